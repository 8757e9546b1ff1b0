# utils/logrank.py
# Two-arm log-rank comparison of censored PFS within one biomarker stratum.

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from lifelines.statistics import logrank_test

from utils.patients import Arm, Patient


@dataclass(frozen=True)
class StageResult:
    chi_square: float
    p_value: float
    n_at_risk: int


def logrank_chisq(durations_a: Sequence[float], events_a: Sequence[int],
                  durations_b: Sequence[float], events_b: Sequence[int]) -> StageResult:
    """
    One-degree-of-freedom log-rank statistic and upper-tail p-value.
    Symmetric in the two groups. Returns (0, 1) when nothing can be compared.
    """
    durations_a = np.asarray(durations_a, dtype=float)
    durations_b = np.asarray(durations_b, dtype=float)
    events_a = np.asarray(events_a, dtype=int)
    events_b = np.asarray(events_b, dtype=int)
    n_at_risk = int(np.sum(durations_a > 0) + np.sum(durations_b > 0))

    if len(durations_a) == 0 or len(durations_b) == 0 or events_a.sum() + events_b.sum() == 0:
        return StageResult(chi_square=0.0, p_value=1.0, n_at_risk=n_at_risk)

    res = logrank_test(durations_a, durations_b, event_observed_A=events_a, event_observed_B=events_b)
    chisq = float(res.test_statistic)
    if not np.isfinite(chisq):
        return StageResult(chi_square=0.0, p_value=1.0, n_at_risk=n_at_risk)
    return StageResult(chi_square=chisq, p_value=float(res.p_value), n_at_risk=n_at_risk)


def compare_arms(patients: List[Patient]) -> StageResult:
    """Log-rank test of experimental vs control using each patient's censored data."""
    experimental = [p for p in patients if p.arm is Arm.EXPERIMENTAL]
    control = [p for p in patients if p.arm is Arm.CONTROL]
    return logrank_chisq(
        [p.time_at_risk for p in experimental], [p.event for p in experimental],
        [p.time_at_risk for p in control], [p.event for p in control],
    )
