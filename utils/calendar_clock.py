# utils/calendar_clock.py
# Calendar-time cutoffs from event order statistics, and censoring at a cutoff.

import logging
from typing import List, Optional

import numpy as np

from utils.errors import OrderStatisticUnavailable
from utils.patients import Biomarker, Patient

logger = logging.getLogger(__name__)


def calendar_times(patients: List[Patient], stage: int = 1) -> np.ndarray:
    return np.array([p.calendar_time(stage) for p in patients], dtype=float)


def locate_cutoff(patients: List[Patient], event_count_target: int,
                  target: Optional[Biomarker] = None, stage: int = 1) -> float:
    """
    Calendar time of the `event_count_target`-th event (1-indexed) among the
    patients of `target` stratum, or among all patients when target is None.
    """
    subgroup = patients if target is None else [p for p in patients if p.biomarker is target]
    label = "all patients" if target is None else f"biomarker-{target.value} patients"
    if event_count_target <= 0:
        raise OrderStatisticUnavailable(f"event target must be positive, got {event_count_target}")
    if len(subgroup) < event_count_target:
        raise OrderStatisticUnavailable(
            f"event {event_count_target} among {label} is unavailable: "
            f"only {len(subgroup)} patients in the subgroup"
        )

    times = calendar_times(subgroup, stage)
    k = event_count_target - 1
    cutoff = float(np.partition(times, k)[k])
    logger.debug("stage %d cutoff at event %d among %s: %.4f", stage, event_count_target, label, cutoff)
    return cutoff


def censor_at(patients: List[Patient], cutoff: float, stage: int = 1, tolerance: float = 1e-6) -> List[Patient]:
    """
    Set time at risk and event indicator for every patient as of `cutoff`.

    Follow-up is measured from study entry in both stages; only the calendar
    event time used by `locate_cutoff` adds the stage 1 time for stage 2.
    A patient entering after the cutoff has zero time at risk and no event.
    """
    for patient in patients:
        follow_up = cutoff - patient.entry_time
        progression = patient.progression(stage)
        observed = follow_up + tolerance >= progression
        patient.time_at_risk = max(min(follow_up, progression), 0.0)
        patient.event = 1 if observed else 0
    return patients
