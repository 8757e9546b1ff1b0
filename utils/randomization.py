# utils/randomization.py
# Alternating treatment assignment within biomarker strata.

from typing import List

from utils.errors import InsufficientAccrual
from utils.patients import Arm, Biomarker, Patient, TrialRealization


def randomize_stratum(patients: List[Patient]) -> List[Patient]:
    """
    Sort one stratum by entry time and alternate arms by arrival rank:
    ranks 1, 3, 5, ... get experimental, even ranks get control.
    Returns the stratum in arrival order.
    """
    ordered = sorted(patients, key=lambda p: (p.entry_time, p.patient_id))
    for rank, patient in enumerate(ordered, start=1):
        patient.arm = Arm.EXPERIMENTAL if rank % 2 == 1 else Arm.CONTROL
    return ordered


def stratify_and_randomize(pool: List[Patient], retained_per_stratum: int) -> TrialRealization:
    """Randomize each stratum and keep its first `retained_per_stratum` arrivals."""
    strata = {
        Biomarker.POSITIVE: [p for p in pool if p.biomarker is Biomarker.POSITIVE],
        Biomarker.NEGATIVE: [p for p in pool if p.biomarker is Biomarker.NEGATIVE],
    }
    for biomarker, members in strata.items():
        if len(members) < retained_per_stratum:
            raise InsufficientAccrual(
                f"only {len(members)} biomarker-{biomarker.value} patients accrued, "
                f"{retained_per_stratum} required"
            )

    positive = randomize_stratum(strata[Biomarker.POSITIVE])
    negative = randomize_stratum(strata[Biomarker.NEGATIVE])
    return TrialRealization(
        positive=positive[:retained_per_stratum],
        negative=negative[:retained_per_stratum],
    )
