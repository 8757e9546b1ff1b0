# utils/event_times.py
# Exponential progression times by arm and biomarker stratum.

from typing import Dict, List, Tuple

import numpy as np

from utils.patients import Arm, Biomarker, Patient

LN2 = np.log(2.0)


def exponential_rate(median: float) -> float:
    """Hazard of an exponential distribution with the given median."""
    return LN2 / median


def draw_progression_times(patients: List[Patient], medians: Dict[Tuple[Arm, Biomarker], float],
                           rng: np.random.Generator, stage: int = 1) -> np.ndarray:
    """
    Draw one progression time per patient for `stage` and store it on the patient.

    Stage 2 times are fresh draws, independent of stage 1.
    """
    if stage not in (1, 2):
        raise ValueError(f"stage must be 1 or 2, got {stage}")
    rates = np.array([exponential_rate(medians[(p.arm, p.biomarker)]) for p in patients])
    times = rng.exponential(1.0 / rates)

    attr = "stage1_progression" if stage == 1 else "stage2_progression"
    for patient, t in zip(patients, times):
        setattr(patient, attr, float(t))
    return times
