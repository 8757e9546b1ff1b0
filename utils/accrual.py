# utils/accrual.py
# Candidate patient pool: uniform entry times and Bernoulli biomarker status.

from typing import List

import numpy as np

from utils.errors import InvalidParameter
from utils.patients import Biomarker, Patient


def generate_pool(pool_size: int, accrual_rate: float, prevalence: float,
                  rng: np.random.Generator) -> List[Patient]:
    """
    Draw `pool_size` candidates with entry ~ Uniform(0, pool_size / accrual_rate)
    and biomarker status ~ Bernoulli(prevalence), 1 = positive.
    """
    if not 0 < prevalence <= 1:
        raise InvalidParameter(f"prevalence must lie in (0, 1], got {prevalence}")
    if pool_size <= 0:
        raise InvalidParameter(f"pool size must be positive, got {pool_size}")
    if accrual_rate <= 0:
        raise InvalidParameter(f"accrual rate must be positive, got {accrual_rate}")

    entry = rng.uniform(0.0, pool_size / accrual_rate, pool_size)
    positive = rng.binomial(1, prevalence, pool_size)

    return [
        Patient(
            patient_id=i,
            biomarker=Biomarker.POSITIVE if positive[i] == 1 else Biomarker.NEGATIVE,
            entry_time=float(entry[i]),
        )
        for i in range(pool_size)
    ]
