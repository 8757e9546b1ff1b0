import numpy as np
import pytest

from utils.accrual import generate_pool
from utils.errors import InvalidParameter
from utils.patients import Biomarker


def test_pool_size_and_entry_window(rng):
    pool = generate_pool(640, 20.0, 0.5, rng)
    assert len(pool) == 640
    entries = np.array([p.entry_time for p in pool])
    assert entries.min() >= 0.0
    assert entries.max() <= 640 / 20.0
    assert len({p.patient_id for p in pool}) == 640


def test_biomarker_prevalence_roughly_matches(rng):
    pool = generate_pool(20000, 100.0, 0.3, rng)
    share = np.mean([p.is_positive for p in pool])
    assert abs(share - 0.3) < 0.02


def test_full_prevalence_gives_only_positives(rng):
    pool = generate_pool(50, 10.0, 1.0, rng)
    assert all(p.biomarker is Biomarker.POSITIVE for p in pool)


def test_pool_is_reproducible_for_a_seed():
    a = generate_pool(100, 10.0, 0.5, np.random.default_rng(7))
    b = generate_pool(100, 10.0, 0.5, np.random.default_rng(7))
    assert [(p.entry_time, p.biomarker) for p in a] == [(p.entry_time, p.biomarker) for p in b]


@pytest.mark.parametrize("prevalence", [0.0, -0.1, 1.5])
def test_invalid_prevalence_rejected(rng, prevalence):
    with pytest.raises(InvalidParameter):
        generate_pool(100, 10.0, prevalence, rng)


def test_empty_pool_rejected(rng):
    with pytest.raises(InvalidParameter):
        generate_pool(0, 10.0, 0.5, rng)


def test_arm_is_unassigned_after_accrual(rng):
    pool = generate_pool(10, 10.0, 0.5, rng)
    assert all(p.arm is None for p in pool)
