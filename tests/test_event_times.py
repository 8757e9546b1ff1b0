import numpy as np
import pytest

from utils.event_times import draw_progression_times, exponential_rate
from utils.patients import Arm, Biomarker, Patient

MEDIANS = {
    (Arm.EXPERIMENTAL, Biomarker.POSITIVE): 7.0,
    (Arm.EXPERIMENTAL, Biomarker.NEGATIVE): 6.0,
    (Arm.CONTROL, Biomarker.POSITIVE): 4.0,
    (Arm.CONTROL, Biomarker.NEGATIVE): 4.0,
}


def _cohort(n, arm, biomarker):
    patients = []
    for i in range(n):
        p = Patient(patient_id=i, biomarker=biomarker, entry_time=0.0)
        p.arm = arm
        patients.append(p)
    return patients


def test_rate_from_median():
    assert exponential_rate(np.log(2)) == pytest.approx(1.0)
    assert exponential_rate(4.0) == pytest.approx(np.log(2) / 4.0)


@pytest.mark.parametrize("key", list(MEDIANS))
def test_empirical_median_matches_cell(rng, key):
    arm, biomarker = key
    patients = _cohort(20000, arm, biomarker)
    times = draw_progression_times(patients, MEDIANS, rng, stage=1)
    assert np.median(times) == pytest.approx(MEDIANS[key], rel=0.05)


def test_stage_two_is_a_fresh_draw_stored_separately(rng):
    patients = _cohort(50, Arm.CONTROL, Biomarker.NEGATIVE)
    first = draw_progression_times(patients, MEDIANS, rng, stage=1)
    second = draw_progression_times(patients, MEDIANS, rng, stage=2)
    assert [p.stage1_progression for p in patients] == list(first)
    assert [p.stage2_progression for p in patients] == list(second)
    assert not np.allclose(first, second)


def test_calendar_time_accumulates_stages(rng):
    patient = _cohort(1, Arm.CONTROL, Biomarker.POSITIVE)[0]
    patient.entry_time = 2.0
    draw_progression_times([patient], MEDIANS, rng, stage=1)
    draw_progression_times([patient], MEDIANS, rng, stage=2)
    assert patient.calendar_time(1) == pytest.approx(2.0 + patient.stage1_progression)
    assert patient.calendar_time(2) == pytest.approx(
        2.0 + patient.stage1_progression + patient.stage2_progression
    )


def test_unknown_stage_rejected(rng):
    with pytest.raises(ValueError):
        draw_progression_times(_cohort(2, Arm.CONTROL, Biomarker.POSITIVE), MEDIANS, rng, stage=3)
