import pytest

from utils.calendar_clock import calendar_times, censor_at, locate_cutoff
from utils.errors import OrderStatisticUnavailable
from utils.patients import Arm, Biomarker

POS, NEG = Biomarker.POSITIVE, Biomarker.NEGATIVE


@pytest.fixture
def patients(make_patient):
    # calendar event times: pos 3, 5, 9, 12; neg 1, 4, 6
    return [
        make_patient(0, POS, entry=1.0, t1=2.0),
        make_patient(1, POS, entry=0.0, t1=5.0, arm=Arm.CONTROL),
        make_patient(2, POS, entry=4.0, t1=5.0),
        make_patient(3, POS, entry=2.0, t1=10.0, arm=Arm.CONTROL),
        make_patient(4, NEG, entry=0.5, t1=0.5),
        make_patient(5, NEG, entry=1.0, t1=3.0, arm=Arm.CONTROL),
        make_patient(6, NEG, entry=3.0, t1=3.0),
    ]


def test_calendar_times(patients):
    assert list(calendar_times(patients)) == [3.0, 5.0, 9.0, 12.0, 1.0, 4.0, 6.0]


def test_kth_event_within_subgroup(patients):
    assert locate_cutoff(patients, 1, target=POS) == 3.0
    assert locate_cutoff(patients, 3, target=POS) == 9.0
    assert locate_cutoff(patients, 2, target=NEG) == 4.0


def test_kth_event_over_everyone(patients):
    assert locate_cutoff(patients, 1) == 1.0
    assert locate_cutoff(patients, 4) == 5.0
    assert locate_cutoff(patients, 7) == 12.0


def test_order_statistic_unavailable(patients):
    with pytest.raises(OrderStatisticUnavailable):
        locate_cutoff(patients, 4, target=NEG)
    with pytest.raises(OrderStatisticUnavailable):
        locate_cutoff(patients, 0, target=POS)


def test_censoring_at_cutoff(patients):
    censor_at(patients, 5.0)
    # (time at risk, event) per patient
    assert [(p.time_at_risk, p.event) for p in patients] == [
        (2.0, 1),
        (5.0, 1),   # event exactly at the cutoff counts
        (1.0, 0),
        (3.0, 0),
        (0.5, 1),
        (3.0, 1),
        (2.0, 0),
    ]


def test_tie_tolerance_catches_rounding(make_patient):
    patient = make_patient(0, POS, entry=0.1, t1=0.2)
    censor_at([patient], 0.30000000000000004 - 1e-9)
    assert patient.event == 1
    censor_at([patient], 0.3 - 1e-3)
    assert patient.event == 0


def test_patient_entering_after_cutoff_is_not_at_risk(make_patient):
    patient = make_patient(0, NEG, entry=10.0, t1=1.0)
    censor_at([patient], 4.0)
    assert patient.time_at_risk == 0.0
    assert patient.event == 0


def test_stage_two_calendar_time_adds_stage_one(make_patient):
    patient = make_patient(0, POS, entry=1.0, t1=2.0, t2=4.0)
    assert locate_cutoff([patient], 1, stage=2) == 7.0


@pytest.mark.parametrize("entry, t1, t2, cutoff, at_risk, event", [
    (1.0, 2.0, 4.0, 5.0, 4.0, 1),
    (1.0, 2.0, 4.0, 3.0, 2.0, 0),
    (0.0, 10.0, 5.0, 12.0, 5.0, 1),
    (0.0, 10.0, 5.0, 4.0, 4.0, 0),
])
def test_stage_two_follow_up_counts_from_entry(make_patient, entry, t1, t2, cutoff, at_risk, event):
    patient = make_patient(0, POS, entry=entry, t1=t1, t2=t2)
    censor_at([patient], cutoff, stage=2)
    assert patient.time_at_risk == pytest.approx(at_risk)
    assert patient.event == event
