import pytest

from config.design_defaults import DEFAULTS, DESIGN_LAYOUT, SCENARIOS, DesignLayout
from utils.errors import InvalidParameter
from utils.patients import Arm, Biomarker
from utils.scenario import TrialScenario


def test_defaults_validate():
    scenario = TrialScenario().validate()
    assert scenario.to_dict() == DEFAULTS


def test_pool_size_from_ssbp_and_prevalence():
    assert TrialScenario(ssbp=80, prev_p=0.5).pool_size() == 640
    assert TrialScenario(ssbp=80, prev_p=0.3).pool_size() == 1066
    assert TrialScenario(ssbp=80, prev_p=0.5, acr_r=20).accrual_window() == pytest.approx(32.0)


def test_median_lookup():
    medians = TrialScenario(pfsbp1=7, pfsbn1=6, pfsbp0=4, pfsbn0=3).medians
    assert medians[(Arm.EXPERIMENTAL, Biomarker.POSITIVE)] == 7
    assert medians[(Arm.EXPERIMENTAL, Biomarker.NEGATIVE)] == 6
    assert medians[(Arm.CONTROL, Biomarker.POSITIVE)] == 4
    assert medians[(Arm.CONTROL, Biomarker.NEGATIVE)] == 3


def test_hazard_ratios():
    hr = TrialScenario(pfsbp1=8, pfsbp0=4, pfsbn1=4, pfsbn0=4).hazard_ratios()
    assert hr[Biomarker.POSITIVE] == pytest.approx(0.5)
    assert hr[Biomarker.NEGATIVE] == pytest.approx(1.0)


@pytest.mark.parametrize("field, value", [
    ("prev_p", 0.0),
    ("prev_p", 1.2),
    ("ssbp", 0),
    ("ssbn", -5),
    ("pfsbp1", 0.0),
    ("pfsbn0", -1.0),
    ("acr_r", 0.0),
    ("pv_bn", 0.0),
    ("pv_bp", 1.0),
    ("nsim", 0),
    ("nsim", 2.5),
    ("seed", -1),
])
def test_out_of_range_inputs_rejected(field, value):
    with pytest.raises(InvalidParameter):
        TrialScenario(**{field: value}).validate()


def test_invalid_parameter_is_a_value_error():
    with pytest.raises(ValueError):
        TrialScenario(prev_p=2.0).validate()


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(InvalidParameter):
        TrialScenario.from_dict({"prev.p": 0.5})


def test_presets_build_valid_scenarios():
    for values in SCENARIOS.values():
        TrialScenario.from_dict(values).validate()


def test_default_layout_literals():
    layout = DESIGN_LAYOUT.validate()
    assert (layout.interim_cohort, layout.interim_events) == (40, 33)
    assert (layout.route1_cohort, layout.route1_events) == (80, 70)
    assert layout.route2_events == 110
    assert layout.retained_per_stratum == 120
    assert layout.info_negative + layout.info_positive == layout.info_total


def test_layout_rejects_unreachable_order_statistic():
    with pytest.raises(InvalidParameter):
        DesignLayout(interim_events=41).validate()
    with pytest.raises(InvalidParameter):
        DesignLayout(route2_events=241).validate()
