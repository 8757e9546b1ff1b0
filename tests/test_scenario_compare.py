import pytest

from config.design_defaults import SCENARIOS
from modules._02_scenario_compare import comparison_frame
from utils.decision import DecisionOutcome
from utils.scenario import TrialScenario
from utils.simulation import run_simulation


def test_comparison_frame_lists_hazard_ratios_and_probabilities():
    names = ["Null (no effect in either stratum)", "Positive stratum only"]
    scenarios = {n: TrialScenario.from_dict({**SCENARIOS[n], "nsim": 10, "seed": 3}) for n in names}
    summaries = {n: run_simulation(s) for n, s in scenarios.items()}

    df = comparison_frame(summaries, scenarios).set_index("scenario")
    assert list(df.index) == names
    assert df.loc[names[0], "hr_positive"] == pytest.approx(1.0)
    assert df.loc[names[0], "hr_negative"] == pytest.approx(1.0)
    assert df.loc[names[1], "hr_positive"] == pytest.approx(0.5)
    assert df.loc[names[1], "hr_negative"] == pytest.approx(1.0)
    outcome_cols = [o.value for o in DecisionOutcome]
    assert df[outcome_cols].sum(axis=1).tolist() == pytest.approx([1.0, 1.0])
    for n in names:
        assert df.loc[n, "go"] == pytest.approx(summaries[n].go_probability)
