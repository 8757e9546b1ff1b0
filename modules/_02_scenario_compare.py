# modules/_02_scenario_compare.py
# Streamlit: compare recommendation probabilities across named scenarios.

import streamlit as st
import pandas as pd

from config.design_defaults import SCENARIOS, SCENARIO_LIST
from utils.decision import DecisionOutcome
from utils.errors import SimulationError
from utils.patients import Biomarker
from utils.plot_utils import plot_scenario_comparison
from utils.scenario import TrialScenario
from utils.simulation import run_simulation
from utils.ui_helpers import plot_section


def add_footer():
    st.markdown("---")
    st.caption("For research and planning use only. Not a medical device.")


@st.cache_data
def convert_df(df: pd.DataFrame) -> bytes:
    """Convert DataFrame to CSV bytes for download."""
    return df.to_csv(index=False).encode('utf-8')


def comparison_frame(summaries, scenarios) -> pd.DataFrame:
    """One row per scenario: implied hazard ratios, one column per outcome, and the go total."""
    rows = []
    for name, summary in summaries.items():
        hr = scenarios[name].hazard_ratios()
        row = {"scenario": name, "hr_positive": hr[Biomarker.POSITIVE], "hr_negative": hr[Biomarker.NEGATIVE]}
        row.update({o.value: summary.probabilities[o] for o in DecisionOutcome})
        row["go"] = summary.go_probability
        rows.append(row)
    return pd.DataFrame(rows)


def run():
    st.title("🔀 Scenario Comparison")
    st.markdown("Run several assumed-effect scenarios with a shared seed and compare their operating characteristics.")

    st.sidebar.header("Comparison settings")
    selected = st.sidebar.multiselect("Scenarios", SCENARIO_LIST, default=SCENARIO_LIST[:2])
    nsim = st.sidebar.number_input("Replications per scenario", 100, 50000, 1000, step=100)
    seed = st.sidebar.number_input("RNG seed", 0, 9999999, 179)
    workers = st.sidebar.number_input("Worker processes", 1, 32, 1)

    with st.expander("Scenario definitions"):
        st.dataframe(pd.DataFrame(SCENARIOS).T)

    if st.button("Run comparison"):
        if not selected:
            st.error("Select at least one scenario.")
            st.stop()
        scenarios = {}
        summaries = {}
        try:
            for name in selected:
                scenario = TrialScenario.from_dict({**SCENARIOS[name], "nsim": int(nsim), "seed": int(seed)})
                scenarios[name] = scenario
                with st.spinner(f"Simulating {name}..."):
                    summaries[name] = run_simulation(scenario, workers=int(workers))
        except SimulationError as exc:
            st.error(f"Simulation aborted: {exc}")
            st.stop()

        df = comparison_frame(summaries, scenarios)
        st.subheader("Recommendation probabilities")
        st.dataframe(df.style.format({c: "{:.4f}" for c in df.columns if c != "scenario"}))
        plot_section(plot_scenario_comparison(summaries), title="📊 Side-by-side")
        st.download_button("Download CSV", convert_df(df), file_name="scenario_comparison.csv", mime="text/csv")

    add_footer()


if __name__ == "__main__":
    run()
