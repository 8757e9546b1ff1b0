# 01_enrichment_sim.py
# Streamlit app: Adaptive Enrichment Simulator for a two-stage biomarker-stratified PFS design

import streamlit as st
import pandas as pd

from utils.decision import Route
from utils.errors import SimulationError
from utils.patients import Biomarker
from utils.pdf_utils import create_pdf
from utils.plot_utils import plot_outcome_probabilities
from utils.scenario import TrialScenario
from utils.simulation import run_simulation
from utils.ui_helpers import scenario_inputs, simulation_settings, plot_section

ROUTE_LABELS = {
    Route.STOP_INTERIM: "Stopped at interim",
    Route.BOTH_STRATA: "Route 1 (both strata continue)",
    Route.ENRICHED: "Route 2 (biomarker+ only)",
}


def add_footer():
    st.markdown("---")
    st.caption("For research and planning use only. Not a medical device.")


def run():
    st.title("Adaptive Enrichment Simulator — biomarker-stratified PFS design")
    st.markdown(
        "Estimate the probability of each development recommendation for a two-stage design: "
        "an interim log-rank look in each biomarker stratum, then either continuation in both strata "
        "(Route 1), biomarker-positive enrichment (Route 2), or a stop for futility."
    )

    col1, col2 = st.columns([2, 1])

    with col2:
        inputs = scenario_inputs()
        settings = simulation_settings()

    with col1:
        if st.button("Run simulation"):
            try:
                scenario = TrialScenario.from_dict({
                    **inputs,
                    "pv_bn": settings["pv_bn"],
                    "pv_bp": settings["pv_bp"],
                    "nsim": settings["nsim"],
                    "seed": settings["seed"],
                }).validate()
            except SimulationError as exc:
                st.error(f"Invalid scenario: {exc}")
                st.stop()

            bar = st.progress(0.0)

            def on_progress(done, total):
                bar.progress(min(done / total, 1.0))

            try:
                with st.spinner("Simulating..."):
                    summary = run_simulation(
                        scenario,
                        workers=settings["workers"],
                        time_budget_s=settings["time_budget_s"],
                        progress=on_progress,
                    )
            except SimulationError as exc:
                st.error(f"Simulation aborted: {exc}")
                st.stop()

            msg = (f"Simulation done in {summary.elapsed_s:.1f}s — "
                   f"probability of a go recommendation: {summary.go_probability:.3%}")
            if summary.partial:
                st.warning(f"Time budget reached: {summary.completed:,} of {summary.nsim:,} replications. " + msg)
            else:
                st.success(msg)

            m1, m2, m3 = st.columns(3)
            m1.metric("Go (any route)", f"{summary.go_probability:.3%}")
            m2.metric("No-go (any route)", f"{summary.no_go_probability:.3%}")
            m3.metric("Accrual pool per replication", f"{scenario.pool_size():,}")

            hr = scenario.hazard_ratios()
            h1, h2, h3 = st.columns(3)
            h1.metric("Hazard ratio, biomarker+", f"{hr[Biomarker.POSITIVE]:.2f}")
            h2.metric("Hazard ratio, biomarker-", f"{hr[Biomarker.NEGATIVE]:.2f}")
            h3.metric("Accrual window (months)", f"{scenario.accrual_window():.1f}")

            st.subheader("Recommendation probabilities")
            st.dataframe(summary.to_frame().style.format({"probability": "{:.4f}", "mc_se": "{:.4f}"}))

            routes = summary.route_probabilities()
            st.subheader("Interim routing")
            st.table(pd.DataFrame({
                "Route": [ROUTE_LABELS[r] for r in routes],
                "Probability": [f"{p:.3%}" for p in routes.values()],
            }))

            fig = plot_outcome_probabilities(summary)
            plot_section(fig, title="📊 Outcome distribution")

            with st.expander("Plain-text report"):
                st.code(summary.report())

            pdf_bytes = create_pdf("Adaptive Enrichment Design Report", scenario, summary, fig_outcomes=fig)
            st.download_button(
                label="📥 Download PDF Report",
                data=pdf_bytes,
                file_name="enrichment_design_report.pdf",
                mime="application/pdf"
            )

    add_footer()


if __name__ == "__main__":
    run()
