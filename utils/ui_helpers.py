# utils/ui_helpers.py
import streamlit as st

from config.design_defaults import DEFAULTS

# -----------------------------
# Scenario Inputs
# -----------------------------
def scenario_inputs(defaults=None, expander_title="🧬 Population & Accrual", key_prefix=""):
    """
    Returns a dict of scenario inputs (TrialScenario fields) from Streamlit UI.
    'defaults' can override any of the default values.
    """
    defaults = {**DEFAULTS, **(defaults or {})}

    with st.expander(expander_title, expanded=True):
        col1, col2 = st.columns(2)

        with col1:
            prev_p = st.slider(
                "Biomarker prevalence",
                0.05, 1.0,
                value=float(defaults["prev_p"]), step=0.05,
                key=f"{key_prefix}prev_p"
            )
            acr_r = st.number_input(
                "Accrual rate (patients/month)",
                min_value=0.5, max_value=500.0,
                value=float(defaults["acr_r"]), step=0.5,
                key=f"{key_prefix}acr_r"
            )
            ssbp = st.number_input(
                "Biomarker-positive sample size (sizes the accrual pool)",
                min_value=1, max_value=5000,
                value=int(defaults["ssbp"]), step=10,
                key=f"{key_prefix}ssbp"
            )

        with col2:
            ssbp_max = st.number_input(
                "Maximum biomarker-positive sample size",
                min_value=1, max_value=10000,
                value=int(defaults["ssbp_max"]), step=10,
                key=f"{key_prefix}ssbp_max"
            )
            ssbn = st.number_input(
                "Biomarker-negative sample size",
                min_value=1, max_value=10000,
                value=int(defaults["ssbn"]), step=10,
                key=f"{key_prefix}ssbn"
            )

    with st.expander("⏱️ Median PFS (months)", expanded=True):
        col1, col2 = st.columns(2)
        with col1:
            pfsbp1 = st.number_input("Biomarker+ experimental", 0.1, 120.0,
                                     value=float(defaults["pfsbp1"]), step=0.5, key=f"{key_prefix}pfsbp1")
            pfsbp0 = st.number_input("Biomarker+ control", 0.1, 120.0,
                                     value=float(defaults["pfsbp0"]), step=0.5, key=f"{key_prefix}pfsbp0")
        with col2:
            pfsbn1 = st.number_input("Biomarker− experimental", 0.1, 120.0,
                                     value=float(defaults["pfsbn1"]), step=0.5, key=f"{key_prefix}pfsbn1")
            pfsbn0 = st.number_input("Biomarker− control", 0.1, 120.0,
                                     value=float(defaults["pfsbn0"]), step=0.5, key=f"{key_prefix}pfsbn0")

    return {
        "prev_p": prev_p,
        "acr_r": acr_r,
        "ssbp": int(ssbp),
        "ssbp_max": int(ssbp_max),
        "ssbn": int(ssbn),
        "pfsbp1": pfsbp1,
        "pfsbn1": pfsbn1,
        "pfsbp0": pfsbp0,
        "pfsbn0": pfsbn0,
    }

# -----------------------------
# Simulation Settings
# -----------------------------
def simulation_settings(defaults=None, expander_title="🎲 Interim Thresholds & Simulation", key_prefix=""):
    """
    Returns interim thresholds, nsim, seed and execution settings.
    """
    defaults = {**DEFAULTS, **(defaults or {})}

    with st.expander(expander_title, expanded=True):
        col1, col2 = st.columns(2)
        with col1:
            pv_bn = st.number_input(
                "Interim p-value threshold, biomarker−",
                min_value=0.001, max_value=0.999,
                value=float(defaults["pv_bn"]), step=0.005, format="%.3f",
                key=f"{key_prefix}pv_bn"
            )
            pv_bp = st.number_input(
                "Interim p-value threshold, biomarker+",
                min_value=0.001, max_value=0.999,
                value=float(defaults["pv_bp"]), step=0.005, format="%.3f",
                key=f"{key_prefix}pv_bp"
            )
        with col2:
            nsim = st.number_input(
                "Number of Monte Carlo replications",
                min_value=100, max_value=100000,
                value=int(defaults["nsim"]), step=100,
                key=f"{key_prefix}nsim"
            )
            seed = st.number_input(
                "RNG seed",
                min_value=0, max_value=9999999,
                value=int(defaults["seed"]),
                key=f"{key_prefix}seed"
            )
            workers = st.number_input(
                "Worker processes",
                min_value=1, max_value=32,
                value=1,
                key=f"{key_prefix}workers"
            )
            time_budget = st.number_input(
                "Time budget (seconds, 0 = none)",
                min_value=0, max_value=3600,
                value=0, step=10,
                key=f"{key_prefix}time_budget"
            )

    return {
        "pv_bn": pv_bn,
        "pv_bp": pv_bp,
        "nsim": int(nsim),
        "seed": int(seed),
        "workers": int(workers),
        "time_budget_s": float(time_budget) if time_budget > 0 else None,
    }

# -----------------------------
# Plot Section Helper
# -----------------------------
def plot_section(fig, title=None):
    if title:
        st.subheader(title)
    st.pyplot(fig)
