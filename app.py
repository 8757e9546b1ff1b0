import logging

import streamlit as st

logging.basicConfig(level=logging.INFO)

st.set_page_config(
    page_title="Adaptive Enrichment Design Simulator",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("🧪 Adaptive Enrichment Design Simulator")

# ------------------------
# Module list
# ------------------------
modules = [
    "Adaptive Enrichment Simulator",
    "Scenario Comparison",
]

# ------------------------
# Sidebar: Module selection
# ------------------------
st.sidebar.header("Navigation")
module_to_run = st.sidebar.selectbox("Select a module", modules)

# ------------------------
# Module imports & run
# ------------------------
if module_to_run == "Adaptive Enrichment Simulator":
    from modules import _01_enrichment_sim as mod
    mod.run()
elif module_to_run == "Scenario Comparison":
    from modules import _02_scenario_compare as mod
    mod.run()
