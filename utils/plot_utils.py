import matplotlib.pyplot as plt
import numpy as np

from utils.decision import DecisionOutcome

# -----------------------------------------
# Outcome Probability Plots
# -----------------------------------------

OUTCOME_COLORS = {
    DecisionOutcome.NO_GO_INTERIM: "tab:gray",
    DecisionOutcome.STANDARD_ROUTE1: "tab:green",
    DecisionOutcome.ENRICH_ROUTE1: "tab:olive",
    DecisionOutcome.NO_GO_ROUTE1: "tab:red",
    DecisionOutcome.ENRICH_ROUTE2: "tab:blue",
    DecisionOutcome.NO_GO_ROUTE2: "tab:orange",
}


def plot_outcome_probabilities(summary):
    """
    Bar chart of the six recommendation probabilities with Monte Carlo error bars.
    """
    outcomes = list(DecisionOutcome)
    probs = [summary.probabilities[o] for o in outcomes]
    ses = [summary.standard_errors[o] for o in outcomes]
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.bar([o.value for o in outcomes], probs, yerr=ses, capsize=3,
           color=[OUTCOME_COLORS[o] for o in outcomes])
    ax.set_ylabel("Probability")
    ax.set_ylim(0, 1)
    ax.set_title(f"Recommendation probabilities ({summary.completed:,} replications)")
    for i, v in enumerate(probs):
        ax.text(i, v + 0.02, f"{v:.3f}", ha="center")
    ax.set_xticks(range(len(outcomes)))
    ax.set_xticklabels([o.value for o in outcomes], rotation=30, ha="right")
    fig.tight_layout()
    return fig


def plot_scenario_comparison(summaries):
    """
    Grouped bars: one group per outcome, one bar per named scenario.
    'summaries' maps scenario name -> SimulationSummary.
    """
    outcomes = list(DecisionOutcome)
    names = list(summaries.keys())
    x = np.arange(len(outcomes))
    width = 0.8 / max(len(names), 1)
    fig, ax = plt.subplots(figsize=(8, 4))
    for j, name in enumerate(names):
        probs = [summaries[name].probabilities[o] for o in outcomes]
        ax.bar(x + j * width - 0.4 + width / 2, probs, width, label=name)
    ax.set_xticks(x)
    ax.set_xticklabels([o.value for o in outcomes], rotation=30, ha="right")
    ax.set_ylabel("Probability")
    ax.set_ylim(0, 1)
    ax.set_title("Recommendation probabilities by scenario")
    ax.legend(fontsize=8)
    fig.tight_layout()
    return fig
