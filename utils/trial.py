# utils/trial.py
# One realization of the two-stage biomarker-stratified trial.

from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from config.design_defaults import DESIGN_LAYOUT, DesignLayout
from utils.accrual import generate_pool
from utils.calendar_clock import censor_at, locate_cutoff
from utils.decision import (
    DecisionOutcome,
    Route,
    interim_route,
    route1_outcome,
    route2_outcome,
)
from utils.event_times import draw_progression_times
from utils.logrank import StageResult, compare_arms
from utils.patients import Biomarker, TrialRealization
from utils.randomization import stratify_and_randomize
from utils.scenario import TrialScenario


@dataclass
class TrialTrace:
    outcome: DecisionOutcome
    route: Route
    interim_positive: StageResult
    interim_negative: StageResult
    final_positive: Optional[StageResult] = None
    final_negative: Optional[StageResult] = None
    cutoffs: Dict[str, float] = field(default_factory=dict)


def build_realization(scenario: TrialScenario, rng: np.random.Generator,
                      layout: DesignLayout = DESIGN_LAYOUT) -> TrialRealization:
    pool = generate_pool(
        pool_size=scenario.pool_size(layout.pool_multiplier),
        accrual_rate=scenario.acr_r,
        prevalence=scenario.prev_p,
        rng=rng,
    )
    return stratify_and_randomize(pool, layout.retained_per_stratum)


def run_interim(trial: TrialRealization, layout: DesignLayout = DESIGN_LAYOUT):
    """Cut the interim cohort at its k-th positive event and test each stratum."""
    n = layout.interim_cohort
    cohort = trial.cohort(n)
    cutoff = locate_cutoff(cohort, layout.interim_events, target=Biomarker.POSITIVE, stage=1)
    trial.cutoffs["interim"] = cutoff
    censor_at(cohort, cutoff, stage=1, tolerance=layout.tie_tolerance)
    return compare_arms(trial.positive[:n]), compare_arms(trial.negative[:n])


def run_route1(trial: TrialRealization, layout: DesignLayout = DESIGN_LAYOUT):
    cutoff = locate_cutoff(trial.patients, layout.route1_events, target=Biomarker.POSITIVE, stage=2)
    trial.cutoffs["route1"] = cutoff
    censor_at(trial.patients, cutoff, stage=2, tolerance=layout.tie_tolerance)
    n = layout.route1_cohort
    return compare_arms(trial.positive[:n]), compare_arms(trial.negative[:n])


def run_route2(trial: TrialRealization, layout: DesignLayout = DESIGN_LAYOUT):
    # cutoff counts events in both strata, unlike Route 1
    cutoff = locate_cutoff(trial.patients, layout.route2_events, target=None, stage=2)
    trial.cutoffs["route2"] = cutoff
    censor_at(trial.patients, cutoff, stage=2, tolerance=layout.tie_tolerance)
    n = layout.route2_cohort
    return compare_arms(trial.positive[:n]), compare_arms(trial.negative[:n])


def simulate_trial(scenario: TrialScenario, rng: np.random.Generator,
                   layout: DesignLayout = DESIGN_LAYOUT) -> TrialTrace:
    """
    Simulate accrual, the interim analysis and, when the interim continues,
    a second stage with freshly drawn progression times. Returns the single
    terminal outcome together with the statistics that produced it.
    """
    trial = build_realization(scenario, rng, layout)
    medians = scenario.medians

    draw_progression_times(trial.patients, medians, rng, stage=1)
    pos1, neg1 = run_interim(trial, layout)
    route = interim_route(neg1, pos1, scenario.pv_bn, scenario.pv_bp)

    trace = TrialTrace(
        outcome=DecisionOutcome.NO_GO_INTERIM,
        route=route,
        interim_positive=pos1,
        interim_negative=neg1,
        cutoffs=trial.cutoffs,
    )
    if route is Route.STOP_INTERIM:
        return trace

    draw_progression_times(trial.patients, medians, rng, stage=2)
    if route is Route.BOTH_STRATA:
        pos2, neg2 = run_route1(trial, layout)
        trace.outcome = route1_outcome(neg2, pos2, layout)
    else:
        pos2, neg2 = run_route2(trial, layout)
        trace.outcome = route2_outcome(pos2, neg2, layout)

    trace.final_positive = pos2
    trace.final_negative = neg2
    return trace
