# utils/decision.py
# Adaptive decision rules: interim routing and the stage-2 recommendations.

from dataclasses import dataclass
from enum import Enum

from config.design_defaults import DESIGN_LAYOUT, DesignLayout
from utils.logrank import StageResult
from utils.stats_utils import obf_boundary, union_bound


class Route(str, Enum):
    STOP_INTERIM = "StopInterim"
    BOTH_STRATA = "Route1"      # continue enrollment in both strata
    ENRICHED = "Route2"         # continue in the biomarker-positive stratum only


class DecisionOutcome(str, Enum):
    NO_GO_INTERIM = "NoGoInterim"
    STANDARD_ROUTE1 = "StandardRoute1"
    ENRICH_ROUTE1 = "EnrichRoute1"
    NO_GO_ROUTE1 = "NoGoRoute1"
    ENRICH_ROUTE2 = "EnrichRoute2"
    NO_GO_ROUTE2 = "NoGoRoute2"

    @property
    def label(self) -> str:
        return OUTCOME_LABELS[self]

    @property
    def is_go(self) -> bool:
        return self in GO_OUTCOMES


OUTCOME_LABELS = {
    DecisionOutcome.NO_GO_INTERIM: "Stop for futility at interim",
    DecisionOutcome.STANDARD_ROUTE1: "Route 1: unselected confirmatory trial",
    DecisionOutcome.ENRICH_ROUTE1: "Route 1: biomarker-enriched confirmatory trial",
    DecisionOutcome.NO_GO_ROUTE1: "Route 1: stop after stage 2",
    DecisionOutcome.ENRICH_ROUTE2: "Route 2: biomarker-enriched confirmatory trial",
    DecisionOutcome.NO_GO_ROUTE2: "Route 2: stop after stage 2",
}

GO_OUTCOMES = frozenset({
    DecisionOutcome.STANDARD_ROUTE1,
    DecisionOutcome.ENRICH_ROUTE1,
    DecisionOutcome.ENRICH_ROUTE2,
})

OUTCOME_ROUTE = {
    DecisionOutcome.NO_GO_INTERIM: Route.STOP_INTERIM,
    DecisionOutcome.STANDARD_ROUTE1: Route.BOTH_STRATA,
    DecisionOutcome.ENRICH_ROUTE1: Route.BOTH_STRATA,
    DecisionOutcome.NO_GO_ROUTE1: Route.BOTH_STRATA,
    DecisionOutcome.ENRICH_ROUTE2: Route.ENRICHED,
    DecisionOutcome.NO_GO_ROUTE2: Route.ENRICHED,
}


# -----------------------------
# Interim
# -----------------------------
def interim_route(negative: StageResult, positive: StageResult, pv_bn: float, pv_bp: float) -> Route:
    """The negative stratum is checked first; a signal there keeps both strata open."""
    if negative.p_value < pv_bn:
        return Route.BOTH_STRATA
    if positive.p_value < pv_bp:
        return Route.ENRICHED
    return Route.STOP_INTERIM


# -----------------------------
# Stage 2
# -----------------------------
@dataclass(frozen=True)
class Route2Levels:
    """Significance levels of the Route 2 closed test."""
    efficacy: float         # O'Brien-Fleming level for the positive stratum
    positive: float         # closed-test component, positive stratum
    negative: float         # closed-test component, negative stratum

    @property
    def intersection(self) -> float:
        return union_bound(self.positive, self.negative)

    @property
    def threshold(self) -> float:
        return min(self.efficacy, self.intersection)


def route1_outcome(negative: StageResult, positive: StageResult,
                   layout: DesignLayout = DESIGN_LAYOUT) -> DecisionOutcome:
    neg_level = obf_boundary(negative.chi_square, layout.info_negative,
                             z=layout.z_efficacy, info_total=layout.info_total)
    if negative.p_value < neg_level:
        return DecisionOutcome.STANDARD_ROUTE1

    pos_level = obf_boundary(positive.chi_square, layout.info_positive,
                             z=layout.z_efficacy, info_total=layout.info_total)
    if positive.p_value < pos_level:
        return DecisionOutcome.ENRICH_ROUTE1
    return DecisionOutcome.NO_GO_ROUTE1


def route2_levels(positive: StageResult, negative: StageResult,
                  layout: DesignLayout = DESIGN_LAYOUT) -> Route2Levels:
    return Route2Levels(
        efficacy=obf_boundary(positive.chi_square, layout.info_positive,
                              z=layout.z_efficacy, info_total=layout.info_total),
        positive=obf_boundary(positive.chi_square, layout.info_positive,
                              z=layout.z_closed_test, info_total=layout.info_total),
        negative=obf_boundary(negative.chi_square, layout.info_negative,
                              z=layout.z_closed_test, info_total=layout.info_total),
    )


def route2_outcome(positive: StageResult, negative: StageResult,
                   layout: DesignLayout = DESIGN_LAYOUT) -> DecisionOutcome:
    """
    The negative stratum enters only through its statistic: the positive p-value
    must beat both the efficacy level and the intersection-hypothesis level.
    """
    levels = route2_levels(positive, negative, layout)
    if positive.p_value < levels.threshold:
        return DecisionOutcome.ENRICH_ROUTE2
    return DecisionOutcome.NO_GO_ROUTE2
