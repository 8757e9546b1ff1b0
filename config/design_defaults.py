# config/design_defaults.py
# Default inputs, fixed design layout and named scenarios for the
# two-stage biomarker-stratified PFS design.

from dataclasses import dataclass

from utils.errors import InvalidParameter

# -----------------------------
# Default scenario inputs
# -----------------------------
# pfsb<stratum><arm>: median PFS in months, p/n = biomarker positive/negative,
# 1 = experimental, 0 = control
DEFAULTS = {
    "prev_p": 0.5,        # biomarker prevalence
    "ssbp": 80,           # planned biomarker-positive sample size (sizes the accrual pool)
    "ssbp_max": 160,      # maximum biomarker-positive sample size
    "ssbn": 160,          # planned biomarker-negative sample size
    "pfsbp1": 7.0,
    "pfsbn1": 6.0,
    "pfsbp0": 4.0,
    "pfsbn0": 4.0,
    "acr_r": 20.0,        # patients per month
    "pv_bn": 0.05,        # interim threshold, biomarker-negative stratum
    "pv_bp": 0.05,        # interim threshold, biomarker-positive stratum
    "nsim": 10000,
    "seed": 179,
}


# -----------------------------
# Fixed design layout
# -----------------------------
@dataclass(frozen=True)
class DesignLayout:
    """
    Stage sizes and order-statistic targets of the validated design.

    These are constants of one design scenario. They are not derived from
    ssbp / ssbn; changing them changes the operating characteristics.
    """
    retained_per_stratum: int = 120
    interim_cohort: int = 40        # patients per stratum in the interim analysis
    interim_events: int = 33        # positive events that trigger the interim
    route1_cohort: int = 80         # patients per stratum analyzed after Route 1
    route1_events: int = 70         # positive events that trigger the Route 1 analysis
    route2_cohort: int = 40         # patients per stratum analyzed after Route 2
    route2_events: int = 110        # events in both strata that trigger the Route 2 analysis
    info_negative: int = 33
    info_positive: int = 37
    info_total: int = 70
    z_efficacy: float = 1.6448
    z_closed_test: float = 1.9545
    pool_multiplier: int = 4
    tie_tolerance: float = 1e-6

    def validate(self):
        checks = [
            (self.interim_cohort <= self.retained_per_stratum, "interim cohort exceeds retained patients"),
            (self.route1_cohort <= self.retained_per_stratum, "Route 1 cohort exceeds retained patients"),
            (self.route2_cohort <= self.retained_per_stratum, "Route 2 cohort exceeds retained patients"),
            (0 < self.interim_events <= self.interim_cohort, "interim event target must lie in (0, interim cohort]"),
            (0 < self.route1_events <= self.retained_per_stratum, "Route 1 event target must lie in (0, retained positives]"),
            (0 < self.route2_events <= 2 * self.retained_per_stratum, "Route 2 event target must lie in (0, retained patients]"),
            (min(self.info_negative, self.info_positive, self.info_total) > 0, "information denominators must be positive"),
            (self.pool_multiplier > 0, "pool multiplier must be positive"),
            (self.tie_tolerance >= 0, "tie tolerance must be non-negative"),
        ]
        for ok, message in checks:
            if not ok:
                raise InvalidParameter(message)
        return self


DESIGN_LAYOUT = DesignLayout()


# -----------------------------
# Named scenarios
# -----------------------------
SCENARIOS = {
    "Reference (PFS 7/6 vs 4/4)": dict(DEFAULTS),
    "Null (no effect in either stratum)": {**DEFAULTS, "pfsbp1": 4.0, "pfsbn1": 4.0},
    "Strong effect (median doubled in both strata)": {**DEFAULTS, "pfsbp1": 8.0, "pfsbn1": 8.0},
    "Positive stratum only": {**DEFAULTS, "pfsbp1": 8.0, "pfsbn1": 4.0},
}

SCENARIO_LIST = list(SCENARIOS.keys())
