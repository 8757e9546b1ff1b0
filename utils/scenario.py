# utils/scenario.py
# Input scenario for the enrichment design simulator.

import math
from dataclasses import dataclass, fields, asdict
from typing import Dict, Tuple

from config.design_defaults import DEFAULTS, DESIGN_LAYOUT
from utils.errors import InvalidParameter
from utils.patients import Arm, Biomarker


@dataclass
class TrialScenario:
    prev_p: float = DEFAULTS["prev_p"]
    ssbp: int = DEFAULTS["ssbp"]
    ssbp_max: int = DEFAULTS["ssbp_max"]
    ssbn: int = DEFAULTS["ssbn"]
    pfsbp1: float = DEFAULTS["pfsbp1"]
    pfsbn1: float = DEFAULTS["pfsbn1"]
    pfsbp0: float = DEFAULTS["pfsbp0"]
    pfsbn0: float = DEFAULTS["pfsbn0"]
    acr_r: float = DEFAULTS["acr_r"]
    pv_bn: float = DEFAULTS["pv_bn"]
    pv_bp: float = DEFAULTS["pv_bp"]
    nsim: int = DEFAULTS["nsim"]
    seed: int = DEFAULTS["seed"]

    @classmethod
    def from_dict(cls, values: Dict[str, object]) -> "TrialScenario":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise InvalidParameter(f"Unknown scenario inputs: {unknown}")
        return cls(**values)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    def validate(self, pool_multiplier: int = DESIGN_LAYOUT.pool_multiplier) -> "TrialScenario":
        """Raise InvalidParameter on the first out-of-range input."""
        if not 0 < self.prev_p <= 1:
            raise InvalidParameter(f"prev_p must lie in (0, 1], got {self.prev_p}")
        for name in ("ssbp", "ssbp_max", "ssbn"):
            value = getattr(self, name)
            if int(value) != value or value <= 0:
                raise InvalidParameter(f"{name} must be a positive integer, got {value}")
        for name in ("pfsbp1", "pfsbn1", "pfsbp0", "pfsbn0"):
            value = getattr(self, name)
            if not (value > 0 and math.isfinite(value)):
                raise InvalidParameter(f"{name} must be a positive median (months), got {value}")
        if not (self.acr_r > 0 and math.isfinite(self.acr_r)):
            raise InvalidParameter(f"acr_r must be positive, got {self.acr_r}")
        for name in ("pv_bn", "pv_bp"):
            value = getattr(self, name)
            if not 0 < value < 1:
                raise InvalidParameter(f"{name} must lie in (0, 1), got {value}")
        if isinstance(self.nsim, bool) or int(self.nsim) != self.nsim or self.nsim <= 0:
            raise InvalidParameter(f"nsim must be a positive integer, got {self.nsim}")
        if isinstance(self.seed, bool) or int(self.seed) != self.seed or self.seed < 0:
            raise InvalidParameter(f"seed must be a non-negative integer, got {self.seed}")
        if self.pool_size(pool_multiplier) <= 0:
            raise InvalidParameter("accrual pool is empty; increase ssbp")
        return self

    def pool_size(self, pool_multiplier: int = DESIGN_LAYOUT.pool_multiplier) -> int:
        """Number of candidate patients generated per replication."""
        return int(math.floor(pool_multiplier * self.ssbp / self.prev_p))

    def accrual_window(self, pool_multiplier: int = DESIGN_LAYOUT.pool_multiplier) -> float:
        return self.pool_size(pool_multiplier) / self.acr_r

    @property
    def medians(self) -> Dict[Tuple[Arm, Biomarker], float]:
        return {
            (Arm.EXPERIMENTAL, Biomarker.POSITIVE): float(self.pfsbp1),
            (Arm.EXPERIMENTAL, Biomarker.NEGATIVE): float(self.pfsbn1),
            (Arm.CONTROL, Biomarker.POSITIVE): float(self.pfsbp0),
            (Arm.CONTROL, Biomarker.NEGATIVE): float(self.pfsbn0),
        }

    def hazard_ratios(self) -> Dict[Biomarker, float]:
        """Experimental-vs-control hazard ratio per stratum implied by the medians."""
        return {
            Biomarker.POSITIVE: self.pfsbp0 / self.pfsbp1,
            Biomarker.NEGATIVE: self.pfsbn0 / self.pfsbn1,
        }
