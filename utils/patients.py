# utils/patients.py
# Patient records and the per-replication trial container.

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Biomarker(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class Arm(str, Enum):
    CONTROL = "control"
    EXPERIMENTAL = "experimental"


# fields that may be set once and never changed afterwards
_FIXED_FIELDS = ("biomarker", "arm")


@dataclass
class Patient:
    """
    One simulated patient.

    Progression times are stored per stage. The stage 2 calendar event time is
    entry + stage1_progression + stage2_progression, while time at risk is
    always counted from entry.
    """
    patient_id: int
    biomarker: Biomarker
    entry_time: float
    arm: Optional[Arm] = None
    stage1_progression: Optional[float] = None
    stage2_progression: Optional[float] = None
    time_at_risk: Optional[float] = None
    event: Optional[int] = None

    def __setattr__(self, name, value):
        if name in _FIXED_FIELDS and getattr(self, name, None) is not None:
            raise AttributeError(f"{name} of patient {self.patient_id} is already fixed")
        object.__setattr__(self, name, value)

    @property
    def is_positive(self) -> bool:
        return self.biomarker is Biomarker.POSITIVE

    def progression(self, stage: int) -> float:
        value = self.stage1_progression if stage == 1 else self.stage2_progression
        if value is None:
            raise ValueError(f"patient {self.patient_id} has no stage {stage} progression time")
        return value

    def stage_origin(self, stage: int) -> float:
        """Calendar offset that the given stage's progression time is added to."""
        if stage == 1:
            return self.entry_time
        return self.entry_time + self.progression(1)

    def calendar_time(self, stage: int) -> float:
        return self.stage_origin(stage) + self.progression(stage)


@dataclass
class TrialRealization:
    """
    The retained analysis set of one replication: the earliest arrivals of each
    stratum in entry order, plus the calendar cutoffs fixed at each analysis.
    """
    positive: List[Patient]
    negative: List[Patient]
    cutoffs: Dict[str, float] = field(default_factory=dict)

    @property
    def patients(self) -> List[Patient]:
        return self.positive + self.negative

    def cohort(self, size: int) -> List[Patient]:
        """First `size` arrivals of each stratum, positives first."""
        return self.positive[:size] + self.negative[:size]
