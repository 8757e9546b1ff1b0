import numpy as np
import pytest

from utils.patients import Arm, Biomarker, Patient
from utils.scenario import TrialScenario


@pytest.fixture
def rng():
    return np.random.default_rng(2024)


@pytest.fixture
def scenario():
    return TrialScenario(nsim=40, seed=179)


@pytest.fixture
def make_patient():
    """Factory for hand-built patients with fixed times."""
    def _make(pid, biomarker=Biomarker.POSITIVE, entry=0.0, arm=Arm.EXPERIMENTAL, t1=None, t2=None):
        patient = Patient(patient_id=pid, biomarker=biomarker, entry_time=entry)
        patient.arm = arm
        patient.stage1_progression = t1
        patient.stage2_progression = t2
        return patient
    return _make
