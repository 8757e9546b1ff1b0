# utils/errors.py
# Exceptions raised by the enrichment design simulator.


class SimulationError(Exception):
    """Base class for every failure raised by the simulation engine."""


class InvalidParameter(SimulationError, ValueError):
    """A configuration value is out of range; raised before any replication runs."""


class InsufficientAccrual(SimulationError):
    """A biomarker stratum has fewer patients than the design retains."""


class OrderStatisticUnavailable(SimulationError):
    """The k-th event needed to fix an analysis cutoff does not exist."""
