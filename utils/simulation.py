# utils/simulation.py
# Monte Carlo driver: repeats the trial, tallies outcomes, reports probabilities.

import logging
import time
from collections import Counter
from concurrent.futures import FIRST_COMPLETED, ProcessPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from config.design_defaults import DESIGN_LAYOUT, DesignLayout
from utils.decision import OUTCOME_ROUTE, DecisionOutcome, Route
from utils.errors import InsufficientAccrual, OrderStatisticUnavailable
from utils.scenario import TrialScenario
from utils.trial import TrialTrace, simulate_trial

logger = logging.getLogger(__name__)

ProgressFn = Callable[[int, int], None]


def replication_rng(seed: int, index: int) -> np.random.Generator:
    """Independent stream for one replication; the same for serial and parallel runs."""
    return np.random.default_rng([int(seed), int(index)])


# -----------------------------
# Summary
# -----------------------------
@dataclass
class SimulationSummary:
    counts: Dict[DecisionOutcome, int]
    nsim: int
    seed: int
    completed: int
    partial: bool = False
    elapsed_s: float = 0.0
    traces: List[TrialTrace] = field(default_factory=list)

    @property
    def probabilities(self) -> Dict[DecisionOutcome, float]:
        if self.completed == 0:
            return {o: 0.0 for o in DecisionOutcome}
        return {o: self.counts.get(o, 0) / self.completed for o in DecisionOutcome}

    @property
    def standard_errors(self) -> Dict[DecisionOutcome, float]:
        n = max(self.completed, 1)
        return {o: float(np.sqrt(p * (1 - p) / n)) for o, p in self.probabilities.items()}

    @property
    def go_probability(self) -> float:
        return sum(p for o, p in self.probabilities.items() if o.is_go)

    @property
    def no_go_probability(self) -> float:
        return sum(p for o, p in self.probabilities.items() if not o.is_go)

    def route_probabilities(self) -> Dict[Route, float]:
        routes = {r: 0.0 for r in Route}
        for outcome, p in self.probabilities.items():
            routes[OUTCOME_ROUTE[outcome]] += p
        return routes

    def to_frame(self) -> pd.DataFrame:
        probs = self.probabilities
        ses = self.standard_errors
        return pd.DataFrame({
            "outcome": [o.value for o in DecisionOutcome],
            "recommendation": [o.label for o in DecisionOutcome],
            "count": [int(self.counts.get(o, 0)) for o in DecisionOutcome],
            "probability": [probs[o] for o in DecisionOutcome],
            "mc_se": [ses[o] for o in DecisionOutcome],
        })

    def report(self) -> str:
        """Labeled plain-text summary."""
        lines = [
            "Two-stage biomarker-stratified design: operating characteristics",
            f"Replications: {self.completed:,} of {self.nsim:,} (seed {self.seed})"
            + ("  [PARTIAL: time budget reached]" if self.partial else ""),
            "",
        ]
        probs = self.probabilities
        for outcome in DecisionOutcome:
            lines.append(f"  {outcome.value:<15} {probs[outcome]:>7.4f}   {outcome.label}")
        lines.append("")
        lines.append(f"  {'Go (any)':<15} {self.go_probability:>7.4f}")
        lines.append(f"  {'No-go (any)':<15} {self.no_go_probability:>7.4f}")
        return "\n".join(lines)


# -----------------------------
# Replications
# -----------------------------
def run_replication(scenario: TrialScenario, index: int, layout: DesignLayout = DESIGN_LAYOUT) -> TrialTrace:
    try:
        return simulate_trial(scenario, replication_rng(scenario.seed, index), layout)
    except (InsufficientAccrual, OrderStatisticUnavailable) as exc:
        raise type(exc)(
            f"replication {index} (seed {scenario.seed}) failed: {exc}. "
            f"The accrual pool of {scenario.pool_size(layout.pool_multiplier)} patients "
            f"is incompatible with the design layout."
        ) from exc


def _run_chunk(scenario: TrialScenario, layout: DesignLayout, start: int, stop: int,
               keep_traces: bool) -> Tuple[Counter, List[TrialTrace]]:
    tally = Counter()
    traces = []
    for index in range(start, stop):
        trace = run_replication(scenario, index, layout)
        tally[trace.outcome] += 1
        if keep_traces:
            traces.append(trace)
    return tally, traces


def _chunks(nsim: int, n_chunks: int) -> List[Tuple[int, int]]:
    bounds = np.linspace(0, nsim, n_chunks + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(bounds[:-1], bounds[1:]) if b > a]


def _run_serial(scenario, layout, time_budget_s, progress, keep_traces, started):
    nsim = int(scenario.nsim)
    tally = Counter()
    traces = []
    completed = 0
    for index in range(nsim):
        if time_budget_s is not None and time.perf_counter() - started > time_budget_s:
            break
        trace = run_replication(scenario, index, layout)
        tally[trace.outcome] += 1
        if keep_traces:
            traces.append(trace)
        completed += 1
        if progress is not None:
            progress(completed, nsim)
    return tally, traces, completed


def _run_parallel(scenario, layout, workers, time_budget_s, progress, keep_traces, started):
    nsim = int(scenario.nsim)
    tally = Counter()
    traces = []
    completed = 0
    chunks = _chunks(nsim, workers * 8)

    executor = ProcessPoolExecutor(max_workers=workers)
    try:
        pending = {
            executor.submit(_run_chunk, scenario, layout, start, stop, keep_traces): (start, stop)
            for start, stop in chunks
        }
        by_start = {}
        while pending:
            timeout = None
            if time_budget_s is not None:
                timeout = max(time_budget_s - (time.perf_counter() - started), 0.0)
            done, _ = wait(pending, timeout=timeout, return_when=FIRST_COMPLETED)
            if not done:
                break
            for future in done:
                start, stop = pending.pop(future)
                part, part_traces = future.result()
                tally.update(part)
                by_start[start] = part_traces
                completed += stop - start
                logger.debug("chunk %d-%d finished", start, stop)
                if progress is not None:
                    progress(completed, nsim)
        for start in sorted(by_start):
            traces.extend(by_start[start])
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
    return tally, traces, completed


def run_simulation(scenario: TrialScenario, layout: DesignLayout = DESIGN_LAYOUT, workers: int = 1,
                   time_budget_s: Optional[float] = None, progress: Optional[ProgressFn] = None,
                   keep_traces: bool = False) -> SimulationSummary:
    """
    Run `scenario.nsim` replications and return the outcome probabilities.

    Replication i always uses the stream seeded with (seed, i), so results do
    not depend on `workers`. With a time budget, unfinished replications are
    abandoned and the summary is flagged partial.
    """
    scenario.validate(layout.pool_multiplier)
    layout.validate()
    nsim = int(scenario.nsim)
    workers = max(int(workers), 1)

    logger.info("Simulating %d replications (seed %d, %d worker(s))", nsim, scenario.seed, workers)
    started = time.perf_counter()
    if workers == 1:
        tally, traces, completed = _run_serial(scenario, layout, time_budget_s, progress, keep_traces, started)
    else:
        tally, traces, completed = _run_parallel(scenario, layout, workers, time_budget_s, progress,
                                                 keep_traces, started)
    elapsed = time.perf_counter() - started

    partial = completed < nsim
    if partial:
        logger.warning("Time budget of %.1fs reached after %d of %d replications",
                       time_budget_s, completed, nsim)
    logger.info("Simulation finished in %.1fs", elapsed)

    return SimulationSummary(
        counts={o: int(tally.get(o, 0)) for o in DecisionOutcome},
        nsim=nsim,
        seed=int(scenario.seed),
        completed=completed,
        partial=partial,
        elapsed_s=elapsed,
        traces=traces,
    )


def run_reference(nsim: int = 2000, seed: int = 179, **kwargs) -> SimulationSummary:
    """Operating characteristics of the reference scenario (PFS 7/6 vs 4/4)."""
    scenario = TrialScenario(nsim=nsim, seed=seed)
    return run_simulation(scenario, **kwargs)
