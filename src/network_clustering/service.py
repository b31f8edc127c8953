from __future__ import annotations

import asyncio
import itertools
import logging

from network_graph.errors import CancellationError
from network_graph.models import NetworkData

from .cancellation import CancellationToken
from .engine import ClusteringEngine
from .metrics import CLUSTERING_RUNS_IN_FLIGHT
from .models import ClusteringParameters, ClusteringResult, RunState

# a run never reports full progress before its result is available
PROGRESS_CEILING = 0.99

_TRANSITIONS = {
    RunState.IDLE: {RunState.RUNNING, RunState.CANCELLED},
    RunState.RUNNING: {RunState.COMPLETED, RunState.FAILED, RunState.CANCELLED},
}


class ClusteringRun:
    """Handle for one background clustering run.

    State moves ``idle -> running -> completed | failed | cancelled`` exactly
    once; ``result`` is only set on ``completed``. A run whose task is
    cancelled before it starts goes straight from ``idle`` to ``cancelled``.
    """

    def __init__(self, sequence: int, algorithm: str, parameters: ClusteringParameters) -> None:
        self.sequence = sequence
        self.algorithm = algorithm
        self.parameters = parameters
        self.token = CancellationToken()
        self.state = RunState.IDLE
        self.result: ClusteringResult | None = None
        self.error: BaseException | None = None
        self._task: asyncio.Task | None = None

    def _transition(self, new_state: RunState) -> None:
        if new_state not in _TRANSITIONS.get(self.state, set()):
            raise RuntimeError(f"illegal clustering run transition {self.state.value} -> {new_state.value}")
        self.state = new_state

    @property
    def done(self) -> bool:
        return self.state.terminal

    @property
    def progress(self) -> float:
        """Fraction in [0, 1]; 0.0 while idle and 1.0 only once completed."""
        if self.state is RunState.COMPLETED:
            return 1.0
        if self.state is RunState.IDLE:
            return 0.0
        return min(self.token.progress, PROGRESS_CEILING)

    def cancel(self) -> None:
        self.token.cancel()

    def _on_task_done(self, task: asyncio.Task) -> None:
        if self.state is RunState.IDLE and task.cancelled():
            self.token.cancel()
            self.error = CancellationError("clustering run cancelled before it started")
            self._transition(RunState.CANCELLED)

    def is_superseded_by(self, other: "ClusteringRun") -> bool:
        return other.sequence > self.sequence

    async def wait(self) -> ClusteringResult:
        if self._task is not None:
            try:
                await asyncio.shield(self._task)
            except asyncio.CancelledError:
                if not self._task.cancelled():
                    raise
                self._on_task_done(self._task)
        if self.state is RunState.COMPLETED and self.result is not None:
            return self.result
        if self.error is not None:
            raise self.error
        raise CancellationError("clustering run cancelled")


class ClusteringService:
    """Runs clustering off the event loop thread.

    Runs are not serialised: each gets a sequence number and callers drop
    results of runs superseded by a later one.
    """

    def __init__(self, engine: ClusteringEngine | None = None) -> None:
        self.engine = engine or ClusteringEngine()
        self.logger = logging.getLogger("network-clustering-service")
        self._sequence = itertools.count(1)
        self.latest_sequence = 0

    async def _execute(self, run: ClusteringRun, graph: NetworkData) -> None:
        run._transition(RunState.RUNNING)
        CLUSTERING_RUNS_IN_FLIGHT.inc()
        try:
            result = await asyncio.to_thread(self.engine.run, graph, run.algorithm, run.parameters, run.token)
        except CancellationError as exc:
            run.error = exc
            run._transition(RunState.CANCELLED)
        except asyncio.CancelledError:
            run.token.cancel()
            run.error = CancellationError("clustering run cancelled")
            run._transition(RunState.CANCELLED)
            raise
        except Exception as exc:  # noqa: BLE001
            run.error = exc
            run._transition(RunState.FAILED)
        else:
            run.result = result
            run._transition(RunState.COMPLETED)
        finally:
            CLUSTERING_RUNS_IN_FLIGHT.dec()
            self.logger.info("clustering run seq=%d algorithm=%s state=%s", run.sequence, run.algorithm, run.state.value)

    def start(
        self,
        graph: NetworkData,
        algorithm: str,
        parameters: ClusteringParameters | None = None,
    ) -> ClusteringRun:
        """Schedule a run on the current event loop and return its handle immediately."""
        run = ClusteringRun(next(self._sequence), algorithm, parameters or ClusteringParameters())
        self.latest_sequence = run.sequence
        run._task = asyncio.get_running_loop().create_task(self._execute(run, graph))
        run._task.add_done_callback(run._on_task_done)
        return run

    async def run(
        self,
        graph: NetworkData,
        algorithm: str,
        parameters: ClusteringParameters | None = None,
    ) -> ClusteringResult:
        return await self.start(graph, algorithm, parameters).wait()

    def is_latest(self, run: ClusteringRun) -> bool:
        return run.sequence == self.latest_sequence
