"""Client-side geofence intrusion monitor.

The monitor polls the latest location of every watched trackable, asks the
hub which fences contain it and intersects the answer with the armed
fences. Per-trackable results fold into a single alarm flag.

Passes are serialized: a tick that fires while a pass is still in flight
is skipped. ``stop()`` bumps a generation counter so results from a pass
that was started before the stop never touch the fresh state.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Protocol

from pyomlox._constants import DEFAULT_POLL_INTERVAL
from pyomlox.exceptions import InvalidStateError
from pyomlox.models.trackable import Location
from pyomlox.monitor.events import (
    AlarmEvent,
    AlarmStatus,
    IntrusionTransition,
    MonitorEvent,
    MonitorState,
    TransitionKind,
)
from pyomlox.monitor.policy import alarm_active, armed_matches, select_latest_location
from pyomlox.monitor.registry import SelectionRegistry

_logger = logging.getLogger(__name__)

MonitorListener = Callable[[MonitorEvent], None]


class LocationSource(Protocol):
    """Supplies the most recent location(s) of a trackable."""

    async def get_latest_location(self, trackable_id: str) -> list[Location]:
        ...


class ContainmentOracle(Protocol):
    """Answers which fences currently contain a trackable.

    Items may be fence records, dicts with an ``id`` key or bare ids.
    """

    async def get_containing_fences(self, trackable_id: str, use_spatial_query: bool) -> Iterable[Any]:
        ...


@dataclass(frozen=True, slots=True)
class _Assessment:
    trackable_id: str
    inside: bool
    fence_ids: frozenset[str]


class IntrusionMonitor:
    """Polling state machine deriving an intrusion alarm from armed fences.

    Usage::

        monitor = IntrusionMonitor(client, client)
        monitor.arm_fence(fence_id)
        monitor.select_trackable(trackable_id)
        await monitor.start()
        ...
        monitor.stop()

    Parameters
    ----------
    locations : LocationSource
        Supplies trackable locations (usually an :class:`OmloxClient`).
    oracle : ContainmentOracle
        Answers fence containment (usually the same client).
    registry : SelectionRegistry or None
        Watched/armed sets. A fresh registry is created when omitted.
    poll_interval : float
        Seconds between evaluation passes.
    use_spatial_query : bool
        Forwarded to the containment oracle.
    branch_timeout : float or None
        Upper bound in seconds for one trackable's fetch + query. Defaults
        to ``poll_interval``.
    """

    def __init__(
        self,
        locations: LocationSource,
        oracle: ContainmentOracle,
        *,
        registry: SelectionRegistry | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        use_spatial_query: bool = True,
        branch_timeout: float | None = None,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self._locations = locations
        self._oracle = oracle
        self._registry = registry if registry is not None else SelectionRegistry()
        self._poll_interval = poll_interval
        self._use_spatial_query = use_spatial_query
        self._branch_timeout = branch_timeout if branch_timeout is not None else poll_interval

        self._state = MonitorState.IDLE
        self._intrusions: dict[str, bool] = {}
        self._alarm = False
        self._generation = 0
        self._active_pass: int | None = None
        self._task: asyncio.Task[None] | None = None
        self._retired_tasks: set[asyncio.Task[None]] = set()
        self._listeners: list[MonitorListener] = []
        self._pass_count = 0
        self._last_pass_at: datetime | None = None

        self._remove_deselect_listener: Callable[[], None] | None = self._registry.add_deselect_listener(
            self._on_deselect
        )

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> IntrusionMonitor:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Stop monitoring and wait for the polling task to unwind.

        Also unsubscribes from the registry; a later ``start()`` subscribes again.
        """
        self.stop()
        if self._remove_deselect_listener is not None:
            self._remove_deselect_listener()
            self._remove_deselect_listener = None
        retired = list(self._retired_tasks)
        for task in retired:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._retired_tasks.clear()

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def registry(self) -> SelectionRegistry:
        return self._registry

    @property
    def state(self) -> MonitorState:
        return self._state

    @property
    def is_monitoring(self) -> bool:
        return self._state is MonitorState.MONITORING

    @property
    def poll_interval(self) -> float:
        return self._poll_interval

    @property
    def watched(self) -> frozenset[str]:
        return self._registry.watched

    @property
    def armed(self) -> frozenset[str]:
        return self._registry.armed

    @property
    def intrusions(self) -> dict[str, bool]:
        """Copy of the per-trackable "inside an armed fence" flags."""
        return dict(self._intrusions)

    @property
    def alarm(self) -> bool:
        return self._alarm

    @property
    def intruders(self) -> frozenset[str]:
        return frozenset(tid for tid, inside in self._intrusions.items() if inside)

    @property
    def intrusion_count(self) -> int:
        return sum(1 for inside in self._intrusions.values() if inside)

    @property
    def pass_count(self) -> int:
        """Completed evaluation passes since construction."""
        return self._pass_count

    @property
    def last_pass_at(self) -> datetime | None:
        return self._last_pass_at

    # ------------------------------------------------------------------
    # Registry shortcuts
    # ------------------------------------------------------------------

    def select_trackable(self, trackable_id: str) -> None:
        self._registry.select_trackable(trackable_id)

    def deselect_trackable(self, trackable_id: str) -> None:
        self._registry.deselect_trackable(trackable_id)

    def arm_fence(self, fence_id: str) -> None:
        self._registry.arm_fence(fence_id)

    def disarm_fence(self, fence_id: str) -> None:
        self._registry.disarm_fence(fence_id)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: MonitorListener) -> Callable[[], None]:
        """Register a callback for transitions and alarm changes.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def _emit(self, event: MonitorEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                _logger.exception("Monitor listener failed for %s", type(event).__name__)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Begin monitoring: evaluate once now, then every ``poll_interval``.

        Raises
        ------
        InvalidStateError
            No trackable is selected for monitoring.
        """
        if self._state is MonitorState.MONITORING:
            return
        if not self._registry.watched:
            raise InvalidStateError("Please select at least one trackable to monitor")

        if self._remove_deselect_listener is None:
            self._remove_deselect_listener = self._registry.add_deselect_listener(self._on_deselect)
        self._state = MonitorState.MONITORING
        self._generation += 1
        generation = self._generation
        _logger.info(
            "Monitoring %d trackable(s) against %d armed fence(s) every %.1fs",
            len(self._registry.watched),
            len(self._registry.armed),
            self._poll_interval,
        )
        self._task = asyncio.create_task(self._poll_loop(generation), name="pyomlox-intrusion-monitor")
        await self._run_pass(generation)

    def stop(self) -> None:
        """Stop monitoring and discard all intrusion state.

        Results of a pass still in flight are dropped when they arrive.
        Safe to call when already idle.
        """
        self._generation += 1
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            self._retired_tasks.add(task)
            task.add_done_callback(self._retired_tasks.discard)
        if self._state is MonitorState.MONITORING:
            _logger.info("Monitoring stopped")
        self._state = MonitorState.IDLE
        self._intrusions.clear()
        self._recompute_alarm()

    async def evaluate(self) -> bool:
        """Run one evaluation pass now.

        Returns ``False`` when the pass was skipped because another pass
        is still in flight or the results were discarded by ``stop()``.

        Raises
        ------
        InvalidStateError
            The monitor is idle.
        """
        if self._state is not MonitorState.MONITORING:
            raise InvalidStateError("Monitor is not running")
        return await self._run_pass(self._generation)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    async def _poll_loop(self, generation: int) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self._poll_interval
        while self._generation == generation:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            next_tick += self._poll_interval
            if self._generation != generation:
                return
            await self._run_pass(generation)
            # Ticks missed while the pass was running are dropped, not queued.
            now = loop.time()
            while next_tick <= now:
                _logger.debug("Evaluation pass overran the poll interval; skipping a tick")
                next_tick += self._poll_interval

    async def _run_pass(self, generation: int) -> bool:
        if self._active_pass == generation:
            _logger.debug("Evaluation pass already in flight; skipping")
            return False
        self._active_pass = generation
        try:
            watched = sorted(self._registry.watched)
            results = await asyncio.gather(
                *(self._evaluate_trackable(trackable_id) for trackable_id in watched),
                return_exceptions=True,
            )
            if self._generation != generation:
                _logger.debug("Discarding evaluation results from a stopped session")
                return False

            for trackable_id, result in zip(watched, results, strict=True):
                # A listener may stop the monitor while results are applied.
                if self._generation != generation:
                    return False
                if isinstance(result, BaseException):
                    _logger.warning("Evaluation of trackable %s failed: %r", trackable_id, result)
                    continue
                if result is None:
                    continue
                self._apply(result)

            if self._generation != generation:
                return False
            self._recompute_alarm()
            self._pass_count += 1
            self._last_pass_at = datetime.now(UTC)
            return True
        finally:
            if self._active_pass == generation:
                self._active_pass = None

    async def _evaluate_trackable(self, trackable_id: str) -> _Assessment | None:
        """Assess one trackable; ``None`` leaves its previous state untouched."""
        try:
            return await asyncio.wait_for(self._assess(trackable_id), self._branch_timeout)
        except TimeoutError:
            _logger.warning("Evaluation of trackable %s timed out after %.1fs", trackable_id, self._branch_timeout)
        except Exception:
            _logger.warning("Evaluation of trackable %s failed", trackable_id, exc_info=True)
        return None

    async def _assess(self, trackable_id: str) -> _Assessment | None:
        locations = await self._locations.get_latest_location(trackable_id)
        location = select_latest_location(locations)
        if location is None:
            _logger.debug("No location for trackable %s; skipping", trackable_id)
            return None
        if location.coordinates is None:
            _logger.debug("Location for trackable %s has no usable coordinates; skipping", trackable_id)
            return None

        containing = await self._oracle.get_containing_fences(trackable_id, self._use_spatial_query)
        # Armed set is read after the query so a disarm during the request is honoured.
        matched = armed_matches(containing, self._registry.armed)
        return _Assessment(trackable_id=trackable_id, inside=bool(matched), fence_ids=matched)

    def _apply(self, assessment: _Assessment) -> None:
        trackable_id = assessment.trackable_id
        if not self._registry.is_watched(trackable_id):
            _logger.debug("Trackable %s was deselected during the pass; dropping result", trackable_id)
            return

        previous = self._intrusions.get(trackable_id, False)
        self._intrusions[trackable_id] = assessment.inside
        if previous == assessment.inside:
            return

        if assessment.inside:
            _logger.warning(
                "Intrusion detected: trackable %s entered %d armed fence(s): %s",
                trackable_id,
                len(assessment.fence_ids),
                ", ".join(sorted(assessment.fence_ids)),
            )
            kind = TransitionKind.ENTERED
        else:
            _logger.info("Intrusion cleared: trackable %s left all armed fences", trackable_id)
            kind = TransitionKind.CLEARED
        self._emit(IntrusionTransition(trackable_id=trackable_id, kind=kind, fence_ids=assessment.fence_ids))

    def _on_deselect(self, trackable_id: str) -> None:
        if self._intrusions.pop(trackable_id, None) is not None:
            _logger.debug("Purged intrusion state for deselected trackable %s", trackable_id)
        self._recompute_alarm()

    def _recompute_alarm(self) -> None:
        active = alarm_active(self._intrusions)
        if active == self._alarm:
            return
        self._alarm = active
        intruders = self.intruders
        if active:
            _logger.warning(
                "Intrusion alarm activated: %d trackable(s) inside armed fence(s)",
                len(intruders),
            )
            self._emit(AlarmEvent(status=AlarmStatus.ACTIVATED, intruders=intruders))
        else:
            _logger.info("Intrusion alarm cleared")
            self._emit(AlarmEvent(status=AlarmStatus.CLEARED, intruders=intruders))
