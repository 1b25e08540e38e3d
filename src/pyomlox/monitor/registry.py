"""Selection and arming registry.

Holds the set of watched trackables and the set of armed fences. The
intrusion monitor reads both sets live on every evaluation and subscribes
to deselections so it can purge state for trackables that are no longer
watched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

_logger = logging.getLogger(__name__)

DeselectListener = Callable[[str], None]


class SelectionRegistry:
    """Watched trackables and armed fences.

    All mutations are idempotent: selecting a watched trackable or arming
    an armed fence is a no-op.
    """

    def __init__(self, *, watched: Iterable[str] = (), armed: Iterable[str] = ()) -> None:
        self._watched: set[str] = set(watched)
        self._armed: set[str] = set(armed)
        self._deselect_listeners: list[DeselectListener] = []

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def watched(self) -> frozenset[str]:
        return frozenset(self._watched)

    @property
    def armed(self) -> frozenset[str]:
        return frozenset(self._armed)

    def is_watched(self, trackable_id: str) -> bool:
        return trackable_id in self._watched

    def is_armed(self, fence_id: str) -> bool:
        return fence_id in self._armed

    # ------------------------------------------------------------------
    # Trackables
    # ------------------------------------------------------------------

    def select_trackable(self, trackable_id: str) -> None:
        if trackable_id in self._watched:
            return
        self._watched.add(trackable_id)
        _logger.debug("Watching trackable %s", trackable_id)

    def deselect_trackable(self, trackable_id: str) -> None:
        if trackable_id not in self._watched:
            return
        self._watched.discard(trackable_id)
        _logger.debug("Stopped watching trackable %s", trackable_id)
        for listener in list(self._deselect_listeners):
            listener(trackable_id)

    def toggle_trackable(self, trackable_id: str) -> bool:
        """Flip watch membership and return the new state."""
        if trackable_id in self._watched:
            self.deselect_trackable(trackable_id)
            return False
        self.select_trackable(trackable_id)
        return True

    # ------------------------------------------------------------------
    # Fences
    # ------------------------------------------------------------------

    def arm_fence(self, fence_id: str) -> None:
        if fence_id in self._armed:
            return
        self._armed.add(fence_id)
        _logger.debug("Armed fence %s", fence_id)

    def disarm_fence(self, fence_id: str) -> None:
        if fence_id not in self._armed:
            return
        self._armed.discard(fence_id)
        _logger.debug("Disarmed fence %s", fence_id)

    def toggle_fence(self, fence_id: str) -> bool:
        """Flip arming and return the new state."""
        if fence_id in self._armed:
            self.disarm_fence(fence_id)
            return False
        self.arm_fence(fence_id)
        return True

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_deselect_listener(self, listener: DeselectListener) -> Callable[[], None]:
        """Call *listener* with the id of every deselected trackable.

        Returns a callable that removes the listener.
        """
        self._deselect_listeners.append(listener)

        def _remove() -> None:
            if listener in self._deselect_listeners:
                self._deselect_listeners.remove(listener)

        return _remove
