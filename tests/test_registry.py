from __future__ import annotations

from pyomlox.monitor.registry import SelectionRegistry


def test_initial_sets() -> None:
    registry = SelectionRegistry(watched=["T1"], armed=("F1", "F2"))
    assert registry.watched == frozenset({"T1"})
    assert registry.armed == frozenset({"F1", "F2"})
    assert registry.is_watched("T1")
    assert not registry.is_armed("F3")


def test_select_and_arm_are_idempotent() -> None:
    registry = SelectionRegistry()
    registry.select_trackable("T1")
    registry.select_trackable("T1")
    registry.arm_fence("F1")
    registry.arm_fence("F1")
    assert registry.watched == frozenset({"T1"})
    assert registry.armed == frozenset({"F1"})


def test_toggles_flip_membership() -> None:
    registry = SelectionRegistry()
    assert registry.toggle_trackable("T1") is True
    assert registry.toggle_trackable("T1") is False
    assert registry.toggle_fence("F1") is True
    assert registry.toggle_fence("F1") is False
    assert registry.watched == frozenset()
    assert registry.armed == frozenset()


def test_deselect_notifies_listeners_once() -> None:
    registry = SelectionRegistry(watched={"T1"})
    seen: list[str] = []
    registry.add_deselect_listener(seen.append)

    registry.deselect_trackable("T1")
    registry.deselect_trackable("T1")
    registry.deselect_trackable("never-selected")

    assert seen == ["T1"]


def test_removed_listener_is_not_called() -> None:
    registry = SelectionRegistry(watched={"T1", "T2"})
    seen: list[str] = []
    remove = registry.add_deselect_listener(seen.append)

    registry.deselect_trackable("T1")
    remove()
    remove()
    registry.deselect_trackable("T2")

    assert seen == ["T1"]


def test_disarm_does_not_notify_deselect_listeners() -> None:
    registry = SelectionRegistry(watched={"T1"}, armed={"F1"})
    seen: list[str] = []
    registry.add_deselect_listener(seen.append)

    registry.disarm_fence("F1")

    assert seen == []
    assert registry.armed == frozenset()


def test_snapshots_are_immutable_copies() -> None:
    registry = SelectionRegistry(watched={"T1"})
    snapshot = registry.watched
    registry.select_trackable("T2")
    assert snapshot == frozenset({"T1"})
