import logging

import pytest

from spring_follow.core.constants import SpringTuning
from spring_follow.core.follower import SpringFollower, StepStatus
from spring_follow.core.system import FollowerSystem, TargetSnapshot, TargetState
from spring_follow.core.vector import Vec3


DT = 1.0 / 60.0


def test_auto_handles_and_registry():
    system = FollowerSystem()
    a = system.add(SpringFollower("t"))
    b = system.add(SpringFollower("t"))
    named = system.add(SpringFollower("t"), handle="cam")

    assert (a, b, named) == (0, 1, "cam")
    assert len(system) == 3
    assert "cam" in system
    assert list(system) == [0, 1, "cam"]

    assert system.remove(a) is not None
    assert system.remove(a) is None
    assert system.get(a) is None


def test_duplicate_handle_rejected():
    system = FollowerSystem()
    system.add(SpringFollower("t"), handle="x")
    with pytest.raises(ValueError):
        system.add(SpringFollower("t"), handle="x")


def test_tick_steps_followers_with_resolved_targets():
    system = FollowerSystem()
    h = system.add(SpringFollower("t"))
    report = system.tick(DT, {"t": TargetState(Vec3(1, 0, 0), Vec3())})

    assert report.results[h].status is StepStatus.OK
    assert report.updated == [h]
    assert system.get(h).velocity.x > 0


def test_missing_target_is_skipped_and_reported(caplog):
    system = FollowerSystem()
    lost = system.add(
        SpringFollower("gone", position=Vec3(1, 1, 1), velocity=Vec3(0.5, 0, 0)),
        handle="lost",
    )
    ok = system.add(SpringFollower("here"), handle="ok")
    targets = {"here": TargetState(Vec3(2, 0, 0))}

    with caplog.at_level(logging.DEBUG, logger="spring_follow.core.system"):
        first = system.tick(DT, targets)
        second = system.tick(DT, targets)

    assert first.missing == [lost]
    assert second.missing == [lost]
    assert not first.all_resolved
    assert first.results[ok].status is StepStatus.OK

    follower = system.get(lost)
    assert follower.position == Vec3(1, 1, 1)
    assert follower.velocity == Vec3(0.5, 0, 0)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "gone" in warnings[0].getMessage()


def test_none_state_counts_as_missing():
    system = FollowerSystem()
    h = system.add(SpringFollower("t"))
    report = system.tick(DT, {"t": None})
    assert report.results[h].status is StepStatus.TARGET_MISSING
    assert report.counts() == {"ok": 0, "idle": 0, "target_missing": 1}


def test_zero_dt_tick_is_idle():
    system = FollowerSystem()
    h = system.add(SpringFollower("t", velocity=Vec3(1, 0, 0)))
    report = system.tick(0.0, {"t": TargetState(Vec3(3, 0, 0))})
    assert report.idle == [h]
    assert system.get(h).position == Vec3()


def test_negative_dt_rejected():
    system = FollowerSystem()
    with pytest.raises(ValueError):
        system.tick(-1.0, {})


def test_callable_lookup_and_bare_positions():
    system = FollowerSystem()
    h = system.add(SpringFollower("t"))
    seen = []

    def lookup(target_id):
        seen.append(target_id)
        return (1.0, 0.0, 0.0)

    report = system.tick(DT, lookup)
    assert report.results[h].ok
    assert seen == ["t"]


def test_snapshot_resolves_each_target_once():
    calls = []

    def lookup(target_id):
        calls.append(target_id)
        return TargetState(Vec3())

    snapshot = TargetSnapshot.capture(lookup, ["a", "b", "a", "a"])
    assert calls == ["a", "b"]
    assert "a" in snapshot
    assert len(snapshot) == 2


def _chain_positions(order, ticks=30):
    system = FollowerSystem()
    for handle in order:
        target = "leader" if handle == "trailer" else "goal"
        system.add(SpringFollower(target), handle=handle)

    for _ in range(ticks):
        targets = {"goal": TargetState(Vec3(1, 0, 0))}
        targets.update(system.as_targets())
        system.tick(DT, targets)
    return system.positions()


def test_followers_of_followers_do_not_depend_on_order():
    forward = _chain_positions(["leader", "trailer"])
    backward = _chain_positions(["trailer", "leader"])
    assert forward == backward


def test_apply_and_update_publish_state():
    system = FollowerSystem()
    system.add(SpringFollower("t"), handle="a")
    system.add(SpringFollower("t"), handle="b")
    published = {}

    def sink(handle, position, velocity):
        published[handle] = (position, velocity)

    system.update(DT, {"t": TargetState(Vec3(0, 1, 0))}, sink)

    assert set(published) == {"a", "b"}
    assert published["a"][1] == system.get("a").velocity
    assert system.positions()["b"] == system.get("b").position


def test_retarget_through_system(caplog):
    system = FollowerSystem()
    h = system.add(SpringFollower("old"))
    with caplog.at_level(logging.WARNING, logger="spring_follow.core.system"):
        system.tick(DT, {})
    system.retarget(h, "new", Vec3(5, 0, 0))

    report = system.tick(DT, {"new": TargetState(Vec3(5, 0, 0))})
    assert report.results[h].ok
    assert report.results[h].target_velocity == Vec3()

    with pytest.raises(KeyError):
        system.retarget("nope", "new")


def test_target_state_coerces_sequences():
    state = TargetState((1, 2, 3), [0, 0, 1])
    assert state.position == Vec3(1, 2, 3)
    assert state.velocity == Vec3(0, 0, 1)
    assert TargetState((0, 0, 0)).velocity is None


def test_returning_target_does_not_kick_follower():
    system = FollowerSystem()
    h = system.add(SpringFollower("t", tuning=SpringTuning(response=2.0)))
    system.tick(DT, {"t": TargetState(Vec3())})
    follower = system.get(h)
    before = (follower.position, follower.velocity, follower.previous_target_position)

    for _ in range(5):
        system.tick(DT, {})
    assert (follower.position, follower.velocity, follower.previous_target_position) == before

    report = system.tick(DT, {"t": TargetState(Vec3(3, 0, 0))})

    assert report.results[h].ok
    assert report.results[h].target_velocity == Vec3()

    report = system.tick(DT, {"t": TargetState(Vec3(3, 0, 0))})
    assert report.results[h].target_velocity == Vec3()
