import math

import numpy as np
import pytest

from balloonspots.model.balloon import Balloon
from balloonspots.model.geometry import Point, Vector
from balloonspots.spots.gestures import GestureState, PanGesture
from balloonspots.spots.manager import SpotManager

from conftest import ANGLES, CENTER, RADIUS


def held(manager):
    return [spot.balloon for spot in manager.spots]


def test_setup_fans_spots_out_along_their_angles(make_manager):
    manager = make_manager(8)

    assert len(manager.spots) == 8
    for spot, angle in zip(manager.spots, ANGLES):
        assert spot.direction_angle == pytest.approx(angle)
        # (-R, -R) only counts through its y component
        assert spot.center.x == pytest.approx(CENTER.x + RADIUS * math.cos(angle))
        assert spot.center.y == pytest.approx(CENTER.y + RADIUS * math.sin(angle))


def test_setup_attaches_one_distinct_balloon_per_spot(make_manager):
    manager = make_manager(8)
    balloons = held(manager)

    assert all(b is not None for b in balloons)
    assert len({id(b) for b in balloons}) == 8
    for spot in manager.spots:
        assert spot.field.items == [spot.balloon]
        # Balloons spawn at the shared starting point
        assert spot.balloon.center == CENTER


def test_setup_twice_is_rejected(make_manager):
    manager = make_manager(3)
    with pytest.raises(RuntimeError):
        manager.setup([0.0], center=CENTER, radius=RADIUS, balloon_factory=lambda c: Balloon(center=c))


@pytest.mark.parametrize("seed", range(25))
def test_shuffle_is_a_bijection(make_manager, seed):
    manager = make_manager(8, seed=seed)
    before = held(manager)

    manager.shuffle()
    after = held(manager)

    assert all(b is not None for b in after)
    assert {id(b) for b in after} == {id(b) for b in before}
    for spot in manager.spots:
        assert spot.field.items == [spot.balloon]
        assert spot.damping.items == [spot.balloon]


@pytest.mark.parametrize("count", [2, 3, 5, 8])
def test_first_balloon_never_stays_in_slot_zero(make_manager, count):
    for seed in range(60):
        manager = make_manager(count, seed=seed)
        first = manager.spots[0].balloon

        manager.shuffle()

        assert manager.spots[0].balloon is not first
        manager.teardown()


def test_shuffle_targets_are_a_permutation(animator, escape, scheduler):
    manager = SpotManager(animator, escape, scheduler, rng=np.random.default_rng(7))
    for size in range(1, 10):
        for _ in range(20):
            targets = manager.shuffle_targets(size)
            assert sorted(targets) == list(range(size))
            if size > 1:
                assert targets[0] != 0


def test_other_balloons_may_stay_in_place(animator, escape, scheduler):
    """Only the first slot is forced to change; the rest are merely unique."""
    manager = SpotManager(animator, escape, scheduler, rng=np.random.default_rng(3))
    stayed = False
    for _ in range(200):
        targets = manager.shuffle_targets(4)
        if any(targets[i] == i for i in range(1, 4)):
            stayed = True
            break
    assert stayed


def test_shuffle_single_spot_reassigns_to_itself(make_manager):
    manager = make_manager(1)
    balloon = manager.spots[0].balloon

    targets = manager.shuffle()

    assert targets == [0]
    assert manager.spots[0].balloon is balloon
    assert balloon in manager.spots[0].field


def test_shuffle_with_empty_spots_keeps_remaining_balloons(make_manager):
    manager = make_manager(8, seed=11)
    for spot in manager.spots[:3]:
        spot.balloon.tap()
    remaining = {id(b) for b in held(manager) if b is not None}

    manager.shuffle()
    after = [b for b in held(manager) if b is not None]

    assert len(after) == 5
    assert {id(b) for b in after} == remaining


def test_shuffle_emits_pairing(make_manager):
    manager = make_manager(4, seed=2)
    emitted = []
    manager.shuffled.connect(emitted.append)

    targets = manager.shuffle()

    assert emitted == [targets]


def test_shuffle_without_spots_is_noop(animator, escape, scheduler):
    manager = SpotManager(animator, escape, scheduler)
    assert manager.shuffle() == []


def test_pan_changed_moves_every_spot_and_resets_translation(make_manager):
    manager = make_manager(8)
    before = [spot.center for spot in manager.spots]
    gesture = PanGesture()
    gesture.begin(Point(100.0, 300.0))
    gesture.update(Point(140.0, 250.0))

    manager.handle_pan(gesture)

    assert gesture.translation() == Vector(0.0, 0.0)
    for spot, old in zip(manager.spots, before):
        assert spot.center.x == pytest.approx(old.x + 50.0 * math.cos(spot.direction_angle))
        assert spot.center.y == pytest.approx(old.y + 50.0 * math.sin(spot.direction_angle))


def test_pan_deltas_are_relative(make_manager):
    manager = make_manager(2)
    spot = manager.spots[0]  # angle 0
    start_x = spot.center.x
    gesture = PanGesture()
    gesture.begin(Point(0.0, 0.0))

    gesture.update(Point(0.0, -10.0))
    manager.handle_pan(gesture)
    gesture.update(Point(0.0, -30.0))
    manager.handle_pan(gesture)

    assert spot.center.x == pytest.approx(start_x + 30.0)


@pytest.mark.parametrize(
    "state",
    [GestureState.POSSIBLE, GestureState.BEGAN, GestureState.ENDED, GestureState.CANCELLED, GestureState.FAILED],
)
def test_pan_other_phases_are_ignored(make_manager, state):
    manager = make_manager(4)
    before = [spot.center for spot in manager.spots]
    gesture = PanGesture()
    gesture.set_translation(Vector(0.0, -80.0))
    gesture.state = state

    manager.handle_pan(gesture)

    assert [spot.center for spot in manager.spots] == before
    assert gesture.translation() == Vector(0.0, -80.0)


def test_tap_releases_balloon_into_escape(make_manager, escape):
    manager = make_manager(8)
    spot = manager.spots[2]
    balloon = spot.balloon
    released = []
    manager.released.connect(released.append)

    balloon.tap()

    assert spot.balloon is None
    assert balloon not in spot.field
    assert balloon in escape.gravity
    assert balloon in escape.collision
    assert balloon not in escape.vortex
    assert released == [balloon]
    assert all(b is not balloon for b in held(manager))


def test_interaction_with_stale_spot_is_noop(make_manager, escape):
    manager = make_manager(3)
    spot = manager.spots[0]
    balloon = spot.remove_item()

    manager.handle_interaction(balloon, spot)

    assert balloon not in escape.gravity


def test_escape_detaches_every_balloon(make_manager, escape):
    manager = make_manager(8)
    balloons = held(manager)

    absorbed = manager.trigger_escape(12.0, lambda: None)

    assert [id(b) for b in absorbed] == [id(b) for b in balloons]
    assert all(spot.balloon is None for spot in manager.spots)
    for balloon in balloons:
        assert balloon in escape.vortex
        assert balloon in escape.radial_gravity
        assert all(balloon not in spot.field for spot in manager.spots)
    assert manager.has_escaped


def test_escape_skips_released_balloons(make_manager, escape):
    manager = make_manager(4)
    tapped = manager.spots[1].balloon
    tapped.tap()

    absorbed = manager.trigger_escape(12.0, lambda: None)

    assert len(absorbed) == 3
    assert tapped not in absorbed
    assert tapped not in escape.vortex


def test_escape_twice_is_noop(make_manager):
    manager = make_manager(4)
    manager.trigger_escape(12.0, lambda: None)

    assert manager.trigger_escape(12.0, lambda: None) == []


def test_escape_schedules_cleanup(make_manager):
    manager = make_manager(2)
    calls = []

    manager.trigger_escape(12.0, lambda: calls.append("done"))

    task = manager.cleanup_task
    assert task is not None and task.is_active
    assert task.interval == pytest.approx(12.0)
    task.fire()
    assert calls == ["done"]


def test_grace_period_then_periodic_shuffle(make_manager, scheduler):
    manager = make_manager(8, seed=5)
    emitted = []
    manager.shuffled.connect(emitted.append)

    manager.start_shuffling(grace_period=5.0, interval=5.0)
    grace = scheduler.tasks[-1]
    assert grace.is_active and not grace.repeating
    assert emitted == []

    grace.fire()

    assert len(emitted) == 1
    assert manager.shuffle_task is not None
    assert manager.shuffle_task.repeating
    assert manager.shuffle_task.is_active


def test_escape_cancels_shuffling(make_manager, scheduler):
    manager = make_manager(8)
    manager.start_shuffling(grace_period=5.0, interval=5.0)
    scheduler.tasks[-1].fire()
    shuffle_task = manager.shuffle_task

    manager.trigger_escape(12.0, lambda: None)

    assert shuffle_task.cancelled
    assert not shuffle_task.is_active
    shuffle_task.fire()
    assert all(spot.balloon is None for spot in manager.spots)


def test_escape_during_grace_period_prevents_shuffling(make_manager, scheduler):
    manager = make_manager(8)
    emitted = []
    manager.shuffled.connect(emitted.append)
    manager.start_shuffling(grace_period=5.0, interval=5.0)
    grace = scheduler.tasks[-1]

    manager.trigger_escape(12.0, lambda: None)
    grace.fire()

    assert grace.cancelled
    assert emitted == []
    assert manager.shuffle_task is None
