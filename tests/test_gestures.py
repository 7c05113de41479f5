from balloonspots.model.geometry import Point, Vector
from balloonspots.spots.gestures import GestureState, PanGesture


def test_new_gesture_is_possible():
    gesture = PanGesture()
    assert gesture.state is GestureState.POSSIBLE
    assert gesture.translation() == Vector(0.0, 0.0)


def test_updates_accumulate_translation():
    gesture = PanGesture()
    gesture.begin(Point(10.0, 10.0))
    assert gesture.state is GestureState.BEGAN

    gesture.update(Point(15.0, 0.0))
    gesture.update(Point(20.0, -5.0))

    assert gesture.state is GestureState.CHANGED
    assert gesture.translation() == Vector(10.0, -15.0)


def test_set_translation_makes_next_read_relative():
    gesture = PanGesture()
    gesture.begin(Point(0.0, 0.0))
    gesture.update(Point(0.0, 10.0))

    gesture.set_translation(Vector.zero())
    gesture.update(Point(0.0, 12.0))

    assert gesture.translation() == Vector(0.0, 2.0)


def test_update_without_begin_is_ignored():
    gesture = PanGesture()
    gesture.update(Point(5.0, 5.0))
    assert gesture.state is GestureState.POSSIBLE
    assert gesture.translation() == Vector(0.0, 0.0)


def test_end_and_cancel():
    gesture = PanGesture()
    gesture.begin(Point(0.0, 0.0))
    gesture.end()
    assert gesture.state is GestureState.ENDED

    gesture.end()
    assert gesture.state is GestureState.FAILED

    gesture.begin(Point(0.0, 0.0))
    gesture.cancel()
    assert gesture.state is GestureState.CANCELLED

    gesture.reset()
    assert gesture.state is GestureState.POSSIBLE
