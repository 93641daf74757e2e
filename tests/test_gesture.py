"""Tests for the swipe gesture state machine."""

import asyncio
from unittest.mock import MagicMock

import pytest

from studynext.core.gesture import GestureState, SwipeGesture


class FakeHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeTimer:
    """Collects scheduled callbacks so tests decide when time passes."""

    def __init__(self):
        self.scheduled: list[tuple[float, FakeHandle]] = []

    def call_later(self, delay, callback):
        handle = FakeHandle(callback)
        self.scheduled.append((delay, handle))
        return handle

    def run_all(self):
        for _, handle in self.scheduled:
            if not handle.cancelled:
                handle.callback()
        self.scheduled.clear()


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def on_commit():
    return MagicMock()


@pytest.fixture
def gesture(on_commit, timer):
    return SwipeGesture(on_commit=on_commit, timer=timer)


def swipe(gesture, start, end):
    gesture.pointer_down(start)
    gesture.pointer_move(end)
    gesture.pointer_up()


class TestDragging:
    def test_pointer_down_starts_drag(self, gesture):
        gesture.pointer_down(50)
        assert gesture.state == GestureState.DRAGGING
        assert gesture.start_x == 50
        assert gesture.offset == 0

    def test_rightward_move_sets_offset(self, gesture):
        gesture.pointer_down(50)
        gesture.pointer_move(130)
        assert gesture.offset == 80

    def test_leftward_move_clamped_to_zero(self, gesture):
        gesture.pointer_down(50)
        gesture.pointer_move(90)
        gesture.pointer_move(10)
        assert gesture.offset == 0

    def test_offset_not_capped_while_dragging(self, gesture):
        gesture.pointer_down(0)
        gesture.pointer_move(5000)
        assert gesture.offset == 5000

    def test_move_without_down_is_ignored(self, gesture):
        gesture.pointer_move(300)
        assert gesture.state == GestureState.IDLE
        assert gesture.offset == 0

    def test_up_without_down_is_ignored(self, gesture, timer):
        gesture.pointer_up()
        assert gesture.state == GestureState.IDLE
        assert timer.scheduled == []


class TestCancel:
    @pytest.mark.parametrize("distance", [0, 40, 100])
    def test_at_or_below_threshold_snaps_back(self, gesture, timer, on_commit, distance):
        swipe(gesture, 10, 10 + distance)
        assert gesture.state == GestureState.IDLE
        assert gesture.offset == 0
        assert timer.scheduled == []
        timer.run_all()
        on_commit.assert_not_called()


class TestCommit:
    def test_past_threshold_flies_out(self, gesture, timer):
        swipe(gesture, 0, 101)
        assert gesture.state == GestureState.COMMITTING
        assert gesture.offset == 1000
        assert timer.scheduled[0][0] == 0.3

    def test_callback_waits_for_timer(self, gesture, on_commit):
        swipe(gesture, 0, 150)
        on_commit.assert_not_called()

    def test_callback_fires_once_then_resets(self, gesture, timer, on_commit):
        swipe(gesture, 0, 150)
        timer.run_all()
        on_commit.assert_called_once()
        assert gesture.state == GestureState.IDLE
        assert gesture.offset == 0

    def test_pointer_down_while_committing_is_noop(self, gesture, timer, on_commit):
        swipe(gesture, 0, 150)
        gesture.pointer_down(20)
        gesture.pointer_move(400)
        gesture.pointer_up()
        assert gesture.state == GestureState.COMMITTING
        assert gesture.offset == 1000
        assert len(timer.scheduled) == 1
        timer.run_all()
        on_commit.assert_called_once()

    def test_reusable_after_commit(self, gesture, timer, on_commit):
        swipe(gesture, 0, 150)
        timer.run_all()
        swipe(gesture, 0, 150)
        timer.run_all()
        assert on_commit.call_count == 2

    def test_callback_error_leaves_state_reset(self, timer):
        gesture = SwipeGesture(on_commit=MagicMock(side_effect=RuntimeError("boom")), timer=timer)
        swipe(gesture, 0, 150)
        with pytest.raises(RuntimeError, match="boom"):
            timer.run_all()
        assert gesture.state == GestureState.IDLE
        assert gesture.offset == 0

    def test_custom_threshold(self, on_commit, timer):
        gesture = SwipeGesture(on_commit=on_commit, timer=timer, threshold=50)
        swipe(gesture, 0, 60)
        assert gesture.is_committing


class TestDispose:
    def test_dispose_cancels_pending_commit(self, gesture, timer, on_commit):
        swipe(gesture, 0, 150)
        handle = timer.scheduled[0][1]
        gesture.dispose()
        assert handle.cancelled is True
        timer.run_all()
        on_commit.assert_not_called()
        assert gesture.state == GestureState.IDLE

    def test_stale_fire_after_dispose_is_ignored(self, gesture, timer, on_commit):
        swipe(gesture, 0, 150)
        handle = timer.scheduled[0][1]
        gesture.dispose()
        # A timer that ignores cancel still must not complete the item
        handle.callback()
        on_commit.assert_not_called()

    def test_dispose_when_idle(self, gesture):
        gesture.dispose()
        assert gesture.state == GestureState.IDLE


class TestWithAsyncioLoop:
    def test_event_loop_is_a_timer(self):
        calls = []

        async def scenario():
            loop = asyncio.get_running_loop()
            gesture = SwipeGesture(on_commit=lambda: calls.append("done"), timer=loop, commit_delay=0.01)
            swipe(gesture, 0, 200)
            await asyncio.sleep(0.05)
            return gesture

        gesture = asyncio.run(scenario())
        assert calls == ["done"]
        assert gesture.state == GestureState.IDLE

    def test_dispose_cancels_loop_handle(self):
        calls = []

        async def scenario():
            loop = asyncio.get_running_loop()
            gesture = SwipeGesture(on_commit=lambda: calls.append("done"), timer=loop, commit_delay=0.01)
            swipe(gesture, 0, 200)
            gesture.dispose()
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert calls == []
