import pytest

from mststep.engine import run
from mststep.navigator import Navigator
from mststep.playback import ManualTickSource, PlaybackScheduler, interval_for


@pytest.fixture
def clock():
    return ManualTickSource()


@pytest.fixture
def navigator(square_graph):
    return Navigator(square_graph, run(square_graph, "kruskal"))


def test_interval_matches_speed_scale():
    assert interval_for(1) == 2000
    assert interval_for(5) == 1200
    assert interval_for(10) == 200


def test_one_step_per_tick(navigator, clock):
    player = PlaybackScheduler(navigator, clock, speed=5)
    assert player.play()
    assert clock.advance(1199) == 0
    assert navigator.cursor == 0
    clock.advance(1)
    assert navigator.cursor == 1
    clock.advance(2400)
    assert navigator.cursor == 3
    assert clock.pending == 1


def test_plays_to_end_and_stops(navigator, clock):
    finished = []
    ticks = []
    player = PlaybackScheduler(navigator, clock, speed=10, on_tick=lambda: ticks.append(navigator.cursor),
                               on_finish=lambda: finished.append(navigator.cursor))
    player.play()
    clock.advance(200 * 100)
    assert navigator.at_end
    assert ticks == list(range(1, len(navigator.log) + 1))
    assert finished == [len(navigator.log)]
    assert not player.is_playing
    assert clock.pending == 0
    assert navigator.graph.total_weight == 6


def test_pause_and_resume_keep_cursor(navigator, clock):
    player = PlaybackScheduler(navigator, clock, speed=5)
    player.play()
    clock.advance(2400)
    player.pause()
    assert not player.is_playing
    assert clock.pending == 0
    clock.advance(10_000)
    assert navigator.cursor == 2
    assert player.toggle() is True
    clock.advance(1200)
    assert navigator.cursor == 3


def test_manual_step_cancels_autoplay(navigator, clock):
    player = PlaybackScheduler(navigator, clock, speed=5)
    player.play()
    clock.advance(600)
    assert player.step_forward()
    assert navigator.cursor == 1
    assert not player.is_playing
    clock.advance(10_000)
    assert navigator.cursor == 1

    player.play()
    clock.advance(1200)
    assert navigator.cursor == 2
    assert player.step_backward()
    assert navigator.cursor == 1
    assert clock.pending == 0


def test_speed_change_reschedules_single_tick(navigator, clock):
    player = PlaybackScheduler(navigator, clock, speed=1)
    player.play()
    player.speed = 10
    assert clock.pending == 1
    clock.advance(200)
    assert navigator.cursor == 1
    player.speed = 99
    assert player.speed == 10


def test_pause_from_tick_callback(navigator, clock):
    player = PlaybackScheduler(navigator, clock, speed=10)
    player.on_tick = player.pause
    player.play()
    clock.advance(5_000)
    assert navigator.cursor == 1
    assert clock.pending == 0


def test_play_without_log_or_at_end(square_graph, clock):
    empty = PlaybackScheduler(Navigator(square_graph), clock)
    assert empty.play() is False

    nav = Navigator(square_graph, run(square_graph, "prim"))
    nav.seek(len(nav.log))
    player = PlaybackScheduler(nav, clock)
    assert player.play() is False
    assert clock.pending == 0


def test_stop_resets_navigator(navigator, clock):
    player = PlaybackScheduler(navigator, clock, speed=10)
    player.play()
    clock.advance(1_000)
    player.stop()
    assert navigator.log is None
    assert navigator.graph.mst_edges == []
    assert clock.pending == 0
