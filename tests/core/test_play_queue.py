"""Play Queue — editing and transport transitions.

Tests cover:
    - remove/clear adjust or reset the current index
    - move keeps the current index on the same track
    - play/select/next/previous selection and wrap-around
    - volume clamping and snapshot round trip
"""

import pytest

from melodyhub.core.domain_types import Track
from melodyhub.core.errors import EmptyQueueError, TrackIndexError
from melodyhub.core.play_queue import DEFAULT_VOLUME, PlayQueue


def _queue(n: int, current: int = -1) -> PlayQueue:
    tracks = [Track(path=f"t{i}.mp3", title=f"T{i}") for i in range(n)]
    return PlayQueue(tracks=tracks, current_index=current)


def _titles(queue: PlayQueue) -> list[str]:
    return [t.title for t in queue.tracks]


# ─── construction ────────────────────────────────────────────────

def test_defaults():
    queue = PlayQueue()
    assert queue.current_index == -1
    assert queue.current_track is None
    assert queue.volume == DEFAULT_VOLUME
    assert not queue.is_playing


def test_out_of_range_index_is_reset_on_load():
    queue = PlayQueue(tracks=[Track("a.mp3", "a")], current_index=5, is_playing=True)
    assert queue.current_index == -1
    assert not queue.is_playing


# ─── editing ─────────────────────────────────────────────────────

def test_add_appends_and_counts():
    queue = _queue(1)
    assert queue.add([Track("x.mp3", "X"), Track("y.mp3", "Y")]) == 2
    assert _titles(queue) == ["T0", "X", "Y"]


def test_remove_current_track_deselects_and_stops():
    queue = _queue(3, current=1)
    queue.play()
    queue.remove(1)
    assert queue.current_index == -1
    assert not queue.is_playing
    assert _titles(queue) == ["T0", "T2"]


def test_remove_before_current_shifts_index():
    queue = _queue(3, current=2)
    queue.remove(0)
    assert queue.current_index == 1
    assert queue.current_track.title == "T2"


def test_remove_after_current_keeps_index():
    queue = _queue(3, current=0)
    queue.remove(2)
    assert queue.current_index == 0


def test_remove_rejects_bad_index():
    with pytest.raises(TrackIndexError) as info:
        _queue(2).remove(2)
    assert info.value.http_status == 400


def test_clear_resets_everything():
    queue = _queue(3, current=1)
    queue.play()
    queue.clear()
    assert len(queue) == 0
    assert queue.current_index == -1
    assert not queue.is_playing


def test_move_reorders():
    queue = _queue(4)
    queue.move(0, 2)
    assert _titles(queue) == ["T1", "T2", "T0", "T3"]


def test_move_current_track_follows_it():
    queue = _queue(4, current=0)
    queue.move(0, 3)
    assert queue.current_index == 3
    assert queue.current_track.title == "T0"


def test_move_across_current_downward_decrements():
    queue = _queue(4, current=2)
    queue.move(0, 3)
    assert queue.current_track.title == "T2"
    assert queue.current_index == 1


def test_move_across_current_upward_increments():
    queue = _queue(4, current=1)
    queue.move(3, 0)
    assert queue.current_track.title == "T1"
    assert queue.current_index == 2


def test_move_same_position_is_noop():
    queue = _queue(3, current=1)
    queue.move(1, 1)
    assert _titles(queue) == ["T0", "T1", "T2"]
    assert queue.current_index == 1


def test_move_rejects_bad_index():
    with pytest.raises(TrackIndexError):
        _queue(2).move(0, 5)


# ─── transport ───────────────────────────────────────────────────

def test_play_empty_queue_raises():
    with pytest.raises(EmptyQueueError) as info:
        PlayQueue().play()
    assert info.value.http_status == 409


def test_play_without_selection_starts_at_first():
    queue = _queue(3)
    assert queue.play().title == "T0"
    assert queue.is_playing


def test_pause_keeps_selection():
    queue = _queue(2)
    queue.play()
    queue.pause()
    assert not queue.is_playing
    assert queue.current_index == 0


def test_select_plays_given_track():
    queue = _queue(3)
    assert queue.select(2).title == "T2"
    assert queue.is_playing


def test_select_rejects_bad_index():
    with pytest.raises(TrackIndexError):
        _queue(3).select(-1)


def test_next_wraps_to_first():
    queue = _queue(3, current=2)
    assert queue.next().title == "T0"


def test_next_without_selection_starts_at_first():
    assert _queue(3).next().title == "T0"


def test_previous_wraps_to_last():
    queue = _queue(3, current=0)
    assert queue.previous().title == "T2"


def test_previous_without_selection_steps_back_from_minus_one():
    # (-1 - 1) mod len: second to last
    assert _queue(4).previous().title == "T2"
    assert _queue(3).previous().title == "T1"


def test_previous_without_selection_on_single_track():
    assert _queue(1).previous().title == "T0"


def test_next_and_previous_on_empty_queue_do_nothing():
    queue = PlayQueue()
    assert queue.next() is None
    assert queue.previous() is None
    assert queue.current_index == -1


# ─── settings & persistence ──────────────────────────────────────

@pytest.mark.parametrize("given, expected", [(-1, 0.0), (0.25, 0.25), (3, 1.0)])
def test_set_volume_clamps(given, expected):
    queue = PlayQueue()
    queue.set_volume(given)
    assert queue.volume == expected


def test_snapshot_round_trip():
    queue = _queue(2, current=1)
    queue.play()
    queue.set_volume(0.8)
    queue.current_path = "Artist"
    restored = PlayQueue.from_snapshot(queue.to_snapshot())
    assert restored == queue


def test_from_snapshot_tolerates_missing_keys():
    queue = PlayQueue.from_snapshot({})
    assert queue == PlayQueue()
