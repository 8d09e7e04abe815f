from finops_ui.views.row_status import DELETED, SAVED, RowStatusTracker


def _tracker(clock):
    return RowStatusTracker(clock=clock, status_seconds=1.0, fade_seconds=0.4)


def test_saved_glyph_expires(clock):
    tracker = _tracker(clock)
    tracker.mark_saved(5)

    assert tracker.status(5) == SAVED
    assert not tracker.is_removing(5)
    clock.advance(0.5)
    assert tracker.status(5) == SAVED
    clock.advance(0.5)
    assert tracker.status(5) is None
    assert tracker.expire() == []
    assert not tracker.active


def test_deleted_row_fades_before_removal(clock):
    tracker = _tracker(clock)
    tracker.mark_deleted(7, 3, {"id": 7, "name": "x"})

    assert tracker.status(7) == DELETED
    assert tracker.ghosts() == [(3, {"id": 7, "name": "x"})]

    clock.advance(1.2)
    assert tracker.status(7) is None
    assert tracker.is_removing(7)
    assert tracker.expire() == []

    clock.advance(0.3)
    assert tracker.expire() == [7]
    assert tracker.ghosts() == []


def test_ghosts_are_ordered_by_index(clock):
    tracker = _tracker(clock)
    tracker.mark_deleted(1, 4, {"id": 1})
    tracker.mark_deleted(2, 0, {"id": 2})

    assert [index for index, _ in tracker.ghosts()] == [0, 4]


def test_ghost_keeps_a_copy(clock):
    tracker = _tracker(clock)
    record = {"id": 1, "name": "before"}
    tracker.mark_deleted(1, 0, record)
    record["name"] = "after"

    assert tracker.ghosts()[0][1]["name"] == "before"


def test_clear(clock):
    tracker = _tracker(clock)
    tracker.mark_saved(1)
    tracker.clear()
    assert not tracker.active
