import pytest

from event_registration import points
from event_registration.points import (
    Entry,
    PointRegistry,
    PointStats,
    TooManyCollisionsError,
)
from tests.test_utils import make_registry, walk


def test_end_to_end_append_and_walk() -> None:
    registry = PointRegistry()
    registry.append(0, 0, "a")
    registry.append(1, 0, "b")
    registry.append(0, 0, "c")

    assert registry.length() == 3
    assert registry.get_first_generation(0, 0) == Entry(0, 0, 1, "a")
    assert registry.first() == Entry(0, 0, 1, "a")
    assert registry.next() == Entry(1, 0, 1, "b")
    assert registry.next() == Entry(0, 0, 2, "c")
    assert registry.next() is None


def test_generation_density_with_interleaved_points() -> None:
    registry = PointRegistry()
    generations = [
        registry.append(x, y).generation
        for x, y in [(5, 5), (1, 2), (5, 5), (3, 3), (5, 5), (1, 2)]
    ]
    assert generations == [1, 1, 2, 1, 3, 2]
    assert registry.get(5, 5, 3) is not None
    assert registry.get(5, 5, 4) is None


def test_insertion_order_is_preserved() -> None:
    pts = [(3, 1), (0, 0), (3, 1), (2, 9), (0, 0), (7, 7)]
    registry = make_registry(pts)

    visited = walk(registry)
    assert [(x, y) for x, y, _ in visited] == pts
    assert len(visited) == registry.length() == len(registry)


def test_stats_ignore_later_generations() -> None:
    registry = make_registry([(1, 1), (3, 2), (1, 1)])
    assert registry.get_stats() == PointStats(count=2, min_x=1, max_x=3, min_y=1, max_y=2)


def test_stats_of_empty_registry() -> None:
    stats = PointRegistry().get_stats()
    assert stats.count == 0
    assert stats.min_x is None and stats.max_y is None


def test_stats_with_negative_coordinates() -> None:
    registry = make_registry([(0, 0), (-4, 2), (3, -1)])
    assert registry.get_stats() == PointStats(count=3, min_x=-4, max_x=3, min_y=-1, max_y=2)


def test_cursors_are_independent() -> None:
    registry = make_registry([(0, 0), (1, 0), (2, 0)])
    registry.first("a")
    registry.first("b")
    registry.next("a")
    registry.next("a")

    assert registry.current("a") == Entry(2, 0, 1)
    assert registry.current("b") == Entry(0, 0, 1)
    assert registry.current() is None


def test_next_past_the_end_unsets_cursor() -> None:
    registry = make_registry([(0, 0), (1, 0)])
    registry.last()
    assert registry.has_next() is False
    assert registry.next() is None
    assert registry.current() is None
    assert registry.next() is None


def test_prev_walks_backwards() -> None:
    registry = make_registry([(0, 0), (1, 0), (2, 0)])
    assert registry.last() == Entry(2, 0, 1)
    assert registry.has_prev()
    assert registry.prev() == Entry(1, 0, 1)
    assert registry.prev() == Entry(0, 0, 1)
    assert registry.has_prev() is False
    assert registry.prev() is None
    assert registry.current() is None


def test_cursor_moves_on_empty_registry() -> None:
    registry = PointRegistry()
    assert registry.first() is None
    assert registry.last() is None
    assert registry.next() is None
    assert registry.has_next() is False
    assert registry.has_prev() is False


def test_unset_cursor_has_no_neighbours() -> None:
    registry = make_registry([(0, 0), (1, 0)])
    assert registry.has_next("fresh") is False
    assert registry.has_prev("fresh") is False


def test_iteration_does_not_move_cursors() -> None:
    registry = make_registry([(0, 0), (1, 0), (0, 0)])
    registry.first()
    registry.next()

    assert [entry.generation for entry in registry] == [1, 1, 2]
    assert [entry.point for entry in registry.first_generation()] == [(0, 0), (1, 0)]
    assert registry.current() == Entry(1, 0, 1)


def test_mark_round_trip() -> None:
    registry = make_registry([(2, 3), (4, 4)])
    registry.set_mark(2, 3, "red")
    assert registry.get_mark(2, 3) == "red"

    registry.unmark(2, 3)
    assert registry.get_mark(2, 3) is None

    registry.set_mark(2, 3, "red")
    registry.set_mark(4, 4, "blue")
    registry.unmark_all()
    assert registry.marked() == {}


def test_mark_defaults_to_true_and_overwrites() -> None:
    registry = PointRegistry()
    registry.set_mark(1, 1)
    assert registry.get_mark(1, 1) is True
    registry.set_mark(1, 1, None)
    assert registry.get_mark(1, 1) is True
    registry.set_mark(1, 1, "green")
    assert registry.marked() == {(1, 1): "green"}


def test_marks_do_not_need_an_entry() -> None:
    registry = PointRegistry()
    registry.set_mark(9, 9, "red")
    registry.unmark(0, 0)
    assert registry.get_mark(9, 9) == "red"
    assert registry.length() == 0


def test_marks_cover_all_generations() -> None:
    registry = make_registry([(1, 1), (1, 1)])
    registry.set_mark(1, 1, "red")
    for entry in registry:
        assert registry.get_mark(entry.x, entry.y) == "red"


def test_marked_returns_a_snapshot() -> None:
    registry = PointRegistry()
    registry.set_mark(0, 0, "red")
    snapshot = registry.marked()
    registry.unmark_all()
    assert snapshot == {(0, 0): "red"}


@pytest.mark.parametrize("x, y", [(1.5, 0), (0, "1"), (True, 0), (None, None)])
def test_non_integer_coordinates_are_rejected(x, y) -> None:
    registry = PointRegistry()
    with pytest.raises(TypeError):
        registry.append(x, y)
    with pytest.raises(TypeError):
        registry.set_mark(x, y)


@pytest.mark.parametrize("cursor", ["", None, 3])
def test_invalid_cursor_names(cursor) -> None:
    registry = make_registry([(0, 0)])
    with pytest.raises(ValueError):
        registry.first(cursor)


def test_runaway_generations_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(points, "MAX_GENERATIONS", 3)
    registry = make_registry([(0, 0), (0, 0), (0, 0)])
    with pytest.raises(TooManyCollisionsError):
        registry.append(0, 0)
    assert registry.length() == 3


def test_repr_mentions_length() -> None:
    assert "length=2" in repr(make_registry([(0, 0), (0, 0)]))
