"""Tests for integer line stepping."""

from __future__ import annotations

from terrain_skyline.view.raster import iter_line_cells, traverse_line


def _collect(x0: int, y0: int, x1: int, y1: int) -> list[tuple[int, int]]:
    cells: list[tuple[int, int]] = []
    traverse_line(x0, y0, x1, y1, lambda x, y: cells.append((x, y)))
    return cells


def _assert_connected_monotonic(cells: list[tuple[int, int]], end: tuple[int, int]) -> None:
    assert cells[-1] == end
    assert len(set(cells)) == len(cells)
    sx = 1 if end[0] >= cells[0][0] else -1
    sy = 1 if end[1] >= cells[0][1] else -1
    for (ax, ay), (bx, by) in zip(cells, cells[1:]):
        assert (bx - ax) * sx in (0, 1)
        assert (by - ay) * sy in (0, 1)
        assert (ax, ay) != (bx, by)


def test_horizontal_line_visits_every_cell_in_order() -> None:
    assert _collect(0, 0, 5, 0) == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0), (5, 0)]


def test_diagonal_line_is_connected_and_ends_on_endpoint() -> None:
    cells = _collect(0, 0, 3, 4)
    assert cells[0] == (0, 0)
    _assert_connected_monotonic(cells, (3, 4))


def test_negative_directions() -> None:
    cells = _collect(4, 2, -3, -6)
    assert cells[0] == (4, 2)
    _assert_connected_monotonic(cells, (-3, -6))


def test_single_point_line() -> None:
    assert _collect(2, 3, 2, 3) == [(2, 3)]


def test_visitor_can_stop_early() -> None:
    seen: list[tuple[int, int]] = []

    def visit(x: int, y: int) -> bool:
        seen.append((x, y))
        return x == 2

    count = traverse_line(0, 0, 10, 0, visit)

    assert seen == [(0, 0), (1, 0), (2, 0)]
    assert count == 3


def test_generator_matches_callback_traversal() -> None:
    assert list(iter_line_cells(1, 7, 9, -2)) == _collect(1, 7, 9, -2)
