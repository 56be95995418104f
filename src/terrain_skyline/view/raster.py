"""Integer line stepping (compact Bresenham) over grid cells."""

from __future__ import annotations

from collections.abc import Callable, Iterator

CellVisitor = Callable[[int, int], object]


def iter_line_cells(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    """Yield every cell from (x0, y0) to (x1, y1) inclusive, start first.

    Uses only integer additions: each step advances x, y, or both by one, so
    consecutive cells are 8-connected and no cell repeats.
    """
    x, y = int(x0), int(y0)
    x1, y1 = int(x1), int(y1)
    dx = abs(x1 - x)
    dy = -abs(y1 - y)
    sx = 1 if x < x1 else -1
    sy = 1 if y < y1 else -1
    err = dx + dy

    while True:
        yield (x, y)
        if x == x1 and y == y1:
            return
        e2 = 2 * err
        if e2 > dy:
            err += dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def traverse_line(x0: int, y0: int, x1: int, y1: int, visit: CellVisitor) -> int:
    """Call `visit(x, y)` along the line until it returns truthy or the end is reached.

    Returns the number of cells passed to `visit`.
    """
    count = 0
    for x, y in iter_line_cells(x0, y0, x1, y1):
        count += 1
        if visit(x, y):
            break
    return count
