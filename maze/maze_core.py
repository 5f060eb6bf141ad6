"""
Core maze structures - grid, movement checks, and pathfinding
"""

from collections import deque, namedtuple
from utils.constants import DIRS, DX, DY


Position = namedtuple("Position", ["x", "y"])


class Maze:
    """
    Immutable maze grid with passage-based representation
    Each cell is a bitmask of open sides: N, S, E, W
    """
    __slots__ = ("rows", "cols", "_cells")

    def __init__(self, rows, cols, cells):
        """
        Args:
            rows, cols: Maze dimensions
            cells: rows x cols nested sequence of passage bitmasks
        """
        if len(cells) != rows or any(len(row) != cols for row in cells):
            raise ValueError(f"cells do not match a {cols}x{rows} grid")
        self.rows = rows
        self.cols = cols
        self._cells = tuple(tuple(row) for row in cells)

    @property
    def cells(self):
        """Rows of passage bitmasks (read-only)"""
        return self._cells

    def cell(self, x, y):
        """Passage bitmask for (x, y)"""
        return self._cells[y][x]

    def in_bounds(self, x, y):
        """Check if coordinates are within grid bounds"""
        return 0 <= x < self.cols and 0 <= y < self.rows

    def can_move(self, x, y, direction):
        """Check if the passage from (x, y) toward direction is open"""
        return bool(self._cells[y][x] & direction)

    def open_neighbors(self, x, y):
        """Get list of neighbor cells reachable in one step"""
        res = []
        w = self._cells[y][x]
        for dx, dy, bit, _ in DIRS:
            if w & bit:
                nx, ny = x + dx, y + dy
                if self.in_bounds(nx, ny):
                    res.append(Position(nx, ny))
        return res

    def passage_count(self):
        """Number of open passages (each shared passage counted once)"""
        total = 0
        for row in self._cells:
            for w in row:
                total += bin(w).count("1")
        return total // 2

    def reachable_from(self, start):
        """Set of all cells reachable from start"""
        start = Position(*start)
        seen = {start}
        q = deque([start])
        while q:
            x, y = q.popleft()
            for n in self.open_neighbors(x, y):
                if n not in seen:
                    seen.add(n)
                    q.append(n)
        return seen

    def shortest_path(self, start, goal):
        """BFS shortest path finder, returns [] when unreachable"""
        start = Position(*start)
        goal = Position(*goal)
        if start == goal:
            return [start]

        q = deque([start])
        prev = {start: None}

        while q:
            x, y = q.popleft()
            for n in self.open_neighbors(x, y):
                if n not in prev:
                    prev[n] = Position(x, y)
                    if n == goal:
                        return reconstruct_path(prev, goal)
                    q.append(n)
        return []

    def __eq__(self, other):
        if not isinstance(other, Maze):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self):
        return hash(self._cells)

    def __repr__(self):
        return f"Maze({self.cols}x{self.rows})"


def step(position, direction):
    """Destination of a single step from position toward direction"""
    x, y = position
    return Position(x + DX[direction], y + DY[direction])


def reconstruct_path(prev, goal):
    """Reconstruct path from prev dictionary"""
    path = []
    cur = goal
    while cur is not None:
        path.append(cur)
        cur = prev[cur]
    path.reverse()
    return path
