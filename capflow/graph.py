"""
capflow/graph.py

Capacity tables and the residual copies the solver works on.

CapacityGraph is the immutable input: an n x n table of non-negative integers
where 0 means "no edge". A residual is a mutable working copy made fresh for
every solve. Two residual layouts are provided:

  DenseResidual  - list of lists, scans every vertex as a neighbour
  SparseResidual - per-vertex dicts plus sorted neighbour lists; each vertex
                   lists both its out- and in-neighbours, since reverse arcs
                   gain capacity as flow is pushed

Both expose the same small interface (n, capacity, neighbours, push, snapshot)
and both keep neighbours in increasing vertex order, so BFS picks the same path
whichever layout is used.
"""
import numbers

from capflow.errors import InvalidArgument


def _coerce_capacity(value, u, v):
    # bool is an int subclass; a JSON true/false in a table is a mistake
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgument(f"capacity[{u}][{v}] is not a number: {value!r}")
    if isinstance(value, numbers.Integral):
        cap = int(value)
    elif float(value).is_integer():
        cap = int(value)
    else:
        raise InvalidArgument(f"capacity[{u}][{v}] is not an integer: {value!r}")
    if cap < 0:
        raise InvalidArgument(f"capacity[{u}][{v}] is negative: {cap}")
    return cap


class CapacityGraph(object):
    """Immutable square capacity table indexed by (u, v)."""

    __slots__ = ("_rows",)

    def __init__(self, table):
        if isinstance(table, CapacityGraph):
            rows = table._rows
        else:
            try:
                raw = [list(row) for row in table]
            except TypeError:
                raise InvalidArgument("capacity table must be a sequence of rows")
            n = len(raw)
            for u, row in enumerate(raw):
                if len(row) != n:
                    raise InvalidArgument(
                        f"capacity table is not square: row {u} has {len(row)} entries, expected {n}"
                    )
            rows = tuple(
                tuple(_coerce_capacity(c, u, v) for v, c in enumerate(row))
                for u, row in enumerate(raw)
            )
        object.__setattr__(self, "_rows", rows)

    def __setattr__(self, name, value):
        raise AttributeError("CapacityGraph is immutable")

    @classmethod
    def from_edges(cls, n, edges):
        """
        Build a table from (u, v, capacity) triples.
        Repeated (u, v) pairs add their capacities together.
        """
        if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 0:
            raise InvalidArgument(f"vertex count must be a non-negative integer, got {n!r}")
        table = [[0] * n for _ in range(n)]
        for u, v, cap in edges:
            for name, x in (("from", u), ("to", v)):
                if isinstance(x, bool) or not isinstance(x, numbers.Integral) or not 0 <= x < n:
                    raise InvalidArgument(f"edge endpoint '{name}'={x!r} outside [0, {n})")
            table[u][v] += _coerce_capacity(cap, u, v)
        return cls(table)

    @property
    def n(self):
        return len(self._rows)

    def __len__(self):
        return len(self._rows)

    @property
    def rows(self):
        return self._rows

    def capacity(self, u, v):
        return self._rows[u][v]

    def __getitem__(self, u):
        return self._rows[u]

    def __eq__(self, other):
        if isinstance(other, CapacityGraph):
            return self._rows == other._rows
        return NotImplemented

    def __hash__(self):
        return hash(self._rows)

    def __repr__(self):
        return f"CapacityGraph(n={self.n}, edges={sum(1 for _ in self.edges())})"

    def edges(self):
        """Yield (u, v, capacity) for every positive-capacity edge, row-major."""
        for u, row in enumerate(self._rows):
            for v, cap in enumerate(row):
                if cap > 0:
                    yield u, v, cap

    def out_capacity(self, u):
        return sum(self._rows[u])

    def check_vertex(self, x, role):
        if isinstance(x, bool) or not isinstance(x, numbers.Integral):
            raise InvalidArgument(f"{role} must be an integer vertex, got {x!r}")
        if not 0 <= x < self.n:
            raise InvalidArgument(f"{role} {x} outside valid vertex range [0, {self.n})")

    def to_lists(self):
        return [list(row) for row in self._rows]


class DenseResidual(object):
    def __init__(self, capacity):
        self.n = capacity.n
        self._cap = [list(row) for row in capacity.rows]

    def capacity(self, u, v):
        return self._cap[u][v]

    def neighbours(self, u):
        return range(self.n)

    def push(self, u, v, amount):
        self._cap[u][v] -= amount
        self._cap[v][u] += amount

    def snapshot(self):
        return [list(row) for row in self._cap]


class SparseResidual(object):
    def __init__(self, capacity):
        self.n = capacity.n
        self._cap = [dict() for _ in range(self.n)]
        for u, v, cap in capacity.edges():
            self._cap[u][v] = cap
            # reverse arc, credited when flow is pushed along (u, v)
            self._cap[v].setdefault(u, 0)
        self._adj = [sorted(arcs) for arcs in self._cap]

    def capacity(self, u, v):
        return self._cap[u].get(v, 0)

    def neighbours(self, u):
        return self._adj[u]

    def push(self, u, v, amount):
        self._cap[u][v] -= amount
        self._cap[v][u] += amount

    def snapshot(self):
        out = [[0] * self.n for _ in range(self.n)]
        for u, arcs in enumerate(self._cap):
            for v, cap in arcs.items():
                out[u][v] = cap
        return out


REPRESENTATIONS = {
    "dense": DenseResidual,
    "sparse": SparseResidual,
}


def residual_from(capacity, representation="dense"):
    """Return a fresh residual copy of `capacity` in the requested layout."""
    try:
        factory = REPRESENTATIONS[representation]
    except (KeyError, TypeError):
        raise InvalidArgument(
            f"unknown representation {representation!r}; choose one of {sorted(REPRESENTATIONS)}"
        )
    return factory(capacity)


def example_graph():
    """The six-vertex sample network used by the demos and tests."""
    table = [[0] * 6 for _ in range(6)]
    table[0][1] = 15
    table[0][2] = 12
    table[1][2] = 9
    table[1][3] = 11
    table[2][1] = 5
    table[2][4] = 13
    table[3][2] = 9
    table[3][5] = 25
    table[4][3] = 8
    table[4][5] = 6
    return CapacityGraph(table)
