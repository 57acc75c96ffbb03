"""
capflow/solver.py

Edmonds-Karp maximum flow: Ford-Fulkerson with breadth-first selection of
augmenting paths.

The controller loop is

    residual = fresh copy of capacity
    while BFS finds a source -> sink path of positive residual capacity:
        push the path's bottleneck forward, credit it to the reverse arcs
        add the bottleneck to the running total

BFS always returns a path with the fewest edges, which bounds the number of
augmentations by O(V*E) and the whole solve by O(V*E^2).
"""
from collections import deque, namedtuple

from capflow.errors import InvalidArgument, IterationLimitExceeded
from capflow.graph import CapacityGraph, residual_from

NO_PARENT = -1


def find_augmenting_path(residual, source, sink, parent):
    """
    Breadth-first search over positive-residual arcs.
    Fills `parent` for every vertex reached and returns True iff sink was reached.
    Entries of `parent` for unreached vertices are left as they were.
    """
    visited = [False] * residual.n
    queue = deque([source])
    visited[source] = True
    parent[source] = NO_PARENT

    while queue:
        u = queue.popleft()
        for v in residual.neighbours(u):
            if not visited[v] and residual.capacity(u, v) > 0:
                visited[v] = True
                parent[v] = u
                queue.append(v)

    return visited[sink]


def bottleneck(residual, parent, source, sink):
    """Smallest residual capacity on the parent chain from source to sink."""
    v = sink
    amount = None
    while v != source:
        u = parent[v]
        cap = residual.capacity(u, v)
        if amount is None or cap < amount:
            amount = cap
        v = u
    return amount


def augment(residual, parent, source, sink):
    """Push the bottleneck along the parent chain. Returns the amount pushed."""
    amount = bottleneck(residual, parent, source, sink)
    v = sink
    while v != source:
        u = parent[v]
        residual.push(u, v, amount)
        v = u
    return amount


def path_from_parents(parent, source, sink):
    path = [sink]
    v = sink
    while v != source:
        v = parent[v]
        path.append(v)
    path.reverse()
    return path


class FlowResult(namedtuple("FlowResult", ["value", "source", "sink", "residual", "paths"])):
    """
    Outcome of one solve.

    value    - the maximum flow
    residual - dense snapshot (list of lists) of the final residual capacities
    paths    - [(vertex list, amount), ...] in the order they were augmented
    """

    __slots__ = ()

    def edge_flows(self, capacity):
        """Net flow on each edge that carries some, as {(u, v): flow}."""
        capacity = as_capacity_graph(capacity)
        flows = {}
        for u, v, cap in capacity.edges():
            f = cap - self.residual[u][v]
            if f > 0:
                flows[(u, v)] = f
        return flows

    def reachable(self):
        """Vertices reachable from the source over positive residual arcs."""
        n = len(self.residual)
        seen = [False] * n
        seen[self.source] = True
        queue = deque([self.source])
        while queue:
            u = queue.popleft()
            for v in range(n):
                if not seen[v] and self.residual[u][v] > 0:
                    seen[v] = True
                    queue.append(v)
        return [v for v in range(n) if seen[v]]

    def min_cut(self, capacity):
        """
        Source side of a minimum cut, the edges crossing it, and their total
        capacity. By max-flow/min-cut the total equals `value`.
        """
        capacity = as_capacity_graph(capacity)
        side = set(self.reachable())
        cut_edges = [
            (u, v, cap)
            for u, v, cap in capacity.edges()
            if u in side and v not in side
        ]
        return sorted(side), cut_edges, sum(cap for _, _, cap in cut_edges)


def as_capacity_graph(capacity):
    if isinstance(capacity, CapacityGraph):
        return capacity
    return CapacityGraph(capacity)


def _check_endpoints(capacity, source, sink):
    capacity.check_vertex(source, "source")
    capacity.check_vertex(sink, "sink")
    if source == sink:
        raise InvalidArgument(f"source and sink must differ (both are {source})")


def _run(capacity, source, sink, representation, on_augment, max_iterations, keep_paths):
    if max_iterations is not None and (
        isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations < 0
    ):
        raise InvalidArgument(f"max_iterations must be a non-negative integer, got {max_iterations!r}")

    residual = residual_from(capacity, representation)
    parent = [NO_PARENT] * capacity.n
    max_flow = 0
    iterations = 0
    paths = []

    while find_augmenting_path(residual, source, sink, parent):
        if max_iterations is not None and iterations >= max_iterations:
            raise IterationLimitExceeded(max_iterations, max_flow)
        amount = augment(residual, parent, source, sink)
        max_flow += amount
        iterations += 1
        if on_augment is not None or keep_paths:
            path = path_from_parents(parent, source, sink)
            if keep_paths:
                paths.append((path, amount))
            if on_augment is not None:
                on_augment(path, amount)

    return max_flow, residual, paths


def compute_max_flow(capacity, source, sink, representation="dense",
                     on_augment=None, max_iterations=None):
    """
    Maximum flow from `source` to `sink` under `capacity`.

    `capacity` is a CapacityGraph or a square table of non-negative integers;
    it is never mutated. Raises InvalidArgument for a bad table, an endpoint
    outside [0, n) or source == sink. An unreachable sink gives 0.

    on_augment(path, amount) is called after each augmentation. If
    max_iterations is given and more augmenting paths remain after that many,
    IterationLimitExceeded is raised.
    """
    capacity = as_capacity_graph(capacity)
    _check_endpoints(capacity, source, sink)
    value, _, _ = _run(capacity, source, sink, representation,
                       on_augment, max_iterations, keep_paths=False)
    return value


def solve(capacity, source, sink, representation="dense",
          on_augment=None, max_iterations=None):
    """Like compute_max_flow but returns a FlowResult with the residual and paths."""
    capacity = as_capacity_graph(capacity)
    _check_endpoints(capacity, source, sink)
    value, residual, paths = _run(capacity, source, sink, representation,
                                  on_augment, max_iterations, keep_paths=True)
    return FlowResult(value, source, sink, residual.snapshot(), paths)
