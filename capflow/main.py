#!/usr/bin/env python3
"""
capflow/main.py

Reads JSON from stdin and writes JSON to stdout.

Computes maximum flow (Edmonds-Karp) on a capacity table.

Input expected (JSON), either a dense table:
{
  "capacity": [[0, 15, 12, 0], ...],
  "source": 0,
  "sink": 5
}
or an edge list over vertices 0..n-1 (repeated pairs add up):
{
  "n": 6,
  "edges": [
    {"from": 0, "to": 1, "capacity": 15},
    ...
  ],
  "source": 0,
  "sink": 5
}
Optional keys: "representation" ("dense" | "sparse"), "all_pairs" (bool),
"max_iterations" (int). Command-line flags override them.

Output (single pair):
{
  "status": "ok",
  "source": 0,
  "sink": 5,
  "max_flow": 24,
  "flows": [{"from": 0, "to": 1, "flow": 12}, ...],
  "cut_reachable": [0, 1, 2],
  "cut_edges": [{"from": 1, "to": 3, "capacity": 11}, ...],
  "cut_capacity": 24
}

Output (all pairs):
{
  "status": "ok",
  "results": [{"source": 0, "sink": 1, "max_flow": 20}, ...]
}

On bad input (exit code 2):
{
  "status": "invalid",
  "error": "source 7 outside valid vertex range [0, 6)"
}
If --max-iterations is exceeded the status is "iteration_limit" (exit code 2)
and "flow_so_far" carries the flow pushed before giving up.
"""
import argparse
import json
import sys

from capflow.errors import FlowError, InvalidArgument, IterationLimitExceeded
from capflow.graph import CapacityGraph
from capflow.solver import compute_max_flow, solve


def make_args(argv=None):
    p = argparse.ArgumentParser(description="Max flow (Edmonds-Karp) over a JSON capacity table")
    p.add_argument("--all-pairs", action="store_true", default=None,
                   help="solve every ordered (source, sink) pair")
    p.add_argument("--representation", choices=["dense", "sparse"], default=None,
                   help="residual graph layout")
    p.add_argument("--max-iterations", type=int, default=None,
                   help="fail if more than this many augmenting paths are needed")
    p.add_argument("--paths", action="store_true",
                   help="include augmenting paths in the output")
    return p.parse_args(argv)


def read_input(stream):
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise InvalidArgument(f"input is not valid JSON: {e}")
    if not isinstance(data, dict):
        raise InvalidArgument("input must be a JSON object")
    return data


def build_graph(data):
    """Turn the JSON document into a CapacityGraph."""
    if "capacity" in data:
        table = data["capacity"]
        if not isinstance(table, list) or not all(isinstance(row, list) for row in table):
            raise InvalidArgument("'capacity' must be a list of rows")
        return CapacityGraph(table)
    if "edges" in data:
        n = data.get("n")
        edges = data["edges"]
        if not isinstance(edges, list):
            raise InvalidArgument("'edges' must be a list")
        triples = []
        for e in edges:
            try:
                triples.append((e["from"], e["to"], e.get("capacity", 0)))
            except (KeyError, TypeError, AttributeError):
                raise InvalidArgument(f"malformed edge entry: {e!r}")
        if n is None:
            # infer vertex count from the largest endpoint
            n = 1 + max((max(u, v) for u, v, _ in triples if isinstance(u, int) and isinstance(v, int)),
                        default=-1)
        return CapacityGraph.from_edges(n, triples)
    raise InvalidArgument("input needs either 'capacity' or 'edges'")


def all_pairs(capacity, representation="dense", max_iterations=None):
    """
    Max flow for every ordered (source, sink) pair with source != sink.
    Each pair is solved on its own fresh residual copy.
    """
    capacity = capacity if isinstance(capacity, CapacityGraph) else CapacityGraph(capacity)
    results = {}
    for s in range(capacity.n):
        for t in range(capacity.n):
            if s == t:
                continue
            results[(s, t)] = compute_max_flow(capacity, s, t, representation=representation,
                                               max_iterations=max_iterations)
    return results


def format_single(capacity, result, include_paths):
    flows = result.edge_flows(capacity)
    reachable, cut_edges, cut_capacity = result.min_cut(capacity)
    out = {
        "status": "ok",
        "source": result.source,
        "sink": result.sink,
        "max_flow": result.value,
        "flows": [{"from": u, "to": v, "flow": f} for (u, v), f in sorted(flows.items())],
        "cut_reachable": reachable,
        "cut_edges": [{"from": u, "to": v, "capacity": c} for u, v, c in cut_edges],
        "cut_capacity": cut_capacity,
    }
    if include_paths:
        out["augmenting_paths"] = [{"path": path, "flow": amount} for path, amount in result.paths]
    return out


def format_all_pairs(results):
    return {
        "status": "ok",
        "results": [
            {"source": s, "sink": t, "max_flow": v}
            for (s, t), v in sorted(results.items())
        ],
    }


def run(data, args):
    capacity = build_graph(data)
    representation = args.representation or data.get("representation", "dense")
    max_iterations = args.max_iterations
    if max_iterations is None:
        max_iterations = data.get("max_iterations")
    want_all = args.all_pairs if args.all_pairs is not None else bool(data.get("all_pairs", False))

    if want_all:
        return format_all_pairs(all_pairs(capacity, representation, max_iterations))

    for key in ("source", "sink"):
        if key not in data:
            raise InvalidArgument(f"missing '{key}' (or pass --all-pairs)")
    result = solve(capacity, data["source"], data["sink"], representation=representation,
                   max_iterations=max_iterations)
    return format_single(capacity, result, args.paths)


def main(argv=None):
    args = make_args(argv)
    try:
        data = read_input(sys.stdin)
        out = run(data, args)
    except IterationLimitExceeded as e:
        print(json.dumps({"status": "iteration_limit", "error": str(e), "flow_so_far": e.flow_so_far}, indent=2))
        return 2
    except FlowError as e:
        print(json.dumps({"status": "invalid", "error": str(e)}, indent=2))
        return 2
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
