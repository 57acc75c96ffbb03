#!/usr/bin/env python3
"""
verify_maxflow.py

Usage:
    python verify_maxflow.py input.json output.json

Validates a capflow solver output:
 - For "ok" status with a single (source, sink):
    * each flow is present, integral and 0 <= flow <= capacity
    * conservation at every vertex other than source and sink
    * net outflow of source == net inflow of sink == max_flow
    * cut edges leave cut_reachable, are saturated, and cut_capacity == max_flow
    * max_flow agrees with an independent LP (pulp / CBC) and with networkx
 - For "ok" status with "results" (all pairs):
    * every ordered pair is present once and matches networkx
 - For "invalid" / "iteration_limit" status:
    * presence of an "error" message
Exits 0 on success, 2 on failure.
"""
import sys
import json
from collections import defaultdict

import networkx as nx
import pulp

from capflow.errors import FlowError
from capflow.main import build_graph


def load(path):
    with open(path, "r") as f:
        return json.load(f)


def print_errors_and_exit(fails):
    print("verify_maxflow: FAILED")
    for f in fails:
        print(" -", f)
    sys.exit(2)


def to_networkx(capacity):
    G = nx.DiGraph()
    G.add_nodes_from(range(capacity.n))
    for u, v, cap in capacity.edges():
        G.add_edge(u, v, capacity=cap)
    return G


def networkx_max_flow(capacity, source, sink):
    value, _ = nx.maximum_flow(to_networkx(capacity), source, sink, capacity="capacity")
    return value


def lp_max_flow(capacity, source, sink):
    """
    Max flow as a linear program:
      maximize  sum f(source, *) - sum f(*, source)
      s.t.      0 <= f(u, v) <= cap(u, v)
                inflow == outflow at every other vertex except sink
    Returns the optimum, or None if CBC did not report an optimal solution.
    """
    prob = pulp.LpProblem("max_flow", pulp.LpMaximize)
    f = {
        (u, v): pulp.LpVariable(f"f__{u}__{v}", lowBound=0, upBound=cap, cat="Continuous")
        for u, v, cap in capacity.edges()
    }
    out_of = defaultdict(list)
    into = defaultdict(list)
    for (u, v), var in f.items():
        out_of[u].append(var)
        into[v].append(var)

    prob += pulp.lpSum(out_of[source]) - pulp.lpSum(into[source])
    for x in range(capacity.n):
        if x in (source, sink):
            continue
        prob += (pulp.lpSum(into[x]) - pulp.lpSum(out_of[x]) == 0), f"balance_{x}"

    prob.solve(pulp.PULP_CBC_CMD(msg=False, timeLimit=10))
    status = pulp.LpStatus.get(prob.status, "Undefined")
    if status.lower() != "optimal":
        return None
    return float(pulp.value(prob.objective) or 0.0)


def check_single(capacity, out, fails):
    try:
        source = out["source"]
        sink = out["sink"]
        reported = out["max_flow"]
        flows = out["flows"]
    except KeyError as e:
        fails.append(f"Output missing field {e} for status 'ok'.")
        return

    # Edge bounds
    flow_map = {}
    for fl in flows:
        try:
            u = fl["from"]
            v = fl["to"]
            val = fl["flow"]
        except (KeyError, TypeError) as e:
            fails.append(f"Malformed flow entry: {fl} ({e})")
            continue
        if not isinstance(val, int) or isinstance(val, bool):
            fails.append(f"Edge {(u, v)} flow {val!r} is not an integer")
            continue
        if not (isinstance(u, int) and isinstance(v, int) and 0 <= u < capacity.n and 0 <= v < capacity.n):
            fails.append(f"Flow entry {(u, v)} is not an edge of the input")
            continue
        cap = capacity.capacity(u, v)
        if val < 0:
            fails.append(f"Edge {(u, v)} flow {val} is negative")
        if val > cap:
            fails.append(f"Edge {(u, v)} flow {val} above capacity {cap}")
        flow_map[(u, v)] = val

    inflow = defaultdict(int)
    outflow = defaultdict(int)
    for (u, v), val in flow_map.items():
        outflow[u] += val
        inflow[v] += val

    # Conservation at inner vertices
    for x in range(capacity.n):
        if x in (source, sink):
            continue
        if inflow[x] != outflow[x]:
            fails.append(f"Vertex {x} conservation violated: inflow({inflow[x]}) != outflow({outflow[x]})")

    net_out = outflow[source] - inflow[source]
    net_in = inflow[sink] - outflow[sink]
    if net_out != reported:
        fails.append(f"max_flow reported {reported} but source net outflow {net_out}")
    if net_in != reported:
        fails.append(f"max_flow reported {reported} but sink net inflow {net_in}")

    # Cut certificate
    if "cut_reachable" in out:
        side = set(out["cut_reachable"])
        if source not in side:
            fails.append("cut_reachable does not contain the source")
        if sink in side:
            fails.append("cut_reachable contains the sink")
        crossing = 0
        for u, v, cap in capacity.edges():
            if u in side and v not in side:
                crossing += cap
                if flow_map.get((u, v), 0) != cap:
                    fails.append(f"Cut edge {(u, v)} not saturated: flow {flow_map.get((u, v), 0)} < {cap}")
        if crossing != reported:
            fails.append(f"Cut capacity {crossing} != max_flow {reported}")
        if out.get("cut_capacity") is not None and out["cut_capacity"] != crossing:
            fails.append(f"cut_capacity reported {out['cut_capacity']} but crossing edges sum to {crossing}")

    # Independent solvers
    expected = networkx_max_flow(capacity, source, sink)
    if expected != reported:
        fails.append(f"networkx max flow {expected} != reported {reported}")
    lp_value = lp_max_flow(capacity, source, sink)
    if lp_value is None:
        fails.append("LP cross-check did not reach an optimal solution")
    elif abs(lp_value - reported) > 1e-6:
        fails.append(f"LP max flow {lp_value} != reported {reported}")


def check_all_pairs(capacity, out, fails):
    seen = set()
    for r in out["results"]:
        try:
            s, t, reported = r["source"], r["sink"], r["max_flow"]
        except (KeyError, TypeError) as e:
            fails.append(f"Malformed result entry: {r} ({e})")
            continue
        if (s, t) in seen:
            fails.append(f"Pair {(s, t)} reported twice")
        seen.add((s, t))
        expected = networkx_max_flow(capacity, s, t)
        if expected != reported:
            fails.append(f"Pair {(s, t)}: networkx max flow {expected} != reported {reported}")
    want = {(s, t) for s in range(capacity.n) for t in range(capacity.n) if s != t}
    missing = want - seen
    if missing:
        fails.append(f"Missing pairs: {sorted(missing)}")


def main():
    if len(sys.argv) != 3:
        print("Usage: python verify_maxflow.py input.json output.json")
        sys.exit(2)
    inp = load(sys.argv[1])
    out = load(sys.argv[2])

    fails = []

    if "status" not in out:
        fails.append("Output missing 'status' field.")
        print_errors_and_exit(fails)

    status = out["status"]

    if status != "ok":
        if "error" not in out:
            fails.append(f"Status '{status}' output missing 'error'.")
            print_errors_and_exit(fails)
        print(f"verify_maxflow: reported {status} ({out['error']}).")
        sys.exit(0)

    try:
        capacity = build_graph(inp)
    except FlowError as e:
        fails.append(f"Solver said ok but the input is invalid: {e}")
        print_errors_and_exit(fails)

    if "results" in out:
        check_all_pairs(capacity, out, fails)
    else:
        check_single(capacity, out, fails)

    if fails:
        print_errors_and_exit(fails)
    print("verify_maxflow: OK")
    sys.exit(0)


if __name__ == "__main__":
    main()
