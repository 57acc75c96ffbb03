#!/usr/bin/env python3
# gen_graphs.py
# Generate synthetic capacity-table JSON testcases for capflow/main.py

import argparse
import json
import random


def make_args(argv=None):
    p = argparse.ArgumentParser(description="Generate max-flow JSON testcases")
    p.add_argument("--seed", type=int, default=0, help="random seed")
    p.add_argument("--n", type=int, default=6, help="number of vertices")
    p.add_argument("--density", type=float, default=0.35, help="probability of an edge between two vertices")
    p.add_argument("--max_cap", type=int, default=30, help="max capacity per edge")
    p.add_argument("--source", type=int, default=0, help="source vertex")
    p.add_argument("--sink", type=int, default=None, help="sink vertex (default: n-1)")
    p.add_argument("--disconnect", action="store_true", help="make the sink unreachable from the source")
    p.add_argument("--sparse", action="store_true", help="emit an edge list instead of a dense table")
    p.add_argument("--outfile", type=str, default=None, help="write JSON to file instead of stdout")
    return p.parse_args(argv)


def generate(args):
    rng = random.Random(args.seed)
    n = max(2, args.n)
    source = args.source
    sink = args.sink if args.sink is not None else n - 1
    table = [[0] * n for _ in range(n)]

    # a backbone path source -> ... -> sink so the instance is usually non-trivial
    middle = [v for v in range(n) if v not in (source, sink)]
    rng.shuffle(middle)
    backbone = [source] + middle[:rng.randint(0, len(middle))] + [sink]
    for u, v in zip(backbone, backbone[1:]):
        table[u][v] = rng.randint(1, args.max_cap)

    # random extra edges, including antiparallel ones
    for u in range(n):
        for v in range(n):
            if u != v and rng.random() < args.density:
                table[u][v] = rng.randint(1, args.max_cap)

    if args.disconnect:
        # nothing may enter the sink
        for u in range(n):
            table[u][sink] = 0

    data = {"source": source, "sink": sink}
    if args.sparse:
        data["n"] = n
        data["edges"] = [
            {"from": u, "to": v, "capacity": table[u][v]}
            for u in range(n) for v in range(n) if table[u][v] > 0
        ]
    else:
        data["capacity"] = table
    return data


def main():
    args = make_args()
    data = generate(args)
    out = json.dumps(data, indent=2)
    if args.outfile:
        with open(args.outfile, "w") as f:
            f.write(out)
        print(f"Wrote max-flow test to {args.outfile}")
    else:
        print(out)


if __name__ == "__main__":
    main()
