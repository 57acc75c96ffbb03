#!/usr/bin/env python3
"""
run_samples.py

Usage:
  python run_samples.py                         # uses "python -m capflow.main"
  python run_samples.py "python -m capflow.main"

What it does:
 - Ensures samples exist (tests/sample_graph.json, tests/sample_all_pairs.json),
   writing the built-in six-vertex network if they are missing
 - Runs the solver on both samples
 - Saves outputs to outputs/sample_graph_output.json and outputs/sample_all_pairs_output.json
 - Runs verify_maxflow.py on each
 - Prints a summary, including the max flow for every (source, sink) pair
"""
import json
import subprocess
import sys
from pathlib import Path

from capflow.graph import example_graph

ROOT = Path(__file__).resolve().parent
CAPFLOW_CMD = sys.argv[1] if len(sys.argv) > 1 else f"{sys.executable} -m capflow.main"

OUT_DIR = ROOT / "outputs"
OUT_DIR.mkdir(exist_ok=True)

SAMPLES_DIR = ROOT / "tests"
SAMPLES_DIR.mkdir(exist_ok=True)

SAMPLE_GRAPH = {
    "capacity": example_graph().to_lists(),
    "source": 0,
    "sink": 5,
}

SAMPLE_ALL_PAIRS = {
    "capacity": example_graph().to_lists(),
    "all_pairs": True,
}


def ensure_sample(path: Path, sample):
    if path.exists():
        return path
    path.write_text(json.dumps(sample, indent=2))
    print(f"Wrote sample to {path}")
    return path


def run_command(cmd_str, input_path, output_path):
    # cmd_str might be like "python -m capflow.main" - split for subprocess.
    if isinstance(cmd_str, str):
        cmd = cmd_str.split()
    else:
        cmd = cmd_str
    with open(input_path, "r") as inf, open(output_path, "w") as outf:
        proc = subprocess.run(cmd, stdin=inf, stdout=outf, stderr=subprocess.PIPE, text=True, cwd=ROOT)
    return proc


def run_verifier(verifier_path, input_path, output_path):
    if not verifier_path.exists():
        return None
    return subprocess.run([sys.executable, str(verifier_path), str(input_path), str(output_path)],
                          stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, cwd=ROOT)


def read_json_safe(p):
    try:
        return json.loads(Path(p).read_text())
    except (OSError, ValueError) as e:
        return {"_error": str(e)}


def main():
    verifier = ROOT / "verify_maxflow.py"
    runs = [
        ("single pair", SAMPLES_DIR / "sample_graph.json", SAMPLE_GRAPH, OUT_DIR / "sample_graph_output.json"),
        ("all pairs", SAMPLES_DIR / "sample_all_pairs.json", SAMPLE_ALL_PAIRS, OUT_DIR / "sample_all_pairs_output.json"),
    ]

    for label, sample_path, sample, out_path in runs:
        ensure_sample(sample_path, sample)
        print(f"Running {label}: {CAPFLOW_CMD} < {sample_path} > {out_path}")
        proc = run_command(CAPFLOW_CMD, sample_path, out_path)
        if proc.returncode != 0:
            print(f"{label} command failed (exit {proc.returncode}). stderr:")
            print(proc.stderr)
        else:
            print(f"{label} command finished (exit 0).")

        vproc = run_verifier(verifier, sample_path, out_path)
        if vproc is None:
            print("verify_maxflow.py not found - skipping verification.")
            continue
        print(vproc.stdout.strip())
        if vproc.stderr.strip():
            print("verify_maxflow.py stderr:")
            print(vproc.stderr.strip())
        print("verify_maxflow.py exit code:", vproc.returncode)

    print("\nSummary:")
    single = read_json_safe(runs[0][3])
    print(f"max flow {single.get('source')} -> {single.get('sink')}: {single.get('max_flow')} "
          f"(status = {single.get('status')})")
    pairs = read_json_safe(runs[1][3])
    last_source = None
    for r in pairs.get("results", []):
        if last_source is not None and r["source"] != last_source:
            print()
        last_source = r["source"]
        print(f"The max flow from {r['source']} to {r['sink']} is: {r['max_flow']}")

    print("\nOutputs saved in", OUT_DIR)


if __name__ == "__main__":
    main()
