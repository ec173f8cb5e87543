import argparse
import csv
import multiprocessing as mp
import os
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

import yaml

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from joltage.evaluation.metrics import approximation_gap  # noqa: E402
from joltage.machine import Machine, load_machines  # noqa: E402
from joltage.parallel import make_solver, total_presses  # noqa: E402
from joltage.solvers.base import InfeasibleError  # noqa: E402

mp.freeze_support()


def parse_solvers(cfg_solvers):
    """Parse solver names from YAML."""
    parsed = []
    for item in cfg_solvers:
        if isinstance(item, str):
            parsed.append(item)
        elif isinstance(item, dict) and "name" in item:
            parsed.append(item["name"])
        else:
            raise ValueError(f"Invalid solver entry: {item}")
    for name in parsed:
        make_solver(name)
    return parsed


def _run_machine(job):
    """Run every configured solver on one machine."""
    machine: Machine = job["machine"]
    row = {
        "machine_id": job["machine_id"],
        "buttons": machine.n_buttons,
        "counters": machine.n_counters,
    }
    for name in job["solvers"]:
        solver = make_solver(name)
        targets = machine.lights if solver.name == "lights" else machine.targets

        start_time = time.perf_counter()
        result = solver.solve(machine.buttons, targets)
        time_ms = (time.perf_counter() - start_time) * 1000

        row[f"{name}_presses"] = "" if result is None else result
        row[f"{name}_time_ms"] = time_ms
    return row


def run_pool(jobs, writer, workers, timeout=None):
    """Solve machines in parallel and write rows as they complete."""
    ctx = mp.get_context("spawn")
    total_jobs = len(jobs)
    rows = []
    done = 0
    start_time = time.time()

    with ProcessPoolExecutor(max_workers=workers, mp_context=ctx) as ex:
        futures = [ex.submit(_run_machine, j) for j in jobs]
        # a timeout fails the whole batch; no machine is silently dropped
        for fut in as_completed(futures, timeout=timeout):
            try:
                row = fut.result()
            except Exception:
                import traceback

                print("\n[ERROR] Worker failed:")
                traceback.print_exc()
                raise
            writer.writerow(row)
            rows.append(row)
            done += 1

            elapsed = time.time() - start_time
            print(
                f"\r[progress] {done}/{total_jobs} machines ({done / total_jobs:>6.1%}) | "
                f"elapsed: {int(elapsed // 60)}m {int(elapsed % 60)}s",
                end="",
                flush=True,
            )
    print()
    return sorted(rows, key=lambda r: r["machine_id"])


def _column(rows, name):
    return [None if r[f"{name}_presses"] == "" else r[f"{name}_presses"] for r in rows]


def main():
    n_cpus = os.cpu_count() or 1
    default_workers = max(n_cpus - 1, 1)

    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--config",
        default=str(ROOT / "configs" / "example.yaml"),
    )
    ap.add_argument("--input", default=None, help="Puzzle input path")
    ap.add_argument("--out", default=None, help="Output CSV path")
    ap.add_argument(
        "--workers", type=int, default=default_workers, help="Number of workers"
    )
    ap.add_argument(
        "--timeout", type=float, default=None, help="Batch timeout in seconds"
    )
    args = ap.parse_args()

    with open(args.config, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)["experiment"]

    input_path = Path(args.input or cfg["input"])
    if not input_path.is_absolute() and not input_path.exists():
        input_path = ROOT / input_path
    solvers = parse_solvers(cfg.get("solvers", ["joltage"]))
    timeout = args.timeout if args.timeout is not None else cfg.get("timeout")
    out_dir = Path(cfg.get("output_dir", "results/runs"))
    out_dir.mkdir(parents=True, exist_ok=True)
    out_csv = args.out or str(out_dir / "machines.csv")

    machines = load_machines(input_path)
    jobs = [
        {"machine_id": i, "machine": m, "solvers": solvers}
        for i, m in enumerate(machines)
    ]

    fieldnames = ["machine_id", "buttons", "counters"]
    for name in solvers:
        fieldnames += [f"{name}_presses", f"{name}_time_ms"]

    print(
        f"\nSolving {len(jobs):,} machines with {args.workers} workers "
        f"({', '.join(solvers)})...\n"
    )

    start_time = time.time()
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        rows = run_pool(jobs, writer, workers=args.workers, timeout=timeout)

    for name in solvers:
        try:
            total = total_presses(_column(rows, name))
        except InfeasibleError as e:
            print(f"{name:>8}: {e}")
            continue
        print(f"{name:>8}: total presses = {total}")
    if "joltage" in solvers and "greedy" in solvers:
        gaps = [
            approximation_gap(e, g)
            for e, g in zip(_column(rows, "joltage"), _column(rows, "greedy"))
        ]
        missed = sum(1 for g in gaps if g is None)
        worse = sum(1 for g in gaps if g is not None and g > 0)
        print(f"  greedy: {worse} machines above optimum, {missed} unsolved")

    elapsed = time.time() - start_time
    print(f"\nDone in {int(elapsed/60)}m {int(elapsed%60)}s")
    print(f"Output: {out_csv}\n")


if __name__ == "__main__":
    main()
