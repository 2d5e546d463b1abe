#!/usr/bin/env python3
"""Ingest pytest-benchmark JSON results into DuckDB.

Usage:
    uv run pytest tests/bench --benchmark-enable --benchmark-json bench/raw/python.json
    uv run scripts/bench_ingest.py [--db bench/patscan_bench.duckdb] [--notes "baseline"]

Reads every *.json file in bench/raw/ (the file stem names the variant)
and inserts one row per benchmark. Each invocation creates a new
bench_runs entry tagged with the current commit SHA.
"""

from __future__ import annotations

import json
import platform
import subprocess
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import click
import duckdb

DB_DEFAULT = "bench/patscan_bench.duckdb"
RAW_DIR = Path("bench/raw")

# Benchmark functions are named test_bench_{searcher}_{phase}[{scenario}].
KNOWN_PHASES = frozenset({"build", "scan", "first"})

SCHEMA = """
CREATE TABLE IF NOT EXISTS bench_runs (
    id          INTEGER PRIMARY KEY,
    commit_sha  VARCHAR NOT NULL,
    timestamp   TIMESTAMP NOT NULL,
    machine     VARCHAR,
    notes       VARCHAR
);

CREATE TABLE IF NOT EXISTS bench_results (
    run_id      INTEGER NOT NULL REFERENCES bench_runs(id),
    variant     VARCHAR NOT NULL,
    scenario    VARCHAR NOT NULL,
    phase       VARCHAR NOT NULL,
    mean_ns     DOUBLE NOT NULL,
    stddev_ns   DOUBLE,
    min_ns      DOUBLE,
    max_ns      DOUBLE,
    iterations  BIGINT,
    PRIMARY KEY (run_id, variant, scenario, phase)
);
"""

INSERT_RESULT = """INSERT INTO bench_results
   (run_id, variant, scenario, phase, mean_ns, stddev_ns, min_ns, max_ns, iterations)
   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)"""


def get_commit_sha() -> str:
    result = subprocess.run(
        ["git", "rev-parse", "--short", "HEAD"],
        capture_output=True,
        text=True,
        check=False,
    )
    return result.stdout.strip() if result.returncode == 0 else "unknown"


def get_machine() -> str:
    return f"{platform.node()}/{platform.machine()}"


def _utc_now() -> datetime:
    # TIMESTAMP column is naive; store UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def create_run(con: duckdb.DuckDBPyConnection, notes: str | None) -> int:
    """Create a new benchmark run entry, return its ID."""
    con.execute(SCHEMA)

    max_id = con.execute("SELECT COALESCE(MAX(id), 0) FROM bench_runs").fetchone()[0]
    run_id = max_id + 1

    con.execute(
        "INSERT INTO bench_runs (id, commit_sha, timestamp, machine, notes) VALUES (?, ?, ?, ?, ?)",
        [run_id, get_commit_sha(), _utc_now(), get_machine(), notes],
    )
    return run_id


def split_name(name: str) -> tuple[str, str]:
    """Split a benchmark name into (scenario, phase).

    >>> split_name("test_bench_boyer_moore_scan[short_in_long]")
    ('boyer_moore/short_in_long', 'scan')
    >>> split_name("test_bench_aho_corasick_classic_scan")
    ('aho_corasick_classic', 'scan')
    """
    base, _, param = name.removeprefix("test_bench_").partition("[")
    param = param.removesuffix("]")

    head, _, tail = base.rpartition("_")
    if head and tail in KNOWN_PHASES:
        scenario, phase = head, tail
    else:
        scenario, phase = base, "scan"

    if param:
        scenario = f"{scenario}/{param}"
    return scenario, phase


def parse_pytest_benchmark_json(data: dict[str, Any], variant: str) -> list[dict[str, Any]]:
    """Parse pytest-benchmark JSON output into normalized rows."""
    results = []
    # pytest-benchmark reports seconds
    to_ns = 1_000_000_000
    for bench in data.get("benchmarks", []):
        scenario, phase = split_name(bench.get("name", ""))
        stats = bench.get("stats", {})
        results.append({
            "variant": variant,
            "scenario": scenario,
            "phase": phase,
            "mean_ns": stats.get("mean", 0) * to_ns,
            "stddev_ns": (stats.get("stddev") or 0) * to_ns,
            "min_ns": stats.get("min", 0) * to_ns,
            "max_ns": stats.get("max", 0) * to_ns,
            "iterations": stats.get("iterations"),
        })
    return results


def ingest(con: duckdb.DuckDBPyConnection, raw_path: Path, notes: str | None) -> tuple[int, int]:
    """Load every JSON file under raw_path into a new run. Returns (run_id, rows)."""
    run_id = create_run(con, notes)
    total = 0
    for json_file in sorted(raw_path.glob("*.json")):
        variant = "patscan" if json_file.stem == "python" else json_file.stem
        rows = parse_pytest_benchmark_json(json.loads(json_file.read_text()), variant)
        for row in rows:
            con.execute(
                INSERT_RESULT,
                [
                    run_id,
                    row["variant"],
                    row["scenario"],
                    row["phase"],
                    row["mean_ns"],
                    row["stddev_ns"],
                    row["min_ns"],
                    row["max_ns"],
                    row["iterations"],
                ],
            )
        total += len(rows)
        click.echo(f"  Ingested {len(rows)} results from {json_file.name} ({variant})")
    return run_id, total


@click.command()
@click.option("--db", default=DB_DEFAULT, help="DuckDB database path")
@click.option("--notes", default=None, help="Notes for this benchmark run")
@click.option("--raw-dir", default=str(RAW_DIR), help="Directory with raw JSON files")
def main(db: str, notes: str | None, raw_dir: str) -> None:
    """Ingest benchmark results into DuckDB."""
    raw_path = Path(raw_dir)

    if not raw_path.exists():
        click.echo(f"Raw directory {raw_path} does not exist", err=True)
        sys.exit(1)

    if not any(raw_path.glob("*.json")):
        click.echo(f"No JSON files found in {raw_path}", err=True)
        sys.exit(1)

    con = duckdb.connect(db)
    try:
        run_id, total = ingest(con, raw_path, notes)
    finally:
        con.close()
    click.echo(f"\nRun #{run_id}: {total} results ingested into {db}")


if __name__ == "__main__":
    main()
