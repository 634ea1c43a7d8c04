"""
Benchmark harness — compares agents on generated problem instances.

Each problem is independent (immutable inputs, no shared state), so
problems are the unit of parallelism: with ``workers > 1`` they run in
a process pool. Rows are returned in problem order regardless.

Run from the command line:

    python -m pantry.engine.benchmark --runs 100 --seed 0 --output tests.csv
"""

from __future__ import annotations

import argparse
import csv
import logging
import time
from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import astuple, dataclass
from pathlib import Path

import numpy as np

from pantry.agents.interface import Agent
from pantry.agents.local_search_agent import LocalSearchAgent
from pantry.agents.random_agent import RandomAssignmentAgent
from pantry.agents.search_agent import SearchAgent
from pantry.core.errors import ExplorationBudgetExceeded
from pantry.core.features import DEFAULT_FEATURES
from pantry.core.model import Inventory, Order
from pantry.generator.problem import generate_problem
from pantry.search.features import FeatureVector

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "Agent",
    "Products",
    "Orders",
    "Products * Orders",
    "Runtime (ms)",
    "Evaluation",
    "Status",
]

STATUS_OK = "ok"
STATUS_BUDGET_EXCEEDED = "budget_exceeded"


@dataclass(frozen=True)
class BenchmarkRow:
    """One agent's outcome on one problem."""

    agent: str
    products: int
    orders: int
    products_x_orders: int
    runtime_ms: float
    evaluation: float | None
    status: str = STATUS_OK


# ── Running ────────────────────────────────────────────────────────

def run_problem(
    agents: Sequence[Agent],
    orders: Sequence[Order],
    inventory: Inventory,
    features: FeatureVector = DEFAULT_FEATURES,
) -> list[BenchmarkRow]:
    """
    Time every agent on one problem and score its final state.

    A search that exceeds its budget is reported with status
    ``budget_exceeded`` and no evaluation.
    """
    n_products = len(inventory.products())
    n_orders = len(orders)
    rows: list[BenchmarkRow] = []

    for agent in agents:
        start = time.perf_counter()
        try:
            final_state = agent.assign(orders, inventory, features)
        except ExplorationBudgetExceeded as exc:
            duration = (time.perf_counter() - start) * 1000.0
            logger.info("%s: %s", agent.name, exc)
            rows.append(
                BenchmarkRow(
                    agent.name, n_products, n_orders, n_products * n_orders,
                    duration, None, STATUS_BUDGET_EXCEEDED,
                )
            )
            continue
        duration = (time.perf_counter() - start) * 1000.0
        rows.append(
            BenchmarkRow(
                agent.name, n_products, n_orders, n_products * n_orders,
                duration, final_state.evaluate(features),
            )
        )
    return rows


def _run_problem_task(
    args: tuple[Sequence[Agent], list[Order], Inventory, FeatureVector],
) -> list[BenchmarkRow]:
    return run_problem(*args)


def run_benchmark(
    agents: Sequence[Agent],
    runs: int = 100,
    seed: int | None = 0,
    max_order_size: int = 4,
    num_products: tuple[int, int] = (1, 5),
    num_orders: tuple[int, int] = (1, 5),
    features: FeatureVector = DEFAULT_FEATURES,
    workers: int = 1,
) -> list[BenchmarkRow]:
    """
    Generate *runs* problems from one seed and run every agent on each.

    Parameters
    ----------
    workers : int
        1 runs in-process; more spreads problems over a process pool.
    """
    if runs < 0:
        raise ValueError(f"runs must be >= 0, got {runs}.")
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}.")

    rng = np.random.default_rng(seed)
    problems = [
        generate_problem(max_order_size, num_products, num_orders, rng=rng)
        for _ in range(runs)
    ]
    tasks = [(agents, orders, inventory, features) for orders, inventory in problems]
    logger.info(
        "Benchmarking %d agents on %d problems (%d workers)",
        len(agents), runs, workers,
    )

    if workers == 1:
        results = [_run_problem_task(task) for task in tasks]
    else:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(_run_problem_task, tasks))

    return [row for rows in results for row in rows]


# ── Output ─────────────────────────────────────────────────────────

def write_csv(rows: Sequence[BenchmarkRow], path: str | Path) -> None:
    """Write benchmark rows with a header line."""
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_COLUMNS)
        for row in rows:
            writer.writerow(astuple(row))


def default_agents(
    seed: int | None = 0, max_explored_states: int = 20_000
) -> list[Agent]:
    """Random, two local-search budgets, and the exhaustive search (last)."""
    return [
        RandomAssignmentAgent(seed=seed),
        LocalSearchAgent(10),
        LocalSearchAgent(1000),
        SearchAgent(max_explored_states),
    ]


# ── CLI ────────────────────────────────────────────────────────────

def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compare assignment agents on generated problems.",
    )
    parser.add_argument("--runs", type=int, default=100, help="Problems per phase (default: 100)")
    parser.add_argument("--seed", type=int, default=0, help="Generator seed (default: 0)")
    parser.add_argument("--output", type=Path, default=Path("tests.csv"), help="CSV path (default: tests.csv)")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")
    parser.add_argument("--max-order-size", type=int, default=4, help="Largest order size (default: 4)")
    parser.add_argument(
        "--max-explored-states",
        type=int,
        default=20_000,
        help="Search agent budget (default: 20000)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    agents = default_agents(args.seed, args.max_explored_states)
    non_optimal_agents = agents[:3]

    # every agent on small problems, non-optimal agents on larger ones
    rows = run_benchmark(
        agents, args.runs, args.seed, args.max_order_size,
        (1, 5), (1, 5), workers=args.workers,
    )
    rows += run_benchmark(
        non_optimal_agents, args.runs, args.seed, args.max_order_size,
        (6, 10), (6, 10), workers=args.workers,
    )

    write_csv(rows, args.output)
    logger.info("Wrote %d rows to %s", len(rows), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
