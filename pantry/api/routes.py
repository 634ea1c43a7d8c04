"""
FastAPI routes for the Pantry Core backend.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, HTTPException

from pantry.agents.agent_registry import create_agent, list_agent_types
from pantry.api.schemas import (
    AssignInput,
    AssignResult,
    BenchmarkInput,
    BenchmarkRowResult,
    CustomerProducts,
    FeatureSpec,
    GenerateInput,
    ProblemInput,
    StateSpaceInput,
    StateSpaceResult,
)
from pantry.core.errors import ExplorationBudgetExceeded
from pantry.core.feature_registry import build_features, list_features
from pantry.core.features import DEFAULT_FEATURES
from pantry.core.model import Customer, Inventory, Order, Product
from pantry.core.state import AssignmentState
from pantry.engine.benchmark import run_benchmark
from pantry.generator.problem import generate_problem
from pantry.search.features import FeatureVector
from pantry.search.graph_search import state_space

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Conversion helpers ─────────────────────────────────────────────

def _to_domain(payload: ProblemInput) -> tuple[list[Order], Inventory]:
    """Resolve product names and build domain values. Raises KeyError/ValueError."""
    products: dict[str, Product] = {}
    for p in payload.products:
        if p.name in products:
            raise ValueError(f"Duplicate product name {p.name!r}.")
        products[p.name] = Product(p.name, p.cost)

    def resolve(name: str) -> Product:
        if name not in products:
            raise KeyError(f"Unknown product {name!r}.")
        return products[name]

    orders = [
        Order(
            customer=Customer(
                name=o.customer.name,
                preferences={resolve(n): w for n, w in o.customer.preferences.items()},
                allergies=frozenset(resolve(n) for n in o.customer.allergies),
            ),
            size=o.size,
        )
        for o in payload.orders
    ]
    inventory = Inventory([(resolve(e.product), e.quantity) for e in payload.inventory])
    return orders, inventory


def _to_payload(orders: list[Order], inventory: Inventory) -> dict[str, Any]:
    return {
        "products": [{"name": p.name, "cost": p.cost} for p in inventory.products()],
        "orders": [
            {
                "customer": {
                    "name": o.customer.name,
                    "preferences": {p.name: w for p, w in o.customer.preferences},
                    "allergies": sorted(p.name for p in o.customer.allergies),
                },
                "size": o.size,
            }
            for o in orders
        ],
        "inventory": [
            {"product": p.name, "quantity": q} for p, q in inventory.quantities
        ],
    }


def _features(specs: list[FeatureSpec] | None) -> FeatureVector:
    if specs is None:
        return DEFAULT_FEATURES
    return build_features(spec.model_dump() for spec in specs)


# ── Solving ────────────────────────────────────────────────────────

@router.post("/assign", response_model=AssignResult)
async def assign(payload: AssignInput) -> AssignResult:
    """
    Run one agent on a problem and return its final assignment,
    along with cost, satisfaction and the feature-weighted evaluation.
    """
    try:
        orders, inventory = _to_domain(payload)
        features = _features(payload.features)
        agent = create_agent(payload.agent.name, **payload.agent.params)
        final_state = agent.assign(orders, inventory, features)
    except ExplorationBudgetExceeded as exc:
        logger.warning("Assign aborted: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))
    except (KeyError, ValueError, TypeError) as exc:
        logger.exception("Assign failed")
        raise HTTPException(status_code=400, detail=str(exc))

    assignment = final_state.to_result()
    return AssignResult(
        agent=agent.name,
        assignment=[CustomerProducts(**row) for row in assignment.to_report()],
        cost=assignment.calculate_cost(),
        satisfaction=assignment.calculate_satisfaction(),
        evaluation=final_state.evaluate(features),
        valid=assignment.is_valid(orders, inventory),
        fulfilled=assignment.fulfills_orders(orders),
        terminal=final_state.is_terminal(),
    )


@router.post("/state-space", response_model=StateSpaceResult)
async def get_state_space(payload: StateSpaceInput) -> StateSpaceResult:
    """
    Size the reachable state graph of a problem, e.g. to choose a
    search budget before calling /assign with the search agent.
    """
    try:
        orders, inventory = _to_domain(payload)
        graph = state_space(AssignmentState.root(orders, inventory), payload.max_states)
    except ExplorationBudgetExceeded as exc:
        logger.warning("State space aborted: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))
    except (KeyError, ValueError) as exc:
        logger.exception("State space failed")
        raise HTTPException(status_code=400, detail=str(exc))

    return StateSpaceResult(
        states=graph.number_of_nodes(),
        transitions=graph.number_of_edges(),
        terminal_states=sum(1 for state in graph.nodes if state.is_terminal()),
    )


# ── Generation / Benchmark ─────────────────────────────────────────

@router.post("/generate", response_model=ProblemInput)
async def generate(payload: GenerateInput) -> ProblemInput:
    """Generate a random problem in the same shape /assign accepts."""
    try:
        orders, inventory = generate_problem(
            payload.max_order_size,
            (payload.min_products, payload.max_products),
            (payload.min_orders, payload.max_orders),
            seed=payload.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return ProblemInput(**_to_payload(orders, inventory))


@router.post("/benchmark", response_model=list[BenchmarkRowResult])
async def benchmark(payload: BenchmarkInput) -> list[BenchmarkRowResult]:
    """Run agents on generated problems and return one row per agent run."""
    try:
        agents = [create_agent(spec.name, **spec.params) for spec in payload.agents]
        rows = run_benchmark(
            agents,
            runs=payload.runs,
            seed=payload.seed,
            max_order_size=payload.max_order_size,
            num_products=(payload.min_products, payload.max_products),
            num_orders=(payload.min_orders, payload.max_orders),
            features=_features(payload.features),
        )
    except (KeyError, ValueError, TypeError) as exc:
        logger.exception("Benchmark failed")
        raise HTTPException(status_code=400, detail=str(exc))

    return [BenchmarkRowResult(**asdict(row)) for row in rows]


# ── Registries ─────────────────────────────────────────────────────

@router.get("/agents")
async def get_agents() -> dict[str, list[str]]:
    return {"agents": list_agent_types()}


@router.get("/features")
async def get_features() -> dict[str, list[str]]:
    return {"features": list_features()}
