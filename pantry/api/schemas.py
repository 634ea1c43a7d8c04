"""
Pydantic schemas for the FastAPI endpoints.

Products are referenced by name inside customers, orders and the
inventory; the route layer resolves those names to Product values.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# ── Problem ────────────────────────────────────────────────────────

class ProductInput(BaseModel):
    name: str
    cost: float = Field(..., ge=0, description="Unit cost")


class CustomerInput(BaseModel):
    name: str
    preferences: dict[str, float] = Field(
        default_factory=dict,
        description="Product name → satisfaction weight",
    )
    allergies: list[str] = Field(
        default_factory=list, description="Names of products the customer must not get"
    )


class OrderInput(BaseModel):
    customer: CustomerInput
    size: int = Field(..., ge=1, description="Exact number of products requested")


class InventoryEntry(BaseModel):
    product: str
    quantity: int = Field(..., ge=0)


class ProblemInput(BaseModel):
    """One problem instance: products, orders and stock."""

    products: list[ProductInput]
    orders: list[OrderInput]
    inventory: list[InventoryEntry]


# ── Solving ────────────────────────────────────────────────────────

class AgentSpec(BaseModel):
    name: str = Field(default="search", description="Registered agent type")
    params: dict[str, Any] = Field(
        default_factory=dict, description="Constructor keyword arguments"
    )


class FeatureSpec(BaseModel):
    name: str = Field(..., description="Registered feature name")
    weight: float = 1.0
    normalizer: float = 1.0


class AssignInput(ProblemInput):
    """Problem + strategy + optional objective (defaults to cost/satisfaction)."""

    agent: AgentSpec = Field(default_factory=AgentSpec)
    features: list[FeatureSpec] | None = None


class CustomerProducts(BaseModel):
    customer: str
    products: list[str]


class AssignResult(BaseModel):
    """Final state of an agent run."""

    agent: str
    assignment: list[CustomerProducts]
    cost: float
    satisfaction: float
    evaluation: float
    valid: bool
    fulfilled: bool
    terminal: bool


# ── Generation ─────────────────────────────────────────────────────

class GenerateInput(BaseModel):
    max_order_size: int = Field(default=4, ge=1)
    min_products: int = Field(default=1, ge=1)
    max_products: int = Field(default=10, ge=1)
    min_orders: int = Field(default=1, ge=1)
    max_orders: int = Field(default=10, ge=1)
    seed: int | None = None


# ── State space ────────────────────────────────────────────────────

class StateSpaceInput(ProblemInput):
    max_states: int = Field(default=10_000, ge=1, description="Abort above this many states")


class StateSpaceResult(BaseModel):
    states: int
    transitions: int
    terminal_states: int


# ── Benchmark ──────────────────────────────────────────────────────

class BenchmarkInput(BaseModel):
    agents: list[AgentSpec] = Field(
        default_factory=lambda: [
            AgentSpec(name="random", params={"seed": 0}),
            AgentSpec(name="local-search", params={"max_steps": 10}),
        ]
    )
    runs: int = Field(default=10, ge=1, le=1000)
    seed: int | None = 0
    max_order_size: int = Field(default=4, ge=1)
    min_products: int = Field(default=1, ge=1)
    max_products: int = Field(default=5, ge=1)
    min_orders: int = Field(default=1, ge=1)
    max_orders: int = Field(default=5, ge=1)
    features: list[FeatureSpec] | None = None


class BenchmarkRowResult(BaseModel):
    agent: str
    products: int
    orders: int
    products_x_orders: int
    runtime_ms: float
    evaluation: float | None
    status: str
