"""Pytest configuration and fixtures."""

import pytest

from flowlayout.engine import (
    DependencyEdge,
    DiagramGraph,
    Element,
    Group,
    LayoutConfig,
    default_config,
)


@pytest.fixture
def config() -> LayoutConfig:
    """Default layout configuration."""
    return default_config()


@pytest.fixture
def grouped_graph() -> DiagramGraph:
    """Three bounded contexts chained A -> B -> C, declared out of order."""
    return DiagramGraph(
        groups=[
            Group(id="billing", label="Billing", color="#FF9800"),
            Group(id="orders", label="Orders"),
            Group(id="shipping", label="Shipping", color="#4CAF50"),
        ],
        elements=[
            Element(id="place-order", type="action", group="orders"),
            Element(id="order", type="aggregate", group="orders"),
            Element(id="order-placed", type="event", group="orders", layer="domain"),
            Element(id="invoice", type="aggregate", group="billing"),
            Element(id="invoice-sent", type="event", group="billing"),
            Element(id="shipment", type="aggregate", group="shipping"),
            Element(id="customer", type="actor"),
        ],
        edges=[
            DependencyEdge(source="place-order", target="order"),
            DependencyEdge(source="order", target="order-placed"),
            DependencyEdge(source="order-placed", target="invoice"),
            DependencyEdge(source="invoice", target="invoice-sent"),
            DependencyEdge(source="invoice-sent", target="shipment"),
            DependencyEdge(source="customer", target="place-order"),
        ],
    )


@pytest.fixture
def ring_graph() -> DiagramGraph:
    """Core with two rings and one satellite carrying children."""
    return DiagramGraph(
        core_id="bc",
        elements=[
            Element(id="bc", ring=0),
            Element(id="api", ring=1),
            Element(id="worker", ring=1),
            Element(id="db", ring=2),
            Element(id="queue", ring=2),
            Element(id="api-pod-1", parent_id="api"),
            Element(id="api-pod-2", parent_id="api"),
            Element(id="api-pod-3", parent_id="api"),
        ],
    )
