"""In-memory helpers for testing.

Products, sinks and clocks that stand in for real collaborators. No file
I/O, no side effects.
"""

from __future__ import annotations

from datetime import date

from irito.application.broadcaster import Sink, SinkBusyError, SinkClosedError
from irito.domain.model.product import Product
from irito.infrastructure.persistence.in_memory_inventory_store import (
    InMemoryInventoryStore,
)


def make_product(
    product_id: str = "1",
    code: str = "ABC123",
    name: str = "Widget",
    current_stock: int = 8,
    min_stock: int = 50,
    max_stock: int = 500,
    location: str = "A区域",
    category: str = "電子機器",
) -> Product:
    return Product(
        id=product_id,
        code=code,
        name=name,
        category=category,
        current_stock=current_stock,
        min_stock=min_stock,
        max_stock=max_stock,
        location=location,
    )


def make_store(*products: Product) -> InMemoryInventoryStore:
    """Store seeded with *products*, or a single ABC123 product (stock 8)."""
    return InMemoryInventoryStore(list(products) or [make_product()])


class FakeClock:
    """A settable ``today`` callable."""

    def __init__(self, today: date = date(2024, 5, 1)) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


class RecordingSink(Sink):

    def __init__(self) -> None:
        self.messages: list[dict] = []
        self.open = True

    @property
    def is_open(self) -> bool:
        return self.open

    def send(self, message: dict) -> None:
        self.messages.append(message)


class BrokenSink(Sink):
    """Reports itself open but fails on delivery."""

    def __init__(self) -> None:
        self.attempts = 0

    def send(self, message: dict) -> None:
        self.attempts += 1
        raise SinkClosedError("connection reset")


class BusySink(Sink):

    def __init__(self) -> None:
        self.attempts = 0

    def send(self, message: dict) -> None:
        self.attempts += 1
        raise SinkBusyError("try later")


class CrashingSink(Sink):
    """Fails with an error outside the sink protocol."""

    def __init__(self) -> None:
        self.attempts = 0

    def send(self, message: dict) -> None:
        self.attempts += 1
        raise RuntimeError("socket went away mid-write")
