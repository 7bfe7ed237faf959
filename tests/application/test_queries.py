"""Tests for the AddProduct, ShowInventory and ShowDashboard use cases."""

import pytest

from irito.application.add_product import AddProductHandler
from irito.application.show_dashboard import ShowDashboardHandler
from irito.application.show_inventory import ShowInventoryHandler
from irito.domain.exceptions import DuplicateProductCodeError, ValidationError
from irito.domain.model.transaction import TransactionType
from irito.domain.service.kpi_aggregator import KpiAggregator
from tests.fakes import FakeClock, make_product, make_store


class TestAddProduct:

    def test_adds_with_generated_id(self):
        store = make_store()
        product = AddProductHandler(store).handle(
            code=" NEW-1 ", name="New", category="食品", location="C区域", current_stock=5
        )

        assert product.code == "NEW-1"
        assert product.id != "1"
        assert store.get_by_code("NEW-1").current_stock == 5

    def test_duplicate_code(self):
        store = make_store()
        with pytest.raises(DuplicateProductCodeError):
            AddProductHandler(store).handle(code="ABC123", name="Dup", category="x", location="A区域")

    def test_invalid_bounds(self):
        with pytest.raises(ValidationError):
            AddProductHandler(make_store()).handle(
                code="NEW-2", name="Bad", category="x", location="A区域", min_stock=10, max_stock=5
            )


class TestShowInventory:

    def _store(self):
        return make_store(
            make_product("1", "A-LOW", current_stock=1, min_stock=5, location="A区域"),
            make_product("2", "A-OK", current_stock=9, min_stock=5, location="A区域"),
            make_product("3", "B-LOW", current_stock=0, min_stock=5, location="B区域"),
        )

    def test_all_lines(self):
        lines = ShowInventoryHandler(self._store()).handle()
        assert [(line.code, line.low_stock) for line in lines] == [
            ("A-LOW", True), ("A-OK", False), ("B-LOW", True),
        ]

    def test_by_location_and_low_stock(self):
        lines = ShowInventoryHandler(self._store()).handle(location="Aエリア", low_stock_only=True)
        assert [line.code for line in lines] == ["A-LOW"]


class TestShowDashboard:

    def test_collects_views(self):
        store = make_store(
            make_product("1", "A-1", current_stock=8, min_stock=50, location="A区域"),
            make_product("2", "B-1", current_stock=80, min_stock=5, location="B区域"),
        )
        kpis = KpiAggregator(today=FakeClock())
        store.subscribe(kpis.on_transaction_committed)
        for _ in range(3):
            store.mutate_stock("2", 1, TransactionType.INBOUND, user_id="u1")

        dto = ShowDashboardHandler(store, kpis).handle(recent_limit=2)

        assert len(dto.products) == 2
        assert [p.code for p in dto.low_stock_products] == ["A-1"]
        assert [t.sequence for t in dto.recent_transactions] == [3, 2]
        assert dto.locations == ["A区域", "B区域"]
        assert dto.kpis.total_inbound == 3

        payload = dto.to_dict()
        assert payload["kpis"]["date"] == "2024-05-01"
        assert len(payload["recentTransactions"]) == 2
