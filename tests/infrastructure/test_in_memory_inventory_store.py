"""Unit tests for the InMemoryInventoryStore."""

import threading

import pytest

from irito.domain.exceptions import (
    DuplicateProductCodeError,
    InsufficientStockError,
    InvalidInputError,
    ProductNotFoundError,
)
from irito.domain.model.product import Product
from irito.domain.model.transaction import TransactionType
from irito.domain.model.voice_command import VoiceCommand
from irito.infrastructure.persistence.in_memory_inventory_store import (
    InMemoryInventoryStore,
)
from tests.fakes import make_product, make_store


def _outbound(store, product_id, quantity, user_id="u1"):
    return store.mutate_stock(product_id, -quantity, TransactionType.OUTBOUND, user_id=user_id)


def _inbound(store, product_id, quantity, user_id="u1"):
    return store.mutate_stock(product_id, quantity, TransactionType.INBOUND, user_id=user_id)


class TestProductQueries:

    def test_get_by_code_and_id(self):
        store = make_store()
        assert store.get_by_code("ABC123").id == "1"
        assert store.get_by_id("1").code == "ABC123"

    def test_unknown_returns_none(self):
        store = make_store()
        assert store.get_by_code("NOPE") is None
        assert store.get_by_id("999") is None

    def test_returned_products_are_copies(self):
        store = make_store()
        product = store.get_by_id("1")
        product.current_stock = 1000
        assert store.get_by_id("1").current_stock == 8

    def test_list_all_keeps_insertion_order(self):
        store = make_store(
            make_product("2", "B-1"), make_product("1", "A-1"), make_product("3", "C-1"),
        )
        assert [p.code for p in store.list_all()] == ["B-1", "A-1", "C-1"]

    def test_list_low_stock(self):
        store = make_store(
            make_product("1", "LOW", current_stock=50, min_stock=50),
            make_product("2", "OK", current_stock=51, min_stock=50),
        )
        assert [p.code for p in store.list_low_stock()] == ["LOW"]

    def test_list_by_location_and_locations(self):
        store = make_store(
            make_product("1", "A-1", location="A区域"),
            make_product("2", "B-1", location="B区域"),
            make_product("3", "A-2", location="A区域"),
        )
        assert [p.code for p in store.list_by_location("Aエリア")] == ["A-1", "A-2"]
        assert store.list_locations() == ["A区域", "B区域"]


class TestAddProduct:

    def test_duplicate_code_rejected(self):
        store = make_store()
        with pytest.raises(DuplicateProductCodeError, match="ABC123"):
            store.add_product(make_product("2", "ABC123"))
        assert len(store.list_all()) == 1

    def test_codes_stay_unique(self):
        store = make_store(make_product("1", "A-1"), make_product("2", "A-2"))
        codes = [p.code for p in store.list_all()]
        assert len(codes) == len(set(codes))


class TestMutateStock:

    def test_inbound_commits_transaction(self):
        store = make_store()
        tx = _inbound(store, "1", 50)

        assert tx.type == TransactionType.INBOUND
        assert (tx.previous_stock, tx.new_stock, tx.quantity) == (8, 58, 50)
        assert store.get_by_id("1").current_stock == 58

    def test_outbound_commits_transaction(self):
        store = make_store()
        tx = _outbound(store, "1", 3)
        assert (tx.previous_stock, tx.new_stock, tx.quantity) == (8, 5, 3)
        assert store.get_by_id("1").current_stock == 5

    def test_stamps_last_updated(self):
        store = make_store()
        tx = _inbound(store, "1", 1)
        assert store.get_by_id("1").last_updated == tx.timestamp

    def test_insufficient_stock_leaves_state_unchanged(self):
        store = make_store()
        with pytest.raises(InsufficientStockError):
            _outbound(store, "1", 9999)
        assert store.get_by_id("1").current_stock == 8
        assert store.list_transactions() == []

    def test_unknown_product_rejected(self):
        store = make_store()
        with pytest.raises(ProductNotFoundError, match="999"):
            _inbound(store, "999", 1)

    def test_zero_delta_rejected(self):
        store = make_store()
        with pytest.raises(InvalidInputError, match="must not be zero"):
            store.mutate_stock("1", 0, TransactionType.INBOUND, user_id="u1")

    def test_sign_must_match_kind(self):
        store = make_store()
        with pytest.raises(InvalidInputError):
            store.mutate_stock("1", -1, TransactionType.INBOUND, user_id="u1")
        with pytest.raises(InvalidInputError):
            store.mutate_stock("1", 1, TransactionType.OUTBOUND, user_id="u1")

    def test_adjustment_records_signed_quantity(self):
        store = make_store()
        tx = store.mutate_stock("1", -2, TransactionType.ADJUSTMENT, user_id="u1", note="棚卸")
        assert tx.quantity == -2
        assert tx.new_stock == 6
        assert tx.note == "棚卸"
        assert tx.is_consistent

    def test_voice_metadata_recorded(self):
        store = make_store()
        tx = store.mutate_stock(
            "1", 5, TransactionType.INBOUND,
            user_id="u1", is_voice_command=True, note="voice", order_id="PO-1",
        )
        assert tx.is_voice_command
        assert tx.order_id == "PO-1"

    def test_listeners_receive_commit(self):
        store = make_store()
        seen = []
        store.subscribe(lambda tx, product: seen.append((tx, product)))

        tx = _inbound(store, "1", 2)

        assert len(seen) == 1
        assert seen[0][0] is tx
        assert seen[0][1].current_stock == 10

    def test_listeners_not_called_on_rejection(self):
        store = make_store()
        seen = []
        store.subscribe(lambda tx, product: seen.append(tx))
        with pytest.raises(InsufficientStockError):
            _outbound(store, "1", 100)
        assert seen == []


class TestLedgerConsistency:

    def test_every_transaction_matches_stock(self):
        store = make_store(make_product(current_stock=20))
        moves = [(+5, TransactionType.INBOUND), (-12, TransactionType.OUTBOUND),
                 (+1, TransactionType.INBOUND), (-14, TransactionType.OUTBOUND),
                 (-1, TransactionType.OUTBOUND)]

        for delta, kind in moves:
            try:
                tx = store.mutate_stock("1", delta, kind, user_id="u1")
            except InsufficientStockError:
                continue
            assert tx.is_consistent
            assert store.get_by_id("1").current_stock == tx.new_stock
            assert tx.new_stock >= 0

        assert store.get_by_id("1").current_stock == 0
        assert len(store.list_transactions()) == 4

    def test_list_transactions_most_recent_first(self):
        store = make_store()
        first = _inbound(store, "1", 1)
        second = _inbound(store, "1", 2)
        third = _outbound(store, "1", 1)
        assert store.list_transactions() == [third, second, first]

    def test_list_transactions_respects_limit(self):
        store = make_store()
        for _ in range(5):
            _inbound(store, "1", 1)
        assert len(store.list_transactions(limit=3)) == 3

    def test_default_limit(self):
        store = InMemoryInventoryStore([make_product()], transaction_limit=2)
        for _ in range(3):
            _inbound(store, "1", 1)
        assert len(store.list_transactions()) == 2


class TestConcurrentMutation:

    def test_two_concurrent_outbounds_cannot_oversell(self):
        store = make_store()  # stock 8
        barrier = threading.Barrier(2)
        results = []

        def worker():
            barrier.wait()
            try:
                results.append(_outbound(store, "1", 5))
            except InsufficientStockError as exc:
                results.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        committed = [r for r in results if not isinstance(r, Exception)]
        rejected = [r for r in results if isinstance(r, InsufficientStockError)]
        assert len(committed) == 1
        assert len(rejected) == 1
        assert committed[0].new_stock == 3
        assert store.get_by_id("1").current_stock == 3

    def test_many_threads_never_exceed_starting_stock(self):
        store = make_store(make_product(current_stock=10))
        barrier = threading.Barrier(25)
        failures = []

        def worker():
            barrier.wait()
            try:
                _outbound(store, "1", 1)
            except InsufficientStockError:
                failures.append(1)

        threads = [threading.Thread(target=worker) for _ in range(25)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ledger = store.list_transactions(limit=100)
        assert len(ledger) == 10
        assert len(failures) == 15
        assert store.get_by_id("1").current_stock == 0
        assert sorted(t.new_stock for t in ledger) == list(range(10))


    def test_readers_never_see_stock_ahead_of_ledger(self, monkeypatch):
        store = make_store()  # stock 8
        paused, resume = threading.Event(), threading.Event()
        apply_delta = Product.apply_delta

        def slow_apply_delta(product, delta, at=None):
            result = apply_delta(product, delta, at=at)
            paused.set()
            resume.wait(timeout=5)
            return result

        monkeypatch.setattr(Product, "apply_delta", slow_apply_delta)
        writer = threading.Thread(target=_outbound, args=(store, "1", 5))
        writer.start()
        assert paused.wait(timeout=5)

        seen_stock = store.get_by_id("1").current_stock
        seen_ledger = store.list_transactions()
        seen_listed = store.list_all()[0].current_stock
        resume.set()
        writer.join()

        assert seen_stock == 8
        assert seen_listed == 8
        assert seen_ledger == []
        assert store.get_by_id("1").current_stock == 3
        assert store.list_transactions()[0].new_stock == 3


class TestVoiceLog:

    def test_voice_commands_most_recent_first(self):
        store = make_store()
        first = VoiceCommand(id="v1", transcript="a", interpretation={}, successful=False, user_id="u1")
        second = VoiceCommand(id="v2", transcript="b", interpretation={}, successful=True, user_id="u1")
        store.record_voice_command(first)
        store.record_voice_command(second)

        assert store.list_voice_commands() == [second, first]
        assert store.export_voice_commands() == [first, second]
