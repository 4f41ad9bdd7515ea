"""
Tests for the persistent list adapter and the change-notification bridge
"""
import json
from decimal import Decimal

import pytest

from storefront.cart import CartLine, JsonListStore
from storefront.events import ChangeBroadcaster

KEY = "storefront_cart"


@pytest.fixture
def store(storage):
    return JsonListStore(storage, KEY, CartLine.from_dict, ChangeBroadcaster("cart-updated"))


class FailingStorage:
    """Storage whose writes always fail (quota exceeded)."""

    def get(self, key):
        return None

    def set(self, key, value):
        raise OSError("quota exceeded")

    def remove(self, key):
        pass


class TestJsonListStore:
    def test_missing_key_reads_empty(self, store):
        assert store.read() == []

    def test_round_trip(self, store):
        lines = [
            CartLine(id="1", name="A", price="10.50", quantity=2, image="a.jpg", slug="a"),
            CartLine(id="2", name="B", price=5, quantity=1),
        ]

        store.write(lines)

        assert store.read() == lines

    def test_high_precision_price_round_trip(self, store):
        lines = [CartLine(id="1", name="A", price=Decimal("19.99999999999999999"), quantity=1)]

        store.write(lines)

        assert store.read() == lines
        assert store.read()[0].price == Decimal("19.99999999999999999")

    @pytest.mark.parametrize("raw", ["not json", "{", "[1, 2", '{"id": "1"}', '"text"', "null"])
    def test_corrupted_storage_reads_empty(self, storage, store, raw):
        storage.set(KEY, raw)

        assert store.read() == []

    def test_malformed_records_dropped(self, storage, store):
        storage.set(KEY, json.dumps([
            {"id": "1", "name": "ok", "price": 2, "quantity": 1},
            {"name": "no id", "price": 2, "quantity": 1},
            {"id": "3", "price": 2, "quantity": 0},
            "garbage",
        ]))

        assert [line.id for line in store.read()] == ["1"]

    def test_write_persists_json(self, storage, store):
        store.write([CartLine(id="1", name="A", price=Decimal("3"), quantity=2)])

        data = json.loads(storage.get(KEY))
        assert data[0]["id"] == "1"
        assert data[0]["quantity"] == 2

    def test_write_failure_is_swallowed_and_still_broadcast(self):
        store = JsonListStore(FailingStorage(), KEY, CartLine.from_dict)
        received = []
        store.broadcaster.subscribe(received.append)

        result = store.write([CartLine(id="1", price=1)])

        assert [line.id for line in result] == ["1"]
        assert len(received) == 1
        assert store.read() == []


class TestChangeBroadcaster:
    def test_subscribers_receive_identical_payload_before_write_returns(self, store):
        first, second = [], []
        store.broadcaster.subscribe(first.append)
        store.broadcaster.subscribe(second.append)

        written = store.write([CartLine(id="1", price=1)])

        assert len(first) == 1 and len(second) == 1
        assert first[0] is second[0]
        assert first[0] == written

    def test_failing_listener_does_not_block_others(self):
        broadcaster = ChangeBroadcaster()
        received = []

        def broken(payload):
            raise RuntimeError("boom")

        broadcaster.subscribe(broken)
        broadcaster.subscribe(received.append)

        broadcaster.publish(["x"])

        assert received == [["x"]]

    def test_unsubscribe(self):
        broadcaster = ChangeBroadcaster()
        received = []
        unsubscribe = broadcaster.subscribe(received.append)

        unsubscribe()
        broadcaster.publish("payload")

        assert received == []
        assert broadcaster.listener_count == 0

    def test_unsubscribe_unknown_listener_is_noop(self):
        ChangeBroadcaster().unsubscribe(print)

    def test_delivery_order_follows_publish_order(self):
        broadcaster = ChangeBroadcaster()
        received = []
        broadcaster.subscribe(received.append)

        broadcaster.publish(1)
        broadcaster.publish(2)

        assert received == [1, 2]

    def test_listener_may_unsubscribe_during_delivery(self):
        broadcaster = ChangeBroadcaster()
        received = []

        def once(payload):
            received.append(payload)
            broadcaster.unsubscribe(once)

        broadcaster.subscribe(once)
        broadcaster.subscribe(received.append)

        broadcaster.publish("a")
        broadcaster.publish("b")

        assert received == ["a", "a", "b"]

    def test_cart_mutations_broadcast(self, cart, headphones):
        received = []
        cart.subscribe(received.append)

        cart.add_item(headphones)
        cart.update_quantity("101", 3)
        cart.clear()

        assert [sum(line.quantity for line in payload) for payload in received] == [1, 3, 0]
