import unittest

from itstock.domain.Ledger import StockLedger
from itstock.domain.Movement import MovementKind
from itstock.events import web_observers
from itstock.events.Event_Bus import EventBus, STOCK_LOW_STOCK, STOCK_MOVEMENT


class TestEventBus(unittest.TestCase):

    def test_subscribe_publish_unsubscribe(self):
        bus = EventBus()
        seen = []
        cb = lambda name, payload: seen.append((name, payload))
        bus.subscribe("x", cb)
        bus.subscribe("x", cb)
        bus.publish("x", 1)
        bus.unsubscribe("x", cb)
        bus.unsubscribe("x", cb)
        bus.publish("x", 2)
        self.assertEqual(seen, [("x", 1)])

    def test_failing_subscriber_does_not_stop_delivery(self):
        bus = EventBus()
        seen = []

        def broken(name, payload):
            raise RuntimeError("boom")

        bus.subscribe("x", broken)
        bus.subscribe("x", lambda name, payload: seen.append(payload))
        with self.assertLogs("itstock.events.Event_Bus", level="ERROR"):
            bus.publish("x", "ok")
        self.assertEqual(seen, ["ok"])


class TestWebObservers(unittest.TestCase):

    def setUp(self):
        self.bus = EventBus()
        # start() is process-wide; subscribe the recorder to this test's bus directly
        self.bus.subscribe(STOCK_LOW_STOCK, web_observers._record)
        self.bus.subscribe(STOCK_MOVEMENT, web_observers._record)
        web_observers.reset()
        self.ledger = StockLedger().set_event_bus(self.bus)

    def tearDown(self):
        web_observers.reset()

    def test_movement_and_low_stock_events(self):
        router = self.ledger.create_item({"name": "Router", "quantity": 3, "min_threshold": 1})
        self.ledger.apply_movement(router.id, MovementKind.EXIT, 2)

        data = web_observers.get_events()
        types = [e["type"] for e in data["events"]]
        self.assertEqual(types, [STOCK_MOVEMENT, STOCK_MOVEMENT, STOCK_LOW_STOCK])
        low = data["events"][-1]
        self.assertEqual((low["name"], low["remaining"], low["threshold"]), ("Router", 1, 1))
        self.assertEqual(data["events"][1]["signed_quantity"], -2)
        self.assertEqual(data["next_cursor"], 3)

    def test_cursor(self):
        item = self.ledger.create_item({"name": "Cable", "quantity": 10})
        cursor = web_observers.get_events()["next_cursor"]
        self.ledger.apply_movement(item.id, MovementKind.ENTRY, 1)
        newer = web_observers.get_events(since=cursor)
        self.assertEqual(len(newer["events"]), 1)
        self.assertEqual(newer["events"][0]["kind"], "ENTRY")
        self.assertEqual(web_observers.get_events(since=newer["next_cursor"])["events"], [])

    def test_empty_buffer_echoes_cursor(self):
        self.assertEqual(web_observers.get_events(since=7), {"events": [], "next_cursor": 7})
        self.assertEqual(web_observers.get_events(), {"events": [], "next_cursor": 0})

    def test_buffer_is_capped(self):
        item = self.ledger.create_item({"name": "Screws", "quantity": 1})
        for _ in range(web_observers.MAX_EVENTS + 10):
            self.ledger.apply_movement(item.id, MovementKind.ENTRY, 1)
        events = web_observers.get_events()["events"]
        self.assertEqual(len(events), web_observers.MAX_EVENTS)
        self.assertEqual(events[-1]["id"], web_observers.MAX_EVENTS + 11)
