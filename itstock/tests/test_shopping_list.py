import unittest
from itstock.domain.Item import Item
from itstock.domain.ManualShoppingItem import ManualShoppingItem
from itstock.logic.shopping.list_builder import (
    build_final_list, build_shopping_list, format_shopping_list_text, suggested_order_quantity
)


class TestShoppingListBuilder(unittest.TestCase):

    def setUp(self):
        self.items = [
            Item("a", "Toner", "Consumables", 2, 10),
            Item("b", "Keyboard", "Peripherals", 8, 3),
            Item("c", "Patch cable", "Networking", 4, 4),
        ]

    def test_low_stock_selection_keeps_item_order(self):
        rows = build_shopping_list(self.items)
        self.assertEqual([r["id"] for r in rows], ["a", "c"])

    def test_suggested_quantity(self):
        rows = {r["id"]: r for r in build_shopping_list(self.items)}
        self.assertEqual(rows["a"]["deficit"], 8)
        self.assertEqual(rows["a"]["suggested_quantity"], 13)
        # at threshold: deficit 0, buffer only
        self.assertEqual(rows["c"]["suggested_quantity"], 5)

    def test_suggestion_is_at_least_one(self):
        self.assertEqual(suggested_order_quantity(Item("z", "Fan", quantity=3, min_threshold=3), buffer=0), 1)

    def test_custom_buffer(self):
        rows = build_shopping_list(self.items, buffer=0)
        self.assertEqual(rows[0]["suggested_quantity"], 8)

    def test_builder_has_no_side_effects(self):
        before = [i.to_dict() for i in self.items]
        build_shopping_list(self.items)
        self.assertEqual([i.to_dict() for i in self.items], before)

    def test_final_list_merges_overrides_and_manual(self):
        low = build_shopping_list(self.items)
        manual = [ManualShoppingItem("m1", "Webcam", 2, "for meeting room")]
        final = build_final_list(low, manual, overrides={"c": 0, "a": 20}, notes={"a": "HP 85A"})
        self.assertEqual(final, [
            {"name": "Toner", "quantity": 20, "note": "HP 85A", "source": "low-stock"},
            {"name": "Webcam", "quantity": 2, "note": "for meeting room", "source": "manual"},
        ])

    def test_text_export(self):
        text = format_shopping_list_text([
            {"name": "Toner", "quantity": 13, "note": "", "source": "low-stock"},
            {"name": "Webcam", "quantity": 2, "note": "USB", "source": "manual"},
        ])
        self.assertEqual(text, "[ ] Toner: 13 units\n[ ] Webcam: 2 units -- Note: USB")
