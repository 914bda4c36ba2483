import unittest
from itstock.domain.Categories import CategorySet
from itstock.domain.ManualShoppingList import ManualShoppingList
from itstock.domain.errors import ValidationError
from itstock.utilities.constants import DEFAULT_CATEGORIES


class TestCategorySet(unittest.TestCase):

    def setUp(self):
        self.categories = CategorySet()

    def test_defaults(self):
        self.assertEqual(self.categories.names(), list(DEFAULT_CATEGORIES))

    def test_add_is_idempotent(self):
        self.assertTrue(self.categories.add("Printers"))
        self.assertFalse(self.categories.add("Printers"))
        self.assertEqual(self.categories.names().count("Printers"), 1)

    def test_add_rejects_blank(self):
        with self.assertRaises(ValidationError):
            self.categories.add("  ")

    def test_remove(self):
        self.assertTrue(self.categories.remove("Tools"))
        self.assertNotIn("Tools", self.categories)
        self.assertFalse(self.categories.remove("Tools"))

    def test_duplicates_dropped_on_load(self):
        self.assertEqual(CategorySet(["A", "B", "A"]).names(), ["A", "B"])


class TestManualShoppingList(unittest.TestCase):

    def setUp(self):
        self.manual = ManualShoppingList()

    def test_add_and_remove(self):
        entry = self.manual.add("Monitor arm", 2, "VESA 100")
        self.assertEqual(len(self.manual), 1)
        self.assertTrue(self.manual.remove(entry.id))
        self.assertFalse(self.manual.remove(entry.id))
        self.assertEqual(self.manual.items(), [])

    def test_validation(self):
        with self.assertRaises(ValidationError):
            self.manual.add("", 1)
        with self.assertRaises(ValidationError):
            self.manual.add("Docking station", 0)
