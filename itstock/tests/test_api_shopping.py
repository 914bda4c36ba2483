import os
import shutil
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

from fastapi.testclient import TestClient
from openai import OpenAIError

from itstock.api.api_run import app
from itstock.api.api_ai import MISSING_KEY_MESSAGE, UNAVAILABLE_MESSAGE, _get_openai_client, build_advice_prompt
from itstock.api.deps import get_controller
from itstock.events.Event_Bus import EventBus
from itstock.infra.Stock_Repository import StockRepository
from itstock.logic.controller import InventoryController


class TestShoppingListAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.controller = InventoryController(StockRepository(data_dir=self.tmp), event_bus=EventBus()).load()
        app.dependency_overrides[get_controller] = lambda: self.controller
        self.toner = self.controller.create_item({"name": "Toner", "category": "Consumables",
                                                  "quantity": 2, "min_threshold": 10})
        self.controller.create_item({"name": "Keyboard", "quantity": 8, "min_threshold": 3})

    def tearDown(self):
        app.dependency_overrides.clear()
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_derived_list(self):
        data = self.client.get('/api/shopping-list').json()
        self.assertEqual(data['count'], 1)
        self.assertEqual(data['buffer'], 5)
        row = data['items'][0]
        self.assertEqual((row['name'], row['deficit'], row['suggested_quantity']), ("Toner", 8, 13))
        self.assertEqual(data['manual'], [])

    def test_manual_list(self):
        resp = self.client.post('/api/shopping-list/manual', json={"name": "Webcam", "quantity": 2, "note": "USB"})
        self.assertEqual(resp.status_code, 200)
        entry_id = resp.json()['id']
        self.assertEqual(self.client.get('/api/shopping-list/manual').json()['count'], 1)
        self.assertEqual(self.client.post('/api/shopping-list/manual', json={"name": "Cable", "quantity": 0}).status_code, 422)

        self.assertEqual(self.client.delete(f'/api/shopping-list/manual/{entry_id}').json(), {"success": True})
        self.assertEqual(self.client.delete(f'/api/shopping-list/manual/{entry_id}').status_code, 404)

    def test_final_list_and_export(self):
        self.controller.add_manual_item("Webcam", 2, "USB")
        body = {"overrides": {self.toner.id: 20}, "notes": {self.toner.id: "HP 85A"}}
        data = self.client.post('/api/shopping-list/final', json=body).json()
        self.assertEqual(data['count'], 2)
        self.assertEqual(data['entries'][0], {"name": "Toner", "quantity": 20, "note": "HP 85A", "source": "low-stock"})

        resp = self.client.post('/api/shopping-list/export', json=body)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.headers['content-type'].startswith('text/plain'))
        self.assertEqual(resp.text, "[ ] Toner: 20 units -- Note: HP 85A\n[ ] Webcam: 2 units -- Note: USB")

    def test_negative_override_drops_row(self):
        data = self.client.post('/api/shopping-list/final', json={"overrides": {self.toner.id: -3}}).json()
        self.assertEqual(data['entries'], [])
        # No body uses the suggestions as they are
        data = self.client.post('/api/shopping-list/final').json()
        self.assertEqual(data['entries'][0]['quantity'], 13)

    def test_categories(self):
        data = self.client.get('/api/categories').json()
        self.assertIn("Hardware", data['categories'])
        resp = self.client.post('/api/categories', json={"name": " Printers "})
        self.assertEqual(resp.json()['added'], True)
        self.assertIn("Printers", resp.json()['categories'])
        self.assertFalse(self.client.post('/api/categories', json={"name": "Printers"}).json()['added'])
        self.assertTrue(self.client.delete('/api/categories/Printers').json()['removed'])
        self.assertFalse(self.client.delete('/api/categories/Printers').json()['removed'])


class TestPurchaseAdviceAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.controller = InventoryController(StockRepository(data_dir=self.tmp), event_bus=EventBus()).load()
        app.dependency_overrides[get_controller] = lambda: self.controller

    def tearDown(self):
        app.dependency_overrides.clear()
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _fake_client(self, text):
        client = mock.MagicMock()
        client.responses.create.return_value = SimpleNamespace(output_text=text)
        return client

    def test_prompt_lists_entries(self):
        prompt = build_advice_prompt([
            {"name": "Toner", "quantity": 13, "note": "", "source": "low-stock"},
            {"name": "Webcam", "quantity": 2, "note": "USB", "source": "manual"},
        ])
        self.assertIn("- Toner (Qty: 13) [Low stock]", prompt)
        self.assertIn("- Webcam (Qty: 2) [Note: USB] [Added manually]", prompt)

    def test_empty_list_is_rejected(self):
        resp = self.client.post('/api/shopping-list/advice')
        self.assertEqual(resp.status_code, 400)

    def test_advice_from_current_lists(self):
        self.controller.add_manual_item("Monitor", 1)
        fake = self._fake_client("```html\n<p>Buy a 27 inch panel.</p>\n```")
        with mock.patch('itstock.api.api_ai._get_openai_client', return_value=fake):
            resp = self.client.post('/api/shopping-list/advice')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"advice": "<p>Buy a 27 inch panel.</p>", "count": 1})
        prompt = fake.responses.create.call_args.kwargs['input']
        self.assertIn("Monitor (Qty: 1)", prompt)
        self.assertEqual(self.controller.ledger.items(), [])

    def test_explicit_entries(self):
        fake = self._fake_client("<ul><li>ok</li></ul>")
        body = {"entries": [{"name": "SSD", "quantity": 4, "source": "manual"}]}
        with mock.patch('itstock.api.api_ai._get_openai_client', return_value=fake):
            resp = self.client.post('/api/shopping-list/advice', json=body)
        self.assertEqual(resp.json()['count'], 1)

    def test_missing_key(self):
        self.controller.add_manual_item("Monitor", 1)
        with mock.patch('itstock.api.api_ai._get_openai_client', return_value=None):
            resp = self.client.post('/api/shopping-list/advice')
        self.assertEqual(resp.status_code, 503)
        self.assertEqual(resp.json()['detail'], MISSING_KEY_MESSAGE)

    def test_key_read_from_environment(self):
        self.controller.add_manual_item("Monitor", 1)
        with mock.patch.dict(os.environ):
            os.environ.pop("OPENAI_API_KEY", None)
            self.assertIsNone(_get_openai_client())
            resp = self.client.post('/api/shopping-list/advice')
            self.assertEqual(resp.status_code, 503)
            self.assertEqual(resp.json()['detail'], MISSING_KEY_MESSAGE)

            os.environ["OPENAI_API_KEY"] = "sk-test"
            with mock.patch('itstock.api.api_ai.OpenAI') as openai_cls:
                openai_cls.return_value = self._fake_client("<p>fine</p>")
                resp = self.client.post('/api/shopping-list/advice')
            openai_cls.assert_called_once_with(api_key="sk-test")
            self.assertEqual(resp.json()['advice'], "<p>fine</p>")

    def test_provider_failure(self):
        self.controller.add_manual_item("Monitor", 1)
        fake = mock.MagicMock()
        fake.responses.create.side_effect = OpenAIError("quota exceeded")
        with mock.patch('itstock.api.api_ai._get_openai_client', return_value=fake):
            resp = self.client.post('/api/shopping-list/advice')
        self.assertEqual(resp.status_code, 503)
        self.assertEqual(resp.json()['detail'], UNAVAILABLE_MESSAGE)

    def test_empty_reply(self):
        self.controller.add_manual_item("Monitor", 1)
        with mock.patch('itstock.api.api_ai._get_openai_client', return_value=self._fake_client("  ")):
            resp = self.client.post('/api/shopping-list/advice')
        self.assertEqual(resp.status_code, 503)
