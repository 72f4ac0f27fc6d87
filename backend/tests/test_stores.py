"""
Tests for store management.
"""
import unittest

from helpers import ApiTestCase


class TestStores(ApiTestCase):
    def test_crud(self):
        store = self.create_store(email="centro@panaderia.com", latitude=-34.6, longitude=-58.4)
        self.assertEqual(store["email"], "centro@panaderia.com")
        self.assertTrue(store["isActive"])

        res = self.client.put(f"/stores/{store['id']}", json={"phone": "555-0101", "isActive": False})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["phone"], "555-0101")
        self.assertEqual(res.json()["address"], "Main St 1")

        self.assertEqual(self.client.get(f"/stores/{store['id']}").json()["isActive"], False)

        res = self.client.delete(f"/stores/{store['id']}")
        self.assertEqual(res.json(), {"detail": "Store 'Downtown' deleted"})
        self.assertEqual(self.client.get(f"/stores/{store['id']}").status_code, 404)

    def test_list_order_and_active_filter(self):
        self.create_store(name="B", position=2)
        self.create_store(name="A", position=1)
        self.create_store(name="C", position=1, isActive=False)

        res = self.client.get("/stores")
        self.assertEqual([s["name"] for s in res.json()], ["A", "C", "B"])

        res = self.client.get("/stores", params={"activeOnly": "true"})
        self.assertEqual([s["name"] for s in res.json()], ["A", "B"])

    def test_invalid_email(self):
        res = self.client.post("/stores", json={"name": "X", "address": "Y", "email": "not-an-email"})
        self.assertEqual(res.status_code, 422)

    def test_missing_store(self):
        self.assertEqual(self.client.put("/stores/999", json={"name": "x"}).status_code, 404)
        self.assertEqual(self.client.delete("/stores/999").status_code, 404)


if __name__ == "__main__":
    unittest.main()
