"""
Tests for product categories.
"""
import unittest

from helpers import ApiTestCase


class TestCategories(ApiTestCase):
    def test_public_filter(self):
        self.create_category(name="Breads")
        self.create_category(name="Supplies", is_public=False)

        res = self.client.get("/categories")
        self.assertEqual([c["name"] for c in res.json()], ["Breads", "Supplies"])

        res = self.client.get("/categories", params={"public": "true"})
        self.assertEqual([c["name"] for c in res.json()], ["Breads"])

    def test_update_reports_affected_rows(self):
        category = self.create_category()
        res = self.client.put(f"/categories/{category['id']}", json={"description": "Fresh daily"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json(), {"detail": "Category updated", "updated": 1})

        res = self.client.put("/categories/999", json={"description": "x"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["updated"], 0)

    def test_duplicate_name_is_a_storage_error(self):
        self.create_category(name="Breads")
        res = self.client.post("/categories", json={"name": "Breads"})
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json()["detail"], "Error creating category")
        self.assertIn("error", res.json())

    def test_delete_keeps_products(self):
        category = self.create_category()
        product = self.create_product(name="Rye", categoryId=category["id"])

        res = self.client.delete(f"/categories/{category['id']}")
        self.assertEqual(res.json(), {"detail": "Category deleted"})

        res = self.client.get(f"/products/{product['id']}")
        self.assertEqual(res.status_code, 200)
        self.assertIsNone(res.json()["categoryId"])
        self.assertIsNone(res.json()["category"])

    def test_delete_missing_category(self):
        res = self.client.delete("/categories/999")
        self.assertEqual(res.status_code, 200)


if __name__ == "__main__":
    unittest.main()
