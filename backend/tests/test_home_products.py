"""
Tests for the legacy home-page showcase.
"""
import unittest

from helpers import ApiTestCase


class TestHomeProducts(ApiTestCase):
    def test_crud_and_filters(self):
        product = self.create_product(name="Medialuna")
        res = self.client.post(
            "/home-products",
            json={"productId": product["id"], "name": "Medialunas x12", "section": "offers", "position": 1},
        )
        self.assertEqual(res.status_code, 201, res.text)
        entry = res.json()

        res = self.client.post("/home-products", json={"name": "Banner", "isActive": False})
        self.assertEqual(res.status_code, 201)
        self.assertIsNone(res.json()["productId"])

        self.assertEqual([e["name"] for e in self.client.get("/home-products").json()], ["Medialunas x12"])
        res = self.client.get("/home-products", params={"activeOnly": "false"})
        self.assertEqual(len(res.json()), 2)
        res = self.client.get("/home-products", params={"section": "new"})
        self.assertEqual(res.json(), [])

        res = self.client.put(f"/home-products/{entry['id']}", json={"badge": "-20%"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["badge"], "-20%")

        res = self.client.delete(f"/home-products/{entry['id']}")
        self.assertEqual(res.json(), {"detail": "Home product deleted"})
        self.assertEqual(self.client.delete(f"/home-products/{entry['id']}").status_code, 404)

    def test_unknown_product(self):
        res = self.client.post("/home-products", json={"productId": 999, "name": "Ghost"})
        self.assertEqual(res.status_code, 404)

    def test_product_deletion_detaches_entry(self):
        product = self.create_product(name="Chipa")
        entry = self.client.post("/home-products", json={"productId": product["id"], "name": "Chipa"}).json()

        self.client.delete(f"/products/{product['id']}")

        res = self.client.get("/home-products")
        self.assertEqual([e["id"] for e in res.json()], [entry["id"]])
        self.assertIsNone(res.json()[0]["productId"])


if __name__ == "__main__":
    unittest.main()
