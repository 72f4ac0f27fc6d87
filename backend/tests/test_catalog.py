"""
Tests for the showcase catalog.
"""
import unittest

from helpers import ApiTestCase


class TestCatalog(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.product = self.create_product(
            name="Alfajor", price=3, wholesaleRules=[{"minQty": 12, "discountPercent": 10}],
        )

    def add_entry(self, **fields):
        body = {"productId": self.product["id"]}
        body.update(fields)
        return self.client.post("/catalog", json=body)

    def test_effective_price_and_rules(self):
        res = self.add_entry(section="offers", title="Weekly offer")
        self.assertEqual(res.status_code, 201, res.text)
        entry = res.json()
        self.assertEqual(entry["effectivePrice"], 3)
        self.assertEqual(entry["effectiveWholesaleRules"], [{"minQty": 12, "discountPercent": 10}])
        self.assertEqual(entry["product"]["name"], "Alfajor")

        res = self.client.put(
            f"/catalog/{entry['id']}",
            json={"priceOverride": 2.5, "wholesaleOverrideRules": '{"tiers": [{"minQty": 6, "pricePerUnit": 2}]}'},
        )
        self.assertEqual(res.status_code, 200, res.text)
        entry = res.json()
        self.assertEqual(entry["effectivePrice"], 2.5)
        self.assertEqual(entry["wholesaleOverrideRules"], [{"minQty": 6, "pricePerUnit": 2}])
        self.assertEqual(entry["effectiveWholesaleRules"], [{"minQty": 6, "pricePerUnit": 2}])

    def test_duplicate_entry_conflicts(self):
        self.assertEqual(self.add_entry(section="offers").status_code, 201)
        res = self.add_entry(section="offers")
        self.assertEqual(res.status_code, 409)

        # Same product in another section, or for a specific store, is fine
        self.assertEqual(self.add_entry(section="new").status_code, 201)
        store = self.create_store()
        self.assertEqual(self.add_entry(section="offers", storeId=store["id"]).status_code, 201)
        self.assertEqual(self.add_entry(section="offers", storeId=store["id"]).status_code, 409)

    def test_update_into_duplicate_conflicts(self):
        self.add_entry(section="offers")
        other = self.add_entry(section="new").json()
        res = self.client.put(f"/catalog/{other['id']}", json={"section": "offers"})
        self.assertEqual(res.status_code, 409)

    def test_validation(self):
        res = self.add_entry(wholesaleOverrideRules="{bad")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["detail"], "wholesaleOverrideRules must be valid JSON")

        res = self.add_entry(startsAt="2030-01-02T00:00:00Z", endsAt="2030-01-01T00:00:00Z")
        self.assertEqual(res.status_code, 400)

        res = self.client.post("/catalog", json={"productId": 999})
        self.assertEqual(res.status_code, 404)

        res = self.add_entry(storeId=999)
        self.assertEqual(res.status_code, 404)

        res = self.add_entry(section="unknown")
        self.assertEqual(res.status_code, 422)

    def test_time_window_and_activity(self):
        self.add_entry(section="home", position=2)
        self.add_entry(section="offers", position=1, endsAt="2000-01-01T00:00:00Z")
        self.add_entry(section="new", position=0, startsAt="2999-01-01T00:00:00+03:00")
        self.add_entry(section="popular", position=3, isActive=False)

        res = self.client.get("/catalog")
        self.assertEqual([e["section"] for e in res.json()], ["home"])

        res = self.client.get("/catalog", params={"activeOnly": "false"})
        self.assertEqual([e["section"] for e in res.json()], ["new", "offers", "home", "popular"])

        res = self.client.get("/catalog", params={"activeOnly": "false", "section": "offers"})
        self.assertEqual(len(res.json()), 1)

    def test_inactive_product_hidden(self):
        self.add_entry()
        self.client.put(f"/products/{self.product['id']}", json={"isActive": False})
        self.assertEqual(self.client.get("/catalog").json(), [])

    def test_store_filter_includes_global_entries(self):
        first = self.create_store(name="North")
        second = self.create_store(name="South")
        self.add_entry(section="home")
        self.add_entry(section="offers", storeId=first["id"])
        self.add_entry(section="new", storeId=second["id"])

        res = self.client.get("/catalog", params={"storeId": first["id"]})
        self.assertEqual(sorted(e["section"] for e in res.json()), ["home", "offers"])

    def test_get_and_delete(self):
        entry = self.add_entry().json()
        self.assertEqual(self.client.get(f"/catalog/{entry['id']}").status_code, 200)

        res = self.client.delete(f"/catalog/{entry['id']}")
        self.assertEqual(res.json(), {"detail": "Catalog entry deleted"})
        self.assertEqual(self.client.get(f"/catalog/{entry['id']}").status_code, 404)

    def test_entries_follow_product_deletion(self):
        self.add_entry()
        self.client.delete(f"/products/{self.product['id']}")
        self.assertEqual(self.client.get("/catalog", params={"activeOnly": "false"}).json(), [])


if __name__ == "__main__":
    unittest.main()
