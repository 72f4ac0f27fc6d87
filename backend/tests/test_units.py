"""
Tests for measurement units.
"""
import unittest

from helpers import ApiTestCase


class TestUnits(ApiTestCase):
    def test_crud(self):
        kg = self.create_unit()
        self.create_unit(name="Gram", abbreviation="g")

        res = self.client.get("/units")
        self.assertEqual([u["name"] for u in res.json()], ["Gram", "Kilogram"])

        res = self.client.put(f"/units/{kg['id']}", json={"factor": 1000})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["factor"], 1000)
        self.assertEqual(res.json()["abbreviation"], "kg")

        res = self.client.delete(f"/units/{kg['id']}")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["detail"], "Unit 'Kilogram' deleted")

    def test_missing_unit(self):
        self.assertEqual(self.client.put("/units/999", json={"name": "x"}).status_code, 404)
        self.assertEqual(self.client.delete("/units/999").status_code, 404)

    def test_unit_in_use_cannot_be_deleted(self):
        unit = self.create_unit()
        self.create_product(name="Flour", unitId=unit["id"])
        res = self.client.delete(f"/units/{unit['id']}")
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json()["detail"], "Error deleting unit")


if __name__ == "__main__":
    unittest.main()
