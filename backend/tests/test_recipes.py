"""
Tests for recipe (bill of materials) endpoints.
"""
import unittest

from helpers import ApiTestCase


class TestRecipes(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.kg = self.create_unit()
        self.bread = self.create_product(name="Bread", unitId=self.kg["id"])
        self.flour = self.create_product(name="Flour", unitId=self.kg["id"], type="raw")
        self.bag = self.create_product(name="Paper bag", type="raw")

    def add_item(self, input_product, quantity, **fields):
        body = {"finalProductId": self.bread["id"], "inputProductId": input_product["id"], "quantity": quantity}
        body.update(fields)
        return self.client.post("/recipes", json=body)

    def test_recipe_lines(self):
        res = self.add_item(self.flour, 500, quantityInGrams=True)
        self.assertEqual(res.status_code, 201, res.text)
        self.add_item(self.bag, 1, itemType="material")

        res = self.client.get(f"/products/{self.bread['id']}/recipe")
        self.assertEqual(res.status_code, 200)
        lines = res.json()
        self.assertEqual([line["inputProductName"] for line in lines], ["Flour", "Paper bag"])
        self.assertTrue(lines[0]["quantityInGrams"])
        self.assertEqual(lines[0]["unit"], "kg")
        self.assertEqual(lines[0]["inputProductType"], "raw")
        self.assertEqual(lines[1]["itemType"], "material")

    def test_recipe_of_unknown_product(self):
        res = self.client.get("/products/999/recipe")
        self.assertEqual(res.status_code, 404)

    def test_quantity_must_be_positive(self):
        res = self.add_item(self.flour, 0)
        self.assertEqual(res.status_code, 422)

    def test_unknown_input_product(self):
        res = self.add_item({"id": 999}, 1)
        self.assertEqual(res.status_code, 404)

    def test_update_and_delete_item(self):
        item = self.add_item(self.flour, 500).json()

        res = self.client.put(f"/recipes/{item['id']}", json={"quantity": 450})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["quantity"], 450)

        res = self.client.delete(f"/recipes/{item['id']}")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self.client.get(f"/products/{self.bread['id']}/recipe").json(), [])

        res = self.client.delete(f"/recipes/{item['id']}")
        self.assertEqual(res.status_code, 404)

    def test_deleting_input_removes_line(self):
        self.add_item(self.flour, 500)
        self.client.delete(f"/products/{self.flour['id']}")
        self.assertEqual(self.client.get(f"/products/{self.bread['id']}/recipe").json(), [])


if __name__ == "__main__":
    unittest.main()
