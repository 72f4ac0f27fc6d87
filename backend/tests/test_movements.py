"""
Tests for stock movements.
"""
import unittest

from fastapi import HTTPException

from helpers import ApiTestCase

from models.movement import MovementType
from routes.movements import stock_delta


class TestStockDelta(unittest.TestCase):
    def test_signs(self):
        self.assertEqual(stock_delta(MovementType.IN, 5), 5)
        self.assertEqual(stock_delta(MovementType.PRODUCTION, 2), 2)
        self.assertEqual(stock_delta(MovementType.OUT, 3), -3)
        self.assertEqual(stock_delta(MovementType.ADJUSTMENT, -4), -4)

    def test_invalid_quantities(self):
        for movement_type, quantity in (
            (MovementType.IN, 0),
            (MovementType.OUT, -1),
            (MovementType.ADJUSTMENT, 0),
        ):
            with self.subTest(type=movement_type, quantity=quantity):
                with self.assertRaises(HTTPException) as ctx:
                    stock_delta(movement_type, quantity)
                self.assertEqual(ctx.exception.status_code, 400)


class TestMovementEndpoints(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.product = self.create_product(name="Flour", type="raw")

    def move(self, movement_type, quantity, **fields):
        body = {"productId": self.product["id"], "type": movement_type, "quantity": quantity, "createdBy": 1}
        body.update(fields)
        return self.client.post("/movements", json=body)

    def stock(self):
        return self.client.get(f"/products/{self.product['id']}").json()["stock"]

    def test_movements_adjust_stock(self):
        res = self.move("in", 10, price=0.8, description="Supplier delivery")
        self.assertEqual(res.status_code, 201, res.text)
        self.assertEqual(res.json()["productName"], "Flour")
        self.assertEqual(self.stock(), 10)

        self.assertEqual(self.move("out", 3).status_code, 201)
        self.assertEqual(self.stock(), 7)

        self.assertEqual(self.move("adjustment", -2).status_code, 201)
        self.assertEqual(self.stock(), 5)

        self.assertEqual(self.move("production", 1, referenceType="batch", referenceId=4).status_code, 201)
        self.assertEqual(self.stock(), 6)

    def test_negative_stock_rejected(self):
        self.move("in", 2)
        res = self.move("out", 5)
        self.assertEqual(res.status_code, 400)
        self.assertEqual(self.stock(), 2)

    def test_unknown_product(self):
        res = self.client.post("/movements", json={"productId": 999, "type": "in", "quantity": 1, "createdBy": 1})
        self.assertEqual(res.status_code, 404)

    def test_unknown_type(self):
        res = self.move("transfer", 1)
        self.assertEqual(res.status_code, 422)

    def test_list_filters_and_pages(self):
        self.move("in", 10)
        self.move("out", 1)
        self.move("out", 2)

        res = self.client.get("/movements", params={"productId": self.product["id"], "type": "out"})
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertEqual(body["total"], 2)
        # Newest first
        self.assertEqual([m["quantity"] for m in body["items"]], [2, 1])

        res = self.client.get("/movements", params={"page": 2, "pageSize": 2})
        body = res.json()
        self.assertEqual(body["total"], 3)
        self.assertEqual(body["pageSize"], 2)
        self.assertEqual(len(body["items"]), 1)

    def test_get_movement(self):
        created = self.move("in", 4).json()
        res = self.client.get(f"/movements/{created['id']}")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["type"], "in")

        res = self.client.get("/movements/999")
        self.assertEqual(res.status_code, 404)

    def test_deleting_product_removes_movements(self):
        self.move("in", 4)
        self.client.delete(f"/products/{self.product['id']}")
        res = self.client.get("/movements")
        self.assertEqual(res.json()["total"], 0)


if __name__ == "__main__":
    unittest.main()
