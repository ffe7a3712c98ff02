import unittest
from decimal import Decimal

from saasadmin.models import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    Tenant,
    TenantPlan,
    TenantStatus,
)
from saasadmin.models.base import next_timestamp


class TestTenantModel(unittest.TestCase):
    def test_create_tenant(self):
        tenant = Tenant.create(name="Acme Corp", email="admin@acme.com", plan=TenantPlan.BASIC)
        self.assertTrue(tenant.tenant_id.startswith("tenant_"))
        self.assertEqual(tenant.status, TenantStatus.PENDING)
        self.assertEqual(tenant.plan, "BASIC")
        self.assertEqual(tenant.created_at, tenant.updated_at)

    def test_ids_are_unique(self):
        ids = {Tenant.create(name="Acme", email=f"a{i}@acme.com").tenant_id for i in range(200)}
        self.assertEqual(len(ids), 200)

    def test_with_fields_returns_new_version(self):
        tenant = Tenant.create(name="Acme", email="a@acme.com")
        updated = tenant.with_fields(name="Acme Inc", settings={"maxUsers": 10, "features": ["sso"]})

        self.assertEqual(tenant.name, "Acme")
        self.assertIsNone(tenant.settings)
        self.assertEqual(updated.name, "Acme Inc")
        self.assertEqual(updated.settings.max_users, 10)
        self.assertNotEqual(updated.updated_at, tenant.updated_at)
        self.assertEqual(updated.created_at, tenant.created_at)
        self.assertEqual(updated.tenant_id, tenant.tenant_id)

    def test_with_status(self):
        tenant = Tenant.create(name="Acme", email="a@acme.com")
        active = tenant.with_status(TenantStatus.ACTIVE)
        self.assertEqual(active.status, "ACTIVE")
        self.assertEqual(tenant.status, "PENDING")

    def test_unknown_field_rejected(self):
        tenant = Tenant.create(name="Acme", email="a@acme.com")
        with self.assertRaises(ValueError):
            tenant.with_fields(colour="blue")

    def test_records_are_immutable(self):
        tenant = Tenant.create(name="Acme", email="a@acme.com")
        with self.assertRaises(Exception):
            tenant.name = "Other"

    def test_to_item_uses_camel_case_and_drops_empty_fields(self):
        item = Tenant.create(name="Acme", email="a@acme.com").to_item()
        self.assertIn("tenantId", item)
        self.assertIn("createdAt", item)
        self.assertNotIn("settings", item)


class TestOrderModel(unittest.TestCase):
    def setUp(self):
        self.items = [
            {"productId": "p1", "name": "Widget", "quantity": 3, "unitPrice": Decimal("9.99"), "totalPrice": 1},
            {"productId": "p2", "name": "Gadget", "quantity": 1, "unitPrice": Decimal("5"), "totalPrice": 500},
        ]

    def test_create_computes_totals(self):
        order = Order.create(tenant_id="tenant_1", customer_id="c1", items=self.items, currency="USD")
        self.assertTrue(order.order_id.startswith("order_"))
        self.assertEqual(order.items[0].total_price, Decimal("29.97"))
        self.assertEqual(order.items[1].total_price, Decimal("5"))
        self.assertEqual(order.total_amount, Decimal("34.97"))
        self.assertEqual(order.calculate_total(), order.total_amount)
        self.assertEqual(order.status, OrderStatus.PENDING)
        self.assertEqual(order.payment_status, PaymentStatus.PENDING)

    def test_item_priced(self):
        item = OrderItem(product_id="p1", name="Widget", quantity=4, unit_price=Decimal("2.50"))
        self.assertEqual(item.priced().total_price, Decimal("10.00"))
        self.assertEqual(item.total_price, Decimal("0"))

    def test_status_updates_leave_other_fields_untouched(self):
        order = Order.create(tenant_id="tenant_1", customer_id="c1", items=self.items, notes="leave at door")
        shipped = order.with_status(OrderStatus.SHIPPED)
        paid = shipped.with_payment_status(PaymentStatus.PAID)

        self.assertEqual(order.status, "PENDING")
        self.assertEqual(shipped.status, "SHIPPED")
        self.assertEqual(shipped.payment_status, "PENDING")
        self.assertEqual(paid.payment_status, "PAID")
        self.assertNotEqual(shipped.updated_at, order.updated_at)
        self.assertGreater(paid.updated_at, shipped.updated_at)

        before = order.model_dump(exclude={"status", "updated_at"})
        after = shipped.model_dump(exclude={"status", "updated_at"})
        self.assertEqual(before, after)

    def test_any_transition_allowed(self):
        order = Order.create(tenant_id="tenant_1", customer_id="c1", items=self.items)
        delivered = order.with_status(OrderStatus.DELIVERED)
        self.assertEqual(delivered.with_status(OrderStatus.PENDING).status, "PENDING")


class TestTimestamps(unittest.TestCase):
    def test_next_timestamp_is_strictly_later(self):
        future = "2999-01-01T00:00:00.000000Z"
        self.assertEqual(next_timestamp(future), "2999-01-01T00:00:00.000001Z")

    def test_timestamp_format(self):
        stamp = next_timestamp()
        self.assertEqual(len(stamp), len("2026-01-01T00:00:00.000000Z"))
        self.assertTrue(stamp.endswith("Z"))


if __name__ == "__main__":
    unittest.main()
