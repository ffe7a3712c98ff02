import unittest
from decimal import Decimal

import boto3
from moto import mock_aws

from saasadmin.errors import AlreadyExistsError, NotFoundError
from saasadmin.models import OrderStatus, PaymentStatus, TenantPlan, TenantStatus
from saasadmin.repositories import DynamoDBOrderRepository, DynamoDBTenantRepository
from saasadmin.services import OrderService, TenantService
from tests.unit.tables import create_orders_table, create_tenants_table

WIDGETS = [{"productId": "p1", "name": "Widget", "quantity": 3, "unitPrice": Decimal("9.99"), "totalPrice": 0}]


@mock_aws
class TestTenantService(unittest.TestCase):
    def setUp(self):
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
        self.repository = DynamoDBTenantRepository(create_tenants_table(dynamodb))
        self.service = TenantService(self.repository)

    def test_create_tenant_defaults(self):
        tenant = self.service.create_tenant("Acme", "a@acme.com")
        self.assertEqual(tenant.status, TenantStatus.PENDING)
        self.assertEqual(tenant.plan, TenantPlan.FREE)
        self.assertEqual(self.service.get_tenant(tenant.tenant_id).model_dump(), tenant.model_dump())

    def test_create_tenant_with_plan(self):
        tenant = self.service.create_tenant("Acme", "a@acme.com", TenantPlan.ENTERPRISE)
        self.assertEqual(tenant.plan, "ENTERPRISE")

    def test_duplicate_email_rejected(self):
        self.service.create_tenant("Acme", "a@acme.com")
        with self.assertRaises(AlreadyExistsError):
            self.service.create_tenant("Acme Again", "a@acme.com")
        self.assertEqual(self.service.list_tenants().count, 1)

    def test_missing_tenant(self):
        with self.assertRaises(NotFoundError):
            self.service.get_tenant("tenant_missing")
        with self.assertRaises(NotFoundError):
            self.service.update_tenant("tenant_missing", name="x")
        with self.assertRaises(NotFoundError):
            self.service.delete_tenant("tenant_missing")

    def test_update_tenant_applies_only_given_fields(self):
        tenant = self.service.create_tenant("Acme", "a@acme.com", TenantPlan.BASIC)
        updated = self.service.update_tenant(tenant.tenant_id, name="Acme Inc", settings={"maxUsers": 5})

        self.assertEqual(updated.name, "Acme Inc")
        self.assertEqual(updated.plan, "BASIC")
        self.assertEqual(updated.email, "a@acme.com")
        self.assertEqual(updated.settings.max_users, 5)
        self.assertNotEqual(updated.updated_at, tenant.updated_at)
        self.assertEqual(self.service.get_tenant(tenant.tenant_id).name, "Acme Inc")

    def test_activate_and_suspend(self):
        tenant = self.service.create_tenant("Acme", "a@acme.com")
        self.assertEqual(self.service.activate_tenant(tenant.tenant_id).status, "ACTIVE")
        self.assertEqual(self.service.suspend_tenant(tenant.tenant_id).status, "SUSPENDED")

    def test_delete_tenant(self):
        tenant = self.service.create_tenant("Acme", "a@acme.com")
        self.service.delete_tenant(tenant.tenant_id)
        with self.assertRaises(NotFoundError):
            self.service.get_tenant(tenant.tenant_id)


@mock_aws
class TestOrderService(unittest.TestCase):
    def setUp(self):
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
        self.tenant_repository = DynamoDBTenantRepository(create_tenants_table(dynamodb))
        self.order_repository = DynamoDBOrderRepository(create_orders_table(dynamodb))
        self.tenants = TenantService(self.tenant_repository)
        self.service = OrderService(self.order_repository, self.tenant_repository)
        self.tenant = self.tenants.create_tenant("Acme", "a@acme.com")

    def test_create_order(self):
        order = self.service.create_order(self.tenant.tenant_id, "c1", WIDGETS, "USD", notes="gift")
        self.assertEqual(order.total_amount, Decimal("29.97"))
        self.assertEqual(order.items[0].total_price, Decimal("29.97"))
        self.assertEqual(order.status, OrderStatus.PENDING)
        self.assertEqual(order.payment_status, PaymentStatus.PENDING)
        self.assertEqual(self.service.get_order(order.order_id).model_dump(), order.model_dump())

    def test_create_order_for_unknown_tenant(self):
        with self.assertRaises(NotFoundError):
            self.service.create_order("tenant_missing", "c1", WIDGETS)
        self.assertEqual(self.service.list_orders().count, 0)

    def test_update_order_keeps_other_fields(self):
        order = self.service.create_order(self.tenant.tenant_id, "c1", WIDGETS, notes="gift")
        shipped = self.service.update_order(order.order_id, status=OrderStatus.SHIPPED)

        self.assertEqual(shipped.status, "SHIPPED")
        self.assertEqual(shipped.payment_status, "PENDING")
        self.assertEqual(shipped.notes, "gift")
        self.assertEqual(shipped.total_amount, order.total_amount)

        noted = self.service.update_order(order.order_id, notes="handle with care")
        self.assertEqual(noted.notes, "handle with care")
        self.assertEqual(noted.status, "SHIPPED")

    def test_lifecycle_shortcuts(self):
        order_id = self.service.create_order(self.tenant.tenant_id, "c1", WIDGETS).order_id
        self.assertEqual(self.service.confirm_order(order_id).status, "CONFIRMED")
        self.assertEqual(self.service.process_order(order_id).status, "PROCESSING")
        self.assertEqual(self.service.ship_order(order_id).status, "SHIPPED")
        self.assertEqual(self.service.deliver_order(order_id).status, "DELIVERED")
        paid = self.service.mark_as_paid(order_id)
        self.assertEqual(paid.payment_status, "PAID")
        self.assertEqual(paid.status, "DELIVERED")
        self.assertEqual(self.service.cancel_order(order_id).status, "CANCELLED")

    def test_no_transition_rules(self):
        order_id = self.service.create_order(self.tenant.tenant_id, "c1", WIDGETS).order_id
        self.service.deliver_order(order_id)
        reopened = self.service.update_order(order_id, status=OrderStatus.PENDING)
        self.assertEqual(reopened.status, "PENDING")

    def test_queries(self):
        other = self.tenants.create_tenant("Globex", "g@globex.com")
        first = self.service.create_order(self.tenant.tenant_id, "c1", WIDGETS)
        self.service.create_order(self.tenant.tenant_id, "c2", WIDGETS)
        self.service.create_order(other.tenant_id, "c3", WIDGETS)
        self.service.ship_order(first.order_id)

        self.assertEqual(self.service.get_orders_by_tenant(self.tenant.tenant_id).count, 2)
        self.assertEqual(self.service.get_orders_by_tenant(other.tenant_id).count, 1)
        shipped = self.service.get_orders_by_status("SHIPPED")
        self.assertEqual([o.order_id for o in shipped.items], [first.order_id])
        self.assertEqual(self.service.list_orders().count, 3)

    def test_delete_order(self):
        order = self.service.create_order(self.tenant.tenant_id, "c1", WIDGETS)
        self.service.delete_order(order.order_id)
        with self.assertRaises(NotFoundError):
            self.service.get_order(order.order_id)
        with self.assertRaises(NotFoundError):
            self.service.delete_order(order.order_id)
        self.assertEqual(self.tenants.get_tenant(self.tenant.tenant_id).tenant_id, self.tenant.tenant_id)

    def test_deleting_tenant_leaves_orders(self):
        order = self.service.create_order(self.tenant.tenant_id, "c1", WIDGETS)
        self.tenants.delete_tenant(self.tenant.tenant_id)
        self.assertEqual(self.service.get_order(order.order_id).tenant_id, self.tenant.tenant_id)


if __name__ == "__main__":
    unittest.main()
