import json
import logging
from typing import Optional

import boto3

from saasadmin.config import EnvironmentConfig, configure_logging, get_environment_config
from saasadmin.errors import SaasAdminError, ValidationError
from saasadmin.models import CreateOrderRequest, OrderStatus, UpdateOrderRequest
from saasadmin.repositories import DynamoDBOrderRepository, DynamoDBTenantRepository
from saasadmin.services import OrderService
from .http import (
    cors_headers,
    error_response,
    get_caller,
    get_http_method,
    get_path_id,
    get_query_params,
    internal_error_response,
    page_body,
    parse_body,
    parse_limit,
    parse_request,
    respond,
)

logger = logging.getLogger(__name__)


class OrderAPI:
    def __init__(self, config: Optional[EnvironmentConfig] = None):
        self.config = config or get_environment_config()
        self.dynamodb = boto3.resource("dynamodb", region_name=self.config.region)
        self.orders_table = self.dynamodb.Table(self.config.orders_table)
        self.tenants_table = self.dynamodb.Table(self.config.tenants_table)
        self.service = OrderService(
            DynamoDBOrderRepository(self.orders_table),
            DynamoDBTenantRepository(self.tenants_table),
        )

    def create_order(self, data: dict):
        request = parse_request(CreateOrderRequest, data)
        order = self.service.create_order(
            tenant_id=request.tenant_id,
            customer_id=request.customer_id,
            items=request.items,
            currency=request.currency,
            shipping_address=request.shipping_address,
            billing_address=request.billing_address,
            notes=request.notes,
        )
        return order.to_item()

    def get_order(self, order_id: str):
        return self.service.get_order(order_id).to_item()

    def list_orders(self, params: dict):
        limit = parse_limit(params)
        cursor = params.get("lastEvaluatedKey")
        tenant_id = params.get("tenantId")
        status = params.get("status")

        if tenant_id:
            page = self.service.get_orders_by_tenant(tenant_id, limit, cursor)
        elif status:
            try:
                status = OrderStatus(status).value
            except ValueError:
                raise ValidationError(f"Unknown order status: {status}")
            page = self.service.get_orders_by_status(status, limit, cursor)
        else:
            page = self.service.list_orders(limit, cursor)
        return page_body(page)

    def update_order(self, order_id: str, data: dict):
        request = parse_request(UpdateOrderRequest, data)
        order = self.service.update_order(
            order_id,
            status=request.status,
            payment_status=request.payment_status,
            notes=request.notes,
        )
        return order.to_item()

    def delete_order(self, order_id: str):
        self.service.delete_order(order_id)


def handler(event, context):
    config = get_environment_config()
    configure_logging(config.log_level)
    headers = cors_headers(config)
    http_method = get_http_method(event)
    order_id = get_path_id(event, "orderId")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Order event: %s", json.dumps(event, default=str))

    if http_method == "OPTIONS":
        return respond(200, None, headers)

    logger.info("%s order request from %s", http_method, get_caller(event) or "anonymous")

    try:
        api = OrderAPI(config)

        if http_method == "POST":
            body = parse_body(event)
            if body is None:
                return respond(400, {"error": "Request body is required"}, headers)
            return respond(201, api.create_order(body), headers)

        elif http_method == "GET":
            if order_id:
                return respond(200, api.get_order(order_id), headers)
            return respond(200, api.list_orders(get_query_params(event)), headers)

        elif http_method == "PUT":
            body = parse_body(event)
            if not order_id or body is None:
                return respond(400, {"error": "Order ID and request body are required"}, headers)
            return respond(200, api.update_order(order_id, body), headers)

        elif http_method == "DELETE":
            if not order_id:
                return respond(400, {"error": "Order ID is required"}, headers)
            api.delete_order(order_id)
            return respond(204, None, headers)

        return respond(405, {"error": "Method not allowed"}, headers)

    except SaasAdminError as e:
        logger.warning("Order request failed: %s", e.message)
        return error_response(e, headers)
    except Exception as e:
        logger.exception("Error processing order request")
        return internal_error_response(e, headers)
