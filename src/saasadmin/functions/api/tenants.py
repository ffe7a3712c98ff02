import json
import logging
from typing import Optional

import boto3

from saasadmin.config import EnvironmentConfig, configure_logging, get_environment_config
from saasadmin.errors import SaasAdminError
from saasadmin.models import CreateTenantRequest, UpdateTenantRequest
from saasadmin.repositories import DynamoDBTenantRepository
from saasadmin.services import TenantService
from .http import (
    cors_headers,
    error_response,
    get_caller,
    get_http_method,
    get_path_id,
    get_query_params,
    health_response,
    internal_error_response,
    is_health_check,
    page_body,
    parse_body,
    parse_limit,
    parse_request,
    respond,
)

logger = logging.getLogger(__name__)


class TenantAPI:
    def __init__(self, config: Optional[EnvironmentConfig] = None):
        self.config = config or get_environment_config()
        self.dynamodb = boto3.resource("dynamodb", region_name=self.config.region)
        self.table = self.dynamodb.Table(self.config.tenants_table)
        self.service = TenantService(DynamoDBTenantRepository(self.table))

    def create_tenant(self, data: dict):
        request = parse_request(CreateTenantRequest, data)
        tenant = self.service.create_tenant(request.name, request.email, request.plan)
        return tenant.to_item()

    def get_tenant(self, tenant_id: str):
        return self.service.get_tenant(tenant_id).to_item()

    def list_tenants(self, params: dict):
        page = self.service.list_tenants(parse_limit(params), params.get("lastEvaluatedKey"))
        return page_body(page)

    def update_tenant(self, tenant_id: str, data: dict):
        request = parse_request(UpdateTenantRequest, data)
        tenant = self.service.update_tenant(
            tenant_id,
            name=request.name,
            plan=request.plan,
            status=request.status,
            settings=request.settings,
        )
        return tenant.to_item()

    def delete_tenant(self, tenant_id: str):
        self.service.delete_tenant(tenant_id)


def handler(event, context):
    config = get_environment_config()
    configure_logging(config.log_level)
    headers = cors_headers(config)
    http_method = get_http_method(event)
    tenant_id = get_path_id(event, "tenantId")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Tenant event: %s", json.dumps(event, default=str))

    if http_method == "OPTIONS":
        return respond(200, None, headers)

    # GET /health is routed to this function without an authorizer
    if is_health_check(event):
        return health_response(headers)

    logger.info("%s tenant request from %s", http_method, get_caller(event) or "anonymous")

    try:
        api = TenantAPI(config)

        if http_method == "POST":
            body = parse_body(event)
            if body is None:
                return respond(400, {"error": "Request body is required"}, headers)
            return respond(201, api.create_tenant(body), headers)

        elif http_method == "GET":
            if tenant_id:
                return respond(200, api.get_tenant(tenant_id), headers)
            return respond(200, api.list_tenants(get_query_params(event)), headers)

        elif http_method == "PUT":
            body = parse_body(event)
            if not tenant_id or body is None:
                return respond(400, {"error": "Tenant ID and request body are required"}, headers)
            return respond(200, api.update_tenant(tenant_id, body), headers)

        elif http_method == "DELETE":
            if not tenant_id:
                return respond(400, {"error": "Tenant ID is required"}, headers)
            api.delete_tenant(tenant_id)
            return respond(204, None, headers)

        return respond(405, {"error": "Method not allowed"}, headers)

    except SaasAdminError as e:
        logger.warning("Tenant request failed: %s", e.message)
        return error_response(e, headers)
    except Exception as e:
        logger.exception("Error processing tenant request")
        return internal_error_response(e, headers)
