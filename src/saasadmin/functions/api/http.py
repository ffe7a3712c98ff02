"""
Shared plumbing for the API Gateway proxy handlers.

Request parsing, CORS headers and the mapping from application errors to
status codes live here so that the tenant and order handlers only deal
with routing.
"""
import base64
from http import HTTPStatus
from typing import Any, Dict, Optional, Type, TypeVar

import pydantic

from saasadmin import encoding
from saasadmin.config import EnvironmentConfig
from saasadmin.errors import SaasAdminError, ValidationError
from saasadmin.models import Page
from saasadmin.models.base import next_timestamp

M = TypeVar("M", bound=pydantic.BaseModel)


def cors_headers(config: EnvironmentConfig) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": config.cors_allow_origin,
        "Access-Control-Allow-Headers": "Content-Type,Authorization,X-Amz-Date,X-Api-Key,X-Amz-Security-Token",
        "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
    }


def respond(status_code: int, body: Any, headers: Dict[str, str]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": "" if body is None else encoding.dumps(body),
    }


def error_response(error: SaasAdminError, headers: Dict[str, str]) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": HTTPStatus(error.status_code).phrase, "message": error.message}
    if error.details:
        body["details"] = error.details
    return respond(error.status_code, body, headers)


def internal_error_response(error: Exception, headers: Dict[str, str]) -> Dict[str, Any]:
    return respond(500, {"error": "Internal server error", "message": str(error)}, headers)


def health_response(headers: Dict[str, str]) -> Dict[str, Any]:
    return respond(200, {"status": "healthy", "timestamp": next_timestamp()}, headers)


def get_http_method(event: Dict[str, Any]) -> Optional[str]:
    method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method")
    return method.upper() if method else None


def get_path_id(event: Dict[str, Any], name: str) -> Optional[str]:
    """Record id from the route's path parameter, e.g. `{tenantId}`, or a plain `{id}`."""
    params = event.get("pathParameters") or {}
    return params.get(name) or params.get("id")


def get_query_params(event: Dict[str, Any]) -> Dict[str, str]:
    return event.get("queryStringParameters") or {}


def is_health_check(event: Dict[str, Any]) -> bool:
    path = event.get("resource") or event.get("path") or event.get("rawPath") or ""
    return path.rstrip("/") == "/health"


def get_caller(event: Dict[str, Any]) -> Optional[str]:
    """Caller identity from the Cognito authorizer claims, if API Gateway attached any."""
    authorizer = event.get("requestContext", {}).get("authorizer") or {}
    claims = authorizer.get("claims") or authorizer.get("jwt", {}).get("claims") or {}
    return claims.get("email") or claims.get("sub")


def parse_body(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    body = event.get("body")
    if not body:
        return None
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode()
    try:
        data = encoding.loads(body)
    except ValueError:
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def parse_request(model: Type[M], data: Dict[str, Any]) -> M:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        errors = [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in e.errors()]
        raise ValidationError("Invalid request body", {"errors": errors})


def parse_limit(params: Dict[str, str]) -> Optional[int]:
    raw = params.get("limit")
    if raw is None or raw == "":
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise ValidationError("limit must be a positive integer")
    if limit < 1:
        raise ValidationError("limit must be a positive integer")
    return limit


def page_body(page: Page) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "items": [item.to_item() for item in page.items],
        "count": page.count,
    }
    if page.last_evaluated_key:
        body["lastEvaluatedKey"] = page.last_evaluated_key
    return body
