"""
SaaS admin command line
=======================
Reads tenants and orders from the admin API.

Usage:
    saasadmin health
    saasadmin dashboard
    saasadmin tenants --limit 20
    saasadmin orders --tenant-id tenant_01H... --status SHIPPED

Authentication:
    SAAS_ADMIN_TOKEN                            ID token used as bearer token, or
    SAAS_ADMIN_USERNAME / SAAS_ADMIN_PASSWORD   signed in through USER_POOL_CLIENT_ID
"""

import argparse
import os
import sys
from typing import Optional

import requests

from saasadmin import encoding
from saasadmin.auth import CognitoAuth, SessionTokenProvider
from saasadmin.config import configure_logging, get_environment_config
from saasadmin.errors import SaasAdminError
from .api import ApiClient
from .dashboard import fetch_dashboard_stats


class StaticToken(SessionTokenProvider):
    def __init__(self, token: str):
        super().__init__()
        self.token = token

    def __call__(self) -> Optional[str]:
        return self.token


def build_token_provider(config) -> SessionTokenProvider:
    token = os.environ.get("SAAS_ADMIN_TOKEN")
    if token:
        return StaticToken(token)

    provider = SessionTokenProvider()
    username = os.environ.get("SAAS_ADMIN_USERNAME")
    password = os.environ.get("SAAS_ADMIN_PASSWORD")
    if username and password and config.user_pool_client_id:
        auth = CognitoAuth(config.user_pool_client_id, region_name=config.region)
        provider.set_session(auth.sign_in(username, password))
    return provider


def run(args, client: ApiClient) -> dict:
    if args.command == "health":
        return client.health_check()
    if args.command == "dashboard":
        return fetch_dashboard_stats(client).model_dump()
    if args.command == "tenants":
        page = client.get_tenants(args.limit, args.cursor)
    elif args.tenant_id:
        page = client.get_orders_by_tenant(args.tenant_id, args.limit, args.cursor)
    elif args.status:
        page = client.get_orders_by_status(args.status, args.limit, args.cursor)
    else:
        page = client.get_orders(args.limit, args.cursor)

    result = {"items": [item.to_item() for item in page.items], "count": page.count}
    if page.last_evaluated_key:
        result["lastEvaluatedKey"] = page.last_evaluated_key
    return result


def main(argv=None) -> int:
    config = get_environment_config()

    parser = argparse.ArgumentParser(description="SaaS admin API client")
    parser.add_argument("--api-url", default=config.api_gateway_url, help="API Gateway base URL")
    parser.add_argument("--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("health", help="Check the API is up")
    subparsers.add_parser("dashboard", help="Tenant, order and revenue totals")

    tenants = subparsers.add_parser("tenants", help="List tenants")
    tenants.add_argument("--limit", type=int)
    tenants.add_argument("--cursor", help="lastEvaluatedKey from a previous page")

    orders = subparsers.add_parser("orders", help="List orders")
    orders.add_argument("--tenant-id")
    orders.add_argument("--status")
    orders.add_argument("--limit", type=int)
    orders.add_argument("--cursor", help="lastEvaluatedKey from a previous page")

    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else config.log_level)

    if not args.api_url:
        print("ERROR: --api-url or API_GATEWAY_URL is required", file=sys.stderr)
        return 2

    try:
        client = ApiClient(args.api_url, token_provider=build_token_provider(config))
        result = run(args, client)
    except SaasAdminError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1
    except requests.exceptions.RequestException as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(encoding.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
