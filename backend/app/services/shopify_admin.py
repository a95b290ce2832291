"""Shopify Admin GraphQL client.

One POST per call, awaited to completion. No retries: callers decide what a
failure means for them.
"""
import logging
from collections.abc import AsyncGenerator
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class ShopifyAdminError(Exception):
    """Transport, HTTP or top-level GraphQL failure talking to the Admin API."""


class ShopifyAdminClient:
    def __init__(self, http: httpx.AsyncClient, url: str, access_token: str):
        self._http = http
        self._url = url
        self._headers = {
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL document and return the parsed JSON body.

        Raises ShopifyAdminError on network errors, non-2xx responses,
        non-JSON bodies and top-level ``errors``.
        """
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables

        try:
            response = await self._http.post(self._url, json=payload, headers=self._headers)
        except httpx.HTTPError as exc:
            raise ShopifyAdminError(str(exc) or exc.__class__.__name__) from exc

        if response.is_error:
            raise ShopifyAdminError(f"Admin API returned HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as exc:
            raise ShopifyAdminError("Admin API returned a non-JSON response") from exc

        if not isinstance(body, dict):
            raise ShopifyAdminError("Admin API returned an unexpected response body")

        errors = body.get("errors")
        if errors:
            if isinstance(errors, list):
                message = ", ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
            else:
                message = str(errors)
            raise ShopifyAdminError(message)

        return body


async def get_admin_client() -> AsyncGenerator[ShopifyAdminClient, None]:
    """FastAPI dependency: a client bound to a per-request httpx session."""
    async with httpx.AsyncClient(timeout=settings.SHOPIFY_REQUEST_TIMEOUT_SECONDS) as http:
        yield ShopifyAdminClient(
            http,
            url=settings.shopify_graphql_url,
            access_token=settings.SHOPIFY_ADMIN_ACCESS_TOKEN,
        )
