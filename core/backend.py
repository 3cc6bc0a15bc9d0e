# =============================================================================
# core/backend.py  —  Backend Client for the Strapi articles-mcp plugin
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues ONE request/response round trip to the upstream content API for a
#   named operation and unwraps its envelope:
#
#     POST {base_url}/api/articles-mcp/mcp/tools/call
#     {"name": "<operation>", "arguments": {...}}
#
#   Success:  {"content": [{"type": "text", "text": "<json string>"}]}
#   Failure:  {"error": {"message": "..."}}
#
# OUTCOMES:
#   - network failure, bad URL → TransportError
#   - non-2xx status           → UpstreamHTTPError(status_code, body)
#   - "error" field in body    → UpstreamAPIError(message)
#   - inner text empty or not
#     JSON                     → MalformedPayload (returned, NOT raised)
#   - unexpected body shape    → the decoded body, unmodified
#
# No retries and no timeout override: one attempt per call with httpx's
# default timeout.  A fresh AsyncClient is opened per call, so concurrent
# tool invocations share nothing.
# =============================================================================

import json
import logging
from typing import Any, Optional

import httpx

from core.config import AdapterConfig
from core.errors import TransportError, UpstreamAPIError, UpstreamHTTPError

logger = logging.getLogger(__name__)

TOOLS_CALL_PATH = "/api/articles-mcp/mcp/tools/call"


class MalformedPayload(list):
    """Empty result returned when the upstream payload cannot be decoded.

    It is a list so callers that iterate results just see nothing;
    `parse_failed` lets the ones that care tell it apart from a real
    empty result.
    """

    parse_failed = True

    def __init__(self, raw_text: str = ""):
        super().__init__()
        self.raw_text = raw_text


class ArticlesBackend:
    """Client for the articles-mcp tool endpoint of a Strapi instance."""

    def __init__(
        self,
        config: AdapterConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.endpoint = f"{config.base_url}{TOOLS_CALL_PATH}"
        # Tests pass an httpx.MockTransport here
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def call(self, operation: str, arguments: dict[str, Any]) -> Any:
        """Invoke one upstream operation and return its decoded payload.

        Raises:
            TransportError: the request could not be completed.
            UpstreamHTTPError: the response status was not 2xx.
            UpstreamAPIError: the response body carried an "error" field.
        """
        body = {"name": operation, "arguments": arguments}
        logger.info("Calling upstream %s with %s", operation, arguments)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(self.endpoint, json=body)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"Could not reach {self.endpoint}: {exc}") from exc

        if not response.is_success:
            raise UpstreamHTTPError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            logger.warning("Upstream %s returned a non-JSON body", operation)
            return MalformedPayload(response.text)

        if isinstance(data, dict) and data.get("error") is not None:
            raise UpstreamAPIError(_error_message(data["error"]))

        return _unwrap_envelope(operation, data)

    # -------------------------------------------------------------------------
    # Typed wrappers for the operations the plugin supports
    # -------------------------------------------------------------------------
    async def get_all_articles(self, limit: int, category: Optional[str] = None) -> Any:
        arguments: dict[str, Any] = {"limit": limit}
        if category:
            arguments["category"] = category
        return await self.call("get_all_articles", arguments)

    async def search_articles(self, query: str, limit: int) -> Any:
        return await self.call("search_articles", {"query": query, "limit": limit})

    async def get_article_by_id(self, article_id: int) -> Any:
        return await self.call("get_article_by_id", {"id": article_id})

    async def get_article_categories(self) -> Any:
        return await self.call("get_article_categories", {})


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message") or "Upstream reported an error")
    return str(error) or "Upstream reported an error"


def _unwrap_envelope(operation: str, data: Any) -> Any:
    """Decode the JSON string inside {"content": [{"text": ...}]}."""
    content = data.get("content") if isinstance(data, dict) else None
    if not (isinstance(content, list) and content and isinstance(content[0], dict)):
        logger.debug("Upstream %s returned an unwrapped body", operation)
        return data

    if "text" not in content[0]:
        return data

    text = content[0]["text"]
    if not isinstance(text, str) or not text.strip():
        logger.warning("Upstream %s returned an empty content wrapper", operation)
        return MalformedPayload(text if isinstance(text, str) else "")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Upstream %s returned undecodable content: %.120s", operation, text)
        return MalformedPayload(text)

    logger.debug("Upstream %s returned %s", operation, type(payload).__name__)
    return payload
