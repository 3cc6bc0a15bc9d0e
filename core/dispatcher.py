# =============================================================================
# core/dispatcher.py  —  Search & Fetch pipelines
# =============================================================================
#
# Drives Classifier → Backend → Normalizer for the two tool entry points.
# The MCP binding in tools/mcp_server.py only serializes what these return.
#
# FAILURE POLICY (intentionally different):
#   run_search → NEVER raises.  Any backend failure or bad record is logged
#                and becomes an empty result, so a browsing agent never
#                sees a hard error.
#   run_fetch  → raises.  A missing or failed single document has no safe
#                empty substitute.
# =============================================================================

import logging
from typing import Any, Optional

from core.backend import ArticlesBackend
from core.classifier import GET_ALL_PAGE_SIZE, classify_query, sort_by_recency
from core.errors import ArticlesAdapterError, NotFound
from core.models import FetchResultDoc, IntentKind, RetrievalIntent, SearchResultDoc
from core.normalizer import to_fetch_doc, to_search_doc

logger = logging.getLogger(__name__)

# Upper bound on any single page requested upstream
MAX_PAGE_SIZE = GET_ALL_PAGE_SIZE


def _apply_limit_override(intent: RetrievalIntent, limit: Optional[int]) -> RetrievalIntent:
    # GET_LATEST keeps the count it read from the query
    if limit is not None and intent.kind is not IntentKind.GET_LATEST:
        intent.limit = limit
    intent.limit = max(1, min(intent.limit, MAX_PAGE_SIZE))
    return intent


async def _retrieve(backend: ArticlesBackend, intent: RetrievalIntent) -> Any:
    if intent.kind is IntentKind.SEARCH:
        return await backend.search_articles(intent.query or "", intent.limit)

    response = await backend.get_all_articles(intent.limit)
    if intent.kind is IntentKind.GET_LATEST and isinstance(response, list):
        response = sort_by_recency(response)
    return response


async def run_search(
    backend: ArticlesBackend,
    query: Optional[str],
    limit: Optional[int] = None,
    snippet_length: int = 512,
) -> list[SearchResultDoc]:
    """Answer a search tool call.  Returns [] rather than raising."""
    try:
        intent = _apply_limit_override(classify_query(query), limit)
        response = await _retrieve(backend, intent)
    except ArticlesAdapterError as exc:
        logger.warning("Search for %r failed, returning no results: %s", query, exc)
        return []

    if getattr(response, "parse_failed", False):
        logger.warning("Search for %r got a malformed upstream payload", query)
        return []
    if not isinstance(response, list):
        logger.info("Search for %r got a %s instead of a list", query, type(response).__name__)
        return []

    docs = []
    for article in response:
        if not isinstance(article, dict):
            logger.debug("Skipping non-object search record: %r", article)
            continue
        docs.append(to_search_doc(article, backend.base_url, snippet_length))

    logger.info("Search for %r (%s) → %d of %d records",
                query, intent.kind.value, len(docs), len(response))
    return docs


async def run_fetch(backend: ArticlesBackend, article_id: str) -> FetchResultDoc:
    """Answer a fetch tool call.

    Raises:
        NotFound: the id is not numeric or the backend has no such article.
        ArticlesAdapterError: any other backend failure, unchanged.
    """
    try:
        numeric_id = int(str(article_id).strip())
    except ValueError:
        raise NotFound(article_id) from None

    response = await backend.get_article_by_id(numeric_id)

    # Some plugin versions answer with a one-element list
    if isinstance(response, list):
        response = response[0] if response else None

    if not isinstance(response, dict) or not response:
        raise NotFound(article_id)

    doc = to_fetch_doc(response, backend.base_url)
    logger.info("Fetched article %s (%d chars)", doc.id, len(doc.text))
    return doc
