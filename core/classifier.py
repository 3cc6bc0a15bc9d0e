# =============================================================================
# core/classifier.py  —  Query Intent Classification
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Looks at the raw search string an agent sent and decides which upstream
#   operation answers it:
#
#     GET_ALL     → get_all_articles{limit: 100}     ("list everything", "*", "")
#     GET_LATEST  → get_all_articles{limit: N}       ("latest 5", "son 2")
#     SEARCH      → search_articles{query, limit: 50}
#
#   Rules are checked in that order and the first match wins.  "all 5" is
#   GET_ALL and the number is dropped.
#
# MATCHING:
#   Plain case-insensitive substring tests, so "small" still contains "all"
#   and "person" still contains "son".
# =============================================================================

from datetime import datetime, timezone
import logging
import re
from typing import Any, Iterable

from core.models import IntentKind, RawArticle, RetrievalIntent

logger = logging.getLogger(__name__)

GET_ALL_PAGE_SIZE = 100
SEARCH_PAGE_SIZE = 50
LATEST_DEFAULT_COUNT = 10

_GET_ALL_WORDS = ("all", "everything", "list")
# English plus Turkish ("son" = last, "yeni" = new)
_LATEST_WORDS = ("latest", "recent", "newest", "last", "son", "yeni")

_NUMBER_RE = re.compile(r"\d+")

# Checked in this order, first present field wins
_TIMESTAMP_FIELDS = ("publishedAt", "created_at", "updatedAt")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def classify_query(query: str | None) -> RetrievalIntent:
    """Decide which upstream retrieval mode a free-text query maps to.

    Args:
        query: The raw query from the agent.  May be None or blank.

    Returns:
        A RetrievalIntent carrying the mode and the page size to request.
        For SEARCH the original query is carried through unmodified.
    """
    raw = query or ""
    stripped = raw.strip()
    lowered = raw.lower()

    if not stripped or stripped == "*" or _contains_any(lowered, _GET_ALL_WORDS):
        intent = RetrievalIntent(kind=IntentKind.GET_ALL, limit=GET_ALL_PAGE_SIZE)
    elif _contains_any(lowered, _LATEST_WORDS):
        match = _NUMBER_RE.search(raw)
        count = int(match.group()) if match else LATEST_DEFAULT_COUNT
        intent = RetrievalIntent(kind=IntentKind.GET_LATEST, limit=count)
    else:
        intent = RetrievalIntent(kind=IntentKind.SEARCH, limit=SEARCH_PAGE_SIZE, query=raw)

    logger.debug("Classified query %r as %s (limit=%d)", raw, intent.kind.value, intent.limit)
    return intent


def _contains_any(text: str, words: Iterable[str]) -> bool:
    return any(word in text for word in words)


# =============================================================================
# Recency ordering (GET_LATEST only)
# =============================================================================
def sort_by_recency(articles: list[RawArticle]) -> list[RawArticle]:
    """Return the articles newest first.

    Each record is keyed on the first present of publishedAt, created_at,
    updatedAt.  Records with no usable timestamp sort as the epoch, i.e.
    last.  The sort is stable, so ties keep their upstream order.
    """
    return sorted(articles, key=_article_timestamp, reverse=True)


def _article_timestamp(article: Any) -> datetime:
    if not isinstance(article, dict):
        return _EPOCH
    for name in _TIMESTAMP_FIELDS:
        value = article.get(name)
        if value:
            return _parse_timestamp(value)
    return _EPOCH


def _parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string or epoch milliseconds; the epoch if neither."""
    if isinstance(value, bool):
        return _EPOCH
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return _EPOCH
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return _EPOCH
        # Naive timestamps are taken as UTC so they compare with aware ones
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return _EPOCH
