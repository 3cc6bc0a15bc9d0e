# =============================================================================
# core/normalizer.py  —  Article Normalizer (RawArticle → canonical document)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Maps an upstream article record of ANY shape onto the canonical document
#   the calling agent expects.  The backend's operations disagree on field
#   names:
#     - search_articles   → summary / excerpt
#     - get_all_articles  → fullContent / description
#     - get_article_by_id → content
#   One set of ordered fallbacks reconciles them all.
#
# TWO VARIANTS, TWO BODY ORDERS:
#   search → summary, excerpt, description, fullContent, content
#            (short-form fields first, then snippet-bounded)
#   fetch  → content, fullContent, description, summary
#            (longest / most authoritative first, never truncated)
#
# TOTALITY:
#   Both functions return a valid document for any input, however sparse.
#   id, title, text and url are always populated.
# =============================================================================

import json
import logging
import uuid
from typing import Any, Optional

from core.models import FetchResultDoc, RawArticle, SearchResultDoc
from core.snippets import create_snippet

logger = logging.getLogger(__name__)

UNTITLED = "Untitled Article"
NO_CONTENT = "No content available"
UNKNOWN_ID = "unknown"
SOURCE_LABEL = "Strapi CMS"

_SEARCH_BODY_FIELDS = ("summary", "excerpt", "description", "fullContent", "content")
_FETCH_BODY_FIELDS = ("content", "fullContent", "description", "summary")
_TITLE_FIELDS = ("title", "name")

# Passed through to fetch metadata untouched when present
_PASSTHROUGH_FIELDS = ("readingTime", "wordCount", "seo")


# =============================================================================
# Field helpers
# =============================================================================
def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


def _first_present(article: RawArticle, fields: tuple[str, ...]) -> Any:
    """Return the first non-empty value among fields, or None."""
    for name in fields:
        value = article.get(name)
        if not _is_empty(value):
            return value
    return None


def _as_text(value: Any) -> str:
    # Rich-text bodies (lists of blocks) arrive as JSON structures
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _title(article: RawArticle) -> str:
    value = _first_present(article, _TITLE_FIELDS)
    return _as_text(value) if value is not None else UNTITLED


def _article_id(article: RawArticle) -> Optional[str]:
    value = article.get("id")
    if _is_empty(value):
        return None
    return str(value)


# =============================================================================
# URL canonicalization (shared by both variants)
# =============================================================================
def canonical_url(article: RawArticle, base_url: str, fallback_id: Optional[str] = None) -> str:
    """Return an absolute URL for the article.

    - An explicit url/link starting with "http" is kept as-is.
    - Any other explicit url/link is a path under base_url.
    - Without one, the URL is {base_url}/blog/{articleId or id}; fallback_id
      is used only when the record carries neither.
    """
    base = base_url.rstrip("/")
    explicit = _first_present(article, ("url", "link"))

    if explicit is not None:
        explicit = str(explicit).strip()
        if explicit.startswith("http"):
            return explicit
        if not explicit.startswith("/"):
            explicit = "/" + explicit
        return f"{base}{explicit}"

    slug = _first_present(article, ("articleId", "id"))
    if slug is None:
        slug = fallback_id if fallback_id is not None else UNKNOWN_ID
    return f"{base}/blog/{slug}"


# =============================================================================
# Search variant
# =============================================================================
def to_search_doc(article: RawArticle, base_url: str, snippet_length: int = 512) -> SearchResultDoc:
    """Normalize one upstream record into a search hit."""
    doc_id = _article_id(article) or uuid.uuid4().hex
    body = _first_present(article, _SEARCH_BODY_FIELDS)
    text = _as_text(body) if body is not None else NO_CONTENT

    tags = article.get("tags")
    category = article.get("category")
    if _is_empty(category) and isinstance(tags, list) and tags:
        category = tags[0]

    metadata = _compact({
        "category": None if _is_empty(category) else category,
        "author": article.get("author"),
        "publishedAt": _first_present(article, ("publishedAt", "created_at")),
        "tags": tags,
        "relevance": _first_present(article, ("relevance", "score")),
    })

    return SearchResultDoc(
        id=doc_id,
        title=_title(article),
        text=create_snippet(text, snippet_length),
        url=canonical_url(article, base_url, fallback_id=doc_id),
        metadata=metadata or None,
    )


# =============================================================================
# Fetch variant
# =============================================================================
def to_fetch_doc(article: RawArticle, base_url: str) -> FetchResultDoc:
    """Normalize one upstream record into a full document.

    Upstream `metadata` is merged last, so its keys win over the derived ones.
    """
    doc_id = _article_id(article) or UNKNOWN_ID
    body = _first_present(article, _FETCH_BODY_FIELDS)

    metadata = _compact({
        "author": article.get("author"),
        "publishedAt": _first_present(article, ("publishedAt", "created_at")),
        "updatedAt": _first_present(article, ("updatedAt", "updated_at")),
        "category": article.get("category"),
        "tags": article.get("tags"),
    })
    metadata["source"] = SOURCE_LABEL
    for name in _PASSTHROUGH_FIELDS:
        if article.get(name) is not None:
            metadata[name] = article[name]

    upstream_metadata = article.get("metadata")
    if isinstance(upstream_metadata, dict):
        metadata.update(upstream_metadata)
    elif upstream_metadata is not None:
        logger.debug("Ignoring non-object metadata on article %s", doc_id)

    return FetchResultDoc(
        id=doc_id,
        title=_title(article),
        text=_as_text(body) if body is not None else NO_CONTENT,
        url=canonical_url(article, base_url, fallback_id=doc_id),
        metadata=metadata,
    )
