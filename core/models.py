# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the adapter)
# =============================================================================
#
# These dataclasses define the shape of every canonical document the adapter
# hands back to the calling agent.  They carry no behavior. The normalizer
# builds them, the tool layer serializes them.
#
# RAW vs CANONICAL:
#   Upstream records are plain dicts (RawArticle) whose field names differ
#   between backend operations.  Nothing downstream of core/normalizer.py
#   ever sees a RawArticle, only SearchResultDoc / FetchResultDoc.
#
# LIFECYCLE:
#   Every object here is built fresh for a single tool call and thrown away
#   once the response is serialized.  No identity survives a call.
# =============================================================================

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional


# An upstream article record.  No field is guaranteed to be present.
RawArticle = dict[str, Any]


# -----------------------------------------------------------------------------
# RetrievalIntent: what the classifier decided to do with a search query
# -----------------------------------------------------------------------------
class IntentKind(str, Enum):
    GET_ALL = "get_all"
    GET_LATEST = "get_latest"
    SEARCH = "search"


@dataclass
class RetrievalIntent:
    """The upstream retrieval mode chosen for a free-text query."""

    kind: IntentKind
    limit: int                         # Page size to request upstream
    query: Optional[str] = None        # Only set for SEARCH, passed through as-is


# -----------------------------------------------------------------------------
# SearchResultDoc: one hit in a search response
# -----------------------------------------------------------------------------
@dataclass
class SearchResultDoc:
    """A search hit: identity, a bounded snippet, and light metadata."""

    id: str                            # Always populated (random if upstream has none)
    title: str                         # "Untitled Article" if upstream has none
    text: str                          # Snippet, never the full body
    url: str                           # Absolute
    metadata: Optional[dict[str, Any]] = None
    # category, author, publishedAt, tags, relevance, only keys with values

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        if not result["metadata"]:
            result.pop("metadata")
        return result


# -----------------------------------------------------------------------------
# FetchResultDoc: the full document returned by fetch
# -----------------------------------------------------------------------------
@dataclass
class FetchResultDoc:
    """A single article with its full body and the merged metadata bag."""

    id: str                            # "unknown" if upstream has none
    title: str
    text: str                          # Full body, never truncated
    url: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
