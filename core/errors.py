# =============================================================================
# core/errors.py  —  Failure taxonomy for backend calls
# =============================================================================
#
# Every failure the adapter can see is one of these.  The tool layer decides
# what to do with them:
#   - search  → logs and returns an empty result (never raises)
#   - fetch   → propagates to the caller as a tool-level error
#
# A malformed success payload is NOT an exception. The backend client
# returns a MalformedPayload sentinel (see core/backend.py) instead.
# =============================================================================


class ArticlesAdapterError(Exception):
    """Base class for every error raised while talking to the backend."""


class TransportError(ArticlesAdapterError):
    """The HTTP exchange itself could not be completed."""


class UpstreamHTTPError(ArticlesAdapterError):
    """The backend answered with a non-success status code."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}: {body[:200]}")


class UpstreamAPIError(ArticlesAdapterError):
    """The backend answered successfully but reported an error in the body."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFound(ArticlesAdapterError):
    """The requested article does not exist upstream."""

    def __init__(self, article_id: str):
        self.article_id = article_id
        super().__init__(f"Article '{article_id}' not found.")
