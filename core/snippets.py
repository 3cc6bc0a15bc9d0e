# =============================================================================
# core/snippets.py  —  Snippet Builder
# =============================================================================
#
# Search results carry a short excerpt, never the full body.  A snippet:
#   - is returned unchanged if it already fits
#   - otherwise is cut at the last whitespace, if that whitespace lies in the
#     final 20% of the window, or at the hard boundary if it doesn't
#   - ends with "..." when anything was cut
#
# The "..." is counted inside max_length, so a snippet never exceeds the
# bound and snippet(snippet(s, L), L) == snippet(s, L).
#
# Fetch results never go through this module.
# =============================================================================

ELLIPSIS = "..."
_WHITESPACE = (" ", "\t", "\n", "\r")


def create_snippet(text: str, max_length: int = 512) -> str:
    """Return a word-boundary-respecting excerpt of at most max_length chars."""
    if not text or len(text) <= max_length:
        return text

    if max_length <= len(ELLIPSIS):
        return text[:max(max_length, 0)]

    window = text[:max_length - len(ELLIPSIS)]
    last_space = max(window.rfind(char) for char in _WHITESPACE)

    if last_space > len(window) * 0.8:
        return window[:last_space].rstrip() + ELLIPSIS

    return window + ELLIPSIS
