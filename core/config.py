# =============================================================================
# core/config.py  —  Adapter configuration
# =============================================================================
#
# The only environment-driven value the core cares about is the backend
# base URL.  It is read ONCE at server start and injected into the backend
# client; nothing in core/ reads os.environ at call time.
#
#   STRAPI_URL   → base URL of the Strapi instance hosting the articles-mcp
#                  plugin (default: the production instance below)
# =============================================================================

from dataclasses import dataclass
import os
from typing import Mapping, Optional

DEFAULT_STRAPI_URL = "https://timely-benefit-e63d540317.strapiapp.com"
DEFAULT_SNIPPET_LENGTH = 512


@dataclass(frozen=True)
class AdapterConfig:
    """Settings injected into the backend client and the normalizer."""

    base_url: str = DEFAULT_STRAPI_URL
    snippet_length: int = DEFAULT_SNIPPET_LENGTH

    def __post_init__(self):
        # "https://x.test/" and "https://x.test" must build the same URLs
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AdapterConfig":
        """Build the config from the environment, falling back to defaults.

        An empty STRAPI_URL counts as unset.
        """
        env = os.environ if environ is None else environ
        return cls(base_url=env.get("STRAPI_URL") or DEFAULT_STRAPI_URL)
