"""
Query Resolver - Pick a search engine for a raw query and build the redirect.

A query starting with "!" names an engine by bang keyword:
  "!w python"   → Wikipedia, remainder "python"
  "!nope foo"   → default engine, remainder "!nope foo" (unchanged)
  "!g"          → default engine, remainder "!g" (unchanged)

Anything that isn't a complete, known bang goes to the default engine
with the original query untouched. The default engine depends on the
wireless network: a trusted network (SSID containing the configured
marker) gets the trusted engine, everything else gets the private one.
"""

import urllib.parse
from typing import Optional

from loguru import logger

from bangserve.search.engines import PLACEHOLDER, EngineRegistry, SearchEngine
from bangserve.services.network import NetworkContextProvider, provider_from_settings

# str.isspace() also accepts the ASCII separators U+001C..U+001F, which
# are not Unicode White_Space and so never end a bang keyword
NON_BREAKING_SEPARATORS = "\x1c\x1d\x1e\x1f"


def _ends_bang(ch: str) -> bool:
    return ch.isspace() and ch not in NON_BREAKING_SEPARATORS


def format_redirect_url(query: str, template: str) -> str:
    """
    Percent-encode query and substitute it into template.

    Every character outside the unreserved set (letters, digits, "-._~")
    is encoded, space included as %20. A template without the
    placeholder comes back unchanged.

    Example:
        format_redirect_url("c++ vector", "https://x/?q={searchTerms}")
        → "https://x/?q=c%2B%2B%20vector"
    """
    return template.replace(PLACEHOLDER, urllib.parse.quote(query, safe=""))


class QueryResolver:
    """Map raw queries to (engine, remainder) and to redirect URLs."""

    def __init__(
        self,
        registry: EngineRegistry,
        network: NetworkContextProvider,
        trusted_marker: str = "BVSD",
        trusted_engine: str = "g",
        fallback_engine: str = "ddg",
        bang_suggester: Optional[str] = "ddg",
    ):
        self.registry = registry
        self.network = network
        self.trusted_marker = trusted_marker

        # Unknown keys raise UnknownEngineError here
        self._trusted = registry.get(trusted_engine)
        self._fallback = registry.get(fallback_engine)
        self._bang_suggester = registry.get(bang_suggester) if bang_suggester else None

    @classmethod
    def from_settings(
        cls,
        settings: dict,
        registry: Optional[EngineRegistry] = None,
        network: Optional[NetworkContextProvider] = None,
    ) -> "QueryResolver":
        """Build a resolver from merged settings; explicit collaborators win."""
        net = settings.get("network", {})
        return cls(
            registry=registry if registry is not None else EngineRegistry.from_settings(settings),
            network=network if network is not None else provider_from_settings(settings),
            trusted_marker=net.get("trusted_marker", "BVSD"),
            trusted_engine=net.get("trusted_engine", "g"),
            fallback_engine=net.get("default_engine", "ddg"),
            bang_suggester=settings.get("suggest", {}).get("bang_suggester", "ddg"),
        )

    def default_engine(self) -> SearchEngine:
        """Pick the default engine from the current SSID."""
        ssid = self.network.current_ssid()
        if ssid is None:
            logger.debug(f"No SSID, using {self._fallback.name or 'fallback engine'}")
            return self._fallback
        if self.trusted_marker and self.trusted_marker in ssid:
            logger.debug(f"Trusted network '{ssid}', using {self._trusted.name or 'trusted engine'}")
            return self._trusted
        logger.debug(f"Untrusted network '{ssid}', using {self._fallback.name or 'fallback engine'}")
        return self._fallback

    def bang_suggester(self) -> Optional[SearchEngine]:
        """
        Engine to ask for suggestions when the query carried a bang.

        Banged engines don't handle bangs in suggestions well, so a
        suggester that tolerates them is used instead.
        """
        return self._bang_suggester

    def resolve_engine(self, query: str) -> tuple[SearchEngine, str]:
        """
        Select an engine for a query.

        Args:
            query: Raw search string

        Returns:
            Tuple of (engine, remainder). The remainder is the text after
            "!bang " on a successful match, otherwise the original query.
        """
        if query.startswith("!"):
            end = 1
            while end < len(query) and not _ends_bang(query[end]):
                end += 1
            bang = query[1:end]

            engine = self.registry.lookup(bang)
            if engine is not None and len(bang) + 2 <= len(query):
                logger.debug(f"Bang '!{bang}' matched")
                return engine, query[len(bang) + 2:]
            logger.debug(f"Bang '!{bang}' not usable, falling back to default engine")

        return self.default_engine(), query

    def search_url(self, query: str) -> str:
        """Redirect target for a search request."""
        engine, remainder = self.resolve_engine(query)
        return format_redirect_url(remainder, engine.search_url)

    def suggest_url(self, query: str) -> str:
        """
        Redirect target for a suggestion request.

        The full original query, bang included, is what gets substituted.
        This only works because the bang suggester ignores the leading
        "!bang" token; kept as-is for compatibility with existing clients.
        """
        engine, remainder = self.resolve_engine(query)
        if remainder != query:
            engine = self.bang_suggester() or engine

        return format_redirect_url(query, engine.suggest_url)
