"""
Search Engines - The catalog of bang-addressable search engines.

Each engine is a pair of URL templates with a single {searchTerms}
placeholder:
  !g query       → Google
  !ddg query     → DuckDuckGo
  !w query       → Wikipedia
  !nws query     → National Weather Service (zip/city lookup)
  !cpp query     → cppreference
  !rust query    → Rust std docs
  !crates query  → crates.io

Sites without a usable suggestion API share DEFAULT_SUGGEST.
Extra engines can be added via the [engines] section of settings.toml.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from loguru import logger

from bangserve.errors import InvalidEngineError, UnknownEngineError

PLACEHOLDER = "{searchTerms}"

DEFAULT_SUGGEST = "https://duckduckgo.com/ac/?q={searchTerms}&type=list"


@dataclass(frozen=True)
class SearchEngine:
    """A search engine we can redirect to."""
    search_url: str
    suggest_url: str = DEFAULT_SUGGEST
    name: str = field(default="", compare=False)


GOOGLE = SearchEngine(
    search_url="https://www.google.com/search?hl=en&q={searchTerms}",
    suggest_url="https://www.google.com/complete/search?hl=en&client=firefox&q={searchTerms}",
    name="Google",
)

DUCKDUCKGO = SearchEngine(
    search_url="https://duckduckgo.com/?q={searchTerms}",
    suggest_url="https://duckduckgo.com/ac/?q={searchTerms}&type=list",
    name="DuckDuckGo",
)

WIKIPEDIA = SearchEngine(
    search_url="https://en.wikipedia.org/w/index.php?title=Special:Search&search={searchTerms}",
    suggest_url="https://en.wikipedia.org/w/api.php?action=opensearch&search={searchTerms}&namespace=0",
    name="Wikipedia",
)

NWS = SearchEngine(
    search_url="https://forecast.weather.gov/zipcity.php?inputstring={searchTerms}",
    name="National Weather Service",
)

CPP = SearchEngine(
    search_url="https://en.cppreference.com/mwiki/index.php?search={searchTerms}",
    name="cppreference",
)

RUST = SearchEngine(
    search_url="https://doc.rust-lang.org/std/?search={searchTerms}",
    name="Rust std",
)

CRATES = SearchEngine(
    search_url="https://crates.io/search?q={searchTerms}",
    name="crates.io",
)

DEFAULT_ENGINES = {
    "g": GOOGLE,
    "ddg": DUCKDUCKGO,
    "w": WIKIPEDIA,
    "nws": NWS,
    "cpp": CPP,
    "rust": RUST,
    "crates": CRATES,
}


def _validate(bang: str, engine: SearchEngine) -> None:
    if not bang:
        raise InvalidEngineError("Bang keyword must not be empty")
    if any(c.isspace() for c in bang):
        raise InvalidEngineError(f"Bang keyword '{bang}' contains whitespace")
    if not engine.search_url:
        raise InvalidEngineError(f"Engine '{bang}' has an empty search_url")
    if PLACEHOLDER not in engine.search_url:
        raise InvalidEngineError(f"Engine '{bang}' search_url is missing {PLACEHOLDER}")


class EngineRegistry:
    """
    Read-only mapping from bang keyword to SearchEngine.

    Built once at startup and shared by every request. Keys are
    case-sensitive. Nothing mutates the registry after construction,
    so concurrent lookups need no locking.
    """

    def __init__(self, engines: Optional[Mapping[str, SearchEngine]] = None):
        engines = DEFAULT_ENGINES if engines is None else engines
        for bang, engine in engines.items():
            _validate(bang, engine)
        self._engines = MappingProxyType(dict(engines))

    @classmethod
    def from_settings(cls, settings: dict) -> "EngineRegistry":
        """
        Build a registry from the merged settings dictionary.

        Args:
            settings: Settings as returned by load_settings()

        Returns:
            Registry with the built-in catalog (unless [registry] builtin
            is false) overlaid with every valid [engines.<bang>] entry.
            Malformed entries are skipped with a warning.
        """
        builtin = settings.get("registry", {}).get("builtin", True)
        engines = dict(DEFAULT_ENGINES) if builtin else {}

        for bang, entry in settings.get("engines", {}).items():
            if not isinstance(entry, dict) or not entry.get("search_url"):
                logger.warning(f"Skipping malformed engine '{bang}': missing 'search_url' field")
                continue

            engine = SearchEngine(
                search_url=entry["search_url"],
                suggest_url=entry.get("suggest_url") or DEFAULT_SUGGEST,
                name=entry.get("name", bang),
            )
            try:
                _validate(bang, engine)
            except InvalidEngineError as e:
                logger.warning(f"Skipping malformed engine '{bang}': {e}")
                continue
            engines[bang] = engine

        logger.debug(f"Engine registry loaded with {len(engines)} engines")
        return cls(engines)

    def lookup(self, bang: str) -> Optional[SearchEngine]:
        """Exact-match lookup; None if the bang is unknown."""
        return self._engines.get(bang)

    def get(self, bang: str) -> SearchEngine:
        """Like lookup(), but an unknown bang is a configuration error."""
        engine = self._engines.get(bang)
        if engine is None:
            raise UnknownEngineError(f"No engine registered for bang '{bang}'")
        return engine

    def bangs(self) -> list[str]:
        return sorted(self._engines)

    @property
    def engines(self) -> Mapping[str, SearchEngine]:
        return self._engines

    def __contains__(self, bang: object) -> bool:
        return bang in self._engines

    def __iter__(self) -> Iterator[str]:
        return iter(self._engines)

    def __len__(self) -> int:
        return len(self._engines)
