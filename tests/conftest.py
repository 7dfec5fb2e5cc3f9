"""
Shared test fixtures for the bangserve test suite.

Provides temporary settings and static files that use real file I/O,
and network providers that never run a real SSID probe.
"""

import pytest
import toml

from bangserve.search.engines import EngineRegistry
from bangserve.search.resolver import QueryResolver
from bangserve.services.network import StaticNetworkProvider


@pytest.fixture
def registry():
    """The built-in engine catalog."""
    return EngineRegistry()


@pytest.fixture
def offline_resolver(registry):
    """Resolver whose SSID lookup always fails."""
    return QueryResolver(registry, StaticNetworkProvider(None))


@pytest.fixture
def trusted_resolver(registry):
    """Resolver connected to a trusted (BVSD) network."""
    return QueryResolver(registry, StaticNetworkProvider("BVSD-Staff"))


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with all sections."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "server": {"host": "0.0.0.0", "port": 9090},
        "network": {"trusted_marker": "CorpNet", "ssid": "CorpNet-5G"},
        "suggest": {"bang_suggester": "ddg"},
        "logging": {"level": "DEBUG"},
        "engines": {
            "gh": {
                "name": "GitHub",
                "search_url": "https://github.com/search?q={searchTerms}",
            },
        },
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path


@pytest.fixture
def tmp_static(tmp_path):
    """Create a real static directory with both served files."""
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<html><body>bangs</body></html>")
    (static_dir / "opensearch.xml").write_text(
        '<?xml version="1.0"?><OpenSearchDescription/>'
    )
    return static_dir


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    from loguru import logger

    messages = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(sink_id)
