# bangserve Package
"""
Personal bang search redirect server.

  !g query   → Google
  !w query   → Wikipedia
  query      → DuckDuckGo, or Google on a trusted network
"""

__version__ = "0.1.0-dev"
