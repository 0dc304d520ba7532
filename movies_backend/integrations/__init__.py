"""
External system integrations (TMDb).

Upstream metadata clients live under this namespace so they stay decoupled
from the app entrypoints in `api/`.
"""
