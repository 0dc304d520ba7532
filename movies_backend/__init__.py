"""
Shared movies backend library code.

This package holds the logic reused by the FastAPI app in `api/`:
- TMDb client and upstream payload schemas
- locale resolution
- list pagination remapping and movie detail aggregation

App entrypoints (FastAPI routers) should live outside this package and
import from `movies_backend` rather than the other way around.
"""
