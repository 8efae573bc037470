"""HTTP API (FastAPI) for seq-spine.

Usage::

    uvicorn seqspine.api.app:create_app --factory
"""

from seqspine.api.app import create_app

__all__ = ["create_app"]
