"""HTTP API package."""

from rolegate.api.router import api_router


__all__ = ["api_router"]
