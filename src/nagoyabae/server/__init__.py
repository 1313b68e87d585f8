"""HTTP server for nagoyabae."""

from nagoyabae.server.app import create_app

__all__ = ["create_app"]
