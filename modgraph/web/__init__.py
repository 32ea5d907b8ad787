"""HTTP API (optional, needs the ``web`` extra)."""

from modgraph.web.app import create_app

__all__ = ["create_app"]
