"""HTTP surface of the proxy"""

from .app import create_app

__all__ = ["create_app"]
