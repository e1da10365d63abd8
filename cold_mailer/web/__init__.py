"""
HTTP surface: Flask app factory, email routes and the JWT gate.
"""

from .app import create_app
from .auth import AuthGate

__all__ = [
    "create_app",
    "AuthGate",
]
