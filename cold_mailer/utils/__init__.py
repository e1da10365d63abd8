"""
Utility modules for the cold mailer application.
"""

from .config import Config

__all__ = [
    "Config",
]
