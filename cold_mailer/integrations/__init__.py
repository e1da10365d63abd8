"""
External collaborators: page loading and Claude-backed extraction and drafting.
"""

from .base import ContentFetcher, JobExtractor, EmailDrafter
from .web_loader import WebPageLoader
from .llm import ClaudeClient, ClaudeJobExtractor, ClaudeEmailDrafter

__all__ = [
    "ContentFetcher",
    "JobExtractor",
    "EmailDrafter",
    "WebPageLoader",
    "ClaudeClient",
    "ClaudeJobExtractor",
    "ClaudeEmailDrafter",
]
