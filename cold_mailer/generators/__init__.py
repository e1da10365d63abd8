"""
Email generation pipeline.
"""

from .orchestrator import EmailRequestOrchestrator

__all__ = [
    "EmailRequestOrchestrator",
]
