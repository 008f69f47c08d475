"""
External API adapters.
"""

from .golf_genius_client import GolfGeniusTransport

__all__ = ["GolfGeniusTransport"]
