"""
Organization-level records: seasons, categories and directories.
"""

from typing import Any, List

from .base import Record


class Season(Record):
    """A season groups events by year or period (``current`` marks the active one)."""


class Category(Record):
    """An event category such as "Member Events"."""

    async def events(self, **query: Any) -> List[Any]:
        """Events in this category."""
        client = self._require_client()
        return await client.events.list(category=self, **self._call_params(query))


class Directory(Record):
    """A directory of events."""

    async def events(self, **query: Any) -> List[Any]:
        """Events listed in this directory."""
        client = self._require_client()
        return await client.events.list(directory=self, **self._call_params(query))
