"""
Domain services for the Golf Genius client.
"""

from .pagination import Paginator, Listing, Page
from .nested import NestedResource, nested_resource, deep_nested_resource
from .base_service import ResourceService
from .organization_service import SeasonService, CategoryService, DirectoryService
from .event_service import EventService
from .player_service import PlayerService

__all__ = [
    # Engine
    "Paginator",
    "Listing",
    "Page",
    "NestedResource",
    "nested_resource",
    "deep_nested_resource",

    # Services
    "ResourceService",
    "SeasonService",
    "CategoryService",
    "DirectoryService",
    "EventService",
    "PlayerService",
]
