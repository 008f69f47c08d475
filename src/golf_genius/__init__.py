"""
Golf Genius v2 API client.

Resources (seasons, categories, directories, events, master roster players and
event sub-resources) are returned as immutable records; pagination, lookup by
id and envelope handling are done by the client.
"""

from .client import GolfGeniusClient
from .config import Settings, configure, get_settings, reset_settings
from .core.exceptions import (
    GolfGeniusError,
    ErrorContext,
    NotFoundError,
    ConfigurationError,
    APIException,
    APIConnectionError,
    APITimeoutError,
    APIRateLimitError,
    APIAuthenticationError,
    APINotFoundError,
    APIValidationError,
    APIServerError,
    MalformedResponseError,
    ResourceNotFoundError,
    InvalidArgumentError,
    ArityError,
)
from .domain.models import (
    Record,
    Season,
    Category,
    Directory,
    Event,
    Round,
    Course,
    Division,
    Tournament,
    TournamentResults,
    Player,
    RosterMember,
    Handicap,
    Tee,
    TeeSheetGroup,
    TeeSheetPlayer,
)
from .adapters.external import GolfGeniusTransport

__version__ = "0.1.0"

__all__ = [
    "GolfGeniusClient",
    "GolfGeniusTransport",
    "Settings",
    "configure",
    "get_settings",
    "reset_settings",

    # Errors
    "GolfGeniusError",
    "ErrorContext",
    "NotFoundError",
    "ConfigurationError",
    "APIException",
    "APIConnectionError",
    "APITimeoutError",
    "APIRateLimitError",
    "APIAuthenticationError",
    "APINotFoundError",
    "APIValidationError",
    "APIServerError",
    "MalformedResponseError",
    "ResourceNotFoundError",
    "InvalidArgumentError",
    "ArityError",

    # Records
    "Record",
    "Season",
    "Category",
    "Directory",
    "Event",
    "Round",
    "Course",
    "Division",
    "Tournament",
    "TournamentResults",
    "Player",
    "RosterMember",
    "Handicap",
    "Tee",
    "TeeSheetGroup",
    "TeeSheetPlayer",
]
