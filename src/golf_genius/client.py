"""
Client facade for the Golf Genius v2 API.

    async with GolfGeniusClient(api_key="...") as client:
        events = await client.events.list(season=season_id)
        rounds = await events[0].rounds()
"""

from typing import Optional

from .adapters.external.golf_genius_client import GolfGeniusTransport
from .config.settings import Settings, get_settings
from .core.exceptions import REDACTED, ConfigurationError
from .core.utils import LoggerFactory
from .domain.services import (
    CategoryService, DirectoryService, EventService, Paginator, PlayerService, SeasonService,
)

logger = LoggerFactory.get_logger(__name__)


class GolfGeniusClient:
    """
    Entry point bundling the resource services around one transport.

    The API key is resolved once: the explicit argument, then the configured
    ``GOLF_GENIUS_API_KEY``. Every call may still override it with ``api_key=``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        transport=None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or get_settings()
        self.api_key = api_key or self.settings.api_key
        if not self.api_key:
            raise ConfigurationError(
                "api_key",
                "No API key provided. Pass api_key=..., set GOLF_GENIUS_API_KEY or call configure(api_key=...)."
            )

        self._owns_transport = transport is None
        self.transport = transport or GolfGeniusTransport(settings=self.settings)
        self.paginator = Paginator(self.transport, client=self)

        self.seasons = SeasonService(self)
        self.categories = CategoryService(self)
        self.directories = DirectoryService(self)
        self.events = EventService(self)
        self.players = PlayerService(self)

        logger.debug(f"Initialized Golf Genius client for {self.settings.base_url}")

    async def __aenter__(self):
        if hasattr(self.transport, "__aenter__"):
            await self.transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        if self._owns_transport and hasattr(self.transport, "close"):
            await self.transport.close()

    def __repr__(self) -> str:
        key = REDACTED if self.api_key else None
        return f"<GolfGeniusClient api_key={key} base_url={self.settings.base_url!r}>"
