"""
HTTP transport for the Golf Genius v2 API.
Owns the aiohttp session, builds key-scoped URLs, maps HTTP statuses onto the
client exception hierarchy and retries connection failures with backoff.
"""
import asyncio
import json
from typing import Any, Dict, Mapping, Optional

import aiohttp

from ...config.settings import Settings, get_settings
from ...core.error_handler import ErrorHandler, error_handler as default_error_handler
from ...core.exceptions import (
    REDACTED,
    APIAuthenticationError, APIConnectionError, APIException, APINotFoundError,
    APIRateLimitError, APIServerError, APITimeoutError, APIValidationError,
    ConfigurationError, ErrorContext,
)
from ...core.utils import LoggerFactory, RequestParams

logger = LoggerFactory.get_logger(__name__)


class GolfGeniusTransport:
    """
    Executes GET requests against ``{base_url}/api_v2/{api_key}{path}``.
    The API key is part of the path, so one session serves any number of keys.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[aiohttp.ClientSession] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        self.settings = settings or get_settings()
        self.session = session
        self._owns_session = session is None
        self.error_handler = error_handler or default_error_handler
        self.user_agent = self.settings.user_agent

    async def __aenter__(self):
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            headers = {
                "Accept": "application/json",
                "User-Agent": self.user_agent
            }
            timeout = aiohttp.ClientTimeout(
                total=None,
                sock_connect=self.settings.open_timeout,
                sock_read=self.settings.read_timeout
            )
            self.session = aiohttp.ClientSession(headers=headers, timeout=timeout)
            self._owns_session = True
        return self.session

    async def close(self):
        """Close the session if this transport created it."""
        if self.session is not None and self._owns_session and not self.session.closed:
            await self.session.close()
        self.session = None

    def build_url(self, path: str, api_key: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.settings.api_base}/{api_key}{path}"

    def _redact(self, url: str, api_key: str) -> str:
        return url.replace(f"/{api_key}/", f"/{REDACTED}/")

    async def execute(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        api_key: Optional[str] = None
    ) -> Any:
        """
        Perform one request and return the decoded JSON body.

        Raises the mapped ``APIException`` subclass for non-2xx statuses and
        ``APIConnectionError`` / ``APITimeoutError`` once retries are exhausted.
        """
        api_key = api_key or self.settings.api_key
        if not api_key:
            raise ConfigurationError(
                "api_key",
                "No API key provided. Set GOLF_GENIUS_API_KEY, call configure(api_key=...) "
                "or pass api_key."
            )

        url = self.build_url(path, api_key)
        query = RequestParams.encode(params)
        safe_url = self._redact(url, api_key)
        context = ErrorContext(
            operation="api_request",
            endpoint=path,
            parameters=dict(query)
        )

        logger.info(f"Golf Genius API Request: {method.upper()} {safe_url}")
        if query:
            logger.debug(f"Request params: {query}")

        send = self.error_handler.with_retry(
            max_retries=self.settings.max_retries,
            delay=self.settings.retry_interval,
            backoff_factor=self.settings.backoff_factor,
            retryable_exceptions=(APIConnectionError,)
        )(self._send)
        return await send(method, url, query, safe_url, context)

    async def _send(self, method: str, url: str, query: Dict[str, str], safe_url: str,
                    context: ErrorContext) -> Any:
        session = self._ensure_session()
        try:
            async with session.request(method.upper(), url, params=query or None) as response:
                body = await self._read_body(response)
                logger.info(f"Golf Genius API Response: {response.status}")
                logger.debug(f"Response body: {body!r}")
                return self._handle_response(response.status, response.headers, body, context)
        except asyncio.TimeoutError as e:
            raise APITimeoutError(
                url=safe_url,
                timeout=self.settings.read_timeout,
                context=context,
                original_error=e
            ) from e
        except aiohttp.ClientError as e:
            raise APIConnectionError(url=safe_url, context=context, original_error=e) from e

    @staticmethod
    async def _read_body(response: aiohttp.ClientResponse) -> Any:
        text = await response.text()
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text

    def _handle_response(self, status: int, headers: Mapping[str, str], body: Any,
                         context: ErrorContext) -> Any:
        if 200 <= status < 300:
            return body

        message = self.error_message(status, body)
        if status in (401, 403):
            raise APIAuthenticationError(
                message, status_code=status, response_data=body, headers=headers, context=context
            )
        if status == 404:
            raise APINotFoundError(message, response_data=body, headers=headers, context=context)
        if status == 422:
            raise APIValidationError(message, response_data=body, headers=headers, context=context)
        if status == 429:
            retry_after = self.header_value(headers, "Retry-After")
            raise APIRateLimitError(
                message,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
                response_data=body,
                headers=headers,
                context=context
            )
        if 500 <= status < 600:
            raise APIServerError(
                message, status_code=status, response_data=body, headers=headers, context=context
            )
        raise APIException(
            message, status_code=status, response_data=body, headers=headers, context=context
        )

    @staticmethod
    def header_value(headers: Mapping[str, str], name: str) -> Optional[str]:
        """Case-insensitive header lookup for plain dicts and aiohttp's CIMultiDict alike."""
        lowered = name.lower()
        for key, value in headers.items():
            if key.lower() == lowered:
                return value
        return None

    @staticmethod
    def error_message(status: int, body: Any) -> str:
        """Best human-readable message from an error body."""
        if isinstance(body, dict):
            for key in ("error", "message"):
                if body.get(key):
                    return str(body[key])
        if isinstance(body, str) and body.strip():
            return body.strip()
        return f"API request failed with status {status}"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} base_url={self.settings.base_url!r}>"
