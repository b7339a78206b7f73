"""
TeamViewer web API client.

Fetches the raw devices listing with Bearer token authentication over
HTTPS. Decoding the body is left to the decoder.
"""

import aiohttp
import asyncio
import ssl
import logging
from typing import Optional

from . import __version__
from ._types import CheckTeamViewerError
from .config import ProbeConfig

logger = logging.getLogger(__name__)


class FetchError(CheckTeamViewerError):
    """Devices listing could not be retrieved."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message, {"status": status} if status is not None else None)


class AuthenticationError(FetchError):
    """API token rejected (HTTP 401/403)."""
    pass


def create_secure_ssl_context() -> ssl.SSLContext:
    """
    Create a hardened SSL context for TeamViewer API connections.

    - TLS 1.2 minimum
    - Certificate verification and hostname checking enabled
    """
    ctx = ssl.create_default_context()
    ctx.minimum_version = ssl.TLSVersion.TLSv1_2
    ctx.check_hostname = True
    ctx.verify_mode = ssl.CERT_REQUIRED
    return ctx


class TeamViewerClient:
    """
    HTTP client for the TeamViewer devices endpoint.

    Use as an async context manager, or call close() when done.
    """

    def __init__(
        self,
        config: ProbeConfig,
        ssl_context: Optional[ssl.SSLContext] = None
    ):
        """
        Initialize TeamViewer client.

        Args:
            config: Probe configuration (token, URL, timeout, retries)
            ssl_context: Custom SSL context (default: hardened TLS 1.2+)
        """
        self.config = config
        self.max_retries = config.max_retries
        self.timeout = aiohttp.ClientTimeout(total=config.timeout)
        self.ssl_context = ssl_context or create_secure_ssl_context()
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "TeamViewerClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=self.ssl_context)
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=self.timeout,
                headers={
                    'User-Agent': f'check-teamviewer/{__version__}',
                    'Authorization': f'Bearer {self.config.api_key}',
                    'Content-Type': 'application/json',
                }
            )
        return self._session

    async def close(self) -> None:
        """Close the client session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch_devices(self) -> bytes:
        """
        GET the devices listing.

        Transport errors are retried up to max_retries attempts with
        exponential backoff. HTTP error responses are not retried.

        Returns:
            Raw response body of a 2xx response

        Raises:
            AuthenticationError: API answered 401 or 403
            FetchError: Connection failure, timeout or other non-2xx status
        """
        session = await self._get_session()
        last_error: Optional[BaseException] = None

        for attempt in range(self.max_retries):
            try:
                async with session.get(self.config.api_url) as response:
                    body = await response.read()
                    if response.status in (401, 403):
                        raise AuthenticationError(_error_text(response.status, body), status=response.status)
                    if not 200 <= response.status < 300:
                        raise FetchError(_error_text(response.status, body), status=response.status)
                    logger.debug(f"Fetched {len(body)} bytes from {self.config.api_url}")
                    return body

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = e
                logger.warning(f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e!r}")
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(2 ** attempt)

        raise FetchError(str(last_error) or type(last_error).__name__)


def _error_text(status: int, body: bytes) -> str:
    text = body.decode('utf-8', errors='replace').strip()
    return text[:200] if text else f"HTTP {status}"
