"""
Content Prober

Issues a bounded, cancellable HEAD or small ranged GET against a URL to learn
what kind of media sits behind it. Probes never raise: transport errors,
timeouts and non-success statuses come back as a failed ProbeResult.
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator, Optional

import httpx

from collectibles.config import settings
from collectibles.core.types import MediaType
from collectibles.exceptions import ProbeError
from collectibles.utils.logging_config import probe_logger

logger = logging.getLogger(__name__)

ANIMATED_WEBP_MARKER = b"ANMF"


class ProbeMode(str, Enum):
    """How a probe asks for the resource."""
    HEAD = "HEAD"
    RANGE = "RANGE"  # GET of the first bytes, for servers with unreliable HEAD support


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of a single probe.

    Attributes:
        url: The probed URL
        ok: False when the probe raised, timed out or got a status >= 300
        status: HTTP status code, when a response arrived
        content_type: Raw Content-Type header value
        is_animated_webp: Whether a webp body carried an animation chunk
        error: Failure reason for diagnostics
    """
    url: str
    ok: bool
    status: Optional[int] = None
    content_type: Optional[str] = None
    is_animated_webp: bool = False
    error: Optional[str] = None

    def _content_type_has(self, token: str) -> bool:
        return bool(self.content_type) and token in self.content_type.lower()

    @property
    def is_gif(self) -> bool:
        return self._content_type_has("gif")

    @property
    def is_video(self) -> bool:
        return self._content_type_has("video")

    @property
    def is_audio(self) -> bool:
        return self._content_type_has("audio")

    @property
    def is_webp(self) -> bool:
        return self._content_type_has("webp")

    @property
    def is_image(self) -> bool:
        return self._content_type_has("image")

    def media_type(self) -> Optional[MediaType]:
        """
        MIME category of a successful probe.

        Returns:
            ANIMATED_WEBP, GIF, VIDEO or IMAGE, or None for a failed probe
        """
        if not self.ok:
            return None
        if self.is_animated_webp:
            return MediaType.ANIMATED_WEBP
        if self.is_gif:
            return MediaType.GIF
        if self.is_video:
            return MediaType.VIDEO
        return MediaType.IMAGE


def is_webp_animated(data: bytes) -> bool:
    """Check a webp payload for the ANMF (animation frame) chunk."""
    return ANIMATED_WEBP_MARKER in data


class ContentProber:
    """Bounded content-type probing shared by all source adapters."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout_ms: Optional[int] = None,
        range_header: Optional[str] = None,
    ):
        """
        Initialize the prober.

        Args:
            client: Optional shared httpx.AsyncClient. If not provided, each
                    probe opens and closes its own client.
            timeout_ms: Per-probe time budget, including any webp body fetch
            range_header: Range header value for RANGE probes
        """
        self.client = client
        self.timeout_ms = timeout_ms if timeout_ms is not None else settings.probe.timeout_ms
        self.range_header = range_header or settings.probe.range_header

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.client is not None:
            yield self.client
            return
        async with httpx.AsyncClient(
            headers={"User-Agent": settings.probe.user_agent},
            follow_redirects=True,
        ) as client:
            yield client

    async def probe(self, url: str, mode: ProbeMode = ProbeMode.HEAD) -> ProbeResult:
        """
        Probe a URL for its content type.

        Args:
            url: HTTP(S) URL to probe
            mode: HEAD, or RANGE for a GET of the first bytes

        Returns:
            ProbeResult; ok is False on any failure
        """
        try:
            mode = ProbeMode(mode)
        except ValueError:
            logger.warning(f"ContentProber: Unknown probe mode {mode!r} for {url}")
            return ProbeResult(url=url, ok=False, error=f"unknown probe mode {mode!r}")

        started = time.monotonic()
        try:
            result = await asyncio.wait_for(self._probe(url, mode), timeout=self.timeout_ms / 1000)
        except asyncio.TimeoutError:
            logger.warning(f"ContentProber: Probe of {url} timed out after {self.timeout_ms}ms")
            result = ProbeResult(url=url, ok=False, error="timeout")
        except ProbeError as e:
            logger.warning(f"ContentProber: {e}")
            result = ProbeResult(url=url, ok=False, status=e.status_code, error=e.reason)
        except Exception as e:
            logger.warning(f"ContentProber: Probe of {url} failed: {e}")
            result = ProbeResult(url=url, ok=False, error=str(e) or type(e).__name__)

        probe_logger.log_probe(
            url=url,
            mode=mode.value,
            duration_ms=(time.monotonic() - started) * 1000,
            status_code=result.status,
            success=result.ok,
            error=result.error,
        )
        return result

    async def _probe(self, url: str, mode: ProbeMode) -> ProbeResult:
        async with self._client() as client:
            if mode is ProbeMode.RANGE:
                response = await client.get(
                    url, headers={"Range": self.range_header}, follow_redirects=True
                )
            else:
                response = await client.head(url, follow_redirects=True)

            content_type = response.headers.get("content-type")
            if response.status_code >= 300:
                raise ProbeError(url, f"HTTP {response.status_code}", status_code=response.status_code)

            is_animated = False
            if content_type and "webp" in content_type.lower():
                # Animation chunks can sit anywhere in the file
                body_response = await client.get(url, follow_redirects=True)
                is_animated = is_webp_animated(body_response.content)

            logger.debug(f"ContentProber: {mode.value} {url} -> {response.status_code} {content_type}")
            return ProbeResult(
                url=url,
                ok=True,
                status=response.status_code,
                content_type=content_type,
                is_animated_webp=is_animated,
            )
