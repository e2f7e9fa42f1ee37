"""Remote image loading for card assets.

Avatars, rank badges and weapon art are optional decorations. ``AssetLoader``
fetches and decodes them under a timeout and byte ceiling and returns None on
any failure, so a broken image never aborts a render.
"""

import asyncio
import io
from typing import Optional

import httpx
import structlog
from PIL import Image

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
# Largest source image decoded, checked from the header before pixel data is read
MAX_SOURCE_PIXELS = 4096 * 4096
# Decoded images are shrunk to fit this edge; no card slot is larger
MAX_DECODED_EDGE = 512


class AssetTooLargeError(Exception):
    """The payload exceeded the byte ceiling or the pixel ceiling."""

    pass


class AssetLoader:
    """Fetch and decode remote images; never raises from ``load``."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_bytes: int = DEFAULT_MAX_BYTES,
    ):
        """Initialize the loader.

        Args:
            client: Optional shared HTTP client. When omitted the loader owns
                one and closes it in ``close``.
            timeout: Upper bound in seconds for one whole download
            max_bytes: Largest payload accepted, in bytes
        """
        self.timeout = timeout
        self.max_bytes = max_bytes
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": "bf6-stats/1.0"},
        )

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self):
        """Close the HTTP client if this loader created it."""
        if self._owns_client:
            await self.client.aclose()

    async def load(self, url: Optional[str]) -> Optional[Image.Image]:
        """Fetch ``url`` and decode it into an RGBA image.

        Returns None when the URL is empty, the download times out or is too
        large, the server answers with an error, or the bytes are not an image
        of reasonable dimensions. Accepted images are shrunk to fit
        ``MAX_DECODED_EDGE`` on each side. The returned image belongs to the caller.
        """
        if not isinstance(url, str) or not url.strip():
            return None
        url = url.strip()

        try:
            data = await asyncio.wait_for(self._fetch_bytes(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.debug("Image fetch timed out", url=url, timeout=self.timeout)
            return None
        except AssetTooLargeError as e:
            logger.debug("Image payload too large", url=url, error=str(e))
            return None
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug("Image fetch failed", url=url, error=str(e))
            return None
        except Exception as e:
            logger.debug("Image fetch failed unexpectedly", url=url, error=repr(e))
            return None

        if not data:
            logger.debug("Image payload empty", url=url)
            return None

        try:
            return await asyncio.to_thread(self._decode, data)
        except AssetTooLargeError as e:
            logger.debug("Image dimensions too large", url=url, error=str(e))
            return None
        except Exception as e:
            logger.debug("Image decode failed", url=url, error=str(e))
            return None

    async def _fetch_bytes(self, url: str) -> bytes:
        """Stream the response body, stopping as soon as it exceeds the ceiling."""
        async with self.client.stream("GET", url) as response:
            response.raise_for_status()

            declared = response.headers.get("Content-Length")
            if declared and declared.isdigit() and int(declared) > self.max_bytes:
                raise AssetTooLargeError(f"declared {declared} bytes > {self.max_bytes}")

            buffer = bytearray()
            async for chunk in response.aiter_bytes():
                buffer.extend(chunk)
                if len(buffer) > self.max_bytes:
                    raise AssetTooLargeError(f"received more than {self.max_bytes} bytes")
            return bytes(buffer)

    @staticmethod
    def _decode(data: bytes) -> Image.Image:
        """Decode into RGBA no larger than ``MAX_DECODED_EDGE`` on either side.

        Raises:
            AssetTooLargeError: If the header declares more than ``MAX_SOURCE_PIXELS``
        """
        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
            if width * height > MAX_SOURCE_PIXELS:
                raise AssetTooLargeError(f"{width}x{height} exceeds {MAX_SOURCE_PIXELS} pixels")

            # JPEG can downsample while decoding; other formats ignore this
            image.draft("RGB", (MAX_DECODED_EDGE, MAX_DECODED_EDGE))
            image.load()
            decoded = image.convert("RGBA")

        decoded.thumbnail((MAX_DECODED_EDGE, MAX_DECODED_EDGE), resample=Image.Resampling.LANCZOS)
        return decoded
