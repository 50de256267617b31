"""
Caption loader for CaptionKit.

Fetches every configured caption source, classifies it by URL extension,
converts SRT content to the VTT timing syntax and parses the result into
cues. Sources are fetched concurrently; the first failure fails the batch.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Sequence, Union

import requests

from .converter import convert_srt_to_vtt
from .errors import CaptionFetchError
from .models import CaptionSource, CaptionTrack, Cue
from .parser import parse_cues
from .utils import SRT_POSTFIX, VTT_POSTFIX, get_file_type

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Union[str, bytes]]


def http_fetch(url: str, timeout: int = 30, verify_ssl: bool = True) -> str:
    """
    Download a caption file over HTTP.

    Args:
        url: URL of the caption file
        timeout: Request timeout in seconds (default: 30)
        verify_ssl: Whether to verify SSL certificates (default: True)

    Returns:
        Response body as text

    Raises:
        requests.RequestException: If the request fails or returns an error status
    """
    logger.info(f"Downloading captions from: {url[:100]}")
    response = requests.get(url, timeout=timeout, verify=verify_ssl)
    response.raise_for_status()
    return response.text


def _fetch_error_payload(url: str, error: Exception) -> dict:
    status = None
    response = getattr(error, "response", None)
    if response is not None:
        status = response.status_code
    return {"url": url, "status": status, "message": str(error)}


class CaptionLoader:
    """
    Loads caption sources into caption tracks.

    The fetcher is any callable taking a URL and returning the file content
    as text or bytes; it runs in a worker thread so that sources are fetched
    concurrently.
    """

    def __init__(self, fetch: Optional[Fetcher] = None, timeout: int = 30, verify_ssl: bool = True):
        """
        Initialize caption loader.

        Args:
            fetch: Transport callable (default: HTTP GET with requests)
            timeout: Request timeout in seconds for the default transport
            verify_ssl: Whether the default transport verifies SSL certificates
        """
        if fetch is None:
            def fetch(url: str) -> str:
                return http_fetch(url, timeout=timeout, verify_ssl=verify_ssl)
        self.fetch = fetch

    async def load(self, sources: Sequence[CaptionSource]) -> List[CaptionTrack]:
        """
        Fetch and parse every source.

        Sources with an extension other than vtt or srt are skipped.

        Returns:
            Caption tracks in source order

        Raises:
            CaptionFetchError: If any source fails to download
        """
        results = await asyncio.gather(*(self._create_caption(source) for source in sources))
        tracks = [track for track in results if track is not None]
        logger.info(f"Loaded {len(tracks)} caption tracks from {len(sources)} sources")
        return tracks

    async def _create_caption(self, source: CaptionSource) -> Optional[CaptionTrack]:
        cues = await self._get_cues(source.url)
        if cues is None:
            return None
        return CaptionTrack(
            label=source.label,
            language=source.language,
            is_default=source.is_default,
            cues=cues,
        )

    async def _get_cues(self, url: str) -> Optional[List[Cue]]:
        try:
            content = await asyncio.to_thread(self.fetch, url)
        except Exception as e:
            logger.error(f"Failed to download captions from {url[:100]}: {str(e)}")
            raise CaptionFetchError(
                f"Caption download failed: {str(e)}",
                payload=_fetch_error_payload(url, e),
            ) from e

        if isinstance(content, bytes):
            content = content.decode('utf-8-sig')

        file_type = get_file_type(url)
        if file_type == VTT_POSTFIX:
            return parse_cues(content)
        if file_type == SRT_POSTFIX:
            return parse_cues(convert_srt_to_vtt(content))

        logger.warning(f"Unsupported caption format '{file_type}', skipping {url[:100]}")
        return None
