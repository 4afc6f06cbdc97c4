"""Acquiring GEDCOM bytes from local files and URLs."""

from pathlib import Path

import httpx

from gedlineage.config import DEFAULT_HTTP_TIMEOUT
from gedlineage.errors import SourceError
from gedlineage.log import get_logger

logger = get_logger(__name__)

EMPTY_INPUT_MESSAGE = "GEDCOM file is empty or could not be read"


def ensure_not_empty(buffer: bytes | None) -> bytes:
    """Reject missing or zero-length input before it reaches the parser."""
    if not buffer:
        raise SourceError(EMPTY_INPUT_MESSAGE)
    return buffer


def read_gedcom_file(path: Path) -> bytes:
    """Read a GEDCOM file from disk."""
    try:
        buffer = Path(path).read_bytes()
    except OSError as exc:
        raise SourceError(f"{EMPTY_INPUT_MESSAGE}: {exc}") from exc

    logger.info("gedcom_file_read", path=str(path), size=len(buffer))
    return ensure_not_empty(buffer)


def download_gedcom(url: str, timeout: float = DEFAULT_HTTP_TIMEOUT, client: httpx.Client | None = None) -> bytes:
    """
    Download a GEDCOM file with an HTTP GET.

    Args:
        url: Location of the file
        timeout: Request timeout in seconds
        client: Optional client to reuse (a new one is opened otherwise)

    Returns:
        The response body

    Raises:
        SourceError: On transport errors, a non-200 status or an empty body
    """
    try:
        if client is not None:
            response = client.get(url, timeout=timeout, follow_redirects=True)
        else:
            with httpx.Client(follow_redirects=True) as owned:
                response = owned.get(url, timeout=timeout)
    except httpx.HTTPError as exc:
        raise SourceError(f"Failed to download GEDCOM file from URL: {exc}") from exc

    if response.status_code != 200:
        logger.warning("gedcom_download_failed", url=url, status=response.status_code)
        raise SourceError(f"Failed to download GEDCOM file from URL: {response.status_code}")

    logger.info("gedcom_downloaded", url=url, size=len(response.content))
    return ensure_not_empty(response.content)
