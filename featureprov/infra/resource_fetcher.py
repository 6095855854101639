"""
Resource fetching infrastructure for featureprov.

Reads repository descriptors and config files from:
- http/https URLs (via requests)
- file: URLs
- plain filesystem paths

Each call is independent: no connection state is shared between calls,
so a single fetcher can be used from several threads.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlsplit, unquote
from urllib.request import url2pathname

import requests

from ..errors import MalformedLocationError, FetchError, FileDeployError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = 'featureprov'
CHUNK_SIZE = 64 * 1024

HTTP_SCHEMES = ('http', 'https')


def classify_location(location: Optional[str]) -> Tuple[str, str]:
    """
    Work out how a location should be read.

    Args:
        location: URL or filesystem path

    Returns:
        Tuple of (kind, target) where kind is 'http' or 'file' and target
        is the URL or the local path

    Raises:
        MalformedLocationError: If the location is empty or uses a scheme
            we can't read
    """
    if location is None or not location.strip():
        raise MalformedLocationError(str(location), "Empty repository location")

    location = location.strip()
    try:
        parts = urlsplit(location)
    except ValueError as e:
        raise MalformedLocationError(location, f"Malformed URL: {e}") from e
    scheme = parts.scheme.lower()

    if scheme in HTTP_SCHEMES:
        if not parts.netloc:
            raise MalformedLocationError(location, "URL has no host")
        return 'http', location

    if scheme == 'file':
        return 'file', url2pathname(unquote(parts.path))

    # No scheme, or a Windows drive letter such as C:\features.xml
    if not scheme or len(scheme) == 1:
        return 'file', location

    raise MalformedLocationError(location, f"Unsupported location scheme '{scheme}'")


class ResourceFetcher:
    """
    Reads bytes from URLs and paths.

    Example:
        fetcher = ResourceFetcher(timeout=10)
        data = fetcher.fetch("https://example.org/features.xml")
        fetcher.copy_to("file:///tmp/app.cfg", Path("/tmp/work/etc/app.cfg"))
    """

    def __init__(self, timeout: int = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT):
        """
        Initialize ResourceFetcher.

        Args:
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header sent with HTTP requests
        """
        self.timeout = timeout
        self.user_agent = user_agent

    @property
    def headers(self):
        return {'User-Agent': self.user_agent}

    def fetch(self, location: str) -> bytes:
        """
        Read the whole resource at ``location``.

        Raises:
            MalformedLocationError: If the location can't be interpreted
            FetchError: If reading fails
        """
        kind, target = classify_location(location)
        logger.debug(f"Fetching {target} ({kind})")

        if kind == 'http':
            try:
                response = requests.get(target, headers=self.headers, timeout=self.timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                raise FetchError(location, f"HTTP request failed: {e}") from e
            return response.content

        try:
            return Path(target).read_bytes()
        except OSError as e:
            raise FetchError(location, f"Can't read file: {e.strerror or e}") from e
        except ValueError as e:
            # Paths such as file:/a%00b.xml decode to an embedded NUL
            raise FetchError(location, f"Invalid file path: {e}") from e

    def copy_to(self, source: str, destination: Path) -> int:
        """
        Stream ``source`` into ``destination``, truncating it.

        Parent directories of ``destination`` are created as needed.

        Returns:
            Number of bytes written

        Raises:
            FileDeployError: If the source can't be read or the
                destination can't be written
        """
        destination = Path(destination)
        try:
            kind, target = classify_location(source)
        except MalformedLocationError as e:
            raise FileDeployError(source, str(destination), e.reason) from e

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if kind == 'http':
                return self._copy_http(target, destination)
            with open(target, 'rb') as src, open(destination, 'wb') as dst:
                shutil.copyfileobj(src, dst, CHUNK_SIZE)
                return dst.tell()
        except requests.RequestException as e:
            raise FileDeployError(source, str(destination), str(e)) from e
        except OSError as e:
            raise FileDeployError(source, str(destination), e.strerror or str(e)) from e
        except ValueError as e:
            raise FileDeployError(source, str(destination), f"Invalid file path: {e}") from e

    def _copy_http(self, url: str, destination: Path) -> int:
        written = 0
        with requests.get(url, headers=self.headers, timeout=self.timeout, stream=True) as response:
            response.raise_for_status()
            with open(destination, 'wb') as dst:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        dst.write(chunk)
                        written += len(chunk)
        return written
