"""
Repository loader service for featureprov.

Obtains a repository descriptor from its location and parses it into a
RepositoryRecord. The parser is an explicit handle passed in by the caller.
"""

import logging
from typing import Optional

from ..domain import RepositoryRecord
from ..errors import FetchOrParseError
from ..infra import ResourceFetcher, DescriptorParser

logger = logging.getLogger(__name__)


class RepositoryLoader:
    """
    Loads feature repositories.

    Example:
        loader = RepositoryLoader()
        record = loader.load("https://example.org/features.xml")
        print(record.name, len(record.features))
    """

    def __init__(
        self,
        fetcher: Optional[ResourceFetcher] = None,
        parser: Optional[DescriptorParser] = None
    ):
        """
        Initialize RepositoryLoader.

        Args:
            fetcher: Resource fetcher (creates default if None)
            parser: Descriptor parser handle (creates default if None).
                Must be safe for the way the loader is shared: the default
                DescriptorParser is stateless.
        """
        self.fetcher = fetcher or ResourceFetcher()
        self.parser = parser or DescriptorParser()

    def load(self, location: str) -> RepositoryRecord:
        """
        Fetch and parse the repository at ``location``.

        Raises:
            FetchOrParseError: If the location can't be retrieved or the
                content is not a features repository
        """
        data = self.fetcher.fetch(location)
        record = self.parser.parse(data, location)
        if not isinstance(record, RepositoryRecord):
            raise FetchOrParseError(location, "The parsed object is not a feature repository")
        logger.debug(f"Loaded repository {record.name!r} from {location} ({len(record.entries)} entries)")
        return record
