"""
Infrastructure layer for featureprov.

Contains abstractions for external systems:
- ResourceFetcher: reading descriptors and files from URLs and paths
- DescriptorParser: features XML to RepositoryRecord

These provide clean interfaces that can be mocked for testing.
"""

from .resource_fetcher import ResourceFetcher, classify_location
from .descriptor_parser import DescriptorParser

__all__ = [
    'ResourceFetcher',
    'classify_location',
    'DescriptorParser',
]
