"""
Exceptions raised by featureprov.

Only FetchOrParseError (and its subclasses) ever escapes a resolution, and
only for the root repository. The other errors are raised internally and
turned into resolution issues by the resolver.
"""


class FeatureProvError(Exception):
    """Base class for featureprov errors."""


class FetchOrParseError(FeatureProvError):
    """A repository location could not be retrieved or understood."""

    def __init__(self, location: str, message: str):
        super().__init__(f"{message} ({location})")
        self.location = location
        self.reason = message


class MalformedLocationError(FetchOrParseError):
    """The location is not a URL or path we know how to read."""


class FetchError(FetchOrParseError):
    """Retrieving the location failed."""


class DescriptorParseError(FetchOrParseError):
    """The retrieved content is not well-formed."""


class DescriptorSchemaError(FetchOrParseError):
    """The content is well-formed but does not follow the descriptor schema."""


class NotARepositoryRootError(DescriptorSchemaError):
    """Parsing succeeded but the document root is not a features repository."""


class PropertiesParseError(FeatureProvError):
    """A properties text could not be parsed."""


class FileDeployError(FeatureProvError):
    """Copying a config file into the working directory failed."""

    def __init__(self, source: str, destination: str, message: str):
        super().__init__(f"Can't deploy {source} to {destination}: {message}")
        self.source = source
        self.destination = destination
