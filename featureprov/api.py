"""
High-level Python API for featureprov.

Provides a fluent interface for resolving feature repositories into
provisioning directives.

Example:
    import featureprov

    # One call
    resolution = featureprov.resolve(
        "https://example.org/features.xml",
        {"core", "web"},
        default_start_level=80,
        working_directory="/tmp/runtime",
    )

    # Or fluent
    resolution = (
        featureprov.FeatureProvision("https://example.org/features.xml")
        .add("core", "web")
        .default_start_level(80)
        .working_dir("/tmp/runtime")
        .resolve()
    )

    for directive in resolution.directives:
        print(directive.to_jsonl())

    for warning in resolution.warnings:
        print(warning)
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Union
import logging

from .config import load_config
from .domain import Resolution
from .domain.directive import Directive
from .infra import ResourceFetcher, DescriptorParser
from .services import RepositoryLoader, FeatureResolver, ResolveOptions, DEFAULT_START_LEVEL

logger = logging.getLogger(__name__)


def build_resolver(
    config: Optional[Dict[str, Any]] = None,
    default_start_level: Optional[int] = None,
    working_directory: Optional[Union[str, Path]] = None,
    parser: Optional[DescriptorParser] = None
) -> FeatureResolver:
    """
    Build a FeatureResolver from configuration.

    Explicit arguments override the ``resolver`` section of the config.

    Args:
        config: Full config dict (empty defaults if None)
        default_start_level: Start level for bundles without one
        working_directory: Directory config files are deployed into
        parser: Descriptor parser handle (creates a new one if None)
    """
    config = config or {}
    resolver_config = config.get('resolver', {})
    fetch_config = config.get('fetch', {})

    if default_start_level is None:
        default_start_level = int(resolver_config.get('default_start_level', DEFAULT_START_LEVEL))
    if working_directory is None:
        working_directory = resolver_config.get('working_directory') or None

    fetcher = ResourceFetcher(
        timeout=fetch_config.get('timeout_seconds', 30),
        user_agent=fetch_config.get('user_agent', 'featureprov'),
    )
    loader = RepositoryLoader(fetcher=fetcher, parser=parser or DescriptorParser())
    options = ResolveOptions(
        default_start_level=default_start_level,
        working_directory=Path(working_directory).expanduser() if working_directory else None,
    )
    return FeatureResolver(loader=loader, options=options)


def resolve(
    root_location: str,
    requested: Iterable[str],
    default_start_level: Optional[int] = None,
    working_directory: Optional[Union[str, Path]] = None,
    config: Optional[Dict[str, Any]] = None
) -> Resolution:
    """
    Resolve the requested features of a repository.

    Args:
        root_location: URL or path of the root repository
        requested: Names of the features to provision
        default_start_level: Start level for bundles without one (default 60)
        working_directory: Directory config files are deployed into; config
            files are skipped with a warning when not set
        config: Full config dict (no config file is read if None)

    Returns:
        Resolution with directives and issues

    Raises:
        FetchOrParseError: If the root repository can't be loaded
    """
    resolver = build_resolver(
        config=config,
        default_start_level=default_start_level,
        working_directory=working_directory,
    )
    return resolver.resolve(root_location, requested)


class FeatureProvision:
    """
    Fluent builder for one feature repository provision.

    Example:
        provision = FeatureProvision("file:/tmp/features.xml").add("core")
        for directive in provision.directives():
            print(directive)
    """

    def __init__(self, repository_url: str, config: Optional[Dict[str, Any]] = None):
        """
        Initialize FeatureProvision.

        Args:
            repository_url: Location of the feature repository
            config: Full config dict (loads from file if None)
        """
        if repository_url is None:
            raise ValueError("repository_url can't be None")
        self.repository_url = repository_url
        self._config = config if config is not None else load_config()
        self._features: Set[str] = set()
        self._start_level: Optional[int] = None
        self._working_directory: Optional[Path] = None

    @property
    def features(self) -> frozenset:
        return frozenset(self._features)

    def add(self, *features: str) -> 'FeatureProvision':
        """Add features to provision."""
        self._features.update(features)
        return self

    def default_start_level(self, level: int) -> 'FeatureProvision':
        """Start level for bundles that don't declare one."""
        self._start_level = level
        return self

    def working_dir(self, directory: Union[str, Path]) -> 'FeatureProvision':
        """Directory config files are deployed into."""
        self._working_directory = Path(directory)
        return self

    def resolve(self) -> Resolution:
        """
        Run the resolution.

        Raises:
            FetchOrParseError: If the repository can't be loaded
        """
        resolver = build_resolver(
            config=self._config,
            default_start_level=self._start_level,
            working_directory=self._working_directory,
        )
        return resolver.resolve(self.repository_url, self.features)

    def directives(self) -> List[Directive]:
        """Shortcut for ``resolve().directives``."""
        return self.resolve().directives

    def __repr__(self) -> str:
        return f"FeatureProvision(repository_url={self.repository_url!r}, features={sorted(self._features)!r})"
