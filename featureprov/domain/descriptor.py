"""
Feature repository domain objects for featureprov.

A repository descriptor lists features and references to other
repositories. Features carry an ordered content list made of dependencies,
bundles, configuration blocks, config files and descriptive text.

Content entries form a tagged variant: each class carries a ``kind`` so
translation can dispatch on it instead of testing types one by one.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, Tuple, Union


class ContentKind(Enum):
    """Kinds of entries a feature's content list may hold."""
    DEPENDENCY = "dependency"
    BUNDLE = "bundle"
    CONFIG = "config"
    CONFIG_FILE = "configfile"
    DETAILS = "details"


@dataclass(frozen=True)
class Dependency:
    """Reference to another feature by name. Purely advisory."""
    name: str
    version: Optional[str] = None

    kind = ContentKind.DEPENDENCY

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind.value, 'name': self.name, 'version': self.version}


@dataclass(frozen=True)
class BundleEntry:
    """A bundle to install, with optional start level and start flag."""
    location: str
    start_level: Optional[int] = None
    start: Optional[bool] = None
    dependency: Optional[bool] = None

    kind = ContentKind.BUNDLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'location': self.location,
            'start_level': self.start_level,
            'start': self.start,
            'dependency': self.dependency,
        }


@dataclass(frozen=True)
class ConfigEntry:
    """A configuration block: a PID and its properties text."""
    pid: str
    properties_text: str = ""

    kind = ContentKind.CONFIG

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind.value, 'pid': self.pid, 'properties_text': self.properties_text}


@dataclass(frozen=True)
class ConfigFileEntry:
    """A file to deploy into the working directory under ``final_name``."""
    source: str
    final_name: str
    override: Optional[bool] = None

    kind = ContentKind.CONFIG_FILE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'source': self.source,
            'final_name': self.final_name,
            'override': self.override,
        }


@dataclass(frozen=True)
class Details:
    """Long descriptive text shown by feature info tools."""
    text: str

    kind = ContentKind.DETAILS

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind.value, 'text': self.text}


ContentEntry = Union[Dependency, BundleEntry, ConfigEntry, ConfigFileEntry, Details]


@dataclass(frozen=True)
class Feature:
    """
    A named, versioned unit of provisioning content.

    Features are not deduplicated by name: the same name appearing in two
    repositories yields two independent Feature records.
    """
    name: str
    version: str = "0.0.0"
    resolver: Optional[str] = None
    description: Optional[str] = None
    content: Tuple[ContentEntry, ...] = ()

    @property
    def has_resolver(self) -> bool:
        """True if the feature asks for a (unsupported) named resolver."""
        return bool(self.resolver)

    def count(self, kind: ContentKind) -> int:
        """Number of content entries of the given kind."""
        return sum(1 for entry in self.content if entry.kind is kind)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'name': self.name,
            'version': self.version,
            'resolver': self.resolver,
            'description': self.description,
            'bundles': self.count(ContentKind.BUNDLE),
            'configs': self.count(ContentKind.CONFIG),
            'configfiles': self.count(ContentKind.CONFIG_FILE),
            'dependencies': self.count(ContentKind.DEPENDENCY),
        }
        return {k: v for k, v in result.items() if v is not None}

    def __str__(self) -> str:
        return f"{self.name}/{self.version}"


@dataclass(frozen=True)
class RepositoryReference:
    """Reference to another repository. Identity is the literal string."""
    location: str

    def __str__(self) -> str:
        return self.location


RepositoryEntry = Union[Feature, RepositoryReference]


@dataclass(frozen=True)
class RepositoryRecord:
    """
    A parsed repository descriptor.

    Created by the loader, immutable afterwards. ``entries`` keeps the
    descriptor order, which drives the order of the resolved directives.
    """
    name: Optional[str]
    location: str
    entries: Tuple[RepositoryEntry, ...] = field(default_factory=tuple)

    @property
    def features(self) -> Tuple[Feature, ...]:
        return tuple(e for e in self.entries if isinstance(e, Feature))

    @property
    def references(self) -> Tuple[RepositoryReference, ...]:
        return tuple(e for e in self.entries if isinstance(e, RepositoryReference))

    def __repr__(self) -> str:
        return f"RepositoryRecord(name={self.name!r}, location={self.location!r})"
