"""
Domain layer for featureprov.

Contains pure domain objects with no I/O or side effects:
- RepositoryRecord, Feature and the feature content entries
- Directives: InstallBundle, ApplyConfiguration, DeployFile
- ResolutionIssue and Resolution

These objects are immutable where possible and provide
serialization methods for JSONL output.
"""

from .descriptor import (
    ContentKind,
    Dependency,
    BundleEntry,
    ConfigEntry,
    ConfigFileEntry,
    Details,
    Feature,
    RepositoryReference,
    RepositoryRecord,
)
from .directive import DirectiveKind, InstallBundle, ApplyConfiguration, DeployFile
from .issue import IssueKind, Severity, ResolutionIssue, Resolution

__all__ = [
    'ContentKind',
    'Dependency',
    'BundleEntry',
    'ConfigEntry',
    'ConfigFileEntry',
    'Details',
    'Feature',
    'RepositoryReference',
    'RepositoryRecord',
    'DirectiveKind',
    'InstallBundle',
    'ApplyConfiguration',
    'DeployFile',
    'IssueKind',
    'Severity',
    'ResolutionIssue',
    'Resolution',
]
