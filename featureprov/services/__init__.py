"""
Service layer for featureprov.

Contains the resolution logic that orchestrates domain objects and
infrastructure:
- RepositoryLoader: fetch and parse one repository
- FeatureResolver: graph walk, selection and directive translation
- apply_directives: hand directives to a host provisioning sink

Services are the primary API for commands to use.
"""

from .repository_loader import RepositoryLoader
from .feature_resolver import FeatureResolver, ResolveOptions, ResolutionContext, DEFAULT_START_LEVEL
from .provisioning import ProvisioningSink, RecordingSink, apply_directives

__all__ = [
    'RepositoryLoader',
    'FeatureResolver',
    'ResolveOptions',
    'ResolutionContext',
    'DEFAULT_START_LEVEL',
    'ProvisioningSink',
    'RecordingSink',
    'apply_directives',
]
