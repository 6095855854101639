"""
featureprov - Resolve feature repositories into provisioning directives.

featureprov reads a features repository descriptor (and every repository it
references), selects the requested features and turns their bundles,
configuration blocks and config files into an ordered list of directives a
host can apply to launch a configured runtime.

Quick Start:
    import featureprov

    resolution = featureprov.resolve("https://example.org/features.xml", {"core"})
    for directive in resolution.directives:
        print(directive.to_jsonl())

    # Fluent builder
    provision = (
        featureprov.FeatureProvision("file:/tmp/features.xml")
        .add("core", "web")
        .default_start_level(80)
        .working_dir("/tmp/runtime")
    )
    resolution = provision.resolve()

Domain Objects:
    RepositoryRecord, Feature - Parsed repository descriptors
    InstallBundle, ApplyConfiguration, DeployFile - Directives
    ResolutionIssue, Resolution - Resolution results

Services:
    RepositoryLoader - Fetch and parse one repository
    FeatureResolver - Graph walk, selection and translation
"""

__version__ = "0.3.0"

# High-level API
from .api import FeatureProvision, resolve, build_resolver

# Domain objects
from .domain import (
    Feature,
    RepositoryRecord,
    RepositoryReference,
    InstallBundle,
    ApplyConfiguration,
    DeployFile,
    IssueKind,
    Severity,
    ResolutionIssue,
    Resolution,
)

# Services (for advanced use)
from .services import (
    RepositoryLoader,
    FeatureResolver,
    ResolveOptions,
    ProvisioningSink,
    apply_directives,
)

# Errors
from .errors import FetchOrParseError

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # High-level API
    "FeatureProvision",
    "resolve",
    "build_resolver",
    # Domain objects
    "Feature",
    "RepositoryRecord",
    "RepositoryReference",
    "InstallBundle",
    "ApplyConfiguration",
    "DeployFile",
    "IssueKind",
    "Severity",
    "ResolutionIssue",
    "Resolution",
    # Services
    "RepositoryLoader",
    "FeatureResolver",
    "ResolveOptions",
    "ProvisioningSink",
    "apply_directives",
    # Errors
    "FetchOrParseError",
    # Configuration
    "load_config",
    "save_config",
]
