"""
Feature resolver service for featureprov.

Walks a feature repository and every repository it references, selects the
requested features and translates their content into provisioning
directives.

Failure policy: only the root repository must load. Every other problem
skips the smallest affected unit (a nested repository, a feature, a single
entry), is logged, and is recorded as a ResolutionIssue on the result.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set, FrozenSet

from ..domain import (
    ContentKind,
    Dependency,
    BundleEntry,
    ConfigEntry,
    ConfigFileEntry,
    Details,
    Feature,
    RepositoryRecord,
    InstallBundle,
    ApplyConfiguration,
    DeployFile,
    IssueKind,
    Severity,
    ResolutionIssue,
    Resolution,
)
from ..domain.directive import Directive
from ..errors import FetchOrParseError, PropertiesParseError, FileDeployError
from ..infra import ResourceFetcher
from ..properties import parse_properties
from .repository_loader import RepositoryLoader

logger = logging.getLogger(__name__)

DEFAULT_START_LEVEL = 60

_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class ResolveOptions:
    """Settings shared by every resolution a resolver runs."""
    default_start_level: int = DEFAULT_START_LEVEL
    working_directory: Optional[Path] = None


@dataclass
class ResolutionContext:
    """
    Mutable state of one top-level resolution.

    Created per call and never shared between calls: the visited
    repository references and the issues found so far.
    """
    visited: Set[str] = field(default_factory=set)
    issues: List[ResolutionIssue] = field(default_factory=list)
    repository_name: Optional[str] = None

    def report(self, kind: IssueKind, severity: Severity, message: str, **context: str) -> ResolutionIssue:
        """Log an issue at the level matching its severity and record it."""
        logger.log(_LOG_LEVELS[severity], message)
        issue = ResolutionIssue(
            kind=kind,
            severity=severity,
            message=message,
            context=tuple((k, str(v)) for k, v in context.items()),
        )
        self.issues.append(issue)
        return issue


class FeatureResolver:
    """
    Resolves feature repositories into provisioning directives.

    Example:
        resolver = FeatureResolver(options=ResolveOptions(default_start_level=80))
        resolution = resolver.resolve("file:/tmp/features.xml", {"core"})
        for directive in resolution.directives:
            print(directive.to_jsonl())
    """

    # Translation table over every content kind
    _TRANSLATORS = {
        ContentKind.DEPENDENCY: '_translate_dependency',
        ContentKind.BUNDLE: '_translate_bundle',
        ContentKind.CONFIG: '_translate_config',
        ContentKind.CONFIG_FILE: '_translate_config_file',
        ContentKind.DETAILS: '_translate_details',
    }

    def __init__(
        self,
        loader: Optional[RepositoryLoader] = None,
        options: Optional[ResolveOptions] = None,
        fetcher: Optional[ResourceFetcher] = None
    ):
        """
        Initialize FeatureResolver.

        Args:
            loader: Repository loader (creates default if None)
            options: Resolution options (defaults if None)
            fetcher: Fetcher used to copy config files (defaults to the
                loader's fetcher)
        """
        self.loader = loader or RepositoryLoader()
        self.options = options or ResolveOptions()
        self.fetcher = fetcher or self.loader.fetcher

    def resolve(self, root_location: str, requested_names: Iterable[str]) -> Resolution:
        """
        Resolve the requested features of a repository graph.

        Args:
            root_location: Location of the root repository
            requested_names: Names of the features to provision

        Returns:
            Resolution with the ordered directives and all issues

        Raises:
            FetchOrParseError: If the root repository can't be loaded
        """
        context = ResolutionContext()
        features = self.collect_features(root_location, context)
        directives = self.translate(features, requested_names, context)
        return Resolution(
            root_location=root_location,
            repository_name=context.repository_name,
            directives=directives,
            issues=list(context.issues),
        )

    def collect_features(
        self,
        root_location: str,
        context: Optional[ResolutionContext] = None
    ) -> List[Feature]:
        """
        Collect every feature reachable from the root repository.

        Features come out in depth-first order: a referenced repository's
        features appear where the reference stands. Each repository
        reference is loaded at most once; repeated references are reported
        and skipped.

        Raises:
            FetchOrParseError: If the root repository can't be loaded
        """
        if context is None:
            context = ResolutionContext()

        record = self.loader.load(root_location)
        logger.info(f"Provision feature repository with name {record.name} from {root_location}")
        context.repository_name = record.name
        return self._walk(record, context)

    def _walk(self, record: RepositoryRecord, context: ResolutionContext) -> List[Feature]:
        features: List[Feature] = []
        for entry in record.entries:
            if isinstance(entry, Feature):
                features.append(entry)
                continue

            reference = entry.location
            if reference in context.visited:
                context.report(
                    IssueKind.DUPLICATE_REPOSITORY_REFERENCE,
                    Severity.WARNING,
                    f"Cyclic or duplicate repository reference {reference} in {record.location}, "
                    f"the scanned features might not be complete",
                    reference=reference,
                    repository=record.location,
                )
                continue

            context.visited.add(reference)
            try:
                nested = self.loader.load(reference)
            except FetchOrParseError as e:
                context.report(
                    IssueKind.NESTED_REPOSITORY_ERROR,
                    Severity.WARNING,
                    f"Can't load repository {reference}, the scanned features might not be complete ({e.reason})",
                    reference=reference,
                    repository=record.location,
                )
                continue

            features.extend(self._walk(nested, context))
        return features

    def translate(
        self,
        features: Iterable[Feature],
        requested_names: Iterable[str],
        context: Optional[ResolutionContext] = None
    ) -> List[Directive]:
        """
        Translate the requested features into directives.

        Features whose name is not requested are skipped silently.

        Returns:
            Directives of all selected features, in order
        """
        if context is None:
            context = ResolutionContext()
        requested = frozenset(requested_names)

        directives: List[Directive] = []
        for feature in features:
            if feature.name not in requested:
                continue
            directives.extend(self._translate_feature(feature, requested, context))
        return directives

    def _translate_feature(
        self,
        feature: Feature,
        requested: FrozenSet[str],
        context: ResolutionContext
    ) -> List[Directive]:
        logger.info(f"Provision feature {feature.name} with version {feature.version}")

        if feature.has_resolver:
            context.report(
                IssueKind.UNSUPPORTED_FEATURE_RESOLVER,
                Severity.ERROR,
                f"Using resolvers (specified in feature {feature.name}) is not supported "
                f"(resolver specified: {feature.resolver}), the feature will be ignored",
                feature=feature.name,
                resolver=feature.resolver,
            )
            return []

        directives = []
        for entry in feature.content:
            translator = getattr(self, self._TRANSLATORS[entry.kind])
            directive = translator(entry, feature, requested, context)
            if directive is not None:
                directives.append(directive)
        return directives

    def _translate_dependency(self, entry: Dependency, feature, requested, context) -> None:
        if entry.name not in requested:
            context.report(
                IssueKind.UNMET_DEPENDENCY,
                Severity.INFO,
                f"Feature {feature.name} depends on feature {entry.name} which is not part of "
                f"this provision, make sure it will be provided by some other means",
                feature=feature.name,
                dependency=entry.name,
            )
        return None

    def _translate_bundle(self, entry: BundleEntry, feature, requested, context) -> InstallBundle:
        start_level = entry.start_level if entry.start_level is not None else self.options.default_start_level
        start = entry.start if entry.start is not None else True

        if entry.dependency:
            context.report(
                IssueKind.UNSUPPORTED_DEPENDENCY_BUNDLE,
                Severity.WARNING,
                f"The dependency option of bundle {entry.location} in feature {feature.name} "
                f"is not supported and will be ignored",
                feature=feature.name,
                bundle=entry.location,
            )

        return InstallBundle(uri=entry.location, start_level=start_level, start=start)

    def _translate_config(self, entry: ConfigEntry, feature, requested, context) -> Optional[ApplyConfiguration]:
        try:
            properties = parse_properties(entry.properties_text)
        except PropertiesParseError as e:
            context.report(
                IssueKind.PROPERTIES_PARSE_ERROR,
                Severity.ERROR,
                f"Can't read the properties for configuration {entry.pid}: {e}",
                feature=feature.name,
                pid=entry.pid,
            )
            return None

        index = entry.pid.find('-')
        if index > -1:
            factory_pid = entry.pid[:index]
            logger.info(f"Provision factory configuration for PID {factory_pid} and values = {properties}")
            return ApplyConfiguration(pid=factory_pid, is_factory=True, properties=properties)

        logger.info(f"Provision configuration for PID {entry.pid} and values = {properties}")
        return ApplyConfiguration(pid=entry.pid, is_factory=False, properties=properties)

    def _translate_config_file(self, entry: ConfigFileEntry, feature, requested, context) -> Optional[DeployFile]:
        working_directory = self.options.working_directory
        if working_directory is None:
            context.report(
                IssueKind.MISSING_WORKING_DIRECTORY,
                Severity.WARNING,
                f"No working directory set, the deployment of configfile {entry.source} "
                f"will not take place (final name = {entry.final_name})",
                feature=feature.name,
                file=entry.final_name,
            )
            return None

        base = Path(working_directory)
        destination = base / entry.final_name.lstrip('/\\')
        try:
            if not destination.resolve().is_relative_to(base.resolve()):
                raise FileDeployError(entry.source, str(destination), "destination is outside the working directory")
            written = self.fetcher.copy_to(entry.source, destination)
        except FileDeployError as e:
            context.report(
                IssueKind.FILE_DEPLOY_ERROR,
                Severity.ERROR,
                f"The deployment of configfile {entry.source} failed and will not take place "
                f"(final name = {entry.final_name}): {e}",
                feature=feature.name,
                file=entry.final_name,
            )
            return None

        logger.debug(f"Deployed {entry.source} to {destination} ({written} bytes)")
        return DeployFile(source=entry.source, destination_file_name=entry.final_name)

    def _translate_details(self, entry: Details, feature, requested, context) -> None:
        return None
