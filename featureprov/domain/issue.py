"""
Resolution issue and result domain objects for featureprov.

Every non-fatal problem met during a resolution becomes a ResolutionIssue.
Issues carry enough context (reference, feature, pid, file name) to
diagnose the problem without the log.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple

from .directive import Directive


class Severity(Enum):
    """Severity of a resolution issue, mirrored to the log level."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class IssueKind(Enum):
    """What went wrong (or was worth noting) during a resolution."""
    NESTED_REPOSITORY_ERROR = "nested_repository_error"
    DUPLICATE_REPOSITORY_REFERENCE = "duplicate_repository_reference"
    UNSUPPORTED_FEATURE_RESOLVER = "unsupported_feature_resolver"
    PROPERTIES_PARSE_ERROR = "properties_parse_error"
    FILE_DEPLOY_ERROR = "file_deploy_error"
    MISSING_WORKING_DIRECTORY = "missing_working_directory"
    UNMET_DEPENDENCY = "unmet_dependency"
    UNSUPPORTED_DEPENDENCY_BUNDLE = "unsupported_dependency_bundle"


@dataclass(frozen=True)
class ResolutionIssue:
    """A single non-fatal problem found while resolving."""
    kind: IssueKind
    severity: Severity
    message: str
    context: Tuple[Tuple[str, str], ...] = ()

    @property
    def details(self) -> Dict[str, str]:
        return dict(self.context)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'type': 'issue',
            'kind': self.kind.value,
            'severity': self.severity.value,
            'message': self.message,
        }
        result.update(self.details)
        return result

    def to_jsonl(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def __str__(self) -> str:
        return f"{self.severity.value}: {self.message}"


@dataclass
class Resolution:
    """
    Result of one top-level resolution.

    Holds the ordered directives and every issue recorded on the way.
    """
    root_location: str
    repository_name: Optional[str] = None
    directives: List[Directive] = field(default_factory=list)
    issues: List[ResolutionIssue] = field(default_factory=list)

    @property
    def warnings(self) -> List[ResolutionIssue]:
        """Issues of warning or error severity."""
        return [i for i in self.issues if i.severity is not Severity.INFO]

    @property
    def errors(self) -> List[ResolutionIssue]:
        return [i for i in self.issues if i.severity is Severity.ERROR]

    def issues_of(self, kind: IssueKind) -> List[ResolutionIssue]:
        return [i for i in self.issues if i.kind is kind]

    def to_dict(self) -> Dict[str, Any]:
        """Summary record for JSON output."""
        return {
            'type': 'summary',
            'root': self.root_location,
            'repository': self.repository_name,
            'directives': len(self.directives),
            'warnings': len(self.warnings),
            'errors': len(self.errors),
        }
