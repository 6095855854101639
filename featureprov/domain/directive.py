"""
Provisioning directive domain objects for featureprov.

Directives are the only product of a resolution: normalized instructions
that a host applies to launch a configured runtime. They are immutable and
serializable for JSONL output.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Any, Mapping, Union


class DirectiveKind(Enum):
    """Kinds of provisioning directives."""
    INSTALL_BUNDLE = "install_bundle"
    APPLY_CONFIGURATION = "apply_configuration"
    DEPLOY_FILE = "deploy_file"


@dataclass(frozen=True)
class InstallBundle:
    """Install a bundle from ``uri`` at ``start_level``."""
    uri: str
    start_level: int
    start: bool = True

    kind = DirectiveKind.INSTALL_BUNDLE

    def apply_to(self, sink) -> None:
        sink.install_bundle(self.uri, self.start_level, self.start)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind.value,
            'uri': self.uri,
            'start_level': self.start_level,
            'start': self.start,
        }

    def to_jsonl(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


@dataclass(frozen=True)
class ApplyConfiguration:
    """
    Apply a configuration.

    With ``is_factory`` set, ``pid`` is the factory PID and the host creates
    a new factory configuration instance instead of updating ``pid``.
    """
    pid: str
    is_factory: bool = False
    properties: Mapping[str, str] = field(default_factory=dict)

    kind = DirectiveKind.APPLY_CONFIGURATION

    def __post_init__(self):
        # Freeze the mapping so the directive stays immutable
        object.__setattr__(self, 'properties', MappingProxyType(dict(self.properties)))

    def apply_to(self, sink) -> None:
        sink.apply_configuration(self.pid, dict(self.properties), factory=self.is_factory)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind.value,
            'pid': self.pid,
            'is_factory': self.is_factory,
            'properties': dict(self.properties),
        }

    def to_jsonl(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


@dataclass(frozen=True)
class DeployFile:
    """A file copied from ``source`` into the working directory."""
    source: str
    destination_file_name: str

    kind = DirectiveKind.DEPLOY_FILE

    def apply_to(self, sink) -> None:
        sink.deploy_file(self.source, self.destination_file_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind.value,
            'source': self.source,
            'destination_file_name': self.destination_file_name,
        }

    def to_jsonl(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


Directive = Union[InstallBundle, ApplyConfiguration, DeployFile]
