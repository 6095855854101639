"""
Host provisioning sink for featureprov.

The host that actually installs bundles and applies configuration lives
outside featureprov. It implements ProvisioningSink; apply_directives hands
it every directive of a resolution, in order, without retrying.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from ..domain.directive import Directive

logger = logging.getLogger(__name__)


class ProvisioningSink:
    """Interface of a host able to apply provisioning directives."""

    def install_bundle(self, uri: str, start_level: int, start: bool) -> None:
        raise NotImplementedError()

    def apply_configuration(self, pid: str, properties: Dict[str, str], factory: bool = False) -> None:
        raise NotImplementedError()

    def deploy_file(self, source: str, destination_file_name: str) -> None:
        raise NotImplementedError()


@dataclass
class RecordingSink(ProvisioningSink):
    """Sink that only records the calls it receives."""
    calls: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)

    def install_bundle(self, uri, start_level, start):
        self.calls.append(('install_bundle', {'uri': uri, 'start_level': start_level, 'start': start}))

    def apply_configuration(self, pid, properties, factory=False):
        self.calls.append(('apply_configuration', {'pid': pid, 'properties': properties, 'factory': factory}))

    def deploy_file(self, source, destination_file_name):
        self.calls.append(('deploy_file', {'source': source, 'destination_file_name': destination_file_name}))


def apply_directives(directives: Iterable[Directive], sink: ProvisioningSink) -> int:
    """
    Hand every directive to ``sink`` in order.

    Failures raised by the sink propagate; they are the host's concern.

    Returns:
        Number of directives applied
    """
    count = 0
    for directive in directives:
        logger.debug(f"Applying {directive.kind.value}: {directive.to_dict()}")
        directive.apply_to(sink)
        count += 1
    return count
