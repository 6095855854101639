"""Tests for handing directives to a host provisioning sink."""

import pytest

from featureprov.domain import InstallBundle, ApplyConfiguration, DeployFile
from featureprov.services import ProvisioningSink, RecordingSink, apply_directives


class TestApplyDirectives:
    """Tests for apply_directives()."""

    def test_calls_sink_in_order(self):
        sink = RecordingSink()
        directives = [
            InstallBundle('mvn:x/a/1', 60, True),
            ApplyConfiguration('org.x', True, {'a': '1'}),
            DeployFile('file:a.cfg', 'etc/a.cfg'),
            InstallBundle('mvn:x/b/1', 30, False),
        ]

        count = apply_directives(directives, sink)

        assert count == 4
        assert sink.calls == [
            ('install_bundle', {'uri': 'mvn:x/a/1', 'start_level': 60, 'start': True}),
            ('apply_configuration', {'pid': 'org.x', 'properties': {'a': '1'}, 'factory': True}),
            ('deploy_file', {'source': 'file:a.cfg', 'destination_file_name': 'etc/a.cfg'}),
            ('install_bundle', {'uri': 'mvn:x/b/1', 'start_level': 30, 'start': False}),
        ]

    def test_sink_failure_propagates(self):
        """Host failures are not retried or swallowed."""
        class FailingSink(RecordingSink):
            def apply_configuration(self, pid, properties, factory=False):
                raise RuntimeError("config admin unavailable")

        sink = FailingSink()
        with pytest.raises(RuntimeError):
            apply_directives([InstallBundle('a', 1), ApplyConfiguration('p'), InstallBundle('b', 1)], sink)
        assert len(sink.calls) == 1

    def test_base_sink_is_abstract(self):
        with pytest.raises(NotImplementedError):
            apply_directives([InstallBundle('a', 1)], ProvisioningSink())
