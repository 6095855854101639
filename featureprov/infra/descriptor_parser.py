"""
Feature repository descriptor parsing for featureprov.

Turns the XML of a Karaf style features repository into a RepositoryRecord:

    <features name="my-repo" xmlns="http://karaf.apache.org/xmlns/features/v1.0.0">
        <repository>mvn:org.example/other/1.0/xml/features</repository>
        <feature name="core" version="1.0.0">
            <details>Long description</details>
            <feature>base</feature>
            <bundle start-level="50">mvn:org.example/core/1.0</bundle>
            <config name="org.example.core">key = value</config>
            <configfile finalname="/etc/core.cfg">file:core.cfg</configfile>
        </feature>
    </features>

Element and attribute names follow the published features schema. Elements
the schema added after v1.0 (conditionals, capabilities, ...) are skipped.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Optional, Tuple

from ..domain import (
    Dependency,
    BundleEntry,
    ConfigEntry,
    ConfigFileEntry,
    Details,
    Feature,
    RepositoryReference,
    RepositoryRecord,
)
from ..errors import DescriptorParseError, DescriptorSchemaError, NotARepositoryRootError

logger = logging.getLogger(__name__)

FEATURES_NAMESPACE_PREFIX = 'http://karaf.apache.org/xmlns/features/'

_TRUE = ('true', '1')
_FALSE = ('false', '0')


def split_tag(tag: str) -> Tuple[str, str]:
    """Split an ElementTree tag into (namespace, local name)."""
    if tag.startswith('{'):
        namespace, _, local = tag[1:].partition('}')
        return namespace, local
    return '', tag


class DescriptorParser:
    """
    Parser for features repository descriptors.

    The parser holds no state between calls; every ``parse`` builds its own
    expat parser, so one instance can be shared by concurrent resolutions.

    Example:
        parser = DescriptorParser()
        record = parser.parse(xml_bytes, location="file:/tmp/features.xml")
        for feature in record.features:
            print(feature.name, feature.version)
    """

    def parse(self, data: bytes, location: str) -> RepositoryRecord:
        """
        Parse descriptor bytes into a RepositoryRecord.

        Args:
            data: Raw descriptor content
            location: Where the content came from (used in errors and
                recorded on the result)

        Raises:
            DescriptorParseError: If the content is not well-formed XML
            NotARepositoryRootError: If the document root is not a
                features element
            DescriptorSchemaError: If the content breaks the schema
        """
        try:
            root = ET.fromstring(data, parser=ET.XMLParser())
        except ET.ParseError as e:
            raise DescriptorParseError(location, f"Parsing the feature file failed: {e}") from e

        namespace, local = split_tag(root.tag)
        if local != 'features' or (namespace and not namespace.startswith(FEATURES_NAMESPACE_PREFIX)):
            raise NotARepositoryRootError(
                location, f"The parsed document root <{local}> is not a features repository"
            )

        entries = []
        for child in root:
            _, name = split_tag(child.tag)
            if name == 'repository':
                entries.append(RepositoryReference(self._required_text(child, location)))
            elif name == 'feature':
                entries.append(self._parse_feature(child, location))
            else:
                logger.debug(f"Skipping unsupported element <{name}> in {location}")

        return RepositoryRecord(name=root.get('name'), location=location, entries=tuple(entries))

    def _parse_feature(self, element: ET.Element, location: str) -> Feature:
        name = element.get('name')
        if not name:
            raise DescriptorSchemaError(location, "Feature without a name")

        content = []
        for child in element:
            _, tag = split_tag(child.tag)
            if tag == 'details':
                content.append(Details(child.text or ''))
            elif tag == 'feature':
                content.append(Dependency(
                    self._required_text(child, location),
                    version=child.get('version'),
                ))
            elif tag == 'bundle':
                content.append(BundleEntry(
                    self._required_text(child, location),
                    start_level=self._int_attribute(child, 'start-level', location),
                    start=self._bool_attribute(child, 'start', location),
                    dependency=self._bool_attribute(child, 'dependency', location),
                ))
            elif tag == 'config':
                pid = child.get('name')
                if not pid:
                    raise DescriptorSchemaError(location, f"Config without a name in feature {name}")
                content.append(ConfigEntry(pid, child.text or ''))
            elif tag == 'configfile':
                final_name = child.get('finalname')
                if not final_name:
                    raise DescriptorSchemaError(location, f"Configfile without a finalname in feature {name}")
                content.append(ConfigFileEntry(
                    self._required_text(child, location),
                    final_name,
                    override=self._bool_attribute(child, 'override', location),
                ))
            else:
                logger.debug(f"Skipping unsupported element <{tag}> in feature {name}")

        return Feature(
            name=name,
            version=element.get('version', '0.0.0'),
            resolver=element.get('resolver'),
            description=element.get('description'),
            content=tuple(content),
        )

    @staticmethod
    def _required_text(element: ET.Element, location: str) -> str:
        text = (element.text or '').strip()
        if not text:
            _, tag = split_tag(element.tag)
            raise DescriptorSchemaError(location, f"Empty <{tag}> element")
        return text

    @staticmethod
    def _int_attribute(element: ET.Element, name: str, location: str) -> Optional[int]:
        value = element.get(name)
        if value is None:
            return None
        try:
            return int(value.strip())
        except ValueError:
            raise DescriptorSchemaError(location, f"Attribute {name}={value!r} is not an integer") from None

    @staticmethod
    def _bool_attribute(element: ET.Element, name: str, location: str) -> Optional[bool]:
        value = element.get(name)
        if value is None:
            return None
        normalized = value.strip().lower()
        if normalized in _TRUE:
            return True
        if normalized in _FALSE:
            return False
        raise DescriptorSchemaError(location, f"Attribute {name}={value!r} is not a boolean")
