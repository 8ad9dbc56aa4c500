"""package.xml codec — XML text <-> :class:`ManifestDocument`.

Pure functions, no file I/O. Accepts input with or without the Metadata
API namespace; always writes it back on the root element.

Element text is stripped on parse and empty <members> are dropped, which
matches the trimmed, non-empty members :class:`TypeEntry` accepts.

Serialized layout::

    <?xml version="1.0" encoding="UTF-8"?>
    <Package xmlns="http://soap.sforce.com/2006/04/metadata">
        <types>
            <members>AccountController</members>
            <name>ApexClass</name>
        </types>
        <version>59.0</version>
    </Package>
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from sfmcp.domain.errors import ParseError
from sfmcp.domain.manifest import METADATA_NAMESPACE, ManifestDocument, TypeEntry

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
_INDENT = "    "


def _local(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _text(element: ET.Element) -> str:
    return (element.text or "").strip()


def parse_package_xml(text: str) -> ManifestDocument:
    """Parse package.xml *text* into a ManifestDocument.

    Raises:
        ParseError: the text is not XML, the root is not ``<Package>``,
            there are no ``<types>`` elements, a type has no ``<name>``,
            or ``<version>`` is missing or empty.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        msg = f"Invalid package.xml format: {exc}"
        raise ParseError(msg) from exc

    if _local(root.tag) != "Package":
        msg = (
            f"Invalid package.xml format: root element is <{_local(root.tag)}>, "
            "expected <Package>"
        )
        raise ParseError(msg)

    type_elements = _children(root, "types")
    if not type_elements:
        msg = "Invalid package.xml format: no <types> elements"
        raise ParseError(msg)

    entries: list[TypeEntry] = []
    for position, type_el in enumerate(type_elements, start=1):
        names = [_text(el) for el in _children(type_el, "name")]
        if not names or not names[0]:
            msg = f"Invalid package.xml format: <types> #{position} has no <name>"
            raise ParseError(msg)
        members = tuple(m for m in (_text(el) for el in _children(type_el, "members")) if m)
        entries.append(TypeEntry(name=names[0], members=members))

    versions = [_text(el) for el in _children(root, "version")]
    if not versions or not versions[0]:
        msg = "Invalid package.xml format: missing <version>"
        raise ParseError(msg)

    return ManifestDocument(version=versions[0], types=tuple(entries))


def serialize_package_xml(doc: ManifestDocument) -> str:
    """Render *doc* as package.xml text with the Metadata API namespace."""
    root = ET.Element("Package", {"xmlns": METADATA_NAMESPACE})
    for entry in doc.types:
        type_el = ET.SubElement(root, "types")
        for member in entry.members:
            ET.SubElement(type_el, "members").text = member
        ET.SubElement(type_el, "name").text = entry.name
    ET.SubElement(root, "version").text = doc.version

    ET.indent(root, space=_INDENT)
    return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"
