"""The ``docProps/app.xml`` and ``docProps/core.xml`` parts of a package."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from datetime import datetime

_log = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

EXTENDED_NS = "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"
VT_NS = "http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes"
CP_NS = "http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
DC_NS = "http://purl.org/dc/elements/1.1/"
DCTERMS_NS = "http://purl.org/dc/terms/"
DCMITYPE_NS = "http://purl.org/dc/dcmitype/"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

DEFAULT_CREATOR = "xlsxparts"


def _split_tag(tag: str) -> tuple[str, str]:
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return "", tag


def _read_elements(data: bytes | str) -> Iterator[ET.Element]:
    """Yield elements as they close; stop with a warning at the first XML error."""
    parser = ET.XMLPullParser(events=("end",))
    try:
        parser.feed(data)
        parser.close()
    except ET.ParseError as exc:
        _log.warning("error reading document properties: %s", exc)
    try:
        for _event, element in parser.read_events():
            yield element
    except ET.ParseError as exc:
        _log.warning("error reading document properties: %s", exc)


def _text(parent: ET.Element, tag: str, text: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = text
    return element


def _serialize(root: ET.Element) -> bytes:
    body = ET.tostring(root, encoding="unicode", short_empty_elements=False)
    return (XML_DECLARATION + body).encode("utf-8")


def _store(properties: dict[str, str], valid_keys: tuple[str, ...], name: str, value: str) -> bool:
    if name not in valid_keys:
        return False
    if value:
        properties[name] = value
    else:
        properties.pop(name, None)
    return True


class DocPropsApp:
    """Extended application properties: part titles, heading pairs, manager and company."""

    VALID_KEYS = ("manager", "company")

    def __init__(self) -> None:
        self._properties: dict[str, str] = {}
        self.titles_of_parts: list[str] = []
        self.heading_pairs: list[tuple[str, int]] = []

    def add_part_title(self, title: str) -> None:
        self.titles_of_parts.append(title)

    def add_heading_pair(self, name: str, value: int) -> None:
        self.heading_pairs.append((name, value))

    def set_property(self, name: str, value: str) -> bool:
        """Set or, with an empty value, remove a property; False for an unknown name."""
        return _store(self._properties, self.VALID_KEYS, name, value)

    def get_property(self, name: str) -> str:
        return self._properties.get(name, "")

    def property_names(self) -> list[str]:
        return sorted(self._properties)

    def to_xml(self) -> bytes:
        root = ET.Element("Properties", {"xmlns": EXTENDED_NS, "xmlns:vt": VT_NS})
        _text(root, "Application", "Microsoft Excel")
        _text(root, "DocSecurity", "0")
        _text(root, "ScaleCrop", "false")

        pairs = ET.SubElement(root, "HeadingPairs")
        vector = ET.SubElement(
            pairs,
            "vt:vector",
            {"size": str(len(self.heading_pairs) * 2), "baseType": "variant"},
        )
        for name, value in self.heading_pairs:
            _text(ET.SubElement(vector, "vt:variant"), "vt:lpstr", name)
            _text(ET.SubElement(vector, "vt:variant"), "vt:i4", str(value))

        titles = ET.SubElement(root, "TitlesOfParts")
        vector = ET.SubElement(
            titles,
            "vt:vector",
            {"size": str(len(self.titles_of_parts)), "baseType": "lpstr"},
        )
        for title in self.titles_of_parts:
            _text(vector, "vt:lpstr", title)

        if "manager" in self._properties:
            _text(root, "Manager", self._properties["manager"])
        # Excel always writes a Company element, even when empty.
        _text(root, "Company", self._properties.get("company", ""))
        _text(root, "LinksUpToDate", "false")
        _text(root, "SharedDoc", "false")
        _text(root, "HyperlinksChanged", "false")
        _text(root, "AppVersion", "12.0000")
        return _serialize(root)

    def load_xml(self, data: bytes | str) -> None:
        """Read manager and company; malformed XML is logged, not raised."""
        for element in _read_elements(data):
            _namespace, name = _split_tag(element.tag)
            if name == "Manager":
                self.set_property("manager", element.text or "")
            elif name == "Company":
                self.set_property("company", element.text or "")


_CORE_ELEMENTS = {
    (DC_NS, "subject"): "subject",
    (DC_NS, "title"): "title",
    (DC_NS, "creator"): "creator",
    (DC_NS, "description"): "description",
    (CP_NS, "keywords"): "keywords",
    (DCTERMS_NS, "created"): "created",
    (CP_NS, "category"): "category",
    (CP_NS, "contentStatus"): "status",
}


class DocPropsCore:
    """Core document properties such as title, creator and creation time."""

    VALID_KEYS = (
        "title",
        "subject",
        "keywords",
        "description",
        "category",
        "status",
        "created",
        "creator",
    )

    def __init__(self) -> None:
        self._properties: dict[str, str] = {}

    def set_property(self, name: str, value: str) -> bool:
        """Set or, with an empty value, remove a property; False for an unknown name."""
        return _store(self._properties, self.VALID_KEYS, name, value)

    def get_property(self, name: str) -> str:
        return self._properties.get(name, "")

    def property_names(self) -> list[str]:
        return sorted(self._properties)

    def to_xml(self, now: datetime | None = None) -> bytes:
        """Serialise the part; ``now`` stamps the modification and default creation time."""
        if now is None:
            now = datetime.now()
        stamp = now.replace(microsecond=0).isoformat()
        props = self._properties

        root = ET.Element(
            "cp:coreProperties",
            {
                "xmlns:cp": CP_NS,
                "xmlns:dc": DC_NS,
                "xmlns:dcterms": DCTERMS_NS,
                "xmlns:dcmitype": DCMITYPE_NS,
                "xmlns:xsi": XSI_NS,
            },
        )
        if "title" in props:
            _text(root, "dc:title", props["title"])
        if "subject" in props:
            _text(root, "dc:subject", props["subject"])
        creator = props.get("creator", DEFAULT_CREATOR)
        _text(root, "dc:creator", creator)
        if "keywords" in props:
            _text(root, "cp:keywords", props["keywords"])
        if "description" in props:
            _text(root, "dc:description", props["description"])
        _text(root, "cp:lastModifiedBy", creator)

        created = ET.SubElement(root, "dcterms:created", {"xsi:type": "dcterms:W3CDTF"})
        created.text = props.get("created", stamp)
        modified = ET.SubElement(root, "dcterms:modified", {"xsi:type": "dcterms:W3CDTF"})
        modified.text = stamp

        if "category" in props:
            _text(root, "cp:category", props["category"])
        if "status" in props:
            _text(root, "cp:contentStatus", props["status"])
        return _serialize(root)

    def load_xml(self, data: bytes | str) -> None:
        """Read the known properties; malformed XML is logged, not raised."""
        for element in _read_elements(data):
            key = _CORE_ELEMENTS.get(_split_tag(element.tag))
            if key is not None:
                self.set_property(key, element.text or "")