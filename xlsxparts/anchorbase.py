"""Shared pieces of drawing anchors: object kinds, positions, sizes and cell markers."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def _to_int(text: str | None) -> int:
    """Read a 32-bit integer the lenient way: anything unreadable counts as 0."""
    if not text:
        return 0
    try:
        value = int(text.strip())
    except ValueError:
        return 0
    return value if _INT_MIN <= value <= _INT_MAX else 0


def _expect(element: ET.Element, name: str) -> None:
    if _local_name(element.tag) != name:
        raise ValueError(f"expected a {name} element, got {element.tag!r}")


class ObjectType(Enum):
    """The kind of object an anchor places on a sheet."""

    GRAPHIC_FRAME = "graphicFrame"
    SHAPE = "sp"
    GROUP_SHAPE = "grpSp"
    CONNECTION_SHAPE = "cxnSp"
    PICTURE = "pic"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Point:
    """An absolute position in EMU."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Size:
    """An extent in EMU."""

    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class Marker:
    """A zero-based cell position with offsets inside the cell."""

    row: int = 0
    col: int = 0
    row_off: int = 0
    col_off: int = 0


@dataclass
class ShapeProperties:
    """Attributes of a shape or connector kept so they can be written back unchanged.

    ``bw_mode`` and ``blip_cstate`` are ``None`` when the attribute was absent,
    which is different from being present and empty.
    """

    sp_macro: str = ""
    sp_textlink: str = ""
    cxn_sp_macro: str = ""
    cnvpr_name: str = ""
    cnvpr_id: str = ""
    bw_mode: str | None = None
    flip_v: str = ""
    pos: Point = field(default_factory=Point)
    ext: Size = field(default_factory=Size)
    prst_geom: str = ""
    line_algn: str = ""
    line_cmpd: str = ""
    line_cap: str = ""
    line_w: str = ""
    head_end_w: str = ""
    head_end_len: str = ""
    head_end_type: str = ""
    tail_end_w: str = ""
    tail_end_len: str = ""
    tail_end_type: str = ""
    ln_ref_idx: str = ""
    ln_ref_val: str = ""
    fill_ref_idx: str = ""
    fill_ref_val: str = ""
    effect_ref_idx: str = ""
    effect_ref_val: str = ""
    font_ref_idx: str = ""
    font_ref_val: str = ""
    blip_cstate: str | None = None
    dpi: int = 0
    rot_with_shape: int = 0


def load_pos(element: ET.Element) -> Point:
    """Read a ``pos`` element's ``x`` and ``y`` attributes."""
    _expect(element, "pos")
    return Point(_to_int(element.get("x")), _to_int(element.get("y")))


def load_ext(element: ET.Element) -> Size:
    """Read an ``ext`` element's ``cx`` and ``cy`` attributes."""
    _expect(element, "ext")
    return Size(_to_int(element.get("cx")), _to_int(element.get("cy")))


def load_marker(element: ET.Element) -> Marker:
    """Read a ``from`` or ``to`` marker from its ``col``, ``colOff``, ``row`` and ``rowOff``."""
    values = {"col": 0, "colOff": 0, "row": 0, "rowOff": 0}
    for child in element.iter():
        if child is element:
            continue
        name = _local_name(child.tag)
        if name in values:
            values[name] = _to_int(child.text)
    return Marker(
        row=values["row"],
        col=values["col"],
        row_off=values["rowOff"],
        col_off=values["colOff"],
    )


def save_pos(parent: ET.Element, pos: Point) -> ET.Element:
    """Append an ``xdr:pos`` element to ``parent``."""
    return ET.SubElement(parent, "xdr:pos", {"x": str(pos.x), "y": str(pos.y)})


def save_ext(parent: ET.Element, ext: Size) -> ET.Element:
    """Append an ``xdr:ext`` element to ``parent``."""
    return ET.SubElement(parent, "xdr:ext", {"cx": str(ext.width), "cy": str(ext.height)})


def save_marker(parent: ET.Element, marker: Marker, node: str) -> ET.Element:
    """Append a marker element named ``node`` (such as ``xdr:from``) to ``parent``."""
    element = ET.SubElement(parent, node)
    for tag, value in (
        ("xdr:col", marker.col),
        ("xdr:colOff", marker.col_off),
        ("xdr:row", marker.row),
        ("xdr:rowOff", marker.row_off),
    ):
        ET.SubElement(element, tag).text = str(value)
    return element