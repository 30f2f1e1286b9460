"""Reading and writing shapes and connectors inside drawing anchors."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from xlsxparts.anchorbase import Point, ShapeProperties, Size, _local_name, _to_int

RELATIONSHIPS_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

# Style references: element name -> (idx field, schemeClr val field).
_STYLE_REFS = {
    "lnRef": ("ln_ref_idx", "ln_ref_val"),
    "fillRef": ("fill_ref_idx", "fill_ref_val"),
    "effectRef": ("effect_ref_idx", "effect_ref_val"),
    "fontRef": ("font_ref_idx", "font_ref_val"),
}

_LINE_ATTRS = {"algn": "line_algn", "cmpd": "line_cmpd", "cap": "line_cap", "w": "line_w"}
_HEAD_END_ATTRS = {"w": "head_end_w", "len": "head_end_len", "type": "head_end_type"}
_TAIL_END_ATTRS = {"w": "tail_end_w", "len": "tail_end_len", "type": "tail_end_type"}


def _expect(element: ET.Element, name: str) -> None:
    if _local_name(element.tag) != name:
        raise ValueError(f"expected a {name} element, got {element.tag!r}")


def _trimmed(element: ET.Element, name: str) -> str:
    return element.get(name, "").strip()


def _read_trimmed(element: ET.Element, props: ShapeProperties, attrs: dict[str, str]) -> None:
    for attr, field_name in attrs.items():
        setattr(props, field_name, _trimmed(element, attr))


def _read_style_ref(element: ET.Element, props: ShapeProperties, fields: tuple[str, str]) -> None:
    idx_field, val_field = fields
    setattr(props, idx_field, _trimmed(element, "idx"))
    first = next(iter(element), None)
    if first is not None and _local_name(first.tag) == "schemeClr":
        setattr(props, val_field, _trimmed(first, "val"))


def load_connection_shape(element: ET.Element, props: ShapeProperties) -> ShapeProperties:
    """Fill ``props`` from a ``cxnSp`` element and return it."""
    _expect(element, "cxnSp")
    props.cxn_sp_macro = element.get("macro", "")
    has_off = False
    for child in element.iter():
        if child is element:
            continue
        name = _local_name(child.tag)
        if name == "cNvPr":
            props.cnvpr_name = child.get("name", "")
            props.cnvpr_id = child.get("id", "")
        elif name == "spPr":
            props.bw_mode = child.get("bwMode")
        elif name == "xfrm":
            props.flip_v = child.get("flipV", "")
        elif name == "off":
            props.pos = Point(_to_int(child.get("x")), _to_int(child.get("y")))
            has_off = True
        elif name == "ext" and has_off:
            props.ext = Size(_to_int(child.get("cx")), _to_int(child.get("cy")))
            has_off = False
        elif name == "prstGeom":
            props.prst_geom = _trimmed(child, "prst")
        elif name == "ln":
            _read_trimmed(child, props, _LINE_ATTRS)
        elif name == "headEnd":
            _read_trimmed(child, props, _HEAD_END_ATTRS)
        elif name == "tailEnd":
            _read_trimmed(child, props, _TAIL_END_ATTRS)
        elif name in _STYLE_REFS:
            _read_style_ref(child, props, _STYLE_REFS[name])
    return props


def load_shape(element: ET.Element, props: ShapeProperties) -> ShapeProperties:
    """Fill ``props`` from an ``sp`` element's ``macro`` and ``textlink`` and return it."""
    _expect(element, "sp")
    props.sp_textlink = element.get("textlink", "")
    props.sp_macro = element.get("macro", "")
    return props


def _save_transform(sp_pr: ET.Element, props: ShapeProperties, flip_v: bool) -> None:
    xfrm = ET.SubElement(sp_pr, "a:xfrm")
    if flip_v and props.flip_v:
        xfrm.set("flipV", props.flip_v)
    ET.SubElement(xfrm, "a:off", {"x": str(props.pos.x), "y": str(props.pos.y)})
    ET.SubElement(
        xfrm, "a:ext", {"cx": str(props.ext.width), "cy": str(props.ext.height)}
    )
    geom = ET.SubElement(sp_pr, "a:prstGeom", {"prst": props.prst_geom})
    ET.SubElement(geom, "a:avLst")


def _save_line_end(parent: ET.Element, tag: str, type_: str, width: str, length: str) -> None:
    if not (type_ or width or length):
        return
    end = ET.SubElement(parent, tag)
    for attr, value in (("type", type_), ("w", width), ("len", length)):
        if value:
            end.set(attr, value)


def save_line(parent: ET.Element, props: ShapeProperties) -> ET.Element:
    """Append an ``a:ln`` element; its attributes are written only when width and cap are set."""
    line = ET.SubElement(parent, "a:ln")
    if props.line_w and props.line_cap:
        for attr, value in (
            ("w", props.line_w),
            ("cap", props.line_cap),
            ("cmpd", props.line_cmpd),
            ("algn", props.line_algn),
        ):
            if value:
                line.set(attr, value)
    _save_line_end(
        line, "a:headEnd", props.head_end_type, props.head_end_w, props.head_end_len
    )
    _save_line_end(
        line, "a:tailEnd", props.tail_end_type, props.tail_end_w, props.tail_end_len
    )
    return line


def save_style(parent: ET.Element, props: ShapeProperties) -> ET.Element:
    """Append an ``xdr:style`` element with line, fill, effect and font references."""
    style = ET.SubElement(parent, "xdr:style")
    for name, (idx_field, val_field) in _STYLE_REFS.items():
        ref = ET.SubElement(style, f"a:{name}", {"idx": getattr(props, idx_field)})
        ET.SubElement(ref, "a:schemeClr", {"val": getattr(props, val_field)})
    return style


def save_connection_shape(parent: ET.Element, props: ShapeProperties) -> ET.Element:
    """Append an ``xdr:cxnSp`` element built from ``props``."""
    shape = ET.SubElement(parent, "xdr:cxnSp", {"macro": props.cxn_sp_macro})
    nv = ET.SubElement(shape, "xdr:nvCxnSpPr")
    ET.SubElement(nv, "xdr:cNvPr", {"id": props.cnvpr_id, "name": props.cnvpr_name})
    ET.SubElement(nv, "xdr:cNvCxnSpPr")

    sp_pr = ET.SubElement(shape, "xdr:spPr")
    if props.bw_mode is not None:
        sp_pr.set("bwMode", props.bw_mode)
    _save_transform(sp_pr, props, flip_v=True)
    save_line(sp_pr, props)

    save_style(shape, props)
    return shape


def save_shape(
    parent: ET.Element, props: ShapeProperties, image_rel_id: str | None = None
) -> ET.Element:
    """Append an ``xdr:sp`` element; a picture fill is written when ``image_rel_id`` is given."""
    shape = ET.SubElement(
        parent, "xdr:sp", {"macro": props.sp_macro, "textlink": props.sp_textlink}
    )
    nv = ET.SubElement(shape, "xdr:nvSpPr")
    cnvpr = ET.SubElement(nv, "xdr:cNvPr", {"id": props.cnvpr_id, "name": props.cnvpr_name})
    ET.SubElement(cnvpr, "a:extLst")
    ET.SubElement(nv, "xdr:cNvSpPr")

    sp_pr = ET.SubElement(shape, "xdr:spPr")
    if props.bw_mode is not None:
        sp_pr.set("bwMode", props.bw_mode)
    _save_transform(sp_pr, props, flip_v=False)

    if image_rel_id is not None:
        fill = ET.SubElement(
            sp_pr,
            "a:blipFill",
            {"dpi": str(props.dpi), "rotWithShape": str(props.rot_with_shape)},
        )
        blip = ET.SubElement(
            fill, "a:blip", {"r:embed": image_rel_id, "xmlns:r": RELATIONSHIPS_NS}
        )
        if props.blip_cstate is not None:
            blip.set("cstate", props.blip_cstate)
        ET.SubElement(fill, "a:srcRect")
        stretch = ET.SubElement(fill, "a:stretch")
        ET.SubElement(stretch, "a:fillRect")

    save_line(sp_pr, props)
    save_style(shape, props)
    return shape