import xml.etree.ElementTree as ET

import pytest

from xlsxparts.anchorbase import Point, ShapeProperties, Size
from xlsxparts.shapes import (
    RELATIONSHIPS_NS,
    load_connection_shape,
    load_shape,
    save_connection_shape,
    save_line,
    save_shape,
    save_style,
)

XDR = "http://schemas.openxmlformats.org/drawingml/2006/spreadsheetDrawing"
A = "http://schemas.openxmlformats.org/drawingml/2006/main"

CXN_SP = f"""
<xdr:cxnSp xmlns:xdr="{XDR}" xmlns:a="{A}" macro="">
  <xdr:nvCxnSpPr>
    <xdr:cNvPr id="3" name="Connector 2"/>
    <xdr:cNvCxnSpPr/>
  </xdr:nvCxnSpPr>
  <xdr:spPr bwMode="auto">
    <a:xfrm flipV="1">
      <a:off x="100" y="200"/>
      <a:ext cx="300" cy="400"/>
    </a:xfrm>
    <a:prstGeom prst=" line "><a:avLst/></a:prstGeom>
    <a:ln w="9525" cap="flat" cmpd="sng" algn="ctr">
      <a:headEnd type="triangle" w="med" len="med"/>
      <a:tailEnd type="none"/>
    </a:ln>
  </xdr:spPr>
  <xdr:style>
    <a:lnRef idx="1"><a:schemeClr val="accent1"/></a:lnRef>
    <a:fillRef idx="0"><a:schemeClr val="accent1"/></a:fillRef>
    <a:effectRef idx="0"><a:schemeClr val="accent1"/></a:effectRef>
    <a:fontRef idx="minor"><a:schemeClr val="tx1"/></a:fontRef>
  </xdr:style>
</xdr:cxnSp>
"""


def _reparse(element):
    text = ET.tostring(element, encoding="unicode")
    wrapped = f'<root xmlns:xdr="{XDR}" xmlns:a="{A}" xmlns:r="{RELATIONSHIPS_NS}">{text}</root>'
    return ET.fromstring(wrapped)[0]


def _loaded():
    return load_connection_shape(ET.fromstring(CXN_SP), ShapeProperties())


def test_load_connection_shape_reads_fields():
    props = _loaded()
    assert props.cnvpr_id == "3"
    assert props.cnvpr_name == "Connector 2"
    assert props.bw_mode == "auto"
    assert props.flip_v == "1"
    assert props.pos == Point(100, 200)
    assert props.ext == Size(300, 400)
    assert props.prst_geom == "line"
    assert (props.line_w, props.line_cap, props.line_cmpd, props.line_algn) == (
        "9525", "flat", "sng", "ctr"
    )
    assert (props.head_end_type, props.head_end_w, props.head_end_len) == (
        "triangle", "med", "med"
    )
    assert props.tail_end_type == "none"
    assert props.tail_end_w == ""


def test_load_connection_shape_reads_style_refs():
    props = _loaded()
    assert (props.ln_ref_idx, props.ln_ref_val) == ("1", "accent1")
    assert (props.fill_ref_idx, props.fill_ref_val) == ("0", "accent1")
    assert (props.font_ref_idx, props.font_ref_val) == ("minor", "tx1")


def test_ext_without_preceding_off_is_ignored():
    xml = f'<xdr:cxnSp xmlns:xdr="{XDR}" xmlns:a="{A}"><a:ext cx="5" cy="6"/></xdr:cxnSp>'
    props = load_connection_shape(ET.fromstring(xml), ShapeProperties())
    assert props.ext == Size()


def test_missing_bw_mode_is_none():
    xml = f'<xdr:cxnSp xmlns:xdr="{XDR}"><xdr:spPr/></xdr:cxnSp>'
    props = load_connection_shape(ET.fromstring(xml), ShapeProperties())
    assert props.bw_mode is None


def test_wrong_element_is_rejected():
    with pytest.raises(ValueError):
        load_connection_shape(ET.fromstring("<sp/>"), ShapeProperties())
    with pytest.raises(ValueError):
        load_shape(ET.fromstring("<cxnSp/>"), ShapeProperties())


def test_load_shape_reads_macro_and_textlink():
    xml = f'<xdr:sp xmlns:xdr="{XDR}" macro="Run" textlink="$A$1"/>'
    props = load_shape(ET.fromstring(xml), ShapeProperties())
    assert props.sp_macro == "Run"
    assert props.sp_textlink == "$A$1"


def test_connection_shape_round_trip():
    original = _loaded()
    parent = ET.Element("root")
    save_connection_shape(parent, original)
    reloaded = load_connection_shape(_reparse(parent[0]), ShapeProperties())
    assert reloaded == original


def test_save_connection_shape_layout():
    parent = ET.Element("root")
    shape = save_connection_shape(parent, _loaded())
    assert shape.tag == "xdr:cxnSp"
    assert [child.tag for child in shape] == ["xdr:nvCxnSpPr", "xdr:spPr", "xdr:style"]
    xfrm = shape.find("xdr:spPr/a:xfrm", {}) if False else shape[1][0]
    assert xfrm.get("flipV") == "1"


def test_save_line_skips_attributes_without_cap():
    props = ShapeProperties(line_w="9525", line_cmpd="sng")
    parent = ET.Element("root")
    line = save_line(parent, props)
    assert line.attrib == {}
    assert list(line) == []


def test_save_line_writes_ends():
    props = ShapeProperties(line_w="9525", line_cap="flat", tail_end_len="lg")
    line = save_line(ET.Element("root"), props)
    assert line.attrib == {"w": "9525", "cap": "flat"}
    assert [child.tag for child in line] == ["a:tailEnd"]
    assert line[0].attrib == {"len": "lg"}


def test_save_style_refs():
    props = _loaded()
    style = save_style(ET.Element("root"), props)
    assert [child.tag for child in style] == ["a:lnRef", "a:fillRef", "a:effectRef", "a:fontRef"]
    assert style[3].get("idx") == "minor"
    assert style[3][0].get("val") == "tx1"


def test_save_shape_without_image_has_no_blip_fill():
    props = ShapeProperties(sp_macro="m", sp_textlink="t", bw_mode=None)
    shape = save_shape(ET.Element("root"), props)
    sp_pr = shape[1]
    assert "bwMode" not in sp_pr.attrib
    assert [child.tag for child in sp_pr] == ["a:xfrm", "a:prstGeom", "a:ln"]
    assert shape.attrib == {"macro": "m", "textlink": "t"}


def test_save_shape_with_image():
    props = ShapeProperties(blip_cstate="print")
    shape = save_shape(ET.Element("root"), props, "rId2")
    fill = shape[1][2]
    assert fill.tag == "a:blipFill"
    blip = fill[0]
    assert blip.get("r:embed") == "rId2"
    assert blip.get("cstate") == "print"
    assert blip.get("xmlns:r") == RELATIONSHIPS_NS


def test_shape_round_trip_keeps_macro_and_textlink():
    props = ShapeProperties(sp_macro="Macro1", sp_textlink="$B$2")
    parent = ET.Element("root")
    save_shape(parent, props)
    reloaded = load_shape(_reparse(parent[0]), ShapeProperties())
    assert (reloaded.sp_macro, reloaded.sp_textlink) == ("Macro1", "$B$2")