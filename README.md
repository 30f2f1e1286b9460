# xlsxparts

Building blocks for reading and writing some of the XML parts that make up
an `.xlsx` package. It depends only on the standard library and works with
`xml.etree.ElementTree`.

## Installation

```
pip install .
```

## Modules

### `xlsxparts.cellrange`

- `CellReference(row, column)`: a 1-based cell. `CellReference.from_string("$B$3")`
  parses A1 notation (upper-case column letters, one to three of them); text it
  cannot read gives an invalid reference. `to_string(row_abs=False, col_abs=False)`
  writes it back, adding `$` where asked; an invalid reference gives `""`.
  `is_valid()` is true when row and column are both positive.
- `CellRange(first_row, first_column, last_row, last_column)`: a rectangle of
  cells. The default range is invalid. `CellRange.from_string("A1:C3")` also
  accepts a single cell such as `"B2"`; `CellRange.from_references(top_left,
  bottom_right)` builds one from two references. `to_string()` writes a one-cell
  range as that cell alone. There are also `is_valid()`, `row_count()`,
  `column_count()`, `top_left()`, `top_right()`, `bottom_left()` and
  `bottom_right()`.

### `xlsxparts.contenttypes`

`ContentTypes` is the `[Content_Types].xml` part. It starts with defaults for
the `rels` and `xml` extensions and keeps two dictionaries, `defaults` and
`overrides`. Helpers such as `add_workbook()`, `add_styles()`, `add_theme()`,
`add_shared_string()`, `add_doc_prop_app()`, `add_doc_prop_core()`,
`add_worksheet_name("sheet1")`, `add_drawing_name(...)` and
`add_chart_name(...)` add the usual overrides; `add_default` and
`add_override` add any entry and `clear_overrides()` empties the overrides.
`to_xml()` returns UTF-8 bytes with entries in key order. `load_xml(data)`
replaces every entry with those read; malformed XML is logged as a warning,
and entries read before the error are kept.

### `xlsxparts.docprops`

- `DocPropsApp` (`docProps/app.xml`): `add_part_title`, `add_heading_pair`,
  and the properties `manager` and `company`.
- `DocPropsCore` (`docProps/core.xml`): the properties `title`, `subject`,
  `keywords`, `description`, `category`, `status`, `created` and `creator`.
  `to_xml(now=None)` stamps the modification time (and the creation time,
  unless `created` is set) with `now` or the current time; the creator
  defaults to `xlsxparts`.

For both, `set_property(name, value)` returns `False` for a name it does not
know, and an empty value removes the property. `get_property(name)` returns
`""` for an unset property and `property_names()` lists the set ones in
sorted order. `load_xml(data)` reads the known properties and logs malformed
XML instead of raising.

### `xlsxparts.anchorbase`

Shared pieces of drawing anchors: the `ObjectType` enum, the `Point`, `Size`
and `Marker` dataclasses (EMU positions and zero-based cell markers), and
`ShapeProperties`, which holds the attributes of a shape or connector.
`load_pos`, `load_ext` and `load_marker` read elements (the first two raise
`ValueError` when given an element of another name); `save_pos`, `save_ext`
and `save_marker(parent, marker, node)` append `xdr:` elements to a parent.

### `xlsxparts.shapes`

`load_connection_shape(element, props)` fills a `ShapeProperties` from a
`cxnSp` element, and `load_shape(element, props)` reads an `sp` element's
`macro` and `textlink`. `save_connection_shape(parent, props)` and
`save_shape(parent, props, image_rel_id=None)` write them back; `save_shape`
adds a picture fill when a relationship id is given. `save_line` and
`save_style` write the `a:ln` and `xdr:style` parts on their own.

## Example

```python
import xml.etree.ElementTree as ET

from xlsxparts.anchorbase import load_pos
from xlsxparts.cellrange import CellRange
from xlsxparts.contenttypes import ContentTypes
from xlsxparts.docprops import DocPropsCore

cells = CellRange.from_string("B2:D10")
print(cells.row_count(), cells.column_count())  # 9 3

types = ContentTypes()
types.add_workbook()
types.add_worksheet_name("sheet1")
xml_bytes = types.to_xml()

core = DocPropsCore()
core.set_property("title", "Quarterly figures")
core_xml = core.to_xml()

element = ET.fromstring('<xdr:pos xmlns:xdr="urn:example" x="10" y="20"/>')
print(load_pos(element))  # Point(x=10, y=20)
```

## What it does not do

The package works on single parts. It does not open or write whole `.xlsx`
files (no zip handling, no workbook, worksheets, styles or shared strings),
has no data-validation part, and does not assemble a complete drawing part
with its anchors and relationships: `anchorbase` and `shapes` give the pieces
such a part is made of. There is no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```