# mscdoc

A small vector-drawing document model. A drawing is made of circles,
rectangles and free-hand paths, each placed on the canvas with its own
transform (translation, rotation and scale). Documents are stored as a zip
archive holding a single `MSCDocument.xml` entry; the usual file extension
is `.pxz`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

```
mscdoc [FILE] [-o PATH]
```

With `FILE`, the document is opened from that archive; without it, an empty
document is created. `-o PATH` / `--save-as PATH` writes the document to
`PATH`. The command then prints the application title and one line per
element with its type and bounds, for example:

```
Machine stability control documentor
Circle x=5 y=15 width=10 height=10
```

If the file cannot be read, is not valid XML or holds an element of unknown
type, an error is printed to standard error and the exit status is 1.

## Library use

```python
from mscdoc.elements import Circle, Colour, Point, Transform
from mscdoc.paintable import PaintableElement
from mscdoc.document import Document

circle = Circle(center=Point(10.0, 20.0), radius=5.0, colour=Colour.from_string("#ff0000"))
doc = Document()
doc.paintable_elements.append(PaintableElement(circle, Transform()))
doc.save_file("drawing.pxz")

loaded = Document()
loaded.load_file("drawing.pxz")
```

### Modules

- `mscdoc.elements`: the `Circle`, `Rect` and `Path` elements, each with
  `to_xml`, `from_xml`, `draw` and `bounds`; the value types `Point`,
  `Bounds` (with `centre()`), `Transform` and `Colour`. `Colour.from_string`
  accepts `#RRGGBB`, `rgb(r, g, b)`, `rgba(r, g, b, a)` and a few colour
  names; `Colour.to_html` gives `#RRGGBB`. `deserialize_element` builds an
  element from an `Object` node and raises `ElementTypeError` for an unknown
  type; `serialize_transform` and `deserialize_transform` convert a
  `Transform` to and from its XML node. Missing or malformed numbers in the
  XML are read as 0.
- `mscdoc.tooltype`: the `ToolType` enumeration: `PEN`, `RECT`, `CIRCLE`,
  `TEXT` and `TRANSFORM`.
- `mscdoc.paintable`: `PaintableElement`, an element paired with its
  transform and its bounds, with `matrix()`, `draw(gc)` and
  `serialize_transform()`; `AffineMatrix` with `translate`, `rotate`,
  `scale` and `transform_point`.
- `mscdoc.document`: `Document`, holding `paintable_elements`. `to_xml`
  gives the document's XML tree; `save_object` and `load_object` work on
  binary streams, `save_file` and `load_file` on paths. Loading data that is
  not a zip archive, or has no `MSCDocument.xml` entry, leaves the document
  unchanged.
- `mscdoc.widgets`: `GraphicsContext`, which records every drawing call as an
  `Operation` along with the matrix, pen and brush in effect;
  `sine_wave_points`, `transform_arrow_points` and `draw_tool_icon` for the
  tool icons; `SelectableWindow` and `ToolWindow`, whose `redraw()` returns
  the context they drew on; and `Canvas`, with `canvas_bounds`,
  `canvas_scale`, `set_view` and `repaint`.
- `mscdoc.app`: `View`, which draws a document on a context; `Frame`, which
  holds one open document at a time (`new_document`, `open_document`,
  `save_document`, `save_document_as`, `close_document`) and the tool, colour
  and pen-width settings (`select_tool`, `set_colour`, `set_pen_width`, which
  accepts 1 to 20); and `main`, the command above. `save_document` and
  `save_document_as` raise `NoDocumentError` when no document is open, and
  `save_document` also does so when the document has no file name yet.

## What it does not do

There is no graphical window and no interactive editing. Drawing goes to the
recording `GraphicsContext`, not to a screen or an image file, and mouse
input on the canvas is not handled. The `TEXT` tool has no element type and
no icon: documents can hold only circles, rectangles and paths.