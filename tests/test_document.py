import io
import zipfile

import pytest

from mscdoc.document import Document
from mscdoc.elements import (
    Bounds,
    Circle,
    Colour,
    ElementTypeError,
    Path,
    Point,
    Rect,
    Transform,
)
from mscdoc.paintable import PaintableElement


def _sample_document():
    return Document(
        [
            PaintableElement(
                Circle(center=Point(10, 20), radius=5, colour=Colour(255, 0, 0)),
                Transform(1, 2, 0.5, 1, 1),
            ),
            PaintableElement(Rect(rect=Bounds(1, 2, 3, 4), colour=Colour(0, 0, 255))),
            PaintableElement(
                Path(points=[Point(0, 0), Point(5, 7)], width=3, colour=Colour(0, 255, 0))
            ),
        ]
    )


def _zip_bytes(entries):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return buffer.getvalue()


def _saved_bytes(document):
    buffer = io.BytesIO()
    document.save_object(buffer)
    return buffer.getvalue()


def test_to_xml_root_and_version():
    root = Document().to_xml()
    assert root.tag == "MSCDocument"
    assert root.get("version") == "1.0"
    assert len(root) == 0


def test_to_xml_objects_end_with_transform():
    root = _sample_document().to_xml()
    assert [node.tag for node in root] == ["Object", "Object", "Object"]
    assert [node[-1].tag for node in root] == ["Transform"] * 3
    assert root[0].get("type") == "Circle"


def test_save_writes_single_entry():
    data = _saved_bytes(_sample_document())
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        assert archive.namelist() == ["MSCDocument.xml"]


def test_save_returns_same_stream():
    buffer = io.BytesIO()
    assert Document().save_object(buffer) is buffer


def test_round_trip_elements():
    original = _sample_document()
    loaded = Document()
    loaded.load_object(io.BytesIO(_saved_bytes(original)))
    assert [pe.element for pe in loaded.paintable_elements] == [
        pe.element for pe in original.paintable_elements
    ]


def test_empty_path_keeps_transform():
    transform = Transform(3, 4, 0.25, 2, 2)
    original = Document([PaintableElement(Path(width=2), transform)])
    loaded = Document()
    loaded.load_object(io.BytesIO(_saved_bytes(original)))
    assert loaded.paintable_elements[0].transform == transform


def test_transform_read_from_first_child_of_rect():
    original = Document(
        [PaintableElement(Rect(rect=Bounds(1, 2, 3, 4)), Transform(5, 6, 0.5, 2, 2))]
    )
    loaded = Document()
    loaded.load_object(io.BytesIO(_saved_bytes(original)))
    assert loaded.paintable_elements[0].transform == Transform()


def test_load_replaces_existing_elements():
    document = _sample_document()
    document.load_object(io.BytesIO(_saved_bytes(Document())))
    assert document.paintable_elements == []


def test_load_without_entry_leaves_document_unchanged():
    document = _sample_document()
    before = list(document.paintable_elements)
    document.load_object(io.BytesIO(_zip_bytes({"other.xml": "<MSCDocument/>"})))
    assert document.paintable_elements == before


def test_load_of_non_zip_leaves_document_unchanged():
    document = _sample_document()
    before = list(document.paintable_elements)
    document.load_object(io.BytesIO(b"not an archive"))
    assert document.paintable_elements == before


def test_unknown_element_type_raises():
    xml = '<MSCDocument version="1.0"><Object type="Text" colour="#000000"><Transform/></Object></MSCDocument>'
    with pytest.raises(ElementTypeError):
        Document().load_object(io.BytesIO(_zip_bytes({"MSCDocument.xml": xml})))


def test_other_and_childless_nodes_are_skipped():
    xml = (
        '<MSCDocument version="1.0">'
        '<Other type="Rect" colour="#000000"><Rect/></Other>'
        '<Object type="Rect" colour="#000000"/>'
        '<Object type="Rect" colour="#FF0000"><Rect x="1" y="2" width="3" height="4"/></Object>'
        "</MSCDocument>"
    )
    document = Document()
    document.load_object(io.BytesIO(_zip_bytes({"MSCDocument.xml": xml})))
    assert [pe.element for pe in document.paintable_elements] == [
        Rect(rect=Bounds(1, 2, 3, 4), colour=Colour(255, 0, 0))
    ]


def test_file_round_trip(tmp_path):
    path = tmp_path / "drawing.pxz"
    original = _sample_document()
    original.save_file(path)
    loaded = Document()
    loaded.load_file(path)
    assert [pe.element for pe in loaded.paintable_elements] == [
        pe.element for pe in original.paintable_elements
    ]
    assert [pe.bounds for pe in loaded.paintable_elements] == [
        pe.bounds for pe in original.paintable_elements
    ]