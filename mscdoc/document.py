"""A drawing document stored as a zipped XML file."""

from __future__ import annotations

import io
import os
import xml.etree.ElementTree as ET
import zipfile
from dataclasses import dataclass, field
from typing import BinaryIO

from mscdoc.elements import (
    DOCUMENT_NODE_NAME,
    OBJECT_NODE_NAME,
    VERSION_ATTRIBUTE,
    VERSION_VALUE,
    deserialize_element,
    deserialize_transform,
)
from mscdoc.paintable import PaintableElement

ENTRY_NAME = "MSCDocument.xml"


def _read_entry(data: bytes) -> bytes | None:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            for info in archive.infolist():
                if info.filename == ENTRY_NAME:
                    return archive.read(info)
    except zipfile.BadZipFile:
        return None
    return None


@dataclass
class Document:
    """The elements of one drawing."""

    paintable_elements: list[PaintableElement] = field(default_factory=list)

    def to_xml(self) -> ET.Element:
        root = ET.Element(DOCUMENT_NODE_NAME)
        root.set(VERSION_ATTRIBUTE, VERSION_VALUE)
        for paintable in self.paintable_elements:
            node = paintable.element.to_xml()
            node.append(paintable.serialize_transform())
            root.append(node)
        return root

    def save_object(self, stream: BinaryIO) -> BinaryIO:
        """Write the document to *stream* as a zip holding the XML."""
        data = ET.tostring(self.to_xml(), encoding="utf-8", xml_declaration=True)
        with zipfile.ZipFile(stream, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(ENTRY_NAME, data)
        return stream

    def load_object(self, stream: BinaryIO) -> BinaryIO:
        """Replace the elements with those read from *stream*.

        A stream without the document entry leaves the document unchanged.
        """
        xml_bytes = _read_entry(stream.read())
        if xml_bytes is None:
            return stream
        root = ET.fromstring(xml_bytes)
        self.paintable_elements.clear()
        for node in root:
            if node.tag != OBJECT_NODE_NAME:
                continue
            first_child = next(iter(node), None)
            if first_child is None:
                continue
            # The transform is read from the first child node of the object.
            transform = deserialize_transform(first_child)
            element = deserialize_element(node)
            self.paintable_elements.append(PaintableElement(element, transform))
        return stream

    def save_file(self, path: str | os.PathLike[str]) -> None:
        with open(path, "wb") as stream:
            self.save_object(stream)

    def load_file(self, path: str | os.PathLike[str]) -> None:
        with open(path, "rb") as stream:
            self.load_object(stream)