""" parsed DICOM datasets: elements with value positions in the source buffer """
# coding=utf-8
import struct
import logging
from io import BytesIO
from collections.abc import Mapping

import pydicom
from pydicom.dataelem import RawDataElement, convert_raw_data_element
from pydicom.valuerep import EXPLICIT_VR_LENGTH_32

from .tags import normalize_tag, split_tag, format_tag

LOGGER = logging.getLogger(__name__)

UNDEFINED_LENGTH = 0xFFFFFFFF


class Element:
    """DICOM element

    tag: canonical tag
    vr: VR code, or None (implicit VR)
    length: byte length of the value
    data_offset: position of the value in the source buffer
    items: list of Dataset for sequences
    private: private flag from the parser, or None
    """

    def __init__(
        self,
        tag,
        vr=None,
        length=0,
        data_offset=0,
        items=None,
        little_endian=True,
        private=None,
    ):
        self.tag = normalize_tag(tag)
        self.vr = vr or None
        self.length = length
        self.data_offset = data_offset
        self.items = items
        self.little_endian = little_endian
        self.private = private

    def __repr__(self):
        return (
            f"Element({self.tag} {self.vr or '??'}, "
            f"offset={self.data_offset}, length={self.length})"
        )

    @property
    def is_private(self):
        if self.private is not None:
            return self.private
        numbers = split_tag(self.tag)
        return numbers is not None and numbers[0] % 2 == 1


class Dataset(Mapping):
    """read-only mapping tag -> Element, sharing the source buffer"""

    def __init__(self, elements, buffer=b""):
        if not isinstance(elements, Mapping):
            elements = {element.tag: element for element in elements}
        self._elements = dict(elements)
        self.buffer = buffer

    def __getitem__(self, tag):
        return self._elements[tag]

    def __iter__(self):
        return iter(self._elements)

    def __len__(self):
        return len(self._elements)

    def __repr__(self):
        return f"Dataset({len(self)} elements)"

    def value_bytes(self, element):
        """raw bytes of element's value"""
        start = element.data_offset
        return bytes(self.buffer[start : start + element.length])


#
# pydicom adapter


def read_dataset(buffer, **parser_options):
    """parse DICOM bytes with pydicom"""
    LOGGER.debug("Parsing DICOM buffer (%s bytes)", len(buffer))
    dataset = pydicom.dcmread(BytesIO(buffer), **parser_options)
    return from_pydicom(dataset, buffer)


def from_pydicom(dataset, buffer):
    """convert a pydicom dataset read from `buffer`, file meta included"""
    elements = {}
    file_meta = getattr(dataset, "file_meta", None)
    if file_meta:
        elements.update(_convert_elements(file_meta, buffer, 0, (False, True)))
    elements.update(_convert_elements(dataset, buffer, 0))
    return Dataset(elements, buffer)


def _convert_elements(dataset, buffer, base, encoding=None):
    """elements of a pydicom dataset

    base: position of the stream the dataset was read from in `buffer`
    """
    implicit, little = encoding or _original_encoding(dataset)
    elements = {}
    for elem in dataset.elements():
        tag = format_tag(elem.tag.group, elem.tag.element)
        if isinstance(elem, RawDataElement):
            element = _convert_raw(dataset, elem, buffer, base)
        else:
            element = _convert_converted(elem, buffer, base, implicit, little)
        elements[tag] = element
    return elements


def _convert_raw(dataset, raw, buffer, base):
    vr = raw.VR
    length = raw.length
    if length == UNDEFINED_LENGTH and raw.value is not None and not _is_sequence(raw):
        # encapsulated/undefined length value: actual length
        length = len(raw.value)

    items = None
    if _is_sequence(raw):
        # items are parsed from the sequence value alone:
        # their positions are relative to it
        sequence = convert_raw_data_element(raw, ds=dataset).value
        items = [_convert_item(item, buffer, base + raw.value_tell) for item in sequence]

    return Element(
        format_tag(raw.tag.group, raw.tag.element),
        vr,
        length,
        base + raw.value_tell,
        items,
        little_endian=raw.is_little_endian,
        private=raw.tag.is_private,
    )


def _convert_converted(elem, buffer, base, implicit, little):
    """element already converted by pydicom (no raw length at hand)"""
    offset = base + (elem.file_tell or 0)
    items = None
    if elem.VR == "SQ":
        # undefined length sequences are read in place: same base
        items = [_convert_item(item, buffer, base) for item in elem.value]
        length = UNDEFINED_LENGTH if elem.is_undefined_length else _read_length(
            buffer, offset, elem.VR, implicit, little
        )
    elif elem.file_tell is None:
        length = 0
    else:
        length = _read_length(buffer, offset, elem.VR, implicit, little)

    return Element(
        format_tag(elem.tag.group, elem.tag.element),
        None if implicit else elem.VR,
        length,
        offset,
        items,
        little_endian=little,
        private=elem.tag.is_private,
    )


def _convert_item(item, buffer, base):
    return Dataset(_convert_elements(item, buffer, base), buffer)


def _is_sequence(raw):
    if raw.VR:
        return raw.VR == "SQ"
    try:
        return pydicom.datadict.dictionary_VR(raw.tag) == "SQ"
    except KeyError:
        return False


def _original_encoding(dataset):
    implicit, little = dataset.original_encoding
    if implicit is None:
        return False, True
    return implicit, little


def _read_length(buffer, offset, vr, implicit, little):
    """read value length from the element header preceding `offset`"""
    endian = "<" if little else ">"
    if implicit or vr in EXPLICIT_VR_LENGTH_32:
        return struct.unpack_from(endian + "L", buffer, offset - 4)[0]
    return struct.unpack_from(endian + "H", buffer, offset - 2)[0]
