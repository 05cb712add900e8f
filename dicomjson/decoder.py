""" element value decoding, by VR class """
# coding=utf-8
import logging
import warnings
from typing import NamedTuple

import numpy as np

from .vr import VRClass, NUMERIC_VRS, classify, numeric_dtype, resolve_vr
from .bulkdata import build_bulkdata_uri
from .errors import DecodeWarning

LOGGER = logging.getLogger(__name__)


class DecodeIssue(NamedTuple):
    """recoverable problem met while decoding an element"""

    tag: str
    vr: str
    message: str


class ValueDecoder:
    """convert element values to JSON-able values"""

    def __init__(self, options, dictionary):
        self.options = options
        self.dictionary = dictionary
        self.issues = []

    def decode(self, dataset, element, serialize=None):
        """decode element of dataset

        serialize: callable(Dataset) -> dict, used for sequence items
        """
        vr = resolve_vr(element, self.dictionary)
        vr_class = classify(vr)

        if vr_class is VRClass.STRING:
            return self.decode_string(dataset, element)
        elif vr_class is VRClass.NUMERIC:
            return self.decode_numeric(dataset, element, vr)
        elif vr_class is VRClass.SEQUENCE:
            return self.decode_sequence(element, serialize)
        elif vr_class in (VRClass.BINARY, VRClass.UNKNOWN):
            return self.decode_bulkdata(element)
        raise ValueError(f"Unknown VR class: {vr_class}")

    def decode_string(self, dataset, element):
        """text value, multiple values kept with their delimiters"""
        text = dataset.value_bytes(element).decode("utf-8", errors="replace")
        return text.split("\x00", 1)[0].strip()

    def decode_numeric(self, dataset, element, vr):
        """number or list of numbers"""
        size = NUMERIC_VRS[vr].size
        count, remainder = divmod(element.length, size)
        if remainder:
            self.report(
                element,
                vr,
                f"length {element.length} is not a multiple of {size}: "
                f"{remainder} trailing byte(s) dropped",
            )
        data = dataset.value_bytes(element)
        if len(data) < count * size:
            self.report(element, vr, f"value truncated in source ({len(data)} bytes)")
            count = len(data) // size

        dtype = numeric_dtype(vr, element.little_endian)
        values = np.frombuffer(data, dtype=dtype, count=count).tolist() if count else []
        if len(values) == 1 and not self.options.use_array_with_single_value:
            return values[0]
        return values

    def decode_bulkdata(self, element, length=None):
        """reference to the value in the source, never the bytes"""
        if length is None:
            length = element.length
        uri = build_bulkdata_uri(self.options.bulk_data_root, element.data_offset, length)
        return {"BulkDataURI": uri}

    def decode_sequence(self, element, serialize):
        """list of serialized items"""
        if serialize is None:
            raise ValueError(f"Cannot decode sequence {element.tag} without serializer")
        items = element.items or []
        LOGGER.debug("Decode sequence %s (%s items)", element.tag, len(items))
        return [serialize(item) for item in items]

    def report(self, element, vr, message):
        issue = DecodeIssue(element.tag, vr, message)
        self.issues.append(issue)
        warnings.warn(f"Element {element.tag} ({vr}): {message}", DecodeWarning)
