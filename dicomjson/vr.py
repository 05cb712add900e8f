""" value representation (VR) classes """
# coding=utf-8
import enum
from typing import NamedTuple

import numpy as np


class VRClass(enum.Enum):
    """decoding class of a VR"""

    STRING = "string"
    NUMERIC = "numeric"
    BINARY = "binary"
    SEQUENCE = "sequence"
    UNKNOWN = "unknown"


class NumericType(NamedTuple):
    """fixed-width numeric VR"""

    size: int  # bytes per value
    dtype: str  # numpy type (native byte order)


BINARY_VRS = frozenset(["OB", "OD", "OF", "OW", "UN"])
STRING_VRS = frozenset(
    ["AE", "AS", "CS", "DA", "DS", "DT", "IS", "LO", "LT", "PN", "SH", "ST", "TM", "UI", "UT"]
)
SEQUENCE_VRS = frozenset(["SQ"])
NUMERIC_VRS = {
    "AT": NumericType(4, "u4"),
    "FL": NumericType(4, "f4"),
    "FD": NumericType(8, "f8"),
    "SL": NumericType(4, "i4"),
    "SS": NumericType(2, "i2"),
    "UL": NumericType(4, "u4"),
    "US": NumericType(2, "u2"),
}

UNKNOWN_VR = "UN"


def classify(vr):
    """return VRClass of VR code (UNKNOWN if not recognized)"""
    if vr in STRING_VRS:
        return VRClass.STRING
    elif vr in NUMERIC_VRS:
        return VRClass.NUMERIC
    elif vr in SEQUENCE_VRS:
        return VRClass.SEQUENCE
    elif vr in BINARY_VRS:
        return VRClass.BINARY
    return VRClass.UNKNOWN


def is_binary(vr):
    """binary payload, including unknown VRs"""
    return classify(vr) in (VRClass.BINARY, VRClass.UNKNOWN)


def numeric_dtype(vr, little_endian=True):
    """numpy dtype of a numeric VR"""
    return np.dtype(("<" if little_endian else ">") + NUMERIC_VRS[vr].dtype)


def resolve_vr(element, dictionary):
    """element's VR, else dictionary's VR, else UN"""
    if element.vr:
        return element.vr
    return dictionary.vr(element.tag, default=UNKNOWN_VR)
