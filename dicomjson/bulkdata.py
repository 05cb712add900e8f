""" bulk data URIs: deferred references to binary element values

format: <root>?offset=<offset>&length=<length>
"""
# coding=utf-8
import re
from typing import NamedTuple

RE_BULKDATA_URI = re.compile(r"\?offset=(\d+)&length=(\d+)")


class BulkDataRange(NamedTuple):
    offset: int
    length: int


def build_bulkdata_uri(root, offset, length):
    """return bulk data URI for `length` bytes at `offset` of the source"""
    if offset < 0 or length < 0:
        raise ValueError(f"Invalid bulk data range: offset={offset}, length={length}")
    return f"{root or ''}?offset={offset}&length={length}"


def parse_bulkdata_uri(uri):
    """return BulkDataRange of bulk data URI, or None

    The last occurrence wins: the root may hold a query of its own.
    """
    matches = RE_BULKDATA_URI.findall(uri)
    if not matches:
        return None
    offset, length = matches[-1]
    return BulkDataRange(int(offset), int(length))


def read_bulkdata(buffer, uri):
    """return bytes referenced by bulk data URI in source buffer"""
    span = parse_bulkdata_uri(uri)
    if span is None:
        raise ValueError(f"Invalid bulk data URI: {uri}")
    end = span.offset + span.length
    if end > len(buffer):
        raise IndexError(f"Bulk data range [{span.offset}, {end}) exceeds source ({len(buffer)} bytes)")
    return bytes(buffer[span.offset : end])
