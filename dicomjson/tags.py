""" DICOM tag notations and tag dictionary """
# coding=utf-8
import re
import json
import logging
import threading
from typing import NamedTuple, Optional

import pydicom

from .errors import TagDictionaryError

LOGGER = logging.getLogger(__name__)

# accepted notations: x00080060, 0x00080060, (0008,0060), 00080060
RE_PREFIXED = re.compile(r"^(?:0x|x)([0-9a-f]{8})$", re.IGNORECASE)
RE_GROUPED = re.compile(r"^\(([0-9a-f]{4}),\s*([0-9a-f]{4})\)$", re.IGNORECASE)
RE_CANONICAL = re.compile(r"^[0-9a-f]{8}$", re.IGNORECASE)
RE_CANONICAL_STRICT = re.compile(r"^[0-9a-f]{8}$")


def normalize_tag(tag):
    """return canonical 8-hex-digit lowercase tag, or `tag` unchanged if its
    notation is not recognized"""
    if not isinstance(tag, str):
        return tag
    match = RE_PREFIXED.match(tag)
    if match:
        return match.group(1).lower()
    match = RE_GROUPED.match(tag)
    if match:
        return (match.group(1) + match.group(2)).lower()
    if RE_CANONICAL.match(tag):
        return tag.lower()
    return tag


def is_canonical(tag):
    return isinstance(tag, str) and RE_CANONICAL_STRICT.match(tag) is not None


def format_tag(group, element):
    """canonical tag from group and element numbers"""
    return f"{group:04x}{element:04x}"


def split_tag(tag):
    """return (group, element) numbers of a tag, or None"""
    tag = normalize_tag(tag)
    if not is_canonical(tag):
        return None
    return int(tag[:4], 16), int(tag[4:], 16)


class TagEntry(NamedTuple):
    """tag dictionary entry"""

    keyword: str
    vr: Optional[str] = None


def load_pydicom_dictionary():
    """build tag table from pydicom's data dictionary"""
    table = {}
    for tag, (vr, _vm, _name, _retired, keyword) in pydicom.datadict.DicomDictionary.items():
        if not keyword:
            continue
        # ambiguous VRs (eg. "US or SS"): keep first alternative
        vr = vr.split(" or ")[0] or None
        table[format_tag(tag >> 16, tag & 0xFFFF)] = TagEntry(keyword, vr)
    return table


def load_json_dictionary(path):
    """load tag table from a JSON file:
    {"00080060": {"keyword": "Modality", "vr": "CS"}, ...}
    """
    with open(path, encoding="utf-8") as fp:
        content = json.load(fp)
    if not isinstance(content, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    table = {}
    for tag, entry in content.items():
        if not isinstance(entry, dict) or not entry.get("keyword"):
            raise ValueError(f"Invalid entry for tag {tag}: {entry!r}")
        table[normalize_tag(tag)] = TagEntry(entry["keyword"], entry.get("vr") or None)
    return table


class TagDictionary:
    """tag -> (keyword, VR) lookup table, loaded once on first use

    loader: callable returning a mapping of canonical tags to TagEntry
    """

    def __init__(self, loader=load_pydicom_dictionary):
        self._loader = loader
        self._entries = None
        self._lock = threading.Lock()

    def __repr__(self):
        if self._entries is None:
            return "TagDictionary(<not loaded>)"
        return f"TagDictionary({len(self._entries)})"

    def __len__(self):
        return len(self.load())

    def __contains__(self, tag):
        return self.lookup(tag) is not None

    @property
    def loaded(self):
        return self._entries is not None

    def load(self):
        """load table (once) and return it"""
        entries = self._entries
        if entries is not None:
            return entries
        with self._lock:
            if self._entries is None:
                LOGGER.debug("Loading tag dictionary")
                try:
                    entries = dict(self._loader())
                except Exception as exc:
                    raise TagDictionaryError(f"Could not load tag dictionary: {exc}") from exc
                if not entries:
                    raise TagDictionaryError("Tag dictionary is empty")
                LOGGER.info("Tag dictionary loaded (%s entries)", len(entries))
                self._entries = entries
        return self._entries

    def lookup(self, tag):
        """return TagEntry for tag, or None"""
        return self.load().get(normalize_tag(tag))

    def keyword(self, tag, default=None):
        entry = self.lookup(tag)
        return entry.keyword if entry else default

    def vr(self, tag, default=None):
        entry = self.lookup(tag)
        if entry is None or not entry.vr:
            return default
        return entry.vr


_DEFAULT_DICTIONARY = None
_DEFAULT_LOCK = threading.Lock()


def get_default_dictionary():
    """process-wide shared TagDictionary"""
    global _DEFAULT_DICTIONARY
    with _DEFAULT_LOCK:
        if _DEFAULT_DICTIONARY is None:
            _DEFAULT_DICTIONARY = TagDictionary()
        return _DEFAULT_DICTIONARY
