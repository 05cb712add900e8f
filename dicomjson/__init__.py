""" dicomjson: DICOM datasets to filterable JSON """
# coding=utf-8
from .version import __version__
from .config import OutputOptions, load_options
from .dataset import Dataset, Element, read_dataset
from .tags import TagDictionary, TagEntry, normalize_tag, get_default_dictionary
from .vr import VRClass, classify
from .bulkdata import build_bulkdata_uri, parse_bulkdata_uri, read_bulkdata
from .serializer import DatasetSerializer, to_json
from .reader import DicomBuffer, DicomFile, InvalidDicomError
from .errors import (
    DicomJsonError,
    TagDictionaryError,
    ConfigurationError,
    InvalidSourceError,
    DecodeWarning,
)
