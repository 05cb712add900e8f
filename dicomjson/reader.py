""" read DICOM files/buffers and convert them to JSON-able mappings """
# coding=utf-8
import os
import logging

import pydicom

from .bulkdata import read_bulkdata
from .config import OutputOptions
from .dataset import read_dataset
from .errors import InvalidSourceError
from .serializer import DatasetSerializer

LOGGER = logging.getLogger(__name__)

# exceptions
InvalidDicomError = pydicom.errors.InvalidDicomError


class DicomBuffer:
    """DICOM object held in memory"""

    _dataset = None

    def __init__(self, buffer, source=None, **parser_options):
        """parser_options: passed to pydicom.dcmread"""
        if not isinstance(buffer, (bytes, bytearray, memoryview)):
            raise InvalidSourceError(f"Expected bytes, got: {type(buffer).__name__}")
        self.buffer = bytes(buffer)
        self.source = source
        self.parser_options = parser_options
        self.issues = []

    def __repr__(self):
        return f"{type(self).__name__}({self.source or '<memory>'}, {len(self.buffer)} bytes)"

    def parse(self):
        """return parsed Dataset"""
        if self._dataset is None:
            LOGGER.debug("%s: parse", self)
            self._dataset = read_dataset(self.buffer, **self.parser_options)
        return self._dataset

    @property
    def dataset(self):
        return self.parse()

    def to_json(self, options=None, dictionary=None):
        """serialize DICOM object"""
        options = options if options is not None else OutputOptions()
        serializer = DatasetSerializer(options.for_source(self.source), dictionary)
        values = serializer.serialize(self.parse())
        self.issues = list(serializer.issues)
        return values

    def bulkdata(self, uri):
        """bytes referenced by a bulk data URI"""
        return read_bulkdata(self.buffer, uri)


class DicomFile(DicomBuffer):
    """DICOM file"""

    def __init__(self, filename, **parser_options):
        if not isinstance(filename, (str, os.PathLike)):
            raise InvalidSourceError(f"Expected a file path, got: {type(filename).__name__}")
        filename = os.fspath(filename)
        if not pydicom.misc.is_dicom(filename):
            raise InvalidDicomError("Invalid DICOM file: %s" % filename)
        with open(filename, "rb") as fp:
            buffer = fp.read()
        super().__init__(buffer, source=filename, **parser_options)
