""" pytest configuration """
# coding=utf-8

from io import BytesIO
import pytest
import pydicom
from pydicom.dataset import FileMetaDataset
from pydicom.sequence import Sequence
from pydicom.uid import ExplicitVRLittleEndian

from dicomjson.dataset import Dataset, Element, UNDEFINED_LENGTH
from dicomjson.tags import TagDictionary, TagEntry

PIXELS = bytes(range(32))
ICON_PIXELS = bytes([1, 2, 3, 4, 5, 6, 7, 8])
PRIVATE_BYTES = b"\xca\xfe\xba\xbe"

TAGS = {
    "00080060": TagEntry("Modality", "CS"),
    "00100010": TagEntry("PatientName", "PN"),
    "00280010": TagEntry("Rows", "US"),
    "00280030": TagEntry("PixelSpacing", "DS"),
    "00082218": TagEntry("AnatomicRegionSequence", "SQ"),
    "00080100": TagEntry("CodeValue", "SH"),
    "7fe00010": TagEntry("PixelData", "OW"),
    "00020010": TagEntry("TransferSyntaxUID", "UI"),
    "00181310": TagEntry("AcquisitionMatrix", None),
}


class DatasetBuilder:
    """build in-memory datasets, items sharing the same buffer"""

    def __init__(self, buffer=None):
        self.buffer = bytearray() if buffer is None else buffer
        self.elements = {}

    def add(self, tag, vr, value=b"", length=None, **kwargs):
        if isinstance(value, str):
            value = value.encode("utf-8")
        offset = len(self.buffer)
        self.buffer.extend(value)
        length = len(value) if length is None else length
        self.elements[tag] = Element(tag, vr, length, offset, **kwargs)
        return self

    def add_sequence(self, tag, items, vr="SQ", length=UNDEFINED_LENGTH):
        self.elements[tag] = Element(tag, vr, length, len(self.buffer), items=items)
        return self

    def item(self):
        """builder for a sequence item"""
        return DatasetBuilder(self.buffer)

    def build(self):
        return Dataset(self.elements, self.buffer)


@pytest.fixture()
def builder():
    """ dataset builder """
    return DatasetBuilder()


@pytest.fixture(scope="session")
def dictionary():
    """ small tag dictionary """
    return TagDictionary(lambda: TAGS)


@pytest.fixture()
def dicombytes():
    """ DICOM file content written with pydicom """
    ds = pydicom.Dataset()
    ds.file_meta = FileMetaDataset()
    ds.file_meta.MediaStorageSOPClassUID = "1.2.840.10008.5.1.4.1.1.4"
    ds.file_meta.MediaStorageSOPInstanceUID = "1.2.3.4"
    ds.file_meta.TransferSyntaxUID = ExplicitVRLittleEndian

    ds.SOPClassUID = "1.2.840.10008.5.1.4.1.1.4"
    ds.SOPInstanceUID = "1.2.3.4"
    ds.Modality = "MR"
    ds.PatientName = "Doe^John"
    ds.ImageType = ["ORIGINAL", "PRIMARY"]
    ds.Rows = 4
    ds.Columns = 4
    ds.PixelSpacing = [0.5, 0.5]

    region = pydicom.Dataset()
    region.CodeValue = "T-A0100"
    region.CodeMeaning = "Brain"
    ds.AnatomicRegionSequence = Sequence([region])

    icon = pydicom.Dataset()
    icon.Rows = 2
    icon.add_new(0x7FE00010, "OW", ICON_PIXELS)
    ds.IconImageSequence = Sequence([icon])

    ds.add_new(0x00290010, "LO", "ACME")
    ds.add_new(0x00291010, "OB", PRIVATE_BYTES)
    ds.add_new(0x7FE00010, "OW", PIXELS)

    fp = BytesIO()
    pydicom.dcmwrite(fp, ds, enforce_file_format=True)
    return fp.getvalue()


@pytest.fixture()
def dicomfile(dicombytes, tmpdir):
    """ DICOM file path """
    path = tmpdir.join("IMAGE.DCM")
    path.write_binary(dicombytes)
    return str(path)


@pytest.fixture()
def notdicomfile(tmpdir):
    path = tmpdir.join("notdicom.txt")
    path.write("not a DICOM file")
    return str(path)
