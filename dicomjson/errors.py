""" dicomjson exceptions """
# coding=utf-8


class DicomJsonError(Exception):
    """base class for dicomjson errors"""


class TagDictionaryError(DicomJsonError):
    """raise when the tag dictionary cannot be loaded"""


class ConfigurationError(DicomJsonError, ValueError):
    """raise when output options are invalid"""


class InvalidSourceError(DicomJsonError, TypeError):
    """raise when a reader is given the wrong kind of input"""


class DecodeWarning(UserWarning):
    """malformed element value, decoded as far as possible"""
