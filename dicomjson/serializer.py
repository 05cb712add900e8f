""" DICOM dataset to JSON-able mapping """
# coding=utf-8
import logging

from .config import OutputOptions
from .decoder import ValueDecoder
from .filters import should_exclude
from .tags import normalize_tag, get_default_dictionary
from .vr import VRClass, classify, resolve_vr

LOGGER = logging.getLogger(__name__)

# deepest sequence nesting serialized; deeper sequences are kept as bulk data
MAX_SEQUENCE_DEPTH = 64


class DatasetSerializer:
    """serialize datasets into {key: value} mappings

    Values are:
        * str for string VRs (multiple values keep their '\\' delimiters)
        * number, or list of numbers, for numeric VRs
        * {"BulkDataURI": "<root>?offset=<offset>&length=<length>"} for binary
          and unknown VRs, and for sequences nested deeper than `max_depth`
        * list of mappings for sequences
    """

    def __init__(self, options=None, dictionary=None, *, max_depth=MAX_SEQUENCE_DEPTH):
        self.options = options if options is not None else OutputOptions()
        self.dictionary = dictionary if dictionary is not None else get_default_dictionary()
        self.max_depth = max_depth
        self.decoder = ValueDecoder(self.options, self.dictionary)

    @property
    def issues(self):
        """recoverable decoding issues met by the last call to serialize"""
        return self.decoder.issues

    def serialize(self, dataset):
        """serialize dataset"""
        LOGGER.debug("Serialize dataset (%s elements)", len(dataset))
        self.decoder.issues = []
        return self._serialize(dataset, 0)

    def output_key(self, tag):
        """keyword or canonical tag"""
        if self.options.use_common_names:
            return self.dictionary.keyword(tag, default=tag)
        return tag

    def _serialize(self, dataset, depth):
        def serialize_item(item):
            return self._serialize(item, depth + 1)

        values = {}
        for key in sorted(dataset, key=normalize_tag):
            element = dataset[key]
            if should_exclude(self.options, element, self.dictionary):
                continue
            name = self.output_key(normalize_tag(key))
            if depth >= self.max_depth and self._is_sequence(element):
                values[name] = self._truncate(dataset, element)
                continue
            values[name] = self.decoder.decode(dataset, element, serialize_item)
        return values

    def _is_sequence(self, element):
        return classify(resolve_vr(element, self.dictionary)) is VRClass.SEQUENCE

    def _truncate(self, dataset, element):
        """reference to a sequence too deep to serialize"""
        LOGGER.debug("Sequence %s nested deeper than %s levels", element.tag, self.max_depth)
        self.decoder.report(
            element, "SQ", f"nested deeper than {self.max_depth} levels: kept as bulk data"
        )
        # undefined length: everything up to the end of the source
        length = min(element.length, max(len(dataset.buffer) - element.data_offset, 0))
        return self.decoder.decode_bulkdata(element, length=length)


def to_json(dataset, options=None, dictionary=None):
    """serialize dataset with a one-off serializer"""
    return DatasetSerializer(options, dictionary).serialize(dataset)
