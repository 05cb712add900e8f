""" element exclusion rules """
# coding=utf-8
from .tags import split_tag
from .vr import is_binary, resolve_vr

# last tag of the file meta group
META_HEADER_END = 0x0002FFFF


def is_group_length(element):
    numbers = split_tag(element.tag)
    return numbers is not None and numbers[1] == 0x0000


def is_private(element):
    return element.is_private


def is_meta_header(element):
    numbers = split_tag(element.tag)
    return numbers is not None and (numbers[0] << 16 | numbers[1]) <= META_HEADER_END


def is_empty(element):
    return element.length == 0


def should_exclude(options, element, dictionary):
    """True if element must not be rendered"""
    return (
        is_empty(element)
        or (options.ignore_group_length and is_group_length(element))
        or (options.ignore_private and is_private(element))
        or (options.ignore_meta_header and is_meta_header(element))
        or (options.ignore_binary and is_binary(resolve_vr(element, dictionary)))
    )
