""" dicomjson cli """

# coding=utf-8
import sys
import json
import logging
import argparse

from . import config, reader, tags
from .errors import DicomJsonError


def cli(argv=None):
    """Entry point into command-line utility"""

    # make parser
    parser = argparse.ArgumentParser("dicomjson", description="DICOM to JSON utilities.")
    parser.add_argument(
        "-v", "--verbose", default=False, action="store_true", help="Show debug messages."
    )

    # add subprograms
    subparser = parser.add_subparsers()
    cli_dump(subparser)
    cli_bulkdata(subparser)
    cli_lookup(subparser)

    # parse arguments
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if "func" not in args:
        parser.print_help()
        return

    try:
        args.func(args)
    except (DicomJsonError, reader.InvalidDicomError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def cli_dump(subparser):
    """dump DICOM file to JSON"""

    help = "Dump the elements of a DICOM file to JSON."
    parser = subparser.add_parser("dump", help=help, description=help)
    parser.add_argument("src", help="Source DICOM file.")
    parser.add_argument(
        "--array",
        dest="use_array_with_single_value",
        action="store_const",
        const=True,
        help="Use arrays, even for single numeric values.",
    )
    parser.add_argument(
        "--keep-group-length",
        dest="ignore_group_length",
        action="store_const",
        const=False,
        help="Keep group length elements.",
    )
    parser.add_argument(
        "--ignore-meta-header",
        action="store_const",
        const=True,
        help="Skip file meta elements.",
    )
    parser.add_argument(
        "--ignore-private", action="store_const", const=True, help="Skip private elements."
    )
    parser.add_argument(
        "--ignore-binary", action="store_const", const=True, help="Skip binary elements."
    )
    parser.add_argument(
        "--tags",
        dest="use_common_names",
        action="store_const",
        const=False,
        help="Use tags instead of keywords as keys.",
    )
    parser.add_argument(
        "--explicit-bulkdata-root",
        dest="explicit_bulk_data_root",
        action="store_const",
        const=True,
        help="Prefix bulk data URIs with the source path.",
    )
    parser.add_argument(
        "--bulkdata-root", dest="bulk_data_root", metavar="ROOT", help="Prefix of bulk data URIs."
    )
    parser.add_argument("--indent", type=int, help="JSON indentation.")

    def _dump(args):
        options = config.load_options()
        changes = {
            name: getattr(args, name)
            for name in options.to_dict()
            if getattr(args, name, None) is not None
        }
        if changes:
            options = options.replace(**changes)

        dicomfile = reader.DicomFile(args.src)
        values = dicomfile.to_json(options)
        print(json.dumps(values, indent=args.indent))

    parser.set_defaults(func=_dump)


def cli_bulkdata(subparser):
    """extract bulk data"""

    help = "Extract the bytes referenced by a bulk data URI."
    parser = subparser.add_parser("bulkdata", help=help, description=help)
    parser.add_argument("src", help="Source DICOM file.")
    parser.add_argument("uri", help="Bulk data URI (eg. '?offset=512&length=1024').")
    parser.add_argument("-o", "--output", required=True, help="Destination file.")

    def _bulkdata(args):
        dicomfile = reader.DicomFile(args.src)
        data = dicomfile.bulkdata(args.uri)
        with open(args.output, "wb") as fp:
            fp.write(data)
        print(f"{len(data)} bytes were written to '{args.output}'")

    parser.set_defaults(func=_bulkdata)


def cli_lookup(subparser):
    """look up tags in dictionary"""

    help = "Show keyword and VR of DICOM tags."
    parser = subparser.add_parser("lookup", help=help, description=help)
    parser.add_argument("tags", nargs="+", help="Tags, eg. 00080060, x00080060 or (0008,0060).")

    def _lookup(args):
        dictionary = tags.get_default_dictionary()
        for tag in args.tags:
            tag = tags.normalize_tag(tag)
            entry = dictionary.lookup(tag)
            if entry is None:
                print(f"{tag}: unknown")
            else:
                print(f"{tag}: {entry.keyword} ({entry.vr or '??'})")

    parser.set_defaults(func=_lookup)


if __name__ == "__main__":
    cli()
