""" output options and their configuration sources """
# coding=utf-8
import os
import re
import json
import logging
import dataclasses

from .errors import ConfigurationError

LOGGER = logging.getLogger(__name__)

# configuration sources, by precedence
CONFIG_ENV_VAR = "DICOMJSON_CONFIG"  # JSON text
CONFIG_FILE_ENV_VAR = "DICOMJSON_CONFIG_FILE"  # path to JSON file

# section of a configuration document holding the output options
CONFIG_SECTION = "jsonOutput"


@dataclasses.dataclass(frozen=True)
class OutputOptions:
    """JSON output options"""

    # use a list, even for a single numeric value
    use_array_with_single_value: bool = False
    # skip group length elements (gggg,0000)
    ignore_group_length: bool = True
    # skip file meta elements (0002,eeee)
    ignore_meta_header: bool = False
    # skip private elements (odd groups)
    ignore_private: bool = False
    # skip binary elements
    ignore_binary: bool = False
    # use dictionary keywords instead of tags as keys
    use_common_names: bool = True
    # use the source's path as bulk data root
    explicit_bulk_data_root: bool = False
    # prefix of bulk data URIs
    bulk_data_root: str = ""

    @classmethod
    def from_dict(cls, mapping):
        """make options from a mapping with snake_case or camelCase keys"""
        if not isinstance(mapping, dict):
            raise ConfigurationError(f"Expected a mapping of options, got: {mapping!r}")
        fields = {field.name: field for field in dataclasses.fields(cls)}
        values = {}
        for key, value in mapping.items():
            name = snake_case(key)
            if name not in fields:
                raise ConfigurationError(f"Unknown output option: {key}")
            expected = fields[name].type
            if not isinstance(value, {"bool": bool, "str": str}.get(expected, expected)):
                raise ConfigurationError(f"Invalid value for option {key}: {value!r}")
            values[name] = value
        return cls(**values)

    def to_dict(self):
        return dataclasses.asdict(self)

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    def for_source(self, source):
        """resolve the bulk data root for a given source path/URI"""
        if self.bulk_data_root:
            return self
        if self.explicit_bulk_data_root and source:
            return self.replace(bulk_data_root=str(source))
        return self


def snake_case(name):
    """useCommonNames -> use_common_names"""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def load_options(environ=None):
    """load output options from environment variable, file or defaults"""
    environ = os.environ if environ is None else environ

    text = environ.get(CONFIG_ENV_VAR, "").strip()
    if text:
        LOGGER.debug("Loading options from %s", CONFIG_ENV_VAR)
        try:
            document = json.loads(text)
        except ValueError as exc:
            raise ConfigurationError(f"Failed to parse {CONFIG_ENV_VAR}: {exc}") from exc
        return options_from_document(document)

    filename = environ.get(CONFIG_FILE_ENV_VAR, "").strip()
    if filename:
        LOGGER.debug("Loading options from file: %s", filename)
        return load_options_file(filename)

    LOGGER.debug("Using default options")
    return OutputOptions()


def load_options_file(filename):
    """load output options from JSON file"""
    try:
        with open(filename, encoding="utf-8") as fp:
            document = json.load(fp)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Configuration file not found: {filename}") from exc
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Failed to read configuration file {filename}: {exc}") from exc
    return options_from_document(document)


def options_from_document(document):
    """options from a configuration document, or from its 'jsonOutput' section"""
    if isinstance(document, dict) and CONFIG_SECTION in document:
        document = document[CONFIG_SECTION]
    return OutputOptions.from_dict(document)
