""" test output options """
# coding=utf-8

import json
import pytest

from dicomjson import config
from dicomjson.config import OutputOptions
from dicomjson.errors import ConfigurationError


def test_defaults():
    options = OutputOptions()
    assert options.use_array_with_single_value is False
    assert options.ignore_group_length is True
    assert options.ignore_meta_header is False
    assert options.ignore_private is False
    assert options.ignore_binary is False
    assert options.use_common_names is True
    assert options.explicit_bulk_data_root is False
    assert options.bulk_data_root == ""

    with pytest.raises(AttributeError):
        options.ignore_binary = True


def test_from_dict():
    options = OutputOptions.from_dict({"ignoreBinary": True, "use_common_names": False})
    assert options.ignore_binary is True
    assert options.use_common_names is False
    assert options.ignore_group_length is True

    options = OutputOptions.from_dict({"bulkDataRoot": "gs://bucket/file.dcm"})
    assert options.bulk_data_root == "gs://bucket/file.dcm"
    assert OutputOptions.from_dict(options.to_dict()) == options

    with pytest.raises(ConfigurationError):
        OutputOptions.from_dict({"ignoreEverything": True})
    with pytest.raises(ConfigurationError):
        OutputOptions.from_dict({"ignoreBinary": "yes"})
    with pytest.raises(ConfigurationError):
        OutputOptions.from_dict({"bulkDataRoot": 1})
    with pytest.raises(ValueError):
        OutputOptions.from_dict(["ignoreBinary"])


def test_snake_case():
    assert config.snake_case("useArrayWithSingleValue") == "use_array_with_single_value"
    assert config.snake_case("ignore_private") == "ignore_private"


def test_for_source():
    options = OutputOptions()
    assert options.for_source("/data/file.dcm").bulk_data_root == ""

    options = OutputOptions(explicit_bulk_data_root=True)
    assert options.for_source("/data/file.dcm").bulk_data_root == "/data/file.dcm"
    assert options.for_source(None).bulk_data_root == ""

    options = OutputOptions(explicit_bulk_data_root=True, bulk_data_root="gs://b/f.dcm")
    assert options.for_source("/data/file.dcm").bulk_data_root == "gs://b/f.dcm"


def test_load_options(tmpdir):
    # defaults
    assert config.load_options({}) == OutputOptions()
    assert config.load_options({config.CONFIG_ENV_VAR: " "}) == OutputOptions()

    # environment variable
    environ = {config.CONFIG_ENV_VAR: json.dumps({"jsonOutput": {"ignoreBinary": True}})}
    assert config.load_options(environ) == OutputOptions(ignore_binary=True)

    environ = {config.CONFIG_ENV_VAR: json.dumps({"ignorePrivate": True})}
    assert config.load_options(environ) == OutputOptions(ignore_private=True)

    # file
    path = tmpdir.join("config.json")
    path.write(json.dumps({"src": "FILE", "jsonOutput": {"useCommonNames": False}}))
    environ = {config.CONFIG_FILE_ENV_VAR: str(path)}
    assert config.load_options(environ) == OutputOptions(use_common_names=False)

    # environment variable first
    environ[config.CONFIG_ENV_VAR] = json.dumps({"jsonOutput": {"ignoreBinary": True}})
    assert config.load_options(environ) == OutputOptions(ignore_binary=True)


def test_load_options_errors(tmpdir):
    with pytest.raises(ConfigurationError):
        config.load_options({config.CONFIG_ENV_VAR: "{invalid"})

    missing = str(tmpdir.join("missing.json"))
    with pytest.raises(ConfigurationError):
        config.load_options({config.CONFIG_FILE_ENV_VAR: missing})

    path = tmpdir.join("config.json")
    path.write("not json")
    with pytest.raises(ConfigurationError):
        config.load_options({config.CONFIG_FILE_ENV_VAR: str(path)})

    path.write(json.dumps({"jsonOutput": {"ignoreBinary": 1}}))
    with pytest.raises(ConfigurationError):
        config.load_options({config.CONFIG_FILE_ENV_VAR: str(path)})
