from types import SimpleNamespace

import pytest

from syringe.builders import create
from syringe.config import ROOT, RegistrySettings, is_valid_separator
from syringe.errors import ConfigurationError


@pytest.mark.parametrize("candidate", [".", "#", "/", "*", ":"])
def test_valid_separators(candidate):
    assert is_valid_separator(candidate)


@pytest.mark.parametrize("candidate", ["A", "1", " ", "\t", "##", "", None, 4])
def test_invalid_separators(candidate):
    assert not is_valid_separator(candidate)


def test_default_settings():
    settings = RegistrySettings()

    assert settings.separator == "."
    assert settings.root is ROOT
    assert settings.max_bindings is None


def test_settings_from_mapping():
    root = SimpleNamespace()

    settings = RegistrySettings.from_mapping({"separator": "/", "root": root, "max_bindings": 2})

    assert settings == RegistrySettings("/", SimpleNamespace(), 2)
    assert settings.root is root


def test_settings_reject_unknown_keys():
    with pytest.raises(ConfigurationError, match="Unknown registry settings"):
        RegistrySettings.from_mapping({"delimiter": "/"})


def test_settings_reject_invalid_values():
    with pytest.raises(ConfigurationError, match="Invalid separator"):
        RegistrySettings(separator="ab")
    with pytest.raises(ConfigurationError, match="max_bindings"):
        RegistrySettings(max_bindings=0)


def test_registry_starts_with_configured_separator():
    registry = create({"a": {"b": 1}}, RegistrySettings(separator="/"))

    assert registry.separator() == "/"
    assert registry.get("a/b") == 1


def test_created_registries_share_settings(settings):
    parent = create(settings=settings)

    assert parent.create().settings is settings
