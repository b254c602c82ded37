from types import SimpleNamespace

import pytest

from syringe.builders import create
from syringe.config import RegistrySettings


@pytest.fixture
def root() -> SimpleNamespace:
    return SimpleNamespace()


@pytest.fixture
def settings(root) -> RegistrySettings:
    return RegistrySettings(root=root)


@pytest.fixture
def make_registry(settings):
    def make(props=None):
        return create(props, settings)

    return make
