from collections.abc import Iterator
from unittest.mock import patch

import pytest

from kilo.config import Config

from .utils import FakeTerminal

# Always use default config in tests


@pytest.fixture(autouse=True)
def config() -> Iterator[Config]:
    config = Config()
    with patch("kilo.get_config", return_value=config):
        yield config


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal()
