"""PyTest fixtures for Starchart's collectors

This defines the PyTest fixtures that can be used by all the collector tests.

:Module: starchart.tests.collectors.conftest
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
# pylint: disable=redefined-outer-name,unused-argument
from typing import Any, Dict, Generator, List, Tuple
from unittest import mock
from unittest.mock import MagicMock

import pytest

import tests.collectors.testing_plugins
from starchart.cli.components import StarchartCliLoader
from starchart.collectors.loader import StarchartCollectorLoader
from starchart.utils.sinks import Sink


class MemorySink(Sink):
    """A sink that keeps everything in a dictionary so that tests can look at it."""

    def __init__(self):
        self.saved: Dict[str, str] = {}
        self.calls: List[Tuple[str, str]] = []

    def save_content(self, name: str, content: str) -> None:
        self.saved[name] = content
        self.calls.append((name, content))


@pytest.fixture
def memory_sink() -> MemorySink:
    """Returns an in-memory sink."""
    return MemorySink()


@pytest.fixture
def test_collector_loader(test_configuration: Dict[str, Any]) -> StarchartCollectorLoader:
    """This is a fixture that will return a StarchartCollectorLoader instance with the paths set to the testing plugin paths."""
    loader = StarchartCollectorLoader()
    loader._collector_path = tests.collectors.testing_plugins.__path__
    loader._collector_prefix = tests.collectors.testing_plugins.__name__ + "."

    return loader


@pytest.fixture
def test_cli_loader(test_collector_loader: StarchartCollectorLoader) -> Generator[StarchartCliLoader, None, None]:
    """Mocks out the CLI loader -- this also sets up the test collector loader"""
    with mock.patch("starchart.cli.components.STARCHART_COLLECTORS", test_collector_loader):
        new_cli_loader = StarchartCliLoader()
        new_cli_loader._collector_path = test_collector_loader._collector_path
        new_cli_loader._collector_prefix = test_collector_loader._collector_prefix

        with mock.patch("starchart.cli.components.STARCHART_CLI_LOADER", new_cli_loader):
            yield new_cli_loader


@pytest.fixture
def mock_loader_logger() -> Generator[MagicMock, None, None]:
    """This will mock out the logger that is used during the collector loading and return a MagicMock for tests to verify that log entries are being made."""
    with mock.patch("starchart.collectors.loader.LOGGER") as mock_logger:
        yield mock_logger
