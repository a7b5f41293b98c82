"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from dotenv import load_dotenv

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")

RESOURCES = Path(__file__).parent / "resources"


def read_resource(name: str) -> str:
    """Return the content of a file under tests/resources."""
    with open(RESOURCES / name, "r", encoding="utf-8") as fopen:
        return fopen.read()


@pytest.fixture
def load_doc():
    """Parse a fixture with html.parser, which keeps every whitespace text node."""

    def _load(name: str) -> BeautifulSoup:
        return BeautifulSoup(read_resource(name), "html.parser")

    return _load
