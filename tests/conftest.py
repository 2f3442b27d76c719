"""Shared test fixtures and helpers."""

import pytest

from regexrail.layout import LayoutEngine
from regexrail.models import Diagram
from regexrail.parser import parse


@pytest.fixture
def engine() -> LayoutEngine:
    """Layout engine with default configuration."""
    return LayoutEngine()


@pytest.fixture
def diagram_of(engine):
    """Return a helper that parses a pattern and lays it out."""

    def _diagram(pattern: str) -> Diagram:
        return engine.layout(parse(pattern))

    return _diagram
