from __future__ import annotations

import logging
from typing import Iterator

import pytest

from tests._fixtures.graph_builder import GraphBuilder


@pytest.fixture
def graph() -> GraphBuilder:
    """Provide a synthetic registry seeded with the built-in generators."""
    return GraphBuilder()


@pytest.fixture(autouse=True)
def _reset_genstubs_logger() -> Iterator[None]:
    """Undo CLI logging configuration so caplog keeps seeing genstubs records."""
    yield
    logger = logging.getLogger("genstubs")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
