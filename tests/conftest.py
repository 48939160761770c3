"""Shared fixtures."""

from __future__ import annotations

import copy

import pytest

from tests.fakes import VALID_PAYLOAD


@pytest.fixture
def payload() -> dict:
    """A fresh, valid checkout payload the test may mutate."""
    return copy.deepcopy(VALID_PAYLOAD)
