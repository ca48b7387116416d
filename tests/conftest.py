"""Shared fixtures: realistic jstat tables."""

import pytest

from helpers import make_capacity_table, make_gc_table


@pytest.fixture
def gc_table():
    return make_gc_table


@pytest.fixture
def capacity_table():
    return make_capacity_table
