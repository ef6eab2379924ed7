"""Shared pytest fixtures for the fuzzyfuse test suite."""

import pytest

from fixtures.real_data import BOOK_RECORDS, BOOKS, MULTIBYTE_STRINGS, RANDOM_STRINGS

import fuzzyfuse as ff


@pytest.fixture
def fuse():
    """Default search configuration."""
    return ff.Fuse()


@pytest.fixture
def books():
    return list(BOOKS)


@pytest.fixture
def book_records():
    return list(BOOK_RECORDS)


@pytest.fixture
def random_strings():
    return list(RANDOM_STRINGS)


@pytest.fixture
def multibyte_strings():
    return list(MULTIBYTE_STRINGS)
