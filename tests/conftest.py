"""Shared fixtures for the numeric core tests."""

from __future__ import annotations

import pytest

from arithmetic import ArithmeticEngine
from bounds import INT8, TINY
from catalog import Catalog, build_catalog


@pytest.fixture
def engine() -> ArithmeticEngine:
    return ArithmeticEngine()


@pytest.fixture
def tiny_engine() -> ArithmeticEngine:
    """Native range [-8, 7]: almost every result is promoted."""
    return ArithmeticEngine(native=TINY)


@pytest.fixture
def int8_engine() -> ArithmeticEngine:
    return ArithmeticEngine(native=INT8)


@pytest.fixture
def catalog() -> Catalog:
    return build_catalog()


@pytest.fixture
def tiny_catalog(tiny_engine) -> Catalog:
    return build_catalog(tiny_engine)
