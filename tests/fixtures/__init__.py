"""
Test fixtures package.

This package provides factory functions for creating test objects.

Usage:
    from fixtures import make_maker_order, make_immutables

    def test_something():
        order = make_maker_order(parts=4)
"""

from .common import (
    FIXED_NOW_MS,
    FIXED_NOW_NS,
    FUTURE_EXPIRATION_NS,
    ONE_TOKEN,
    SAMPLE_SECRET,
    make_immutables,
    make_maker_order,
    make_secrets,
    make_timelock,
)

__all__ = [
    "FIXED_NOW_MS",
    "FIXED_NOW_NS",
    "FUTURE_EXPIRATION_NS",
    "ONE_TOKEN",
    "SAMPLE_SECRET",
    "make_immutables",
    "make_maker_order",
    "make_secrets",
    "make_timelock",
]
