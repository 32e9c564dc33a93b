"""Test fixtures package."""

from .fake_database import FakeDatabase

__all__ = [
    "FakeDatabase",
]
