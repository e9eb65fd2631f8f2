"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path

# Keep settings deterministic in tests
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("AVATAR_INSPECTION", "extension")

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.factories.phone_number_specification_factory import (
    PhoneNumberSpecificationFactory,
)
from domain.value_objects.identifiers import UserId


@pytest.fixture
def phone_specifications() -> PhoneNumberSpecificationFactory:
    """Factory with the default country registry."""
    return PhoneNumberSpecificationFactory()


@pytest.fixture
def user_id() -> UserId:
    """A random user ID."""
    return UserId.generate()
