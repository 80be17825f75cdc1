"""Tests for src/domain/models/credentials.py."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from src.domain.models.credentials import ApiKey


def test_provider_is_lowercased():
    assert ApiKey(provider=" AlphaVantage ", api_key="k").provider == "alphavantage"


def test_api_key_is_stripped():
    assert ApiKey(provider="alphavantage", api_key="  abc123 ").api_key == "abc123"


def test_blank_api_key_raises():
    with pytest.raises(ValidationError):
        ApiKey(provider="alphavantage", api_key="   ")


def test_saved_at_defaults_to_aware_now():
    key = ApiKey(provider="alphavantage", api_key="abc")
    assert isinstance(key.saved_at, datetime)
    assert key.saved_at.tzinfo is not None


def test_masked_hides_all_but_last_four():
    assert ApiKey(provider="alphavantage", api_key="ABCDEFGH").masked() == "****EFGH"


def test_masked_short_key_not_padded():
    assert ApiKey(provider="alphavantage", api_key="abc").masked() == "abc"
