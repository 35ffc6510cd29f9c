"""Shared fixtures for formwork tests."""

from __future__ import annotations

import pytest

from formwork import FormContext, ValidatorProvider

from tests.forms import FIXED_TODAY


@pytest.fixture
def ctx() -> FormContext:
    return FormContext()


@pytest.fixture
def validator_provider() -> ValidatorProvider:
    return ValidatorProvider(today=lambda: FIXED_TODAY)
