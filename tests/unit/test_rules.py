import pytest

from formwork import ConfigurationError, FormContext
from formwork.validation.rules import (
    AlphanumRule,
    AlphaRule,
    EmailRule,
    EqRule,
    LenRule,
    MaxRule,
    MinRule,
    NeRule,
    NumericRule,
    OneOfRule,
    RequiredRule,
    UrlRule,
    default_label,
    is_empty,
    parse_rules,
)

CTX = FormContext()


def test_parse_rules() -> None:
    assert parse_rules("required, min=3 ,oneof=a b,,") == (
        ("required", None),
        ("min", "3"),
        ("oneof", "a b"),
    )
    assert parse_rules("") == ()


def test_default_label_formats_param() -> None:
    assert default_label("min", "3") == "Must be at least 3"
    assert default_label("custom") == "Failed 'custom' validation"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, True), ("", True), ([], True), ({}, True), (0, False), ("x", False)],
)
def test_is_empty(value, expected) -> None:
    assert is_empty(value) is expected


def test_required_treats_zero_as_present() -> None:
    rule = RequiredRule()

    assert rule.validate_field(CTX, 0)
    assert rule.validate_field(CTX, False)
    assert not rule.validate_field(CTX, "")
    assert not rule.validate_field(CTX, None)


def test_format_rules() -> None:
    assert EmailRule().validate_field(CTX, "a@b.com")
    assert not EmailRule().validate_field(CTX, "a@b")
    assert UrlRule().validate_field(CTX, "https://example.com/x")
    assert not UrlRule().validate_field(CTX, "example.com")
    assert NumericRule().validate_field(CTX, "-12.5")
    assert NumericRule().validate_field(CTX, 7)
    assert not NumericRule().validate_field(CTX, "12a")
    assert AlphaRule().validate_field(CTX, "abc")
    assert not AlphaRule().validate_field(CTX, "ab1")
    assert AlphanumRule().validate_field(CTX, "ab1")
    assert not AlphanumRule().validate_field(CTX, "ab 1")


@pytest.mark.parametrize(
    ("rule", "value"),
    [
        (EmailRule(), "a@b.com\n"),
        (NumericRule(), "12\n"),
        (AlphaRule(), "abc\n"),
        (AlphanumRule(), "ab1\n"),
    ],
)
def test_trailing_newline_is_rejected(rule, value) -> None:
    assert not rule.validate_field(CTX, value)


def test_size_rules_measure_strings_and_numbers() -> None:
    assert MinRule().validate_field_with_param(CTX, "abc", "3")
    assert not MinRule().validate_field_with_param(CTX, "ab", "3")
    assert MinRule().validate_field_with_param(CTX, 18, "18")
    assert MaxRule().validate_field_with_param(CTX, ["a", "b"], "2")
    assert not MaxRule().validate_field_with_param(CTX, 21, "20")
    assert LenRule().validate_field_with_param(CTX, "12345", "5")
    assert not LenRule().validate_field_with_param(CTX, "1234", "5")


def test_comparison_rules() -> None:
    assert EqRule().validate_field_with_param(CTX, "yes", "yes")
    assert EqRule().validate_field_with_param(CTX, 3, "3.0")
    assert NeRule().validate_field_with_param(CTX, "no", "yes")
    assert not NeRule().validate_field_with_param(CTX, "yes", "yes")
    assert OneOfRule().validate_field_with_param(CTX, "green", "red green blue")
    assert not OneOfRule().validate_field_with_param(CTX, "pink", "red green blue")


def test_non_numeric_param_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="numeric parameter"):
        MinRule().validate_field_with_param(CTX, "abc", "three")
