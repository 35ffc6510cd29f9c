import logging

import pytest

from formwork import (
    ConfigurationError,
    FormModel,
    FormRequest,
    UnknownValidationRuleError,
    ValidationInfo,
    ValidatorProvider,
    ValidatorSettings,
    form_field,
)

from tests.forms import FIXED_TODAY, Address, Contact

# --- Test Validators ---


class EvenRule:
    name = "even"

    def validate_field(self, ctx, value) -> bool:
        return int(value) % 2 == 0


class DivisibleRule:
    name = "divisible"

    def validate_field_with_param(self, ctx, value, param) -> bool:
        return int(value) % int(param) == 0


class PasswordForm(FormModel):
    password: str = form_field("", validate="required")
    confirm: str = form_field("")


class PasswordsMatch:
    struct_type = PasswordForm

    def validate_struct(self, ctx, request, data) -> ValidationInfo:
        info = ValidationInfo.success()
        if data.password != data.confirm:
            info.add_field_error("confirm", "formError.confirm.match", "No match")
        return info


class AsyncPasswordsMatch(PasswordsMatch):
    async def validate_struct(self, ctx, request, data) -> ValidationInfo:
        return super().validate_struct(ctx, request, data)


class AddressNotInMoon:
    struct_type = Address

    def validate_struct(self, ctx, request, data) -> ValidationInfo:
        info = ValidationInfo.success()
        if data.street == "Moon":
            info.add_field_error("street", "formError.street.moon", "No")
        return info


def valid_contact(**overrides) -> Contact:
    values = {
        "firstname": "Ada",
        "mail": "ada@example.com",
        "address": Address(street="Main St"),
    }
    values.update(overrides)
    return Contact(**values)


# --- Tests ---


@pytest.mark.asyncio
async def test_valid_model(ctx, validator_provider) -> None:
    info = await validator_provider.validate(ctx, FormRequest.post(), valid_contact())

    assert info.is_valid


@pytest.mark.asyncio
async def test_one_finding_per_field_with_alias_keys(ctx, validator_provider) -> None:
    contact = valid_contact(firstname="", mail="nope")

    info = await validator_provider.validate(ctx, FormRequest.post(), contact)

    assert info.error_count == 2
    assert [e.message_key for e in info.get_errors_for_field("firstname")] == [
        "formError.firstname.required"
    ]
    # first failing rule only: "required" passes, "email" fails
    assert [e.message_key for e in info.get_errors_for_field("mail")] == [
        "formError.mail.email"
    ]


@pytest.mark.asyncio
async def test_omitempty_skips_empty_values(ctx, validator_provider) -> None:
    info = await validator_provider.validate(
        ctx, FormRequest.post(), valid_contact(age=None)
    )
    assert info.is_valid

    info = await validator_provider.validate(
        ctx, FormRequest.post(), valid_contact(age=12)
    )
    assert info.get_errors_for_field("age")[0].default_label == "Must be at least 18"


@pytest.mark.asyncio
async def test_nested_models_use_dotted_paths(ctx, validator_provider) -> None:
    contact = valid_contact(address=Address(street="ab", zip_code="123"))

    info = await validator_provider.validate(ctx, FormRequest.post(), contact)

    assert info.get_errors_for_field("address.street")[0].message_key == (
        "formError.address.street.min"
    )
    assert info.get_errors_for_field("address.zip")[0].message_key == (
        "formError.address.zip.len"
    )


@pytest.mark.asyncio
async def test_injected_field_validators(ctx) -> None:
    class Numbers(FormModel):
        a: int = form_field(0, validate="even")
        b: int = form_field(0, validate="divisible=3")

    provider = ValidatorProvider([EvenRule(), DivisibleRule()])

    info = await provider.validate(ctx, FormRequest.post(), Numbers(a=3, b=4))

    assert info.has_errors_for_field("a")
    assert info.has_errors_for_field("b")
    assert "even" in provider.rule_names


def test_duplicate_field_validator_name() -> None:
    class FakeRequired:
        name = "required"

        def validate_field(self, ctx, value) -> bool:
            return True

    with pytest.raises(ConfigurationError, match="already registered"):
        ValidatorProvider([FakeRequired()])


def test_non_validator_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="not a field validator"):
        ValidatorProvider([object()])


@pytest.mark.asyncio
async def test_unknown_rule_raises_with_suggestions(ctx, validator_provider) -> None:
    class Typo(FormModel):
        name: str = form_field("", validate="requird")

    with pytest.raises(UnknownValidationRuleError) as exc_info:
        await validator_provider.validate(ctx, FormRequest.post(), Typo())

    assert "required" in exc_info.value.suggestions
    assert exc_info.value.to_dict()["field"] == "name"


@pytest.mark.asyncio
async def test_param_mismatch_is_configuration_error(ctx, validator_provider) -> None:
    class MissingParam(FormModel):
        name: str = form_field("x", validate="min")

    class UnexpectedParam(FormModel):
        name: str = form_field("x", validate="required=1")

    with pytest.raises(ConfigurationError, match="requires a parameter"):
        await validator_provider.validate(ctx, FormRequest.post(), MissingParam())
    with pytest.raises(ConfigurationError, match="does not accept a parameter"):
        await validator_provider.validate(ctx, FormRequest.post(), UnexpectedParam())


@pytest.mark.asyncio
async def test_struct_validators_sync_and_async(ctx) -> None:
    for struct_validator in (PasswordsMatch(), AsyncPasswordsMatch()):
        provider = ValidatorProvider(struct_validators=[struct_validator])

        info = await provider.validate(
            ctx, FormRequest.post(), PasswordForm(password="a", confirm="b")
        )

        assert info.get_errors_for_field("confirm")[0].message_key == (
            "formError.confirm.match"
        )


@pytest.mark.asyncio
async def test_struct_validator_on_nested_model_is_prefixed(ctx) -> None:
    provider = ValidatorProvider(struct_validators=[AddressNotInMoon()])

    info = await provider.validate(
        ctx, FormRequest.post(), valid_contact(address=Address(street="Moon"))
    )

    assert info.has_errors_for_field("address.street")


def test_struct_validator_last_write_wins(caplog) -> None:
    caplog.set_level(logging.WARNING)
    first, second = PasswordsMatch(), AsyncPasswordsMatch()

    provider = ValidatorProvider(struct_validators=[first, second])

    assert provider.get_struct_validator(PasswordForm) is second
    assert "replaced by AsyncPasswordsMatch" in caplog.text


def test_struct_validator_found_for_subclass() -> None:
    class ExtendedPasswordForm(PasswordForm):
        hint: str = ""

    struct_validator = PasswordsMatch()
    provider = ValidatorProvider(struct_validators=[struct_validator])

    assert provider.get_struct_validator(ExtendedPasswordForm) is struct_validator
    assert provider.get_struct_validator(Contact) is None


@pytest.mark.asyncio
async def test_settings_drive_date_and_regex_rules(ctx) -> None:
    class Signup(FormModel):
        birthday: str = form_field("", validate="dateformat,minimumage=18")
        zip: str = form_field("", validate="zipcode")

    provider = ValidatorProvider(
        settings=ValidatorSettings.from_config(
            {"validator": {"dateFormat": "%d.%m.%Y", "customRegex": {"zipcode": r"\d{5}"}}}
        ),
        today=lambda: FIXED_TODAY,
    )

    ok = await provider.validate(
        ctx, FormRequest.post(), Signup(birthday="15.06.2006", zip="12345")
    )
    too_young = await provider.validate(
        ctx, FormRequest.post(), Signup(birthday="16.06.2006", zip="1234")
    )

    assert ok.is_valid
    assert too_young.get_errors_for_field("birthday")[0].message_key == (
        "formError.birthday.minimumage"
    )
    assert too_young.has_errors_for_field("zip")
