import logging

import pytest

from formwork import (
    BuildResult,
    ConfigurationError,
    DefaultFormDataDecoder,
    DefaultFormDataProvider,
    DefaultFormDataValidator,
    FormHandlerBuilder,
    ServiceRegistry,
    ServiceRoleError,
    UnknownServiceNameError,
    ValidationInfo,
    ValidatorProvider,
)
from formwork.handler.builder import ServiceBinding
from formwork.handler.registry import ServiceRole

# --- Test Services ---


class Provider:
    async def get_form_data(self, ctx, request):
        return {"source": "provider"}


class OtherProvider(Provider):
    pass


class Decoder:
    async def decode(self, ctx, request, values, form_data):
        return form_data


class Validator:
    async def validate(self, ctx, request, validator_provider, form_data):
        return ValidationInfo.success()


class ProviderAndValidator(Provider, Validator):
    pass


class NotAService:
    pass


# --- Tests ---


def test_unset_roles_use_defaults() -> None:
    handler = FormHandlerBuilder().build()

    assert isinstance(handler.form_data_provider, DefaultFormDataProvider)
    assert isinstance(handler.form_data_decoder, DefaultFormDataDecoder)
    assert isinstance(handler.form_data_validator, DefaultFormDataValidator)
    assert isinstance(handler.validator_provider, ValidatorProvider)
    assert handler.extensions == ()


def test_explicit_instances() -> None:
    provider, decoder, validator = Provider(), Decoder(), Validator()
    validator_provider = ValidatorProvider()

    handler = (
        FormHandlerBuilder(validator_provider=validator_provider)
        .set_form_data_provider(provider)
        .set_form_data_decoder(decoder)
        .set_form_data_validator(validator)
        .build()
    )

    assert handler.form_data_provider is provider
    assert handler.form_data_decoder is decoder
    assert handler.form_data_validator is validator
    assert handler.validator_provider is validator_provider


def test_last_binding_wins() -> None:
    registry = ServiceRegistry()
    named = OtherProvider()
    registry.register_form_data_provider("other", named)
    explicit = Provider()

    named_last = (
        FormHandlerBuilder(registry)
        .set_form_data_provider(explicit)
        .set_named_form_data_provider("other")
        .build()
    )
    explicit_last = (
        FormHandlerBuilder(registry)
        .set_named_form_data_provider("other")
        .set_form_data_provider(explicit)
        .build()
    )

    assert named_last.form_data_provider is named
    assert explicit_last.form_data_provider is explicit


def test_none_resets_role_to_default() -> None:
    handler = (
        FormHandlerBuilder()
        .set_form_data_validator(Validator())
        .set_form_data_validator(None)
        .build()
    )

    assert isinstance(handler.form_data_validator, DefaultFormDataValidator)


def test_form_service_fills_only_implemented_roles() -> None:
    service = ProviderAndValidator()
    decoder = Decoder()

    handler = (
        FormHandlerBuilder()
        .set_form_data_decoder(decoder)
        .set_form_service(service)
        .build()
    )

    assert handler.form_data_provider is service
    assert handler.form_data_validator is service
    assert handler.form_data_decoder is decoder


def test_later_single_role_overrides_form_service() -> None:
    service = ProviderAndValidator()
    validator = Validator()

    handler = (
        FormHandlerBuilder()
        .set_form_service(service)
        .set_form_data_validator(validator)
        .build()
    )

    assert handler.form_data_provider is service
    assert handler.form_data_validator is validator


def test_none_form_service_is_ignored() -> None:
    provider = Provider()

    handler = (
        FormHandlerBuilder()
        .set_form_data_provider(provider)
        .set_form_service(None)
        .build()
    )

    assert handler.form_data_provider is provider


def test_named_form_service() -> None:
    registry = ServiceRegistry()
    service = ProviderAndValidator()
    registry.register_form_service("contact", service)

    handler = FormHandlerBuilder(registry).set_named_form_service("contact").build()

    assert handler.form_data_provider is service


def test_form_service_without_roles_fails() -> None:
    result = FormHandlerBuilder().set_form_service(NotAService()).commit()

    assert not result.ok
    assert isinstance(result.error, ServiceRoleError)
    assert result.error.to_dict()["service"] == "NotAService"


def test_object_lacking_bound_role_fails() -> None:
    with pytest.raises(ServiceRoleError, match="form data decoder"):
        FormHandlerBuilder().set_form_data_decoder(Provider()).build()


def test_unknown_name_fails_commit_not_setter(caplog) -> None:
    caplog.set_level(logging.DEBUG)
    builder = FormHandlerBuilder().set_named_form_data_decoder("missing")

    result = builder.commit()

    assert isinstance(result.error, UnknownServiceNameError)
    assert result.handler is None
    assert "configuration rejected" in caplog.text
    with pytest.raises(UnknownServiceNameError):
        result.unwrap()


def test_extensions_keep_order_and_names() -> None:
    registry = ServiceRegistry()
    registry.register_form_extension("audit", NotAService())
    explicit = Provider()

    handler = (
        FormHandlerBuilder(registry)
        .add_form_extension(explicit, name="prefill")
        .add_named_form_extension("audit")
        .add_form_extension(Validator())
        .build()
    )

    assert [ext.name for ext in handler.extensions] == ["prefill", "audit", "Validator"]
    assert handler.extensions[0].service is explicit
    assert handler.extensions[0].provider is explicit
    assert handler.extensions[0].validator is None
    assert handler.extensions[2].validator is not None


def test_duplicate_extension_name_fails() -> None:
    result = (
        FormHandlerBuilder()
        .add_form_extension(Provider(), name="x")
        .add_form_extension(Validator(), name="x")
        .commit()
    )

    assert isinstance(result.error, ConfigurationError)
    assert "Duplicate form extension name 'x'" in str(result.error)


def broken_factory():
    raise RuntimeError("connection refused")


@pytest.mark.parametrize(
    ("factory", "message"),
    [
        (broken_factory, "failed: connection refused"),
        (lambda: None, "returned None"),
    ],
)
def test_failing_extension_factory_fails_commit(factory, message) -> None:
    registry = ServiceRegistry()
    registry.register_form_extension("audit", factory=factory)

    result = FormHandlerBuilder(registry).add_named_form_extension("audit").commit()

    assert not result.ok
    assert isinstance(result.error, ConfigurationError)
    assert message in str(result.error)


def test_build_result() -> None:
    handler = FormHandlerBuilder().build()

    assert BuildResult.success(handler).unwrap() is handler
    with pytest.raises(ConfigurationError):
        BuildResult().unwrap()


def test_service_binding_describe() -> None:
    assert (
        ServiceBinding(ServiceRole.PROVIDER, name="contact").describe()
        == "form data provider 'contact'"
    )
    assert ServiceBinding(ServiceRole.DECODER, instance=Decoder()).describe() == "Decoder"
