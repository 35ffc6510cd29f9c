from pytest_archon import archrule


def test_primitives_isolation() -> None:
    """
    Primitives layer is the lowest level.
    It must not import from any other formwork layer.
    """
    (
        archrule("primitives_isolation")
        .match("formwork.primitives*")
        .should_not_import("formwork.domain*")
        .should_not_import("formwork.ports*")
        .should_not_import("formwork.validation*")
        .should_not_import("formwork.formdata*")
        .should_not_import("formwork.handler*")
        .should_not_import("formwork.extensions*")
        .should_not_import("formwork.contrib*")
        .check("formwork")
    )


def test_domain_isolation() -> None:
    """
    Domain layer should be self-contained.
    It may only depend on primitives.
    """
    (
        archrule("domain_isolation")
        .match("formwork.domain*")
        .should_not_import("formwork.ports*")
        .should_not_import("formwork.validation*")
        .should_not_import("formwork.formdata*")
        .should_not_import("formwork.handler*")
        .should_not_import("formwork.extensions*")
        .should_not_import("formwork.contrib*")
        .check("formwork")
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on implementations.
    """
    (
        archrule("ports_layering")
        .match("formwork.ports*")
        .should_not_import("formwork.validation*")
        .should_not_import("formwork.formdata*")
        .should_not_import("formwork.handler*")
        .should_not_import("formwork.extensions*")
        .should_not_import("formwork.contrib*")
        .check("formwork")
    )


def test_validation_layering() -> None:
    """
    The validation engine knows nothing about the pipeline that calls it.
    """
    (
        archrule("validation_layering")
        .match("formwork.validation*")
        .should_not_import("formwork.formdata*")
        .should_not_import("formwork.handler*")
        .should_not_import("formwork.extensions*")
        .should_not_import("formwork.contrib*")
        .check("formwork")
    )


def test_formdata_layering() -> None:
    """
    Default stage implementations are plugged into handlers, never the reverse.
    """
    (
        archrule("formdata_layering")
        .match("formwork.formdata*")
        .should_not_import("formwork.handler*")
        .should_not_import("formwork.extensions*")
        .should_not_import("formwork.contrib*")
        .check("formwork")
    )


def test_extensions_layering() -> None:
    """
    Extensions are plain stage objects and must not reach into the handler.
    """
    (
        archrule("extensions_layering")
        .match("formwork.extensions*")
        .should_not_import("formwork.handler*")
        .should_not_import("formwork.contrib*")
        .check("formwork")
    )


def test_core_framework_independence() -> None:
    """
    Only contrib modules may import web frameworks.
    """
    (
        archrule("core_framework_independence")
        .match("formwork*")
        .exclude("formwork.contrib*")
        .should_not_import("starlette*")
        .should_not_import("fastapi*")
        .check("formwork")
    )
