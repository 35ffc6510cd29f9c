import pytest

from formwork import ConfigurationError, Conformer


@pytest.mark.parametrize(
    ("directives", "value", "expected"),
    [
        (("trim",), "  Ada  ", "Ada"),
        (("ltrim",), "  Ada  ", "Ada  "),
        (("rtrim",), "  Ada  ", "  Ada"),
        (("lower",), "ADA", "ada"),
        (("upper",), "ada", "ADA"),
        (("title",), "ada lovelace", "Ada Lovelace"),
        (("ucfirst",), "ada lovelace", "Ada lovelace"),
        (("snake",), "firstName value", "first_name_value"),
        (("camel",), "first name value", "firstNameValue"),
        (("slug",), "  Hello, World! ", "hello-world"),
        (("name",), " jean-luc   picard3 ", "Jean-Luc Picard"),
        (("email",), "  Ada@Example.COM ", "ada@example.com"),
        (("num",), "+49 (0) 123", "490123"),
        (("!num",), "a1b2", "ab"),
        (("alpha",), "a1b2", "ab"),
        (("!alpha",), "a1b2", "12"),
        (("trim", "upper"), "  ada ", "ADA"),
    ],
)
def test_builtin_directives(directives, value, expected) -> None:
    assert Conformer().apply(value, directives) == expected


def test_register_custom_directive() -> None:
    conformer = Conformer()
    conformer.register("reverse", lambda value: value[::-1])

    assert conformer.has("reverse")
    assert conformer.apply("abc", ["reverse"]) == "cba"


def test_unknown_directive() -> None:
    with pytest.raises(ConfigurationError, match="Unknown conform directive 'shout'"):
        Conformer().apply("abc", ["shout"])
