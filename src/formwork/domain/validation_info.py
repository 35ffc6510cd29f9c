"""ValidationInfo — structured field-level and struct-level findings."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, dataclass, field


def default_field_errors_factory() -> dict[str, list[ErrorMessage]]:
    """Factory for the mutable ``field_errors`` default.

    Use this instead of dict() or {} to avoid dataclass default_factory issues.
    """
    return {}


def default_struct_errors_factory() -> list[ErrorMessage]:
    return []


@dataclass(frozen=True)
class ErrorMessage:
    """A single finding: a translatable key plus a fallback label."""

    message_key: str
    default_label: str


@dataclass
class ValidationInfo:
    """Collects validation findings for one form submission.

    ``field_errors`` maps form field names (dotted for nested models) to
    their findings; ``struct_errors`` hold findings that concern the form
    as a whole (cross-field checks, CSRF, ...).

    Usage::

        info = ValidationInfo.success()
        info.add_field_error("email", "formError.email.email", "Invalid email")
        combined = info.merge(extension_info)

    A read-only copy (see :meth:`read_only_copy`) rejects further findings;
    :class:`~formwork.domain.form.Form` only holds such copies.
    """

    field_errors: dict[str, list[ErrorMessage]] = field(
        default_factory=default_field_errors_factory
    )
    struct_errors: list[ErrorMessage] = field(
        default_factory=default_struct_errors_factory
    )
    read_only: bool = field(default=False, repr=False, compare=False)

    @property
    def is_valid(self) -> bool:
        return not self.has_field_errors() and not self.has_struct_errors()

    @property
    def error_count(self) -> int:
        """Total number of findings (field and struct level)."""
        return sum(len(messages) for messages in self.field_errors.values()) + len(
            self.struct_errors
        )

    # ── Factory methods ──────────────────────────────────────────

    @classmethod
    def success(cls) -> ValidationInfo:
        return cls()

    @classmethod
    def failure(
        cls,
        field_errors: dict[str, list[ErrorMessage]] | None = None,
        struct_errors: list[ErrorMessage] | None = None,
    ) -> ValidationInfo:
        return cls(
            field_errors={k: list(v) for k, v in (field_errors or {}).items()},
            struct_errors=list(struct_errors or []),
        )

    # ── Recording ────────────────────────────────────────────────

    def add_field_error(
        self, field_name: str, message_key: str, default_label: str
    ) -> None:
        """Add a single finding for *field_name*."""
        self._check_writable()
        self.field_errors.setdefault(field_name, []).append(
            ErrorMessage(message_key, default_label)
        )

    def add_struct_error(self, message_key: str, default_label: str) -> None:
        """Add a finding that is not bound to one field."""
        self._check_writable()
        self.struct_errors.append(ErrorMessage(message_key, default_label))

    def read_only_copy(self) -> ValidationInfo:
        """Return a detached copy that refuses new findings."""
        return ValidationInfo(
            field_errors={k: list(v) for k, v in self.field_errors.items()},
            struct_errors=list(self.struct_errors),
            read_only=True,
        )

    def _check_writable(self) -> None:
        if self.read_only:
            raise FrozenInstanceError(
                "cannot add findings to a read-only ValidationInfo"
            )

    # ── Merging ──────────────────────────────────────────────────

    def merge(self, other: ValidationInfo) -> ValidationInfo:
        """Return a new info holding the findings of both, in order."""
        merged = {k: list(v) for k, v in self.field_errors.items()}
        for field_name, messages in other.field_errors.items():
            merged.setdefault(field_name, []).extend(messages)
        return ValidationInfo(
            field_errors=merged,
            struct_errors=[*self.struct_errors, *other.struct_errors],
        )

    # ── Queries ──────────────────────────────────────────────────

    def get_errors_for_field(self, field_name: str) -> list[ErrorMessage]:
        return list(self.field_errors.get(field_name, []))

    def has_errors_for_field(self, field_name: str) -> bool:
        return bool(self.field_errors.get(field_name))

    def has_field_errors(self) -> bool:
        return any(self.field_errors.values())

    def has_struct_errors(self) -> bool:
        return len(self.struct_errors) > 0

    def __bool__(self) -> bool:
        return self.is_valid
