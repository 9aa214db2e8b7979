"""Validation of the example form.

Rules are expressed as a JSON Schema and evaluated with jsonschema; each
failing keyword is turned into a human-readable, field-level message.
Validation failure is a normal return value, never an exception.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, TypeAlias

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as SchemaError

CONTENT_FIELD: Final[str] = "content"

FIELD_LABELS: Final[dict[str, str]] = {CONTENT_FIELD: "Content"}

ASCII_PATTERN: Final[str] = r"^[\x00-\x7f]*$"

# Messages are reported in this order for a given field.
_KEYWORD_ORDER: Final[tuple[str, ...]] = ("required", "type", "minLength", "maxLength", "pattern")


@dataclass(frozen=True)
class FormRules:
    content_max_length: int = 64

    @property
    def field_names(self) -> tuple[str, ...]:
        return (CONTENT_FIELD,)

    def schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                CONTENT_FIELD: {
                    "type": "string",
                    "minLength": 1,
                    "maxLength": self.content_max_length,
                    "pattern": ASCII_PATTERN,
                },
            },
            "required": [CONTENT_FIELD],
        }


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class Valid:
    value: dict[str, str]


@dataclass(frozen=True)
class Invalid:
    errors: tuple[FieldError, ...]

    def messages_for(self, field: str) -> list[str]:
        return [e.message for e in self.errors if e.field == field]


ValidationResult: TypeAlias = Valid | Invalid


def _label(field: str) -> str:
    return FIELD_LABELS.get(field, field)


def _message(field: str, error: SchemaError) -> str:
    label = _label(field)
    keyword = error.validator
    if keyword == "required":
        return f"{label} is required"
    if keyword == "type":
        return f"{label} must be text"
    if keyword == "minLength":
        return f"{label} is empty"
    if keyword == "maxLength":
        return f"{label} must be at most {error.validator_value} characters"
    if keyword == "pattern":
        return f"{label} is not ascii"
    return f"{label}: {error.message}"


def _fields_of(error: SchemaError) -> list[str]:
    if error.validator == "required":
        instance = error.instance if isinstance(error.instance, dict) else {}
        return [name for name in error.validator_value if name not in instance]
    if error.path:
        return [str(error.path[0])]
    return ["__all__"]


def _sort_key(rules: FormRules, field: str, keyword: str) -> tuple[int, int]:
    names = rules.field_names
    field_pos = names.index(field) if field in names else len(names)
    kw_pos = _KEYWORD_ORDER.index(keyword) if keyword in _KEYWORD_ORDER else len(_KEYWORD_ORDER)
    return field_pos, kw_pos


def validate_submission(
    submission: Mapping[str, str], rules: FormRules | None = None
) -> ValidationResult:
    """Validate a form submission against the example form rules."""

    rules = rules or FormRules()
    doc = {k: submission[k] for k in rules.field_names if k in submission}

    validator = Draft202012Validator(rules.schema())

    found: list[tuple[tuple[int, int], FieldError]] = []
    seen: set[FieldError] = set()
    for err in validator.iter_errors(doc):
        for field in _fields_of(err):
            fe = FieldError(field=field, message=_message(field, err))
            if fe in seen:
                continue
            seen.add(fe)
            found.append((_sort_key(rules, field, str(err.validator)), fe))

    if found:
        found.sort(key=lambda pair: pair[0])
        return Invalid(errors=tuple(fe for _, fe in found))

    return Valid(value={k: str(v) for k, v in doc.items()})
