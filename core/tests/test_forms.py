from __future__ import annotations

from hxdemo.forms import FieldError, FormRules, Invalid, Valid, validate_submission


def test_valid_submission_keeps_only_declared_fields() -> None:
    result = validate_submission({"content": "hello", "csrf": "ignored"})
    assert result == Valid(value={"content": "hello"})


def test_missing_field_is_required() -> None:
    result = validate_submission({})
    assert result == Invalid(errors=(FieldError(field="content", message="Content is required"),))


def test_empty_field() -> None:
    result = validate_submission({"content": ""})
    assert isinstance(result, Invalid)
    assert result.messages_for("content") == ["Content is empty"]


def test_non_ascii_is_rejected() -> None:
    result = validate_submission({"content": "héllo"})
    assert isinstance(result, Invalid)
    assert result.messages_for("content") == ["Content is not ascii"]


def test_length_bound_comes_from_rules() -> None:
    rules = FormRules(content_max_length=5)
    assert isinstance(validate_submission({"content": "12345"}, rules), Valid)

    result = validate_submission({"content": "123456"}, rules)
    assert isinstance(result, Invalid)
    assert result.messages_for("content") == ["Content must be at most 5 characters"]


def test_all_failing_rules_are_reported_in_rule_order() -> None:
    result = validate_submission({"content": "ééééé!"}, FormRules(content_max_length=3))
    assert isinstance(result, Invalid)
    assert result.messages_for("content") == [
        "Content must be at most 3 characters",
        "Content is not ascii",
    ]


def test_validation_is_deterministic() -> None:
    submission = {"content": "ünïcode and far too long" * 4}
    assert validate_submission(submission) == validate_submission(submission)
