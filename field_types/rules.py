"""Field validation rules shared by the server validator and both client forms.

Rules are evaluated in a fixed order:

1. required and falsy (empty, or a numeric zero) -> error, nothing else is checked
2. empty and optional -> valid, nothing else is checked (an optional 0 is a value)
3. min / max length (strings and lists)
4. min / max value (number-like values)
5. regex pattern
6. type format (email, url)

The server reports every failure from step 3 onward, the client forms only
report the first one. Both always agree on the first failing rule.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping, Optional

from pydantic import AnyUrl, BaseModel, TypeAdapter, ValidationError

from field_types.kinds import FieldKind

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_url_adapter = TypeAdapter(AnyUrl)


class Rule(str, Enum):
    REQUIRED = "required"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    MIN = "min"
    MAX = "max"
    PATTERN = "pattern"
    EMAIL = "email"
    URL = "url"


@dataclass(frozen=True)
class RuleFailure:
    rule: Rule
    message: str


class ValidationRules(BaseModel):
    """The rule set of one field, as handed to the client form controller."""
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[int | float] = None
    max: Optional[int | float] = None
    pattern: Optional[str] = None
    pattern_message: Optional[str] = None

    @classmethod
    def from_attributes(cls, attributes) -> "ValidationRules":
        return cls(
            min_length=attributes.min_length,
            max_length=attributes.max_length,
            min=attributes.min,
            max=attributes.max,
            pattern=attributes.pattern,
            pattern_message=attributes.pattern_message,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def is_empty(value: Any) -> bool:
    """None, blank string, False and empty collections are empty; 0 is not."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def is_falsy(value: Any) -> bool:
    """Empty, or a numeric zero. What a required field rejects."""
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return True
    return is_empty(value)


def as_number(value: Any) -> Optional[float]:
    """Numeric view of a value, or None when it is not number-like."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def is_valid_email(value: Any) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(str(value)))


def is_valid_url(value: Any) -> bool:
    try:
        _url_adapter.validate_python(str(value))
    except ValidationError:
        return False
    return True


def _fmt(number: int | float) -> str:
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def iter_failures(
    label: str,
    field_type: str,
    required: bool,
    rules: ValidationRules | Mapping[str, Any] | None,
    value: Any,
) -> Iterator[RuleFailure]:
    """Yield rule failures for a value in evaluation order."""
    if rules is None:
        rules = ValidationRules()
    elif not isinstance(rules, ValidationRules):
        rules = ValidationRules.model_validate(dict(rules))

    if required and is_falsy(value):
        yield RuleFailure(Rule.REQUIRED, f"{label} is required")
        return
    if is_empty(value):
        return

    if isinstance(value, (str, list, tuple)):
        if rules.min_length and len(value) < rules.min_length:
            yield RuleFailure(
                Rule.MIN_LENGTH, f"{label} must be at least {rules.min_length} characters"
            )
        if rules.max_length and len(value) > rules.max_length:
            yield RuleFailure(
                Rule.MAX_LENGTH, f"{label} must be no more than {rules.max_length} characters"
            )

    number = as_number(value)
    if number is not None:
        if rules.min is not None and number < rules.min:
            yield RuleFailure(Rule.MIN, f"{label} must be at least {_fmt(rules.min)}")
        if rules.max is not None and number > rules.max:
            yield RuleFailure(Rule.MAX, f"{label} must be no more than {_fmt(rules.max)}")

    if rules.pattern and not re.search(rules.pattern, str(value)):
        yield RuleFailure(Rule.PATTERN, rules.pattern_message or f"{label} format is invalid")

    kind = FieldKind.decode(field_type)
    if kind is FieldKind.EMAIL and not is_valid_email(value):
        yield RuleFailure(Rule.EMAIL, f"{label} must be a valid email")
    elif kind is FieldKind.URL and not is_valid_url(value):
        yield RuleFailure(Rule.URL, f"{label} must be a valid URL")


def first_failure(
    label: str,
    field_type: str,
    required: bool,
    rules: ValidationRules | Mapping[str, Any] | None,
    value: Any,
) -> Optional[RuleFailure]:
    return next(iter_failures(label, field_type, required, rules, value), None)


def first_error(field_config: Mapping[str, Any], value: Any) -> Optional[str]:
    """Client-side evaluation of one controller field config.

    ``field_config`` is the ``{name, type, label, required, validation}``
    shape the static form renderer hands to the form controller.
    """
    failure = first_failure(
        field_config.get("label") or field_config.get("name", ""),
        field_config.get("type", FieldKind.TEXT.value),
        bool(field_config.get("required")),
        field_config.get("validation") or {},
        value,
    )
    return failure.message if failure else None
