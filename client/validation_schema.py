"""Validation model generated from a resolved schema.

The dynamic form builds one pydantic model per schema as soon as the schema
loads. Each field runs the shared rule evaluator before type conversion, so
the pydantic error ``type`` of a failing field is the name of the first
failing rule (``required``, ``min_length``, ``email``...), exactly as the
server would report it.
"""

from datetime import date, datetime
from typing import Annotated, Any, Literal, Mapping, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, create_model
from pydantic_core import PydanticCustomError

from field_types.attributes import FieldAttributes
from field_types.kinds import BOOLEAN_KINDS, FieldKind, humanize
from field_types.rules import ValidationRules, first_failure, is_empty
from schemas.resolved_schema import ResolvedSchema

CAST_PYTHON_TYPES = {
    "boolean": bool,
    "bool": bool,
    "integer": int,
    "int": int,
    "float": float,
    "double": float,
    "decimal": float,
    "datetime": datetime | date,
    "date": datetime | date,
}

KIND_PYTHON_TYPES = {
    FieldKind.CHECKBOX: bool,
    FieldKind.BOOLEAN: bool,
    FieldKind.INTEGER: int,
    FieldKind.NUMBER: float,
    FieldKind.DECIMAL: float,
    FieldKind.RANGE: float,
    FieldKind.DATE: datetime | date,
    FieldKind.DATETIME: datetime | date,
}


def python_type_for(attributes: FieldAttributes, field_type: str, cast: Optional[str]) -> Any:
    if attributes.options:
        # select components hold option values as strings
        return Literal[tuple(option.value_str for option in attributes.options)]
    if cast:
        python_type = CAST_PYTHON_TYPES.get(cast.split(":", 1)[0].lower())
        if python_type is not None:
            return python_type
    return KIND_PYTHON_TYPES.get(FieldKind.decode(field_type), str)


def _rule_check(label: str, field_type: str, required: bool, rules: ValidationRules, has_options: bool = False):
    is_boolean = FieldKind.decode(field_type) in BOOLEAN_KINDS

    def check(value: Any) -> Any:
        failure = first_failure(label, field_type, required, rules, value)
        if failure is not None:
            raise PydanticCustomError(failure.rule.value, failure.message)
        if is_empty(value):
            return False if is_boolean else None
        if has_options and not isinstance(value, (list, tuple)):
            return str(value)
        return value

    return check


def build_validation_model(resolved: ResolvedSchema | Mapping[str, Any]) -> type[BaseModel]:
    """Generate the client validation model; hidden fields are left out."""
    if not isinstance(resolved, ResolvedSchema):
        resolved = ResolvedSchema.model_validate(resolved)

    casts = resolved.collection.model.casts if resolved.collection.model else {}
    definitions: dict[str, Any] = {}
    for key in resolved.fillable:
        raw = dict(resolved.fields.get(key, {}))
        field_type = raw.pop("type", None) or FieldKind.TEXT.value
        attributes = FieldAttributes.from_mapping(raw)
        if attributes.hidden:
            continue

        label = attributes.label or humanize(key)
        check = _rule_check(
            label,
            field_type,
            attributes.required,
            ValidationRules.from_attributes(attributes),
            has_options=bool(attributes.options),
        )
        python_type = python_type_for(attributes, field_type, casts.get(key))
        definitions[key] = (
            Annotated[Optional[python_type], BeforeValidator(check)],
            Field(default=None, validate_default=True),
        )

    model_name = "".join(part.capitalize() for part in resolved.key.split("_")) + "FormData"
    return create_model(model_name, __config__=ConfigDict(extra="ignore"), **definitions)


def first_errors(model: type[BaseModel], values: Mapping[str, Any]) -> dict[str, str]:
    """Validate values, returning the first error message per field."""
    try:
        model.model_validate(dict(values))
    except ValidationError as e:
        errors: dict[str, str] = {}
        for error in e.errors():
            if error["loc"]:
                errors.setdefault(str(error["loc"][0]), error["msg"])
        return errors
    return {}
