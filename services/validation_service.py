"""Validation Service - server-side validation of submitted collection data"""

from typing import Any, Mapping, Optional

from field_types.field import FieldDefinition
from schemas.resolved_schema import ResolvedSchema
from services.field_type_registry import FieldTypeRegistry


def build_field_definitions(
    resolved: ResolvedSchema | Mapping[str, Mapping[str, Any]],
    registry: Optional[FieldTypeRegistry] = None,
) -> list[FieldDefinition]:
    """Field definitions for resolved fields, in field order"""
    fields = resolved.fields if isinstance(resolved, ResolvedSchema) else resolved
    return [
        FieldDefinition.from_attributes(key, attributes, registry=registry)
        for key, attributes in fields.items()
    ]


def validate_collection(
    resolved: ResolvedSchema | Mapping[str, Mapping[str, Any]],
    data: Mapping[str, Any],
    registry: Optional[FieldTypeRegistry] = None,
) -> dict[str, list[str]]:
    """
    Validate submitted data against every resolved field.

    Fields missing from ``data`` are validated as None. Hidden fields are
    validated too. Only keys with at least one error appear in the result.
    """
    errors = {}
    for field in build_field_definitions(resolved, registry):
        field_errors = field.validate(data.get(field.key))
        if field_errors:
            errors[field.key] = field_errors
    return errors
