"""Field Types API endpoints - read-only, serves field types from the runtime registry"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from field_types.base_field_type import FieldType
from schemas.field_type_registry import FieldTypeRead
from services.field_type_registry import FieldTypeRegistry, get_field_type_registry

router = APIRouter()


def to_read(handle: str, field_type: FieldType) -> FieldTypeRead:
    field_type_class = type(field_type)
    return FieldTypeRead(
        handle=handle,
        label=field_type.label,
        column_type=field_type.column_type,
        ui_component=field_type.ui_component,
        template=field_type.template,
        input_type=field_type.input_type,
        category=getattr(field_type_class, '_field_type_category', 'general'),
        icon=getattr(field_type_class, '_field_type_icon', None),
        version=getattr(field_type_class, 'version', None),
    )


@router.get("", response_model=list[FieldTypeRead])
def list_field_types(registry: FieldTypeRegistry = Depends(get_field_type_registry)):
    """List all registered field types, grouped by category"""
    field_types = [to_read(handle, field_type) for handle, field_type in registry.all().items()]
    return sorted(field_types, key=lambda x: (x.category, x.label))


@router.get("/{handle}", response_model=FieldTypeRead)
def get_field_type(handle: str, registry: FieldTypeRegistry = Depends(get_field_type_registry)):
    """Get details of a specific field type by handle"""
    field_type = registry.get(handle)
    if field_type is None:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Field type not found"})
    return to_read(handle, field_type)
