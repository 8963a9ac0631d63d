"""Form endpoints - server-rendered forms and dynamic form mount points"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse, JSONResponse

from core.exceptions import SchemaClassMissingError, SchemaNotFoundError
from services.form_renderer_service import FormRendererService
from services.schema_registry import KEY_PATTERN
from services.schema_resolver import SchemaResolver, get_schema_resolver
from services.field_type_registry import FieldTypeRegistry, get_field_type_registry

router = APIRouter()


def get_form_renderer(
    resolver: SchemaResolver = Depends(get_schema_resolver),
    field_type_registry: FieldTypeRegistry = Depends(get_field_type_registry),
) -> FormRendererService:
    return FormRendererService(resolver, field_type_registry)


@router.get("/{key}", response_class=HTMLResponse)
def render_form(
    key: str,
    nonce: str = Query(""),
    renderer: FormRendererService = Depends(get_form_renderer),
):
    """Static create form for a schema"""
    if not KEY_PATTERN.fullmatch(key):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Schema not found"})
    try:
        html = renderer.render_form("create", key, nonce=nonce)
    except SchemaNotFoundError:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Schema not found"})
    except SchemaClassMissingError:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Schema class does not exist"})
    return HTMLResponse(str(html))


@router.get("/{key}/mount", response_class=HTMLResponse)
def render_mount_point(
    key: str,
    record_id: Optional[int] = Query(None),
    renderer: FormRendererService = Depends(get_form_renderer),
):
    """Mount point markup for the dynamic form"""
    if not KEY_PATTERN.fullmatch(key):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Schema not found"})
    return HTMLResponse(str(renderer.render_mount_point(key, record_id)))
