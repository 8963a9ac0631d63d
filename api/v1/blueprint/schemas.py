"""Schema gateway - read-only access to resolved schemas"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from core.exceptions import SchemaClassMissingError, SchemaNotFoundError
from core.logging_config import get_logger
from services.schema_registry import KEY_PATTERN
from services.schema_resolver import SchemaResolver, get_schema_resolver

logger = get_logger(__name__)

router = APIRouter()


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("")
def list_schemas(resolver: SchemaResolver = Depends(get_schema_resolver)):
    """
    List every registered schema.

    Schemas whose class cannot be loaded are left out.
    """
    try:
        summaries = resolver.resolve_all()
    except Exception as e:
        logger.error(f"Failed to list schemas: {e}", exc_info=True)
        return error_response(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)

    return {"data": [summary.model_dump() for summary in summaries]}


@router.get("/{key}")
def get_schema(key: str, resolver: SchemaResolver = Depends(get_schema_resolver)):
    """
    Get one resolved schema: collection metadata, routes and merged fields.

    Unknown and malformed keys both answer 404.
    """
    if not KEY_PATTERN.fullmatch(key):
        return error_response("Schema not found", status.HTTP_404_NOT_FOUND)

    try:
        resolved = resolver.resolve(key)
    except SchemaNotFoundError:
        return error_response("Schema not found", status.HTTP_404_NOT_FOUND)
    except SchemaClassMissingError as e:
        logger.warning_ctx(str(e), schema_key=key)
        return error_response("Schema class does not exist", status.HTTP_404_NOT_FOUND)
    except Exception as e:
        logger.error(f"Failed to resolve schema '{key}': {e}", exc_info=True)
        return error_response(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)

    return {"data": resolved.model_dump()}
