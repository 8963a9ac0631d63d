"""Blueprint API routes"""

from fastapi import APIRouter, Depends

from utils.permissions import require_manage_options
from . import field_types, forms, schemas

router = APIRouter(dependencies=[Depends(require_manage_options)])

router.include_router(schemas.router, prefix="/schemas", tags=["Schemas"])
router.include_router(field_types.router, prefix="/field-types", tags=["Field Types"])
router.include_router(forms.router, prefix="/forms", tags=["Forms"])
