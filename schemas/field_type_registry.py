from typing import Optional

from pydantic import BaseModel


class FieldTypeRead(BaseModel):
    """A registered field type as the gateway exposes it"""
    handle: str
    label: str
    # None for types that never get a column (sortable children)
    column_type: Optional[str] = None
    ui_component: str
    template: str
    input_type: str
    category: str = "general"
    icon: Optional[str] = None
    version: Optional[str] = None
