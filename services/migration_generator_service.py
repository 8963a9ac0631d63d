"""Migration Generator Service - Generate SQL for collection table migrations"""

from typing import List, Optional

from field_types.field import FieldDefinition
from schemas.resolved_schema import ResolvedSchema
from services.field_type_registry import FieldTypeRegistry, get_field_type_registry
from services.validation_service import build_field_definitions


class MigrationGeneratorService:
    """
    Generates SQL migrations for collection tables.

    Each table gets standard columns:
    - id (BIGINT UNSIGNED AUTO_INCREMENT PRIMARY KEY)
    - created_at (TIMESTAMP)
    - updated_at (TIMESTAMP)

    Plus a column for each resolved field whose type owns one.
    """

    def __init__(self, field_type_registry: Optional[FieldTypeRegistry] = None):
        self.field_type_registry = field_type_registry or get_field_type_registry()

    def column_definitions(self, resolved: ResolvedSchema) -> List[str]:
        """Column SQL of every field that owns a column, in field order"""
        columns = []
        for field in self._fields(resolved):
            column_sql = field.column_definition()
            if column_sql:  # Skip virtual fields (sortable children)
                columns.append(column_sql)
        return columns

    def generate_create_table_sql(self, resolved: ResolvedSchema, table_name: Optional[str] = None) -> str:
        """
        Generate CREATE TABLE SQL for a resolved schema.

        Args:
            resolved: The resolved schema to create a table for
            table_name: Overrides the collection model's table name

        Returns:
            SQL string to create the table
        """
        table_name = table_name or self._table_name(resolved)

        columns = ["id BIGINT UNSIGNED NOT NULL AUTO_INCREMENT"]
        columns.extend(self.column_definitions(resolved))
        columns.append("created_at TIMESTAMP NULL DEFAULT NULL")
        columns.append("updated_at TIMESTAMP NULL DEFAULT NULL")
        columns.append("PRIMARY KEY (id)")

        columns_sql = ',\n    '.join(columns)
        return f'CREATE TABLE {table_name} (\n    {columns_sql}\n)'

    def generate_add_column_sql(
        self,
        resolved: ResolvedSchema,
        field_key: str,
        table_name: Optional[str] = None
    ) -> str:
        """
        Generate ALTER TABLE SQL to add the column of one field.

        Returns:
            SQL string to add the column, or "" for virtual fields
        """
        table_name = table_name or self._table_name(resolved)
        field = next((f for f in self._fields(resolved) if f.key == field_key), None)
        if field is None:
            raise KeyError(f"Schema '{resolved.key}' has no field '{field_key}'")

        column_sql = field.column_definition()
        if not column_sql:
            return ""
        return f'ALTER TABLE {table_name} ADD COLUMN {column_sql};'

    def generate_drop_column_sql(self, table_name: str, field_key: str) -> str:
        return f'ALTER TABLE {table_name} DROP COLUMN `{field_key}`;'

    def _fields(self, resolved: ResolvedSchema) -> List[FieldDefinition]:
        return build_field_definitions(resolved, self.field_type_registry)

    @staticmethod
    def _table_name(resolved: ResolvedSchema) -> str:
        model = resolved.collection.model
        if model is None:
            raise ValueError(f"Schema '{resolved.key}' has no collection table; pass a table name")
        return model.table
