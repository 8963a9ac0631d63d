"""Ordered list of child records, reordered and saved through their own endpoint"""

import asyncio
from typing import Any

from client.components.base import AsyncFieldComponent
from core.logging_config import get_logger

logger = get_logger(__name__)


class SortableChildren(AsyncFieldComponent):
    component = "SortableChildrenField"
    loading_error_message = "Failed to load items"

    def __init__(self, key, field_type, attributes, form):
        super().__init__(key, field_type, attributes, form)
        self.items: list[dict[str, Any]] = []
        self.saving = False
        self.has_changes = False

    @property
    def config(self) -> dict[str, Any]:
        children = self.attributes.sortable_children
        return children.model_dump(by_alias=True) if children else {}

    @property
    def submits_value(self) -> bool:
        return False

    @property
    def notice(self) -> str | None:
        if self.form.record_id is None:
            return "Save this record first to manage its children."
        return None

    async def load(self) -> None:
        config = self.config
        if self.form.record_id is None or not config:
            return

        endpoint = self.form.absolute_url(config["endpoint"])
        params = {config["filterBy"]: self.form.record_id}
        position_field = config["positionField"]

        def apply(items):
            self.items = sorted(items, key=lambda item: item.get(position_field) or 0)
            self.has_changes = False

        await self.fetch(lambda: self.form.api.list_records(endpoint, params), apply)

    def move(self, from_index: int, to_index: int) -> None:
        if from_index == to_index:
            return
        item = self.items.pop(from_index)
        self.items.insert(to_index, item)
        self.has_changes = True

    async def save(self) -> int:
        """PATCH the new 1-based position of every item that moved; returns how many"""
        config = self.config
        endpoint = self.form.absolute_url(config["updateEndpoint"])
        position_field = config["positionField"]
        id_field = config["idField"]

        updates = [
            (item[id_field], index + 1)
            for index, item in enumerate(self.items)
            if item.get(position_field) != index + 1
        ]

        self.saving = True
        self.load_error = None
        try:
            await asyncio.gather(*(
                self.form.api.patch_record(endpoint, item_id, {position_field: position})
                for item_id, position in updates
            ))
        except Exception as e:
            logger.warning_ctx("Failed to save child positions", field=self.key, error=str(e))
            self.load_error = str(e) or "Failed to save changes"
            return 0
        finally:
            self.saving = False

        await self.load()
        self.has_changes = False
        return len(updates)

    async def discard(self) -> None:
        await self.load()

    def render_state(self) -> dict[str, Any]:
        state = super().render_state()
        state.update(items=self.items, saving=self.saving, hasChanges=self.has_changes, notice=self.notice)
        return state

    def props(self) -> dict[str, Any]:
        props = super().props()
        props["config"] = self.config
        return props
