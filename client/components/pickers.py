"""Pickers whose options come from another endpoint"""

from typing import Any, Optional

import httpx

from client.api import ApiError
from client.components.base import AsyncFieldComponent
from core.logging_config import get_logger

logger = get_logger(__name__)


class RelationPicker(AsyncFieldComponent):
    component = "RelationField"

    def __init__(self, key, field_type, attributes, form):
        super().__init__(key, field_type, attributes, form)
        self.options: list[dict[str, Any]] = []

    @property
    def source(self) -> dict[str, Any]:
        relation = self.attributes.relation
        return relation.model_dump(by_alias=True) if relation else {}

    def empty_value(self) -> Any:
        return None

    def coerce(self, raw: Any) -> Any:
        if raw in (None, ""):
            return None
        return raw

    async def load(self) -> None:
        source = self.source
        if not source.get("endpoint"):
            self.load_error = "No endpoint configured for relation field"
            return

        params = {"per_page": source.get("perPage", 20), **source.get("filters", {})}
        endpoint = self.form.absolute_url(source["endpoint"])

        def apply(items):
            label_field = source.get("labelField", "title")
            value_field = source.get("valueField", "id")
            self.options = [
                {"label": item.get(label_field), "value": item.get(value_field)} for item in items
            ]

        await self.fetch(lambda: self.form.api.list_records(endpoint, params), apply)

    def props(self) -> dict[str, Any]:
        props = super().props()
        props["placeholder"] = self.source.get("placeholder") or "Select an option..."
        props["options"] = self.options
        return props


class UserPicker(AsyncFieldComponent):
    component = "UserField"
    default_endpoint = "wp/v2/users"
    loading_error_message = "Failed to search"

    def __init__(self, key, field_type, attributes, form):
        super().__init__(key, field_type, attributes, form)
        self.results: list[dict[str, Any]] = []
        self.selected: Optional[dict[str, Any]] = None
        self.selection_error: Optional[str] = None
        self.search_term = ""
        self._selection_token = 0

    @property
    def endpoint(self) -> str:
        return self.form.absolute_url(self.attributes.get("endpoint", self.default_endpoint))

    @property
    def min_search_length(self) -> int:
        return self.attributes.get("minSearchLength", 2)

    def empty_value(self) -> Any:
        return None

    def coerce(self, raw: Any) -> Any:
        if raw in (None, ""):
            return None
        return raw

    def search_params(self, term: str) -> dict[str, Any]:
        params = {"context": "edit", "per_page": self.attributes.get("resultsPerPage", 10)}
        if term and len(term) >= self.min_search_length:
            params["search"] = term
        roles = self.attributes.get("roles", [])
        if roles:
            params["roles"] = ",".join(roles)
        return params

    async def search(self, term: str = "") -> bool:
        """Search; results of an older search that finishes late are dropped"""
        self.search_term = term
        params = self.search_params(term)

        def apply(items):
            self.results = list(items)

        return await self.fetch(lambda: self.form.api.list_records(self.endpoint, params), apply)

    async def load(self) -> None:
        if self.value not in (None, ""):
            await self.load_selected(self.value)
        await self.search("")

    async def load_selected(self, record_id: Any) -> bool:
        """Fetch the current selection; kept apart from search results and errors"""
        self._selection_token += 1
        token = self._selection_token
        try:
            selected = await self.form.api.get_record(self.endpoint, record_id)
        except (ApiError, httpx.HTTPError) as e:
            if token != self._selection_token:
                return False
            logger.warning_ctx("Failed to load selected record", field=self.key, error=str(e))
            self.selected = None
            self.selection_error = str(e) or "Failed to load selection"
            return False

        if token != self._selection_token:
            return False
        self.selected = selected
        self.selection_error = None
        return True

    def select(self, item: dict[str, Any]) -> None:
        self._selection_token += 1
        self.selection_error = None
        self.selected = item
        self.set_value(item.get("id"))

    def clear(self) -> None:
        self._selection_token += 1
        self.selection_error = None
        self.selected = None
        self.set_value(None)

    def props(self) -> dict[str, Any]:
        props = super().props()
        props["placeholder"] = self.attributes.placeholder or "Search..."
        props["results"] = self.results
        props["selected"] = self.selected
        return props

    def render_state(self) -> dict[str, Any]:
        state = super().render_state()
        state["selectionError"] = self.selection_error
        return state


class PostObjectPicker(UserPicker):
    component = "PostObjectField"
    default_endpoint = "wp/v2/posts"

    def search_params(self, term: str) -> dict[str, Any]:
        params = super().search_params(term)
        params.pop("roles", None)
        params["status"] = self.attributes.get("status", "publish")
        return params

    @property
    def endpoint(self) -> str:
        # One REST route per post type; the first configured type is searched
        post_types = self.attributes.get("postTypes", ["post"])
        endpoint = self.attributes.get("endpoint")
        if endpoint:
            return self.form.absolute_url(endpoint)
        route = "posts" if post_types[0] == "post" else post_types[0]
        return self.form.absolute_url(f"wp/v2/{route}")
