"""Base classes for client field components.

A component binds one resolved field to the form store. Components that
fetch their own data (pickers, sortable children) derive from
AsyncFieldComponent, which tracks a loading/error sub-state and drops
responses of superseded requests.
"""

import asyncio
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, Optional

from core.logging_config import get_logger
from field_types.attributes import FieldAttributes
from field_types.kinds import humanize

if TYPE_CHECKING:
    from client.dynamic_form import DynamicForm

logger = get_logger(__name__)


class FieldComponent:
    component: str = "TextField"
    input_type: str = "text"

    def __init__(self, key: str, field_type: str, attributes: FieldAttributes, form: "DynamicForm"):
        self.key = key
        self.field_type = field_type
        self.attributes = attributes
        self.form = form

    @classmethod
    def from_config(cls, key: str, config: Mapping[str, Any], form: "DynamicForm") -> "FieldComponent":
        raw = dict(config)
        field_type = raw.pop("type", None) or "text"
        return cls(key, field_type, FieldAttributes.from_mapping(raw), form)

    @property
    def label(self) -> str:
        return self.attributes.label or humanize(self.key)

    @property
    def value(self) -> Any:
        return self.form.store.get(self.key, self.empty_value())

    @property
    def error(self) -> Optional[str]:
        return self.form.store.errors.get(self.key)

    @property
    def submits_value(self) -> bool:
        """Whether the field's value is part of the submitted record"""
        return True

    def empty_value(self) -> Any:
        return ""

    def coerce(self, raw: Any) -> Any:
        if raw is None:
            return self.empty_value()
        return raw if isinstance(raw, str) else str(raw)

    def set_value(self, raw: Any) -> None:
        self.form.store.set_value(self.key, self.coerce(raw))

    def submitted(self, value: Any) -> Any:
        """Stored value -> value sent to the collection endpoint"""
        return value

    def props(self) -> dict[str, Any]:
        attributes = self.attributes
        props = {
            "label": self.label,
            "required": attributes.required,
            "placeholder": attributes.placeholder,
            "helpText": attributes.help_text,
            "inputType": self.input_type,
        }
        return {name: value for name, value in props.items() if value is not None}

    def render_state(self) -> dict[str, Any]:
        """Snapshot a view layer draws this component from"""
        return {
            "key": self.key,
            "component": self.component,
            "props": self.props(),
            "value": self.value,
            "error": self.error,
        }

    async def load(self) -> None:
        """Fetch auxiliary data; plain inputs have none"""

    def cancel(self) -> None:
        """Stop in-flight work; plain inputs have none"""


class AsyncFieldComponent(FieldComponent):
    loading_error_message = "Failed to load options"

    def __init__(self, key, field_type, attributes, form):
        super().__init__(key, field_type, attributes, form)
        self.loading = False
        self.load_error: Optional[str] = None
        self._token = 0
        self._task: Optional[asyncio.Task] = None

    def start(self) -> asyncio.Task:
        """Run ``load`` as an independent task, replacing any in-flight one"""
        self.cancel()
        self._task = asyncio.create_task(self.load(), name=f"field:{self.key}")
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    async def fetch(self, request: Callable[[], Awaitable[Any]], apply: Callable[[Any], None]) -> bool:
        """
        Run one request under a fresh token.

        ``apply`` receives the result only when no newer request started
        meanwhile. Returns whether the result was applied.
        """
        self._token += 1
        token = self._token
        self.loading = True
        self.load_error = None
        try:
            result = await request()
        except asyncio.CancelledError:
            if token == self._token:
                self.loading = False
            raise
        except Exception as e:
            if token != self._token:
                return False
            logger.warning(f"Field '{self.key}' failed to load: {e}")
            self.load_error = str(e) or self.loading_error_message
            self.loading = False
            return False

        if token != self._token:
            logger.debug(f"Dropping stale response for field '{self.key}'")
            return False
        apply(result)
        self.loading = False
        return True

    def render_state(self) -> dict[str, Any]:
        state = super().render_state()
        state.update(loading=self.loading, loadError=self.load_error)
        return state
