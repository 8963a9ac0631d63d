"""Config-driven controller for server-rendered forms.

The controller is handed the config the static form renderer emits
(``formId``, ``fields``, ``endpoint``, ``nonce``, ``options``) and the raw
values of the form's inputs. It coerces and validates them with the shared
rules, then sends the record as JSON.
"""

import asyncio
import math
from typing import Any, Callable, Mapping, Optional

import httpx

from client.form_store import FormStore
from core.logging_config import get_logger
from core.settings import settings
from field_types.kinds import BOOLEAN_KINDS, NUMERIC_KINDS, FieldKind
from field_types.rules import first_error

logger = get_logger(__name__)

NETWORK_ERROR_MESSAGE = "An error occurred. Please try again."
DEFAULT_ERROR_MESSAGE = "Failed to save"
DEFAULT_SUCCESS_MESSAGE = "Saved successfully!"
DEFAULT_REDIRECT_DELAY = 1.5

Listener = Callable[[dict[str, Any]], None]


def coerce_value(field_config: Mapping[str, Any], raw: Any) -> Any:
    """Input value -> submitted value, per configured field type"""
    kind = FieldKind.decode(field_config.get("type"))

    if kind in BOOLEAN_KINDS:
        if isinstance(raw, bool):
            return raw
        return raw is not None and str(raw).strip().lower() in ("on", "true", "1", "yes")

    if isinstance(raw, (list, tuple)):
        # <select multiple>
        return [str(item).strip() for item in raw]

    if kind in NUMERIC_KINDS:
        if raw is None or isinstance(raw, bool):
            return None
        if isinstance(raw, (int, float)):
            return raw
        text = str(raw).strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return None if math.isnan(number) else number

    if raw is None:
        return None
    return str(raw).strip()


class FormController:
    def __init__(
        self,
        form_id: str,
        config: Mapping[str, Any],
        http_client: httpx.AsyncClient,
        on_redirect: Optional[Callable[[str], None]] = None,
        csrf_header: Optional[str] = None,
    ):
        self.form_id = form_id
        self.http = http_client
        self.on_redirect = on_redirect
        self.csrf_header = csrf_header or settings.CSRF_HEADER
        self.store = FormStore()
        self.submitting = False
        self._listeners: dict[str, list[Listener]] = {"success": [], "error": []}
        self._redirect_task: Optional[asyncio.Task] = None

        self.fields: dict[str, dict[str, Any]] = {}
        self.endpoint = ""
        self.nonce = ""
        self.options: dict[str, Any] = {}
        self.update_config(**config)

    def update_config(self, **config: Any) -> None:
        """Merge new config; fields are matched by name, options are merged"""
        for field in config.get("fields") or []:
            self.fields[field["name"]] = {
                "type": "text",
                "label": field["name"].capitalize(),
                "required": False,
                "validation": {},
                **field,
            }
        if "endpoint" in config:
            self.endpoint = config["endpoint"]
        if "nonce" in config:
            self.nonce = config["nonce"]
        self.options.update(config.get("options") or config.get("config") or {})

    def on(self, event: str, listener: Listener) -> None:
        """Listen for ``success`` or ``error``"""
        self._listeners[event].append(listener)

    def dispatch(self, event: str, detail: dict[str, Any]) -> None:
        for listener in list(self._listeners[event]):
            listener(detail)

    @property
    def submit_text(self) -> Optional[str]:
        if self.submitting:
            return self.options.get("submittingText") or "Submitting..."
        return None

    def validate_on_blur(self, name: str, raw: Any) -> Optional[str]:
        field = self.fields.get(name)
        if field is None:
            return None
        error = first_error(field, coerce_value(field, raw))
        self.store.set_field_error(name, error)
        return error

    def collect(self, raw_values: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, str]]:
        """Coerce and validate every configured field present in the form"""
        data, errors = {}, {}
        for name, field in self.fields.items():
            if name not in raw_values:
                logger.warning(f"Field element not found: {name}")
                continue
            value = coerce_value(field, raw_values[name])
            error = first_error(field, value)
            if error:
                errors[name] = error
                continue
            data[name] = value
        return data, errors

    async def submit(self, raw_values: Mapping[str, Any]) -> bool:
        """Validate and send the form; True when the endpoint accepted it"""
        self.store.clear_errors()

        data, errors = self.collect(raw_values)
        if errors:
            self.store.set_errors(errors)
            return False

        self.submitting = True
        try:
            response = await self.http.request(
                self.options.get("method", "POST"),
                self.endpoint,
                json=data,
                headers={"Content-Type": "application/json", self.csrf_header: self.nonce or ""},
            )
        except httpx.HTTPError as e:
            logger.error(f"Form submission error ({self.form_id}): {e}")
            self.store.set_message(NETWORK_ERROR_MESSAGE, "error")
            return False
        finally:
            self.submitting = False

        try:
            result = response.json() if response.content else {}
        except ValueError:
            result = {}

        if response.is_success:
            self.handle_success(result, data)
            return True
        self.handle_error(result)
        return False

    def handle_success(self, result: Any, data: dict[str, Any]) -> None:
        self.store.set_message(self.options.get("successMessage") or DEFAULT_SUCCESS_MESSAGE, "success")

        if self.options.get("resetOnSuccess", True) is not False:
            self.store.reset()
        else:
            self.store.set_values(data)

        self.dispatch("success", {"result": result})

        redirect = self.options.get("redirectOnSuccess")
        if redirect and self.on_redirect is not None:
            delay = self.options.get("redirectDelay", DEFAULT_REDIRECT_DELAY)
            self._redirect_task = asyncio.create_task(self._redirect(redirect, delay))

    async def _redirect(self, url: str, delay: float) -> None:
        await asyncio.sleep(delay)
        self.on_redirect(url)

    @property
    def redirect_task(self) -> Optional[asyncio.Task]:
        return self._redirect_task

    def handle_error(self, result: Any) -> None:
        message = result.get("message") if isinstance(result, Mapping) else None
        self.store.set_message(message or DEFAULT_ERROR_MESSAGE, "error")

        errors = result.get("errors") if isinstance(result, Mapping) else None
        if isinstance(errors, Mapping):
            self.store.set_errors({
                name: messages if isinstance(messages, str) else messages[0]
                for name, messages in errors.items()
                if messages
            })

        self.dispatch("error", {"result": result})
