"""Reactive form state shared by a form and its field components"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

Listener = Callable[["FormStore"], None]


@dataclass
class FormMessage:
    text: str
    kind: str = "info"  # info | success | error


@dataclass
class FormStore:
    values: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    message: Optional[FormMessage] = None
    _listeners: list[Listener] = field(default_factory=list, repr=False)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def set_value(self, key: str, value: Any) -> None:
        self.values[key] = value
        self.errors.pop(key, None)
        self._notify()

    def set_values(self, values: Mapping[str, Any]) -> None:
        self.values.update(values)
        self._notify()

    def reset(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self.values = dict(values or {})
        self.errors = {}
        self._notify()

    def set_errors(self, errors: Mapping[str, str]) -> None:
        self.errors = dict(errors)
        self._notify()

    def set_field_error(self, key: str, message: Optional[str]) -> None:
        if message:
            self.errors[key] = message
        else:
            self.errors.pop(key, None)
        self._notify()

    def clear_errors(self) -> None:
        self.errors = {}
        self.message = None
        self._notify()

    def set_message(self, text: str, kind: str = "info") -> None:
        self.message = FormMessage(text, kind)
        self._notify()
