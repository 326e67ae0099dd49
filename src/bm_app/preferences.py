"""UI preferences (theme, avatar) held in a flat key-value store.

Purely cosmetic and process-lived. Consumers receive the UiPreferences
object from the AppContext and subscribe to it explicitly instead of
listening for ad hoc global events. The sync core never reads these.
"""

import logging
from collections.abc import Callable
from typing import Protocol

from src.bm_common.enums import Theme

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
AVATAR_KEY = "avatar"

PreferenceListener = Callable[[str, str | None], None]


class PreferenceStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str | None) -> None: ...


class InMemoryPreferenceStore:
    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str | None) -> None:
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = value


class UiPreferences:
    def __init__(self, store: PreferenceStore) -> None:
        self._store = store
        self._listeners: list[PreferenceListener] = []

    @property
    def theme(self) -> Theme:
        raw = self._store.get(THEME_KEY)
        try:
            return Theme(raw) if raw is not None else Theme.LIGHT
        except ValueError:
            return Theme.LIGHT

    @theme.setter
    def theme(self, value: Theme) -> None:
        self._set(THEME_KEY, Theme(value).value)

    def toggle_theme(self) -> Theme:
        self.theme = Theme.DARK if self.theme is Theme.LIGHT else Theme.LIGHT
        return self.theme

    @property
    def avatar(self) -> str | None:
        return self._store.get(AVATAR_KEY)

    @avatar.setter
    def avatar(self, value: str | None) -> None:
        self._set(AVATAR_KEY, value or None)

    def subscribe(self, listener: PreferenceListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, key: str, value: str | None) -> None:
        if self._store.get(key) == value:
            return
        self._store.set(key, value)
        for listener in list(self._listeners):
            try:
                listener(key, value)
            except Exception:
                logger.exception("Preference listener raised for %s", key)
