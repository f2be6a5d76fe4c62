"""
Theme service for the FitTrack application.

``ThemeProvider`` holds the selected theme mode, persists it to a key/value
preference store and notifies listeners when it changes. Listeners are plain
callables; the settings app registers one to rebuild itself.

Classes:
    PreferenceStore: Protocol of the key/value store the provider persists to
    InMemoryPreferenceStore: Store kept in memory, seeded with initial values
    JsonFilePreferenceStore: Store kept in a JSON file
    ThemeProvider: Observable holder of the current theme mode
"""

import json
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol

from ..models.theme import ThemeMode

logger = logging.getLogger(__name__)

THEME_MODE_KEY = "theme_mode"

Listener = Callable[[], None]


class PreferenceStore(Protocol):
    """String key/value store for user preferences."""

    def get_string(self, key: str) -> Optional[str]:
        ...

    def set_string(self, key: str, value: str) -> None:
        ...


class InMemoryPreferenceStore:
    """
    Preference store kept in memory.

    Used as the mocked store in tests; several providers built from the same
    instance see each other's writes, which is how an app restart is simulated.
    """

    def __init__(self, initial_values: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial_values or {})

    def get_string(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set_string(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFilePreferenceStore:
    """
    Preference store kept in a JSON file.

    The file is read once on construction and rewritten on every change. A
    missing or unreadable file starts an empty store.
    """

    def __init__(self, path: Path):
        self._file = Path(path)
        self._values = self._load()

    def _load(self) -> Dict[str, str]:
        if not self._file.exists():
            return {}

        try:
            with open(self._file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Invalid preferences file {self._file}, using defaults: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Preferences file {self._file} does not hold an object, using defaults")
            return {}

        return {str(k): str(v) for k, v in data.items()}

    def get_string(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set_string(self, key: str, value: str) -> None:
        self._values[key] = value
        self._file.parent.mkdir(parents=True, exist_ok=True)
        with open(self._file, "w", encoding="utf-8") as f:
            json.dump(self._values, f, indent=2)


class ThemeProvider:
    """
    Observable holder of the current theme mode.

    The saved mode is loaded on construction (SYSTEM when nothing was saved).
    ``set_theme_mode`` ignores a request for the mode already active; any other
    request updates the state, persists the mode's token and notifies each
    listener exactly once.

    Example:
        >>> prefs = InMemoryPreferenceStore()
        >>> provider = ThemeProvider(prefs)
        >>> provider.set_theme_mode(ThemeMode.DARK)
        >>> prefs.get_string("theme_mode")
        'dark'
        >>> ThemeProvider(prefs).current_theme_mode
        <ThemeMode.DARK: 'dark'>
    """

    def __init__(self, prefs: PreferenceStore):
        self._prefs = prefs
        self._listeners: List[Listener] = []
        self._current_theme_mode = ThemeMode.SYSTEM
        self._load_theme_mode()

    @property
    def current_theme_mode(self) -> ThemeMode:
        return self._current_theme_mode

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_theme_mode(self, mode: ThemeMode) -> None:
        """
        Select a theme mode.

        Args:
            mode: Mode to activate
        """
        mode = ThemeMode(mode)
        if mode == self._current_theme_mode:
            return

        self._current_theme_mode = mode
        self._prefs.set_string(THEME_MODE_KEY, mode.value)
        self._notify_listeners()

    def load_theme_mode(self) -> None:
        """Reload the saved mode from the store and notify listeners."""
        self._load_theme_mode()

    def _load_theme_mode(self) -> None:
        saved = self._prefs.get_string(THEME_MODE_KEY)
        self._current_theme_mode = ThemeMode.from_token(saved)
        self._notify_listeners()

    def _notify_listeners(self) -> None:
        # Copy so a listener may unsubscribe while being notified
        for listener in list(self._listeners):
            listener()
