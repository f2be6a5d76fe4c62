"""
Settings screen for the FitTrack application.

``SettingsApp`` is a minimal Textual app shell bound to a ``ThemeProvider``:
it shows the Settings title, the Appearance section and one button per theme
mode. Pressing a button selects that mode; every change notified by the
provider rebuilds the shell, applying the matching Textual theme.

Classes:
    SettingsApp: App shell hosting the settings screen
"""

from typing import Callable, Dict, Optional

from textual.app import App, ComposeResult
from textual.widgets import Button, Label

from ..models.theme import ThemeMode
from ..services.theme_service import ThemeProvider

THEME_LABELS: Dict[ThemeMode, str] = {
    ThemeMode.SYSTEM: "System Default",
    ThemeMode.LIGHT: "Light",
    ThemeMode.DARK: "Dark",
}

LIGHT_THEME = "textual-light"
DARK_THEME = "textual-dark"

Builder = Callable[[ThemeMode], None]


def theme_button_id(mode: ThemeMode) -> str:
    return f"theme-{mode.value}"


class SettingsApp(App):
    """
    App shell showing the settings screen.

    Args:
        theme_provider: Holder of the current theme mode
        builder: Optional callback invoked with the current mode on every
            build (once on mount, then once per provider notification)
        system_dark: Whether the platform prefers a dark scheme; decides the
            theme applied in follow-system mode
    """

    TITLE = "Settings"

    CSS = """
    #settings-title {
        text-style: bold;
        margin: 1 2 0 2;
    }
    #appearance-heading {
        text-style: italic;
        margin: 1 2;
    }
    .theme-option {
        margin: 0 2;
        min-width: 20;
    }
    """

    def __init__(
        self,
        theme_provider: ThemeProvider,
        builder: Optional[Builder] = None,
        system_dark: bool = False,
    ):
        super().__init__()
        self.theme_provider = theme_provider
        self.builder = builder
        self.system_dark = system_dark

    def compose(self) -> ComposeResult:
        yield Label("Settings", id="settings-title")
        yield Label("Appearance", id="appearance-heading")
        for mode, label in THEME_LABELS.items():
            yield Button(label, id=theme_button_id(mode), classes="theme-option")

    def on_mount(self) -> None:
        self.theme_provider.add_listener(self._on_theme_changed)
        self._build()

    def on_unmount(self) -> None:
        self.theme_provider.remove_listener(self._on_theme_changed)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        for mode in ThemeMode:
            if event.button.id == theme_button_id(mode):
                self.theme_provider.set_theme_mode(mode)
                return

    def resolve_theme(self, mode: ThemeMode) -> str:
        """Name of the Textual theme rendered for a theme mode."""
        if mode == ThemeMode.DARK or (mode == ThemeMode.SYSTEM and self.system_dark):
            return DARK_THEME
        return LIGHT_THEME

    def _on_theme_changed(self) -> None:
        self._build()

    def _build(self) -> None:
        mode = self.theme_provider.current_theme_mode
        if self.builder is not None:
            self.builder(mode)

        self.theme = self.resolve_theme(mode)
        for button in self.query(Button):
            selected = button.id == theme_button_id(mode)
            button.variant = "primary" if selected else "default"
