"""
Terminal UI for the FitTrack application, built on Textual.

Classes:
    SettingsApp: App shell hosting the settings screen
"""

from .settings_app import THEME_LABELS, SettingsApp

__all__ = ["SettingsApp", "THEME_LABELS"]
