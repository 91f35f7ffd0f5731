"""
Theme storage: named themes, the active theme, optional JSON files.

With a directory, each theme is one plain JSON file plus an `_active.json`
marker, so overrides survive between runs of the export scripts.

Without a directory the store lives in memory only. There is no shared
default instance; each caller owns its store.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from .exceptions import ThemeError
from .logger import get_module_logger
from .theme import Theme

logger = get_module_logger("theme_store")

DEFAULT_THEME_NAME = "Default"


class ThemeStore:
    """
    Holds themes by name and tracks which one is active.

    Files are named by a filesystem-safe version of the theme name.
    """

    def __init__(self, theme_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the store.

        Args:
            theme_dir: Directory with one ``<name>.json`` per theme.
                       None keeps everything in memory.
        """
        self.theme_dir = Path(theme_dir) if theme_dir is not None else None
        self._themes: dict[str, Theme] = {}
        self._active = DEFAULT_THEME_NAME

        if self.theme_dir is not None:
            self.theme_dir.mkdir(parents=True, exist_ok=True)
            self._load_all()
            logger.info(f"Theme store initialized at: {self.theme_dir}")

        # There is always a theme to export with
        if DEFAULT_THEME_NAME not in self._themes:
            self._themes[DEFAULT_THEME_NAME] = Theme(name=DEFAULT_THEME_NAME)

    @staticmethod
    def _file_key(name: str) -> str:
        # Keep only alnum, dash, underscore, dot
        return "".join(c if c.isalnum() or c in "-_." else "_" for c in name)

    def _theme_file(self, name: str) -> Path:
        return self.theme_dir / f"{self._file_key(name)}.json"

    def _load_all(self) -> None:
        for theme_file in sorted(self.theme_dir.glob("*.json")):
            try:
                data = json.loads(theme_file.read_text())
            except json.JSONDecodeError as e:
                logger.warning(f"Skipping unreadable theme file {theme_file}: {e}")
                continue

            if theme_file.stem == "_active":
                self._active = data.get("name", DEFAULT_THEME_NAME)
                continue

            try:
                theme = Theme(**data["theme"])
            except (KeyError, TypeError, ValidationError) as e:
                logger.warning(f"Skipping invalid theme file {theme_file}: {e}")
                continue
            self._themes[theme.name] = theme

    def _write_active(self) -> None:
        if self.theme_dir is None:
            return
        (self.theme_dir / "_active.json").write_text(json.dumps({"name": self._active}))

    def get_theme(self, name: str) -> Theme:
        """
        Get a theme by name.

        Raises:
            ThemeError: No theme with that name exists
        """
        theme = self._themes.get(name)
        if theme is None:
            raise ThemeError(f"Theme '{name}' does not exist", details={"theme": name})
        return theme

    def get_active(self) -> Theme:
        return self.get_theme(self._active)

    @property
    def active_name(self) -> str:
        return self._active

    def set_active(self, name: str) -> None:
        self.get_theme(name)
        self._active = name
        self._write_active()
        logger.info(f"Active theme: {name}")

    def exists(self, name: str) -> bool:
        return name in self._themes

    def save_theme(self, theme: Theme) -> None:
        """Store a theme, writing it to disk when a directory is configured."""
        self._themes[theme.name] = theme
        if self.theme_dir is None:
            return

        theme_data = {
            "name": theme.name,
            "saved_at": datetime.now().isoformat(),
            "theme": theme.model_dump(),
        }
        theme_file = self._theme_file(theme.name)
        theme_file.write_text(json.dumps(theme_data, indent=2))
        logger.info(f"Saved theme '{theme.name}' -> {theme_file}")

    def delete_theme(self, name: str) -> bool:
        """Delete a theme. The active theme cannot be deleted."""
        if name == self._active:
            raise ThemeError(f"Theme '{name}' is active and cannot be deleted", details={"theme": name})
        if name not in self._themes:
            return False

        del self._themes[name]
        if self.theme_dir is not None:
            theme_file = self._theme_file(name)
            if theme_file.exists():
                theme_file.unlink()
        logger.info(f"Deleted theme '{name}'")
        return True

    def list_themes(self) -> list[str]:
        return sorted(self._themes)
