"""
Named definition registries for layouts, component styles and text styles.

Components refer to definitions by name so identical definitions appear once
in the final document.
"""

import copy
from typing import Any, Optional

from .logger import get_module_logger

logger = get_module_logger("registry")


class Registry:
    """Mapping of definition name → definition, in registration order."""

    def __init__(self, kind: str):
        self.kind = kind
        self._items: dict[str, Any] = {}

    def register(self, name: str, definition: Any) -> str:
        """
        Register a definition under a name and return the name.

        Registering a name again replaces the definition; the same name
        normally means the same shared definition, so a differing one is
        logged.
        """
        existing = self._items.get(name)
        if existing is not None and existing != definition:
            logger.debug(f"Replacing {self.kind} '{name}'")
        self._items[name] = copy.deepcopy(definition)
        return name

    def get(self, name: str) -> Optional[Any]:
        return self._items.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._items

    def __len__(self) -> int:
        return len(self._items)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._items)


class Registries:
    """The three registries owned by one export."""

    def __init__(self):
        self.layouts = Registry("layout")
        self.component_styles = Registry("component style")
        self.text_styles = Registry("text style")
