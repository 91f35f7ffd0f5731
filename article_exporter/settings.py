"""
Exporter-level settings.

Formatting lives in the theme; these are the switches that apply to every
export regardless of theme. An export reads them but never changes them.
"""

import os
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import SettingsError

YesNo = Literal["yes", "no"]


class Settings(BaseModel):
    """Exporter switches, frozen once created."""
    model_config = ConfigDict(frozen=True)

    use_remote_images: YesNo = "no"     # Pass image URLs through instead of bundling them
    html_support: YesNo = "no"          # Text components emit HTML instead of Markdown
    full_bleed_images: YesNo = "no"     # Images span the full document width
    aside_component_class: str = ""     # CSS class that marks an aside, empty disables asides
    advertisement_component_class: str = ""  # CSS class that marks an ad slot
    in_article_position: int = 3        # Body index for the in-article module

    def get(self, name: str) -> Any:
        """Get a setting by name, None if it does not exist."""
        if name in type(self).model_fields:
            return getattr(self, name)
        return None

    def has(self, name: str) -> bool:
        return name in type(self).model_fields

    def with_values(self, **values: Any) -> "Settings":
        """Copy with some values replaced, validated like a new instance."""
        return self.build({**self.model_dump(), **values})

    @classmethod
    def build(cls, values: dict) -> "Settings":
        """
        Validate a mapping of settings.

        Raises:
            SettingsError: A value does not validate
        """
        try:
            return cls(**values)
        except ValidationError as e:
            raise SettingsError(f"Invalid settings: {e}", details={"errors": e.errors()})

    @classmethod
    def from_env(cls, prefix: str = "ARTICLE_EXPORTER_", environ: Optional[dict] = None) -> "Settings":
        """
        Read settings from environment variables.

        ``ARTICLE_EXPORTER_USE_REMOTE_IMAGES=yes`` sets ``use_remote_images``;
        unknown variables are ignored.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            env_name = f"{prefix}{name.upper()}"
            if env_name in environ:
                values[name] = environ[env_name]
        return cls.build(values)
