"""
JSON specs for components.

A spec is a named template for one part of a component's output (its JSON
body, a layout, a text style). String leaves of the form ``#name#`` are
tokens; at build time they are replaced with runtime values, and a token that
resolves to nothing removes its key so the output stays sparse.

Themes may override a spec, but an override can only drop tokens or replace
them with literals. The one exception is ``#postmeta.<key>#``, which reads a
per-content metadata value and is always allowed.
"""

import copy
import json
import re
from typing import Any, Optional, Union

from .exceptions import SpecValidationError
from .logger import get_module_logger

logger = get_module_logger("component_spec")

# A token is a whole string value. A token inside a longer string is never substituted
TOKEN_PATTERN = re.compile(r"#[^#]+#")

POSTMETA_PREFIX = "#postmeta."

# key_from_name keeps what a theme storage key may contain
_KEY_PATTERN = re.compile(r"[^a-z0-9_\-]")


def is_token(value: Any) -> bool:
    """Determine whether a spec value is a token."""
    return isinstance(value, str) and TOKEN_PATTERN.fullmatch(value) is not None


def is_postmeta_token(value: Any) -> bool:
    return is_token(value) and value.startswith(POSTMETA_PREFIX)


def key_from_name(name: str) -> str:
    """Convert a component or spec name into a storage key."""
    return _KEY_PATTERN.sub("", name.lower())


def find_tokens(spec: Any) -> list[str]:
    """
    Recursively collect every token in a spec.

    Args:
        spec: A spec template (mapping, list or scalar)

    Returns:
        Tokens in document order, duplicates included
    """
    tokens = []
    if isinstance(spec, dict):
        for value in spec.values():
            tokens.extend(find_tokens(value))
    elif isinstance(spec, list):
        for value in spec:
            tokens.extend(find_tokens(value))
    elif is_token(spec):
        tokens.append(spec)
    return tokens


def find_embedded_tokens(spec: Any) -> list[str]:
    """Tokens that sit inside a longer string, such as ``"By #author#"``."""
    if isinstance(spec, dict):
        return [token for value in spec.values() for token in find_embedded_tokens(value)]
    if isinstance(spec, list):
        return [token for value in spec for token in find_embedded_tokens(value)]
    if isinstance(spec, str) and not is_token(spec):
        return TOKEN_PATTERN.findall(spec)
    return []


def invalid_tokens(candidate: Any, default: Any) -> list[str]:
    """
    Tokens in ``candidate`` that ``default`` does not declare (postmeta excluded).

    Embedded tokens are always invalid, postmeta ones included, because only
    whole-string tokens are substituted.
    """
    default_tokens = set(find_tokens(default))
    bad = []
    for token in find_tokens(candidate):
        if token.startswith(POSTMETA_PREFIX):
            continue
        if token not in default_tokens and token not in bad:
            bad.append(token)
    for token in find_embedded_tokens(candidate):
        if token not in bad:
            bad.append(token)
    return bad


def validate(candidate: Any, default: Any) -> bool:
    """
    Validate an override against the built-in spec.

    Removing tokens is fine, new tokens are not, except postmeta tokens.
    """
    return not invalid_tokens(candidate, default)


def substitute(spec: Any, values: dict, post_id: int = 0, metadata=None) -> Any:
    """
    Substitute values recursively into a spec template.

    Args:
        spec: The template
        values: Token → value, keyed by the full token (``"#url#"``)
        post_id: Content ID used to resolve postmeta tokens
        metadata: Object with ``get_metadata(post_id, key)``, needed for postmeta

    Returns:
        A new structure with tokens replaced; keys whose token resolved to
        an empty value are removed
    """
    if isinstance(spec, dict):
        result = {}
        for key, value in spec.items():
            if is_token(value):
                resolved = _resolve(value, values, post_id, metadata)
                if resolved:
                    result[key] = resolved
                continue
            result[key] = substitute(value, values, post_id, metadata)
        return result

    if isinstance(spec, list):
        result = []
        for value in spec:
            if is_token(value):
                resolved = _resolve(value, values, post_id, metadata)
                if resolved:
                    result.append(resolved)
                continue
            result.append(substitute(value, values, post_id, metadata))
        return result

    return spec


def _resolve(token: str, values: dict, post_id: int, metadata) -> Any:
    # Fork for postmeta vs. standard tokens
    if token.startswith(POSTMETA_PREFIX):
        if metadata is None:
            return None
        meta_key = token[len(POSTMETA_PREFIX):-1]
        return metadata.get_metadata(post_id, meta_key)
    return values.get(token)


class ComponentSpec:
    """A named JSON template belonging to one component type."""

    def __init__(self, component: str, name: str, label: str, spec: Union[dict, list]):
        self.component = component
        self.name = name
        self.label = label
        self.spec = spec

    def __repr__(self) -> str:
        return f"ComponentSpec({self.component!r}, {self.name!r})"

    @property
    def component_key(self) -> str:
        return key_from_name(self.component)

    @property
    def spec_key(self) -> str:
        return key_from_name(self.name)

    def get_override(self, theme, parent: Optional[str] = None) -> Optional[Any]:
        """Get the override for this spec from a theme, if there is one."""
        if theme is None:
            return None
        return theme.get_spec_override(self.component_key, self.spec_key, parent=parent)

    def get_spec(self, theme=None, parent: Optional[str] = None) -> Any:
        """
        Get the effective template: the theme's override, else the default.

        Args:
            theme: Theme to read overrides from (None means defaults only)
            parent: Component key of an enclosing container for nested exports

        Returns:
            A deep copy, callers are free to mutate it
        """
        override = self.get_override(theme, parent=parent)
        if override:
            return copy.deepcopy(override)
        return copy.deepcopy(self.spec)

    def find_tokens(self, spec: Any = None) -> list[str]:
        return find_tokens(self.spec if spec is None else spec)

    def validate(self, spec: Any) -> bool:
        """Validate the provided spec against the built-in spec."""
        return validate(spec, self.spec)

    def substitute_values(
        self,
        values: dict,
        post_id: int = 0,
        theme=None,
        metadata=None,
        parent: Optional[str] = None
    ) -> Any:
        """
        Using the effective spec and a set of values, build the JSON.

        Args:
            values: Token → value mapping
            post_id: Content ID for postmeta tokens
            theme: Theme supplying overrides
            metadata: Postmeta collaborator
            parent: Enclosing component key for nested exports

        Returns:
            The JSON with tokens substituted
        """
        return substitute(self.get_spec(theme, parent=parent), values, post_id, metadata)

    @staticmethod
    def format_json(spec: Any) -> str:
        return json.dumps(spec, indent=4, sort_keys=True)

    def save(self, spec: Union[str, dict, list], store, theme_name: Optional[str] = None) -> bool:
        """
        Validate and save an override to a theme.

        Args:
            spec: The override, as JSON text or an already-decoded structure
            store: ThemeStore holding the theme
            theme_name: Theme to save into, defaults to the active theme

        Returns:
            True when the override was stored, or when it matched the default
            and an existing override was removed instead

        Raises:
            SpecValidationError: The override is empty, not JSON or adds tokens
        """
        if isinstance(spec, str):
            try:
                spec = json.loads(spec)
            except json.JSONDecodeError as e:
                raise SpecValidationError(
                    f"The spec for {self.label} was invalid and cannot be saved",
                    component=self.component,
                    spec_name=self.name,
                    details={"error": str(e)}
                )

        if not spec:
            raise SpecValidationError(
                f"The spec for {self.label} was invalid and cannot be saved",
                component=self.component,
                spec_name=self.name
            )

        theme = store.get_theme(theme_name) if theme_name else store.get_active()

        # Identical to the built-in spec: nothing to keep in storage
        if self.format_json(spec) == self.format_json(self.spec):
            self.delete(store, theme.name)
            return True

        bad = invalid_tokens(spec, self.spec)
        if bad:
            raise SpecValidationError(
                f"The spec for {self.label} had invalid tokens and cannot be saved",
                component=self.component,
                spec_name=self.name,
                invalid_tokens=bad
            )

        theme.set_spec_override(self.component_key, self.spec_key, spec)
        store.save_theme(theme)
        logger.info(f"Saved override {self.component_key}/{self.spec_key} to theme '{theme.name}'")
        return True

    def delete(self, store, theme_name: Optional[str] = None) -> bool:
        """Delete this spec's override from a theme. Returns False if there was none."""
        theme = store.get_theme(theme_name) if theme_name else store.get_active()
        if not theme.delete_spec_override(self.component_key, self.spec_key):
            return False
        store.save_theme(theme)
        return True
