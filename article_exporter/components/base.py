"""
Component model.

A component is one typed node of the output document. Each kind declares its
specs once (``register_specs``), claims parser nodes (``node_matches``), and
fills its JSON from a matched HTML fragment (``build``).

Lifecycle per instance: unbuilt → built. A build that finds nothing valid
leaves ``json`` as None and the component is dropped from the output.
"""

import copy
from enum import IntEnum
from typing import Any, Optional, Union

from ..component_spec import ComponentSpec
from ..exceptions import ComponentError
from ..logger import get_module_logger

logger = get_module_logger("components")


class AnchorPosition(IntEnum):
    """Where a floating component sits relative to its target."""
    NONE = 0
    AUTO = 1
    LEFT = 2
    RIGHT = 3


class Component:
    """Base class for every component kind."""

    # Short name: factory key, and the component key for theme overrides
    name: str = ""
    label: str = ""

    # Full-width kinds (ads) set this to False
    CAN_BE_ANCHOR_TARGET: bool = True

    # Floating layouts are named <prefix>-left and <prefix>-right
    ANCHOR_LAYOUT_PREFIX: str = "anchor-layout"

    def __init__(self, text: Optional[str], context, anchor_position: AnchorPosition = AnchorPosition.NONE):
        """
        Args:
            text: HTML fragment (or plain value for meta components); None
                creates an unbuilt component
            context: The ExportContext of the running export
            anchor_position: Initial anchor position, ``build`` may change it
        """
        self.context = context
        self.text = text
        self.json: Optional[dict] = None
        self.anchor_position = anchor_position
        self.get_specs()
        if text is not None:
            self.build(text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(role={self.get_json('role')!r})"

    # --- Matching ---

    @classmethod
    def node_matches(cls, node, context) -> Union[Any, list, None]:
        """
        Claim a parser node.

        Returns:
            The node (or a replacement node) on match; a list of
            ``{"name": kind, "value": html}`` parts when the node must be split
            into several components; None when the node is not claimed
        """
        return None

    # --- Specs ---

    @classmethod
    def register_specs(cls) -> None:
        """Declare the specs this kind may emit. Override in subclasses."""

    @classmethod
    def register_spec(cls, name: str, label: str, spec: Union[dict, list]) -> None:
        cls.__dict__["_specs"][name] = ComponentSpec(cls.name, name, label, spec)

    @classmethod
    def get_specs(cls) -> dict[str, ComponentSpec]:
        """The kind's specs, declared on first use and kept on the class."""
        if "_specs" not in cls.__dict__:
            cls._specs = {}
            cls.register_specs()
        return cls.__dict__["_specs"]

    @classmethod
    def get_spec(cls, name: str) -> ComponentSpec:
        specs = cls.get_specs()
        if name not in specs:
            raise ComponentError(f"Unknown spec '{name}'", component=cls.name)
        return specs[name]

    # --- Building ---

    def build(self, text: str) -> None:
        """Populate ``json`` from the matched fragment. Override in subclasses."""
        raise NotImplementedError

    def get_setting(self, name: str) -> Any:
        return self.context.get_setting(name)

    def setting_values(self, *names: str) -> dict:
        """Token values for theme or exporter settings, keyed ``#name#``."""
        return {f"#{name}#": self.get_setting(name) for name in names}

    def tracking_value(self, name: str) -> float:
        # Stored as a percentage, emitted as a fraction of the font size
        return int(self.get_setting(name) or 0) / 100

    def text_alignment(self) -> str:
        return "center" if self.get_setting("body_orientation") == "center" else "left"

    def substitute_spec(self, spec: ComponentSpec, values: Optional[dict] = None) -> Any:
        """Resolve any spec, this kind's or another's, in this export's context."""
        return spec.substitute_values(
            values or {},
            post_id=self.context.post_id,
            theme=self.context.theme,
            metadata=self.context.metadata,
            parent=self.context.parent
        )

    def _substitute(self, spec_name: str, values: Optional[dict]) -> Any:
        return self.substitute_spec(self.get_spec(spec_name), values)

    def register_json(self, spec_name: str, values: Optional[dict] = None) -> None:
        """Set ``json`` from a spec."""
        self.json = self._substitute(spec_name, values)

    def _register_named(self, registry, spec_name: str, name: str, values: Optional[dict], prop: Optional[str]) -> str:
        registered = registry.register(self.context.prefixed(name), self._substitute(spec_name, values))
        if prop:
            self.set_json(prop, registered)
        return registered

    def register_layout(self, spec_name: str, layout_name: str, values: Optional[dict] = None,
                        prop: Optional[str] = "layout") -> str:
        """Register a named layout and reference it from ``json[prop]``."""
        return self._register_named(self.context.registries.layouts, spec_name, layout_name, values, prop)

    def register_style(self, spec_name: str, style_name: str, values: Optional[dict] = None,
                       prop: Optional[str] = "textStyle") -> str:
        """Register a named text style and reference it from ``json[prop]``."""
        return self._register_named(self.context.registries.text_styles, spec_name, style_name, values, prop)

    def register_component_style(self, spec_name: str, style_name: str, values: Optional[dict] = None,
                                 prop: Optional[str] = "style") -> str:
        """Register a named component style and reference it from ``json[prop]``."""
        return self._register_named(self.context.registries.component_styles, spec_name, style_name, values, prop)

    def register_raw_layout(self, layout_name: str, layout: dict) -> None:
        """Register a computed layout (not overridable) and reference it."""
        self.set_json("layout", self.context.registries.layouts.register(self.context.prefixed(layout_name), layout))

    # --- JSON access ---

    def get_json(self, key: str) -> Any:
        if not self.json:
            return None
        return self.json.get(key)

    def set_json(self, key: str, value: Any) -> None:
        if self.json is None:
            self.json = {}
        self.json[key] = value

    def to_array(self) -> Optional[dict]:
        """
        The component's final JSON.

        Returns:
            A copy of ``json``, or None when the build produced nothing

        Raises:
            ComponentError: The JSON is not a valid component
        """
        if not self.json:
            return None
        if not self.json.get("role"):
            raise ComponentError(
                f"{self.label or type(self).__name__} produced JSON without a role",
                component=self.name
            )
        return copy.deepcopy(self.json)

    # --- Anchoring ---

    def is_anchor_target(self) -> bool:
        return bool(self.get_json("identifier"))

    def can_be_anchor_target(self) -> bool:
        return (
            self.CAN_BE_ANCHOR_TARGET
            and self.json is not None
            and self.anchor_position == AnchorPosition.NONE
            and not self.is_anchor_target()
        )

    def uid(self) -> str:
        """Identifier of this component, generated on first use."""
        identifier = self.get_json("identifier")
        if not identifier:
            identifier = self.context.next_identifier(seed=self.name)
            self.set_json("identifier", identifier)
        return identifier

    def anchor(self) -> None:
        """
        Apply the layout for the resolved anchor position.

        Must run after the builder set ``anchor.targetComponentIdentifier``
        (or, for a target, after ``uid()``): components with an identifier get
        the shrunken target layout, the others the floating one.
        """
        if self.anchor_position in (AnchorPosition.NONE, AnchorPosition.AUTO):
            return

        body_offset = self.get_setting("body_offset")
        body_span = self.get_setting("body_column_span")
        alignment_offset = self.get_setting("alignment_offset")

        if self.is_anchor_target():
            if self.anchor_position == AnchorPosition.RIGHT:
                name = "anchor-target-layout-right"
                column_start = body_offset + alignment_offset
            else:
                name = "anchor-target-layout-left"
                column_start = body_offset
            layout = {"columnStart": column_start, "columnSpan": body_span - alignment_offset}
        elif self.anchor_position == AnchorPosition.LEFT:
            name = f"{self.ANCHOR_LAYOUT_PREFIX}-left"
            layout = {"columnStart": body_offset, "columnSpan": alignment_offset}
        else:
            name = f"{self.ANCHOR_LAYOUT_PREFIX}-right"
            layout = {"columnStart": body_offset + body_span - alignment_offset, "columnSpan": alignment_offset}

        self.register_raw_layout(name, layout)
