"""
Layout loading.

Builds a navigation tree from declarative descriptors, either pydantic
specs or a JSON document:

    {
        "menus": [
            {"id": "main"},
            {"id": "items_menu", "reachable_from_name": "items", "wrapping": true}
        ],
        "focusables": [
            {"id": "items_btn", "menu": "main", "name": "items"},
            {"id": "potion", "menu": "items_menu", "priority": true}
        ]
    }

Every entry is validated against the bundled JSON schema. Invalid
entries are logged and skipped; the rest of the layout still loads.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import jsonschema
from pydantic import BaseModel, ConfigDict

from menunav.tree.nodes import AnchorRef, Focusable, FocusAction, FocusState, Menu, MenuSetting
from menunav.tree.tree import NavigationTree, NavTreeError


SCHEMA_PATH = Path(__file__).parent / "schemas" / "layout.schema.json"


class FocusableSpec(BaseModel):
    """Descriptor of a focusable."""

    model_config = ConfigDict(extra='forbid')

    id: str
    menu: Optional[str] = None
    name: Optional[str] = None
    priority: bool = False
    blocked: bool = False
    action: str = "normal"

    def build(self) -> Focusable:
        return Focusable(
            id=self.id,
            name=self.name,
            priority=self.priority,
            state=FocusState.BLOCKED if self.blocked else FocusState.INERT,
            action=FocusAction[self.action.upper()],
        )


class MenuSpec(BaseModel):
    """Descriptor of a menu; at most one of the reachable_from fields is set."""

    model_config = ConfigDict(extra='forbid')

    id: str
    wrapping: bool = False
    scope: bool = False
    reachable_from: Optional[str] = None
    reachable_from_name: Optional[str] = None
    marker: Optional[str] = None

    def build(self) -> Menu:
        return Menu(
            id=self.id,
            setting=MenuSetting(wrapping=self.wrapping, scope=self.scope),
            marker=self.marker,
        )

    @property
    def anchor(self) -> Optional[AnchorRef]:
        if self.reachable_from is not None:
            return AnchorRef.by_id(self.reachable_from)
        if self.reachable_from_name is not None:
            return AnchorRef.by_name(self.reachable_from_name)
        return None


class LayoutLoader:
    """
    Registers layout descriptors into a NavigationTree.

    Menus are registered before focusables so focusables can name any
    menu of the document; anchors naming focusables registered later
    resolve on the next navigation pass.
    """

    def __init__(self, tree: NavigationTree, schema_path: Path | str | None = None):
        self.tree = tree
        self._schema_path = Path(schema_path) if schema_path else SCHEMA_PATH
        self._schema: dict[str, Any] | None = None
        self.logger = logging.getLogger(__name__)

    @property
    def schema(self) -> dict[str, Any]:
        """The layout JSON schema (loaded on first use)."""
        if self._schema is None:
            with open(self._schema_path, 'r') as f:
                self._schema = json.load(f)
        return self._schema

    def load_file(self, path: Path | str) -> list[str]:
        """Load a JSON layout file. Returns the ids registered."""
        path = Path(path)
        try:
            with open(path, 'r') as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Failed to load layout {path}: {e}")
            return []
        return self.load(document, source=str(path))

    def load(self, document: dict[str, Any], source: str = "<layout>") -> list[str]:
        """Load a layout document already parsed from JSON."""
        if not isinstance(document, dict):
            self.logger.error(f"Layout {source} must be a JSON object")
            return []

        unknown = set(document) - {"menus", "focusables"}
        if unknown:
            self.logger.warning(f"Ignoring unknown layout keys in {source}: {sorted(unknown)}")

        menus = self._valid_entries(document.get("menus", []), "menu", source)
        focusables = self._valid_entries(document.get("focusables", []), "focusable", source)

        registered = []
        for entry in menus:
            spec = MenuSpec(**entry)
            if self._register(lambda: self.tree.register_menu(spec.build(), spec.anchor), spec.id, source):
                registered.append(spec.id)

        for entry in focusables:
            spec = FocusableSpec(**entry)
            if self._register(lambda: self.tree.register(spec.build(), spec.menu), spec.id, source):
                registered.append(spec.id)

        self.logger.info(
            f"Loaded {len(registered)} navigation nodes from {source} "
            f"({len(menus)} menus, {len(focusables)} focusables)."
        )
        return registered

    def register_specs(self, menus: list[MenuSpec], focusables: list[FocusableSpec]) -> None:
        """Register already-validated descriptors. Errors propagate."""
        for menu in menus:
            self.tree.register_menu(menu.build(), menu.anchor)
        for focusable in focusables:
            self.tree.register(focusable.build(), focusable.menu)

    def _valid_entries(self, entries: Any, kind: str, source: str) -> list[dict[str, Any]]:
        if not isinstance(entries, list):
            self.logger.error(f"'{kind}s' in {source} must be a list")
            return []

        schema = self.schema["definitions"][kind]
        valid = []
        for entry in entries:
            try:
                jsonschema.validate(instance=entry, schema=schema)
            except jsonschema.ValidationError as e:
                self.logger.error(f"Validation error in {source} ({kind} {entry!r}): {e.message}")
                continue
            valid.append(entry)
        return valid

    def _register(self, register, node_id: str, source: str) -> bool:
        try:
            register()
        except NavTreeError as e:
            self.logger.error(f"Cannot register {node_id!r} from {source}: {e}")
            return False
        return True


def load_layout(tree: NavigationTree, source: Path | str | dict[str, Any]) -> list[str]:
    """Load a layout file or document into `tree`. Returns registered ids."""
    loader = LayoutLoader(tree)
    if isinstance(source, dict):
        return loader.load(source)
    return loader.load_file(source)
