"""
Navigation tree nodes.

Nodes are data containers (pydantic models). All navigation logic lives
in the resolvers and the NavigationSystem; the tree only stores nodes
and their relations.

Usage:
    tree.register(Focusable(id="items"))
    tree.register_menu(
        Menu(id="items_menu", setting=MenuSetting(wrapping=True)),
        AnchorRef.by_id("items"),
    )
    tree.register(Focusable(id="potion"), "items_menu")
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Id of the menu holding focusables registered without an explicit menu
ROOT_MENU = "__root__"


class FocusState(Enum):
    """State of a focusable."""
    INERT = auto()    # Not on the path to the focused element
    ACTIVE = auto()   # Anchor on the path from a root menu to the focused element
    FOCUSED = auto()  # The single focused element
    BLOCKED = auto()  # Never focusable until unblocked


class FocusAction(Enum):
    """What an Action request does when this focusable is focused."""
    NORMAL = auto()   # Enter the menu reachable from this focusable, if any
    CANCEL = auto()   # Behave like a Cancel request
    LOCK = auto()     # Lock navigation until Unlock


class NavNode(BaseModel):
    """Base class for tree nodes."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )


class Focusable(NavNode):
    """
    A leaf that can hold input focus.

    `menu` is filled in by NavigationTree.register(); `state` is only
    changed by the navigation system (or tree.block()/unblock()).
    `marker` is overwritten by the marker of the menu, when it has one.
    """
    id: str
    menu: str = ROOT_MENU
    state: FocusState = FocusState.INERT
    priority: bool = False
    name: Optional[str] = None
    action: FocusAction = FocusAction.NORMAL
    marker: Optional[str] = None

    @classmethod
    def blocked(cls, id: str, **kwargs) -> Focusable:
        """Create a focusable that starts blocked."""
        return cls(id=id, state=FocusState.BLOCKED, **kwargs)

    @classmethod
    def cancel(cls, id: str, **kwargs) -> Focusable:
        """Create a "back" button: Action on it acts like Cancel."""
        return cls(id=id, action=FocusAction.CANCEL, **kwargs)

    @classmethod
    def lock(cls, id: str, **kwargs) -> Focusable:
        """Create a focusable that locks navigation on Action."""
        return cls(id=id, action=FocusAction.LOCK, **kwargs)

    @property
    def is_blocked(self) -> bool:
        return self.state == FocusState.BLOCKED

    @property
    def is_focused(self) -> bool:
        return self.state == FocusState.FOCUSED


class MenuSetting(NavNode):
    """How focus moves inside a menu."""
    wrapping: bool = False
    scope: bool = False


class AnchorRef(NavNode):
    """
    Reference to the focusable a menu is reachable from.

    Either a focusable id, or the symbolic `name` of a focusable that may
    not be registered yet.
    """
    id: Optional[str] = None
    name: Optional[str] = None

    @model_validator(mode='after')
    def _exactly_one(self) -> AnchorRef:
        if (self.id is None) == (self.name is None):
            raise ValueError("AnchorRef needs exactly one of 'id' or 'name'")
        return self

    @classmethod
    def by_id(cls, focusable_id: str) -> AnchorRef:
        return cls(id=focusable_id)

    @classmethod
    def by_name(cls, name: str) -> AnchorRef:
        return cls(name=name)

    def __str__(self) -> str:
        return self.id if self.id is not None else f"name:{self.name}"


class Menu(NavNode):
    """
    A group of sibling focusables forming one navigation scope.

    Attributes:
        anchor: How this menu is reached; None marks a root menu
        reachable_from: Resolved anchor focusable id (None while pending
            or for root menus)
        remembered_child: Last focused direct child, restored on re-entry
        marker: Tag copied onto every focusable of the menu, so hosts
            can tell which menu an event involves
    """
    id: str
    setting: MenuSetting = Field(default_factory=MenuSetting)
    anchor: Optional[AnchorRef] = None
    reachable_from: Optional[str] = None
    remembered_child: Optional[str] = None
    marker: Optional[str] = None

    @property
    def is_root(self) -> bool:
        return self.anchor is None

    @property
    def is_pending(self) -> bool:
        """True while the anchor reference is not resolved."""
        return self.anchor is not None and self.reachable_from is None

    @property
    def wrapping(self) -> bool:
        return self.setting.wrapping

    @property
    def scope(self) -> bool:
        return self.setting.scope
