"""
Navigation tree: the arena of menus and focusables.

The tree holds:
- All focusables, indexed by id
- All menus, indexed by id (the implicit ROOT_MENU always exists)
- Menu -> ordered focusable ids index
- Anchor focusable -> sub-menu index

Menus are linked to their parent menu through their anchor: a menu
reachable from focusable F is a child of the menu owning F. Anchors can
be given by symbolic name before the named focusable exists; those
menus stay pending and are retried on every resolve_named_parents()
call.

Usage:
    tree = NavigationTree()
    tree.register_menu(Menu(id="main"))
    tree.register(Focusable(id="items"), "main")
    tree.register(Focusable(id="equip"), "main")

    tree.register_menu(Menu(id="items_menu"), AnchorRef.by_name("items"))
    tree.register(Focusable(id="potion"), "items_menu")
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from menunav.tree.nodes import (
    ROOT_MENU,
    AnchorRef,
    Focusable,
    FocusState,
    Menu,
    MenuSetting,
)


class NavTreeError(Exception):
    """Base class for tree construction errors."""


class DuplicateNodeError(NavTreeError):
    """A node with this id is already registered."""


class UnknownNodeError(NavTreeError):
    """No node with this id is registered."""


class AnchorConflictError(NavTreeError):
    """The anchor focusable already opens another menu."""


class NavigationTree:
    """
    Container for menus and focusables.

    Provides:
    - Registration and removal of nodes
    - Parent/child queries used by the resolvers
    - Deferred resolution of by-name anchors
    """

    def __init__(self, root_setting: MenuSetting | None = None):
        self.logger = logging.getLogger(__name__)

        # Node storage (dicts keep registration order)
        self._focusables: dict[str, Focusable] = {}
        self._menus: dict[str, Menu] = {}

        # Relation indices
        self._menu_children: dict[str, list[str]] = {}
        self._anchored: dict[str, str] = {}  # anchor focusable id -> menu id
        self._names: dict[str, str] = {}     # symbolic name -> focusable id

        # Retry queue: menu id -> passes spent unresolved
        self._pending: dict[str, int] = {}

        self._add_menu(Menu(id=ROOT_MENU, setting=root_setting or MenuSetting()))

    # Registration

    def register(self, focusable: Focusable, owner_menu: str | None = None) -> Focusable:
        """
        Add a focusable to a menu.

        Args:
            focusable: The focusable to add
            owner_menu: Id of the owning menu (implicit root if None)

        Returns:
            The registered focusable
        """
        menu_id = owner_menu or ROOT_MENU
        self._check_new_id(focusable.id)
        if menu_id not in self._menus:
            raise UnknownNodeError(f"Menu {menu_id!r} is not registered")

        if focusable.state in (FocusState.ACTIVE, FocusState.FOCUSED):
            # Focus can only be given by the navigation system
            focusable.state = FocusState.INERT

        focusable.menu = menu_id
        if self._menus[menu_id].marker is not None:
            focusable.marker = self._menus[menu_id].marker
        self._focusables[focusable.id] = focusable
        self._menu_children[menu_id].append(focusable.id)

        if focusable.name:
            if focusable.name in self._names:
                self.logger.warning(
                    f"Focusable name {focusable.name!r} already used by "
                    f"{self._names[focusable.name]!r}, keeping the first one"
                )
            else:
                self._names[focusable.name] = focusable.id

        return focusable

    def register_menu(self, menu: Menu, parent_link: AnchorRef | None = None) -> Menu:
        """
        Add a menu.

        Args:
            menu: The menu to add
            parent_link: Anchor the menu is reachable from. Overrides
                menu.anchor when given. None (and no menu.anchor) makes
                a root menu.

        Returns:
            The registered menu
        """
        self._check_new_id(menu.id)
        if parent_link is not None:
            menu.anchor = parent_link
        menu.reachable_from = None
        menu.remembered_child = None

        if menu.anchor is not None and menu.anchor.id is not None:
            anchor_id = menu.anchor.id
            if anchor_id in self._focusables:
                problem = self._link_problem(menu.id, anchor_id)
                if problem:
                    raise AnchorConflictError(problem)

        self._add_menu(menu)
        if menu.anchor is not None:
            self._pending[menu.id] = 0
            self._try_resolve(menu)

        return menu

    def deregister(self, node_id: str) -> None:
        """
        Remove a focusable or a menu.

        Removing a menu also removes its focusables and, recursively, the
        menus reachable from them. Removing an anchor focusable puts its
        menu back in the pending state.
        """
        if node_id in self._focusables:
            self._remove_focusable(node_id, cascade=False)
        elif node_id in self._menus:
            if node_id == ROOT_MENU:
                raise NavTreeError("The implicit root menu cannot be removed")
            self._remove_menu(node_id)
        else:
            raise UnknownNodeError(f"Node {node_id!r} is not registered")

    def block(self, focusable_id: str) -> None:
        """Make a focusable unreachable until unblocked."""
        focusable = self._require_focusable(focusable_id)
        focusable.state = FocusState.BLOCKED
        menu = self._menus[focusable.menu]
        if menu.remembered_child == focusable_id:
            menu.remembered_child = None

    def unblock(self, focusable_id: str) -> None:
        """Make a blocked focusable reachable again."""
        focusable = self._require_focusable(focusable_id)
        if focusable.is_blocked:
            focusable.state = FocusState.INERT

    # Deferred anchors

    def resolve_named_parents(self, warn_every: int = 0) -> list[str]:
        """
        Retry linking pending menus to their anchor.

        Unresolved anchors are never an error; they are kept and retried
        on the next call. When warn_every > 0, a warning is logged each
        time a menu has spent a multiple of warn_every calls pending.

        Returns:
            Ids of the menus resolved by this call
        """
        resolved = []
        for menu_id in list(self._pending):
            menu = self._menus[menu_id]
            if self._try_resolve(menu):
                resolved.append(menu_id)
                continue

            self._pending[menu_id] += 1
            passes = self._pending[menu_id]
            if warn_every and passes % warn_every == 0:
                self.logger.warning(
                    f"Menu {menu_id!r} is still waiting for anchor {menu.anchor} "
                    f"after {passes} passes; no matching focusable is registered"
                )
        return resolved

    def _try_resolve(self, menu: Menu) -> bool:
        """Link menu to its anchor if the anchor exists. Never raises."""
        anchor = menu.anchor
        if anchor.id is not None:
            anchor_id = anchor.id if anchor.id in self._focusables else None
        else:
            anchor_id = self._names.get(anchor.name)
        if anchor_id is None:
            return False

        problem = self._link_problem(menu.id, anchor_id)
        if problem:
            self.logger.warning(f"{problem}; menu stays unreachable")
            return False

        menu.reachable_from = anchor_id
        self._anchored[anchor_id] = menu.id
        del self._pending[menu.id]
        if menu.marker is not None:
            self.mark_menu(menu.id, menu.marker)
        self.logger.debug(f"Linked menu {menu.id!r} to anchor {anchor_id!r}")
        return True

    def _link_problem(self, menu_id: str, anchor_id: str) -> Optional[str]:
        """Describe why menu_id cannot hang off anchor_id, None if it can."""
        if anchor_id in self._anchored and self._anchored[anchor_id] != menu_id:
            return (
                f"Focusable {anchor_id!r} already opens menu "
                f"{self._anchored[anchor_id]!r}, cannot also open {menu_id!r}"
            )

        visited = set()
        current: Optional[str] = self._focusables[anchor_id].menu
        while current is not None and current not in visited:
            if current == menu_id:
                return (
                    f"Anchoring menu {menu_id!r} on {anchor_id!r} "
                    f"would create a navigation cycle"
                )
            visited.add(current)
            parent = self.parent_menu(current)
            current = parent.id if parent else None
        return None

    # Queries

    def get_focusable(self, focusable_id: str) -> Optional[Focusable]:
        """Get focusable by id."""
        return self._focusables.get(focusable_id)

    def get_menu(self, menu_id: str) -> Optional[Menu]:
        """Get menu by id."""
        return self._menus.get(menu_id)

    def focusable(self, focusable_id: str) -> Focusable:
        """Get focusable by id, raising UnknownNodeError if missing."""
        return self._require_focusable(focusable_id)

    def menu(self, menu_id: str) -> Menu:
        """Get menu by id, raising UnknownNodeError if missing."""
        menu = self._menus.get(menu_id)
        if menu is None:
            raise UnknownNodeError(f"Menu {menu_id!r} is not registered")
        return menu

    @property
    def focusables(self) -> Iterator[Focusable]:
        """Iterate over all focusables in registration order."""
        return iter(self._focusables.values())

    @property
    def menus(self) -> Iterator[Menu]:
        """Iterate over all menus in registration order."""
        return iter(self._menus.values())

    @property
    def focusable_count(self) -> int:
        return len(self._focusables)

    @property
    def focused(self) -> Optional[Focusable]:
        """The focused focusable, if any."""
        for focusable in self._focusables.values():
            if focusable.state == FocusState.FOCUSED:
                return focusable
        return None

    def focusables_of(self, menu_id: str) -> list[str]:
        """Ids of the focusables directly in a menu, in insertion order."""
        return list(self._menu_children.get(menu_id, ()))

    def available_focusables_of(self, menu_id: str) -> list[str]:
        """Like focusables_of, without blocked focusables."""
        return [
            f for f in self._menu_children.get(menu_id, ())
            if not self._focusables[f].is_blocked
        ]

    def children_of(self, menu_id: str) -> list[str]:
        """
        Direct children of a menu: its focusables in insertion order,
        followed by the sub-menus reachable from them.
        """
        focusables = self.focusables_of(menu_id)
        sub_menus = [self._anchored[f] for f in focusables if f in self._anchored]
        return focusables + sub_menus

    def menu_of(self, focusable_id: str) -> Menu:
        """The menu owning a focusable."""
        return self._menus[self._require_focusable(focusable_id).menu]

    def parent_menu(self, menu_id: str) -> Optional[Menu]:
        """The menu owning the anchor of menu_id, None for roots and pending menus."""
        menu = self._menus.get(menu_id)
        if menu is None or menu.reachable_from is None:
            return None
        return self._menus[self._focusables[menu.reachable_from].menu]

    def child_menu(self, focusable_id: str) -> Optional[Menu]:
        """The menu reachable from a focusable, if any."""
        menu_id = self._anchored.get(focusable_id)
        return self._menus[menu_id] if menu_id else None

    def root_menus(self) -> list[Menu]:
        """Root menus in registration order (implicit root first)."""
        return [m for m in self._menus.values() if m.is_root]

    def pending_menus(self) -> list[Menu]:
        """Menus whose anchor is not resolved yet."""
        return [self._menus[m] for m in self._pending]

    def is_rooted(self, menu_id: str) -> bool:
        """True if menu_id is connected to a root menu."""
        visited = set()
        menu = self._menus.get(menu_id)
        while menu is not None:
            if menu.id in visited or menu.is_pending:
                return False
            if menu.is_root:
                return True
            visited.add(menu.id)
            menu = self.parent_menu(menu.id)
        return False

    def is_reachable(self, focusable_id: str) -> bool:
        """
        True if navigation can reach a focusable: it is registered and not
        blocked, its menu is connected to a root, and no anchor on the way
        up is blocked.
        """
        focusable = self._focusables.get(focusable_id)
        if focusable is None or focusable.is_blocked:
            return False

        visited = set()
        menu = self._menus[focusable.menu]
        while not menu.is_root:
            if menu.id in visited or menu.reachable_from is None:
                return False
            visited.add(menu.id)
            anchor = self._focusables[menu.reachable_from]
            if anchor.is_blocked:
                return False
            menu = self._menus[anchor.menu]
        return True

    def marked(self, marker: str) -> list[str]:
        """Ids of the focusables carrying a menu marker."""
        return [f.id for f in self._focusables.values() if f.marker == marker]

    def mark_menu(self, menu_id: str, marker: str | None) -> None:
        """Set a menu's marker and pass it on to the focusables it holds."""
        menu = self.menu(menu_id)
        menu.marker = marker
        for focusable_id in self._menu_children[menu_id]:
            self._focusables[focusable_id].marker = marker

    def find_by_name(self, name: str) -> Optional[Focusable]:
        """Find a focusable by symbolic name."""
        focusable_id = self._names.get(name)
        return self._focusables.get(focusable_id) if focusable_id else None

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._focusables or node_id in self._menus

    def __len__(self) -> int:
        return len(self._focusables)

    # Internal

    def _add_menu(self, menu: Menu) -> None:
        self._menus[menu.id] = menu
        self._menu_children[menu.id] = []

    def _check_new_id(self, node_id: str) -> None:
        if node_id in self._focusables or node_id in self._menus:
            raise DuplicateNodeError(f"Node {node_id!r} already registered")

    def _require_focusable(self, focusable_id: str) -> Focusable:
        focusable = self._focusables.get(focusable_id)
        if focusable is None:
            raise UnknownNodeError(f"Focusable {focusable_id!r} is not registered")
        return focusable

    def _remove_focusable(self, focusable_id: str, cascade: bool) -> None:
        focusable = self._focusables.pop(focusable_id)
        self._menu_children[focusable.menu].remove(focusable_id)

        menu = self._menus[focusable.menu]
        if menu.remembered_child == focusable_id:
            menu.remembered_child = None

        if focusable.name and self._names.get(focusable.name) == focusable_id:
            del self._names[focusable.name]

        sub_menu_id = self._anchored.pop(focusable_id, None)
        if sub_menu_id is None:
            return
        if cascade:
            self._remove_menu(sub_menu_id)
        else:
            # Back to the retry queue, the anchor may be registered again
            self._menus[sub_menu_id].reachable_from = None
            self._pending[sub_menu_id] = 0

    def _remove_menu(self, menu_id: str) -> None:
        for focusable_id in self.focusables_of(menu_id):
            self._remove_focusable(focusable_id, cascade=True)

        menu = self._menus.pop(menu_id)
        del self._menu_children[menu_id]
        self._pending.pop(menu_id, None)
        if menu.reachable_from is not None:
            self._anchored.pop(menu.reachable_from, None)
