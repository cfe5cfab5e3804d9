import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure menunav modules can be imported
sys.path.append(os.getcwd())

@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.joystick'), \
         patch('pygame.key'), \
         patch('pygame.mouse'):

        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)

        yield

@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from menunav.core.events import EventBus
    return EventBus()

@pytest.fixture
def tree():
    """Fresh NavigationTree for each test."""
    from menunav.tree.tree import NavigationTree
    return NavigationTree()

@pytest.fixture
def system(tree, event_bus):
    """NavigationSystem over the `tree` fixture."""
    from menunav.system import NavigationSystem
    return NavigationSystem(tree, event_bus=event_bus)

@pytest.fixture
def row_tree():
    """Three focusables in a row at x = 0, 10, 20 in the implicit root."""
    from menunav.tree.tree import NavigationTree
    from menunav.tree.nodes import Focusable

    tree = NavigationTree()
    for focusable_id in ("a", "b", "c"):
        tree.register(Focusable(id=focusable_id))
    return tree

@pytest.fixture
def row_geometry():
    """Geometry matching `row_tree`."""
    from menunav.tree.geometry import RectMap
    return RectMap().set("a", 0, 0, 5, 5).set("b", 10, 0, 5, 5).set("c", 20, 0, 5, 5)

@pytest.fixture
def menu_tree():
    """
    Two-level menu:

        __root__:   start   items   quit
                             |
        items_menu:        potion  ether  (ether has priority)
    """
    from menunav.tree.tree import NavigationTree
    from menunav.tree.nodes import AnchorRef, Focusable, Menu

    tree = NavigationTree()
    tree.register(Focusable(id="start"))
    tree.register(Focusable(id="items", name="items"))
    tree.register(Focusable(id="quit"))
    tree.register_menu(Menu(id="items_menu"), AnchorRef.by_id("items"))
    tree.register(Focusable(id="potion"), "items_menu")
    tree.register(Focusable(id="ether", priority=True), "items_menu")
    return tree

@pytest.fixture
def menu_geometry():
    """Geometry matching `menu_tree`: root row on top, sub-menu column below."""
    from menunav.tree.geometry import RectMap
    return (RectMap()
            .set("start", 0, 0, 50, 20)
            .set("items", 60, 0, 50, 20)
            .set("quit", 120, 0, 50, 20)
            .set("potion", 60, 40, 50, 20)
            .set("ether", 60, 70, 50, 20))
