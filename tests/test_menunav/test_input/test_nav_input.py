import pytest
from types import SimpleNamespace
import pygame
from menunav.core.requests import (
    Action,
    Cancel,
    Direction,
    FocusOn,
    Lock,
    Move,
    ScopeDirection,
    ScopeMove,
    Unlock,
)
from menunav.input.handler import NavInputHandler
from menunav.input.mapping import InputMapping, NavAction
from menunav.system import NavigationSystem

def key_down(key):
    return SimpleNamespace(type=pygame.KEYDOWN, key=key)

@pytest.fixture
def nav(row_tree, row_geometry):
    system = NavigationSystem(row_tree)
    system.update(row_geometry)
    return system

@pytest.fixture
def handler(nav, row_geometry):
    return NavInputHandler(nav, geometry=row_geometry)

def test_default_key_bindings(handler, nav):
    assert handler.process_event(key_down(pygame.K_RIGHT)) == Move(Direction.RIGHT)
    assert handler.process_event(key_down(pygame.K_w)) == Move(Direction.UP)
    assert handler.process_event(key_down(pygame.K_RETURN)) == Action()
    assert handler.process_event(key_down(pygame.K_BACKSPACE)) == Cancel()
    assert handler.process_event(key_down(pygame.K_TAB)) == ScopeMove(ScopeDirection.NEXT)
    assert handler.process_event(key_down(pygame.K_q)) == ScopeMove(ScopeDirection.PREVIOUS)

    assert len(nav.pending_requests) == 6

def test_unbound_key_is_ignored(handler, nav):
    assert handler.process_event(key_down(pygame.K_F12)) is None
    assert nav.pending_requests == []

def test_key_release_is_ignored(handler):
    event = SimpleNamespace(type=pygame.KEYUP, key=pygame.K_RIGHT)

    assert handler.process_event(event) is None

def test_escape_unlocks_only_when_locked(handler, nav, row_geometry):
    assert handler.process_event(key_down(pygame.K_ESCAPE)) == Cancel()

    nav.send(Lock("slider"))
    nav.update(row_geometry)

    assert handler.process_event(key_down(pygame.K_ESCAPE)) == Unlock()

def test_handled_requests_move_focus(handler, nav, row_geometry):
    handler.process_event(key_down(pygame.K_d))
    nav.update(row_geometry)

    assert nav.focused == "b"

def test_rebinding(nav):
    mapping = InputMapping()
    mapping.bind_key(NavAction.ACTION, pygame.K_f)
    mapping.unbind_key(NavAction.ACTION, pygame.K_SPACE)
    handler = NavInputHandler(nav, mapping)

    assert handler.process_event(key_down(pygame.K_f)) == Action()
    assert handler.process_event(key_down(pygame.K_SPACE)) is None

def test_mappings_do_not_share_bindings():
    first = InputMapping()
    first.bind_key(NavAction.CANCEL, pygame.K_z)

    assert pygame.K_z not in InputMapping().key_bindings[NavAction.CANCEL]

def test_gamepad_buttons(handler):
    event = SimpleNamespace(type=pygame.JOYBUTTONDOWN, button=0)
    assert handler.process_event(event) == Action()

    event = SimpleNamespace(type=pygame.JOYBUTTONDOWN, button=5)
    assert handler.process_event(event) == ScopeMove(ScopeDirection.NEXT)

def test_gamepad_hat(handler):
    event = SimpleNamespace(type=pygame.JOYHATMOTION, value=(0, 1))
    assert handler.process_event(event) == Move(Direction.UP)

    event = SimpleNamespace(type=pygame.JOYHATMOTION, value=(0, 0))
    assert handler.process_event(event) is None

def test_stick_moves_once_per_deflection(handler):
    def axis(axis_id, value):
        return handler.process_event(SimpleNamespace(type=pygame.JOYAXISMOTION, axis=axis_id, value=value))

    assert axis(0, 0.3) is None           # Inside dead zone
    assert axis(0, 0.9) == Move(Direction.RIGHT)
    assert axis(0, 1.0) is None           # Still held
    assert axis(0, 0.1) is None           # Back to centre
    assert axis(1, 0.8) == Move(Direction.DOWN)
    assert axis(3, 1.0) is None           # Other stick

def test_mouse_hover_focuses(handler, nav):
    event = SimpleNamespace(type=pygame.MOUSEMOTION, pos=(12, 2))
    assert handler.process_event(event) == FocusOn("b")

    # Hovering the focused element does nothing
    event = SimpleNamespace(type=pygame.MOUSEMOTION, pos=(1, 1))
    assert handler.process_event(event) is None

    # Nothing under the cursor
    event = SimpleNamespace(type=pygame.MOUSEMOTION, pos=(100, 100))
    assert handler.process_event(event) is None

def test_mouse_click_on_focused_sends_action(handler, nav):
    event = SimpleNamespace(type=pygame.MOUSEBUTTONUP, button=1, pos=(1, 1))
    assert handler.process_event(event) == Action()

    event = SimpleNamespace(type=pygame.MOUSEBUTTONUP, button=1, pos=(22, 1))
    assert handler.process_event(event) == FocusOn("c")

    event = SimpleNamespace(type=pygame.MOUSEBUTTONUP, button=3, pos=(1, 1))
    assert handler.process_event(event) is None

def test_mouse_ignores_blocked_and_unplaced(nav, row_tree, row_geometry):
    row_tree.block("b")
    handler = NavInputHandler(nav, geometry=row_geometry)

    event = SimpleNamespace(type=pygame.MOUSEMOTION, pos=(12, 2))
    assert handler.process_event(event) is None

    row_tree.unblock("b")
    del row_geometry["b"]
    assert handler.process_event(event) is None

def test_mouse_without_geometry(nav):
    handler = NavInputHandler(nav)
    event = SimpleNamespace(type=pygame.MOUSEMOTION, pos=(1, 1))

    assert handler.process_event(event) is None
