import logging
import pytest
from menunav.core.events import NoChangeReason
from menunav.core.requests import Direction
from menunav.resolve.directional import closest_in_direction, nearest, resolve_move, wrap_origin
from menunav.resolve.paths import Transition, Uncaught
from menunav.tree.geometry import Rect, RectMap
from menunav.tree.nodes import Focusable, MenuSetting
from menunav.tree.tree import NavigationTree

def test_move_to_neighbour(row_tree, row_geometry):
    assert resolve_move(row_tree, "a", Direction.RIGHT, row_geometry) == Transition("b")
    assert resolve_move(row_tree, "b", Direction.RIGHT, row_geometry) == Transition("c")
    assert resolve_move(row_tree, "c", Direction.LEFT, row_geometry) == Transition("b")

def test_move_past_edge_without_wrapping(row_tree, row_geometry):
    assert resolve_move(row_tree, "c", Direction.RIGHT, row_geometry) == Uncaught()
    assert resolve_move(row_tree, "a", Direction.LEFT, row_geometry) == Uncaught()
    assert resolve_move(row_tree, "b", Direction.UP, row_geometry) == Uncaught()

def test_move_wraps_to_opposite_edge(row_geometry):
    tree = NavigationTree(root_setting=MenuSetting(wrapping=True))
    for focusable_id in ("a", "b", "c"):
        tree.register(Focusable(id=focusable_id))

    assert resolve_move(tree, "c", Direction.RIGHT, row_geometry) == Transition("a")
    assert resolve_move(tree, "a", Direction.LEFT, row_geometry) == Transition("c")

def test_wrap_alone_is_uncaught():
    tree = NavigationTree(root_setting=MenuSetting(wrapping=True))
    tree.register(Focusable(id="only"))
    geometry = RectMap().set("only", 0, 0, 10, 10)

    assert resolve_move(tree, "only", Direction.DOWN, geometry) == Uncaught()

def test_blocked_focusables_are_skipped(row_tree, row_geometry):
    row_tree.block("b")

    assert resolve_move(row_tree, "a", Direction.RIGHT, row_geometry) == Transition("c")

def test_move_climbs_to_parent_menu(menu_tree, menu_geometry):
    assert resolve_move(menu_tree, "potion", Direction.RIGHT, menu_geometry) == Transition("quit")
    assert resolve_move(menu_tree, "potion", Direction.LEFT, menu_geometry) == Transition("start")
    assert resolve_move(menu_tree, "potion", Direction.UP, menu_geometry) == Transition("items")

def test_move_inside_sub_menu_stays_inside(menu_tree, menu_geometry):
    assert resolve_move(menu_tree, "potion", Direction.DOWN, menu_geometry) == Transition("ether")

def test_missing_geometry_for_focused(row_tree, caplog):
    with caplog.at_level(logging.WARNING):
        result = resolve_move(row_tree, "a", Direction.RIGHT, RectMap())

    assert result == Uncaught()
    assert caplog.records

def test_missing_geometry_for_sibling_is_skipped(row_tree):
    geometry = RectMap().set("a", 0, 0, 5, 5).set("c", 20, 0, 5, 5)

    assert resolve_move(row_tree, "a", Direction.RIGHT, geometry) == Transition("c")

def test_cone_excludes_diagonal_boundary():
    candidates = [("diagonal", Rect(10, 10, 0, 0))]

    assert closest_in_direction((0, 0), Direction.RIGHT, candidates) is None
    assert closest_in_direction((0, 0), Direction.RIGHT, candidates, cone_slope=1.5) == "diagonal"

def test_cone_excludes_candidates_behind():
    candidates = [("behind", Rect(-10, 0, 0, 0)), ("level", Rect(0, 5, 0, 0))]

    assert closest_in_direction((0, 0), Direction.RIGHT, candidates) is None

def test_closest_prefers_distance_then_alignment_then_order():
    # Same distance, smaller perpendicular offset wins
    candidates = [("offset", Rect(8, 6, 0, 0)), ("aligned", Rect(10, 0, 0, 0))]
    assert closest_in_direction((0, 0), Direction.RIGHT, candidates) == "aligned"

    # Shorter distance wins even when less aligned
    candidates = [("far", Rect(20, 0, 0, 0)), ("near", Rect(5, 2, 0, 0))]
    assert closest_in_direction((0, 0), Direction.RIGHT, candidates) == "near"

    # Full tie: first listed wins
    candidates = [("first", Rect(10, -2, 0, 0)), ("second", Rect(10, 2, 0, 0))]
    assert closest_in_direction((0, 0), Direction.RIGHT, candidates) == "first"

def test_up_is_towards_smaller_y():
    candidates = [("above", Rect(0, -10, 0, 0)), ("below", Rect(0, 10, 0, 0))]

    assert closest_in_direction((0, 0), Direction.UP, candidates) == "above"
    assert closest_in_direction((0, 0), Direction.DOWN, candidates) == "below"

def test_wrap_origin():
    bounds = Rect(0, 0, 100, 50)

    assert wrap_origin((90, 25), Direction.RIGHT, bounds) == (-1, 25)
    assert wrap_origin((10, 25), Direction.LEFT, bounds) == (101, 25)
    assert wrap_origin((50, 40), Direction.DOWN, bounds) == (50, -1)
    assert wrap_origin((50, 10), Direction.UP, bounds) == (50, 51)

def test_nearest():
    candidates = [("a", Rect(0, 0, 0, 0)), ("b", Rect(3, 0, 0, 0)), ("c", Rect(-3, 0, 0, 0))]

    assert nearest((2, 0), candidates) == "b"
    assert nearest((0, 0), []) is None
