import logging

from livequadtree import Boundary, PointItem, QuadTreeNode

ROOT = Boundary(0, 0, 20, 20)


def filled_node(capacity=4):
    node = QuadTreeNode(ROOT, capacity)
    held = [PointItem(v, v) for v in (1, 2, 3, 4)]
    for it in held:
        assert node.add(it)
    return node, held


def test_add_outside_boundary_fails():
    node = QuadTreeNode(ROOT)
    assert node.add(PointItem(21, 5)) is False
    assert node.count() == 0


def test_leaf_until_capacity_exceeded():
    node, held = filled_node()
    assert node.is_leaf
    assert node.items == tuple(held)
    assert node.get_all_bounds() == [ROOT]


def test_split_creates_four_tiling_quadrants():
    node, _ = filled_node()
    assert node.add(PointItem(19, 19))
    assert not node.is_leaf
    assert node.get_all_bounds() == [
        ROOT,
        Boundary(0, 0, 10, 10),
        Boundary(10, 0, 20, 10),
        Boundary(0, 10, 10, 20),
        Boundary(10, 10, 20, 20),
    ]


def test_items_stay_at_their_level_after_split():
    node, held = filled_node()
    late = PointItem(19, 19)
    node.add(late)
    assert node.items == tuple(held)
    assert node.southeast is not None
    assert node.southeast.items == (late,)


def test_midpoint_goes_to_first_quadrant_in_order():
    node, _ = filled_node()
    on_center = PointItem(10, 10)
    on_vertical = PointItem(10, 15)
    node.add(on_center)
    node.add(on_vertical)
    assert node.northwest.items == (on_center,)
    # (10, 15) is outside NW and NE, first containing quadrant is SW
    assert node.southwest.items == (on_vertical,)


def test_query_orders_local_items_then_children():
    node, held = filled_node()
    ne = PointItem(15, 5)
    sw = PointItem(5, 15)
    nw = PointItem(6, 6)
    for it in (ne, sw, nw):
        node.add(it)
    assert node.query(ROOT) == held + [nw, ne, sw]
    assert node.query(Boundary(14, 4, 16, 6)) == [ne]
    assert node.query(Boundary(30, 30, 40, 40)) == []


def test_remove_unknown_item_returns_false():
    node, _ = filled_node()
    assert node.remove(PointItem(1, 1)) is False
    assert node.count() == 4


def test_remove_matches_identity_not_position():
    node = QuadTreeNode(ROOT)
    a = PointItem(5, 5)
    b = PointItem(5, 5)
    node.add(a)
    node.add(b)
    assert node.remove(b)
    assert node.items == (a,)


def test_remove_through_child_merges_empty_children():
    node, _ = filled_node()
    late = PointItem(19, 19)
    node.add(late)
    assert node.remove(late)
    assert node.is_leaf
    assert node.get_all_bounds() == [ROOT]
    assert node.count() == 4


def test_no_merge_while_a_child_still_holds_items():
    node, _ = filled_node()
    a = PointItem(19, 19)
    b = PointItem(1, 19)
    node.add(a)
    node.add(b)
    assert node.remove(a)
    assert not node.is_leaf
    assert node.count() == 5


def test_remove_at_uses_supplied_position():
    node, _ = filled_node()
    mover = PointItem(15, 15)
    node.add(mover)
    mover.move_to(2, 2)

    assert node.remove(mover) is False
    assert node.remove_at(mover, 15, 15) is True
    assert node.count() == 4
    assert node.is_leaf


def test_zero_area_boundary_never_splits():
    node = QuadTreeNode(Boundary(5, 5, 5, 5), capacity=2)
    for _ in range(10):
        assert node.add(PointItem(5, 5))
    assert node.is_leaf
    assert node.count() == 10


def test_identical_points_stop_at_max_depth():
    node = QuadTreeNode(Boundary(0, 0, 16, 16), capacity=1, max_depth=3)
    stack = [PointItem(1, 1) for _ in range(10)]
    for it in stack:
        assert node.add(it)
    assert node.count() == 10
    assert node.depth_reached() == 3
    assert node.query(Boundary(0, 0, 2, 2)) == stack


def test_clear_drops_items_and_children():
    node, _ = filled_node()
    node.add(PointItem(19, 19))
    node.clear()
    assert node.is_leaf
    assert node.count() == 0
    assert node.query(ROOT) == []


def test_overflow_leaf_logs_once(caplog):
    node = QuadTreeNode(Boundary(0, 0, 16, 16), capacity=2, max_depth=0)
    with caplog.at_level(logging.DEBUG, logger="livequadtree._node"):
        for _ in range(20):
            assert node.add(PointItem(3, 3))
    notes = [r for r in caplog.records if "cannot split" in r.getMessage()]
    assert len(notes) == 1
    assert node.count() == 20
