import logging
import random

from livequadtree import PointItem, QuadTree


def make_tree():
    qt = QuadTree((0, 0, 100, 100), capacity=2)
    crowd = [PointItem(x, y) for x, y in ((5, 5), (95, 5), (5, 95), (95, 95), (50, 50))]
    qt.add_range(crowd)
    return qt, crowd


def test_moved_relocates_item():
    qt, crowd = make_tree()
    mover = PointItem(10, 10)
    qt.add(mover)

    mover.move_to(80, 30)
    assert qt.moved(mover) is True

    assert mover in qt.query((75, 25, 85, 35))
    assert mover not in qt.query((8, 8, 12, 12))
    assert qt.recorded_position(mover) == (80, 30)
    assert len(qt) == len(crowd) + 1


def test_query_before_moved_sees_stale_tree():
    qt, _ = make_tree()
    mover = PointItem(10, 10)
    qt.add(mover)
    mover.move_to(80, 30)

    # Node holding it is still the one covering (10, 10)
    assert qt.query((75, 25, 85, 35)) == []
    assert qt.query((0, 0, 20, 20)) == [qt.to_list()[0]]


def test_moved_untracked_item_returns_false():
    qt, _ = make_tree()
    assert qt.moved(PointItem(1, 1)) is False


def test_moved_without_position_change_is_harmless():
    qt, crowd = make_tree()
    assert qt.moved(crowd[2]) is True
    assert crowd[2] in qt.query((0, 90, 10, 100))
    assert len(qt) == len(crowd)


def test_moved_out_of_bounds_untracks_item(caplog):
    qt, _ = make_tree()
    mover = PointItem(20, 20)
    qt.add(mover)
    mover.move_to(500, 500)

    with caplog.at_level(logging.WARNING, logger="livequadtree.quadtree"):
        assert qt.moved(mover) is True
    assert mover not in qt
    assert "no longer tracked" in caplog.text


def test_moved_fails_when_tree_lost_the_item(caplog):
    qt, _ = make_tree()
    mover = PointItem(20, 20)
    qt.add(mover)
    # Pull it out of the tree behind the index's back
    assert qt._root.remove(mover)  # type: ignore[attr-defined]

    with caplog.at_level(logging.WARNING, logger="livequadtree.quadtree"):
        assert qt.moved(mover) is False
    assert mover in qt
    assert qt.recorded_position(mover) == (20, 20)
    assert "not found at its recorded position" in caplog.text


def test_moved_many_is_per_item():
    qt, crowd = make_tree()
    stranger = PointItem(1, 1)
    for it in crowd[:2]:
        it.move_to(it.x + 1, it.y + 1)

    result = qt.moved_many([crowd[0], stranger, crowd[1]])
    assert result.succeeded == [crowd[0], crowd[1]]
    assert result.failed == [stranger]
    assert qt.recorded_position(crowd[0]) == (6, 6)


def test_update_all_relocates_only_changed_items():
    qt, crowd = make_tree()
    crowd[0].move_to(60, 60)
    crowd[3].move_to(40, 10)

    result = qt.update_all()
    assert result.ok
    assert {id(it) for it in result.succeeded} == {id(crowd[0]), id(crowd[3])}
    assert crowd[0] in qt.query((55, 55, 65, 65))
    assert crowd[3] in qt.query((35, 5, 45, 15))
    assert qt.update_all().count == 0


def test_many_random_moves_stay_consistent():
    rng = random.Random(7)
    qt = QuadTree((0, 0, 200, 200), capacity=3)
    items = [PointItem(rng.uniform(0, 200), rng.uniform(0, 200)) for _ in range(150)]
    qt.add_range(items)

    for _ in range(20):
        movers = rng.sample(items, 40)
        for it in movers:
            it.move_to(rng.uniform(0, 200), rng.uniform(0, 200))
        assert qt.moved_many(movers).ok

        got = qt.query((50, 50, 150, 150))
        expected = [it for it in items if 50 <= it.x <= 150 and 50 <= it.y <= 150]
        assert {id(it) for it in got} == {id(it) for it in expected}
        assert len(got) == len(expected)

    assert len(qt) == len(items)
