import pytest

from livequadtree import PointItem, QuadTree


@pytest.fixture
def bounds():
    return (0.0, 0.0, 100.0, 100.0)


@pytest.fixture
def qt(bounds):
    return QuadTree(bounds, capacity=4)


@pytest.fixture
def example_tree():
    """Worked example: (0,0)-(20,20), capacity 4, five items."""
    qt = QuadTree.from_rect(0, 0, 20, 20, capacity=4)
    items = [PointItem(v, v) for v in (1, 2, 3, 4)] + [PointItem(19, 19)]
    for it in items:
        assert qt.add(it)
    return qt, items
