import pytest

from georoute.segment_tree import SegmentTree


def test_single_element_update():
    tree = SegmentTree(5)
    tree.range_multiply(2, 2, 1.5)
    assert tree.point_query(0) == pytest.approx(1.0)
    assert tree.point_query(2) == pytest.approx(1.5)
    assert tree.point_query(4) == pytest.approx(1.0)


def test_overlapping_updates():
    tree = SegmentTree(6)
    tree.range_multiply(0, 3, 2.0)
    tree.range_multiply(2, 5, 0.5)
    assert tree.point_query(1) == pytest.approx(2.0)
    assert tree.point_query(2) == pytest.approx(1.0)
    assert tree.point_query(4) == pytest.approx(0.5)


def test_entire_range_update():
    tree = SegmentTree(4)
    tree.range_multiply(0, 3, 1.2)
    tree.range_multiply(1, 2, 0.8)
    assert tree.point_query(0) == pytest.approx(1.2)
    assert tree.point_query(1) == pytest.approx(0.96)
    assert tree.point_query(2) == pytest.approx(0.96)
    assert tree.point_query(3) == pytest.approx(1.2)


def test_invalid_operations_raise():
    tree = SegmentTree(3)
    with pytest.raises(ValueError):
        tree.range_multiply(2, 1, 1.0)
    with pytest.raises(IndexError):
        tree.range_multiply(0, 3, 1.0)
    with pytest.raises(IndexError):
        tree.point_query(3)


def test_multiple_overlapping_range_updates():
    tree = SegmentTree(10)
    tree.range_multiply(0, 4, 2.0)
    tree.range_multiply(2, 6, 1.5)
    tree.range_multiply(1, 3, 0.5)
    expected = [2.0, 1.0, 1.5, 1.5, 3.0, 1.5, 1.5, 1.0]
    for index, value in enumerate(expected):
        assert tree.point_query(index) == pytest.approx(value)


def test_boundary_updates():
    tree = SegmentTree(5)
    tree.range_multiply(0, 0, 2.0)
    tree.range_multiply(4, 4, 3.0)
    tree.range_multiply(1, 3, 1.5)
    assert tree.point_query(0) == pytest.approx(2.0)
    assert tree.point_query(1) == pytest.approx(1.5)
    assert tree.point_query(2) == pytest.approx(1.5)
    assert tree.point_query(3) == pytest.approx(1.5)
    assert tree.point_query(4) == pytest.approx(3.0)


def test_repeated_updates_on_same_range():
    tree = SegmentTree(5)
    for _ in range(3):
        tree.range_multiply(1, 3, 2.0)
    assert tree.point_query(1) == pytest.approx(8.0)
    assert tree.point_query(2) == pytest.approx(8.0)
    assert tree.point_query(3) == pytest.approx(8.0)
    assert tree.point_query(0) == pytest.approx(1.0)
    assert tree.point_query(4) == pytest.approx(1.0)


def test_len_reports_size():
    assert len(SegmentTree(7)) == 7
    assert len(SegmentTree()) == 0


def test_empty_tree_rejects_operations():
    tree = SegmentTree(0)
    with pytest.raises(RuntimeError):
        tree.range_multiply(0, 0, 2.0)
    with pytest.raises(IndexError):
        tree.point_query(0)


def test_negative_index_rejected():
    tree = SegmentTree(4)
    with pytest.raises(IndexError):
        tree.point_query(-1)
    with pytest.raises(IndexError):
        tree.range_multiply(-1, 2, 2.0)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        SegmentTree(-1)