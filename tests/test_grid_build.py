import pytest

from bonevox.grid_build import (
    add_missing_nodes,
    build_boundary_list,
    build_octree,
    element_node_keys,
)
from bonevox.morton import MortonKeyGenerator, OctreeNode, morton_decode

GEN = MortonKeyGenerator()

CORNER_OFFSETS = [
    (0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0),
    (0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1),
]


@pytest.mark.parametrize("origin", [(0, 0, 0), (3, 5, 2), (7, 7, 7), (12, 1, 30)])
def test_element_node_keys_follow_corner_order(origin):
    x, y, z = origin
    keys = element_node_keys(GEN, GEN(x, y, z))
    expected = [GEN(x + dx, y + dy, z + dz) for dx, dy, dz in CORNER_OFFSETS]
    assert keys == expected


def test_single_voxel_gives_eight_nodes():
    nodes = build_octree([5.0], (1, 1, 1), (0, 0, 0), GEN)
    assert len(nodes) == 8
    assert [n.key for n in nodes] == sorted(n.key for n in nodes)
    elements = [n for n in nodes if n.w > 0]
    assert elements == [OctreeNode(GEN(0, 0, 0), 5.0)]
    assert elements[0].w == 5.0
    assert all(n.w == -2.0 for n in nodes if n.key != GEN(0, 0, 0))


def test_corner_shifts_keys():
    nodes = build_octree([1.0], (1, 1, 1), (4, 2, 6), GEN)
    coords = {morton_decode(n.key) for n in nodes}
    assert coords == {(4 + dx, 2 + dy, 6 + dz) for dx, dy, dz in CORNER_OFFSETS}


def test_adjacent_elements_share_nodes():
    nodes = build_octree([1.0, 2.0], (2, 1, 1), (0, 0, 0), GEN)
    assert len(nodes) == 12
    by_coord = {morton_decode(n.key): n.w for n in nodes}
    assert by_coord[(0, 0, 0)] == 1.0
    assert by_coord[(1, 0, 0)] == 2.0
    assert by_coord[(2, 1, 1)] == -2.0


def test_empty_neighbour_voxel_gets_boundary_node():
    nodes = build_octree([3.0, 0.0], (2, 1, 1), (0, 0, 0), GEN)
    assert len(nodes) == 8
    by_coord = {morton_decode(n.key): n.w for n in nodes}
    assert by_coord[(1, 0, 0)] == -2.0
    assert sum(1 for w in by_coord.values() if w > 0) == 1


def test_full_cube_counts():
    nodes = build_octree([1.0] * 8, (2, 2, 2), (0, 0, 0), GEN)
    assert len(nodes) == 27
    assert sum(1 for n in nodes if n.w > 0) == 8
    assert {morton_decode(n.key) for n in nodes} == {
        (x, y, z) for x in range(3) for y in range(3) for z in range(3)
    }


def test_empty_image_gives_no_nodes():
    assert build_octree([], (0, 0, 0), (0, 0, 0), GEN) == []
    assert build_octree([0.0, 0.0], (2, 1, 1), (0, 0, 0), GEN) == []


def test_wrong_weight_count_raises():
    with pytest.raises(ValueError):
        build_octree([1.0, 2.0], (1, 1, 1), (0, 0, 0), GEN)


def test_boundary_list_sorted_and_unique():
    coords = [(1, 0, 0, 2), (0, 0, 0, 1), (1, 0, 0, 2), (0, 0, 0, 0)]
    values = [0.5, 0.25, 0.5, 0.0]
    entries = build_boundary_list(coords, values, GEN)
    assert entries == [
        (GEN(0, 0, 0), 0, 0.0),
        (GEN(0, 0, 0), 1, 0.25),
        (GEN(1, 0, 0), 2, 0.5),
    ]


def test_boundary_list_length_mismatch_raises():
    with pytest.raises(ValueError):
        build_boundary_list([(0, 0, 0, 0)], [], GEN)


def test_boundary_list_bad_row_raises():
    with pytest.raises(ValueError):
        build_boundary_list([(0, 0, 0)], [1.0], GEN)


def test_add_missing_nodes_appends_sorted_corners():
    element = OctreeNode(GEN(2, 2, 2), 1.0)
    result = add_missing_nodes([element], GEN)
    assert result[0] == element
    assert result[0].w == 1.0
    tail = result[1:]
    assert len(tail) == 7
    assert [n.key for n in tail] == sorted(n.key for n in tail)
    assert all(n.w == -2.0 for n in tail)
    assert {n.key for n in result} == set(element_node_keys(GEN, element.key))


def test_add_missing_nodes_keeps_complete_grid():
    nodes = build_octree([1.0] * 8, (2, 2, 2), (0, 0, 0), GEN)
    assert add_missing_nodes(nodes, GEN) == nodes


def test_add_missing_nodes_ignores_non_elements():
    nodes = [OctreeNode(GEN(1, 1, 1), -2.0)]
    assert add_missing_nodes(nodes, GEN) == nodes