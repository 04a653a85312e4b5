import pytest

from bonevox.morton import (
    MortonKeyGenerator,
    OctreeNode,
    morton_decode,
    morton_encode,
)

COORDS = [(0, 0, 0), (1, 2, 3), (7, 0, 5), (255, 17, 1023), (65535, 65535, 65535)]


def test_axis_bits():
    assert morton_encode(1, 0, 0) == 1
    assert morton_encode(0, 1, 0) == 2
    assert morton_encode(0, 0, 1) == 4


@pytest.mark.parametrize("coords", COORDS)
def test_round_trip(coords):
    assert morton_decode(morton_encode(*coords)) == coords


def test_keys_are_distinct_in_a_block():
    keys = {morton_encode(x, y, z) for x in range(4) for y in range(4) for z in range(4)}
    assert len(keys) == 64
    assert max(keys) == 63


def test_only_sixteen_bits_are_used():
    assert morton_encode(1 << 16, 0, 0) == morton_encode(0, 0, 0)


def test_negative_coordinate_raises():
    with pytest.raises(ValueError):
        morton_encode(-1, 0, 0)
    with pytest.raises(ValueError):
        morton_decode(-5)


@pytest.mark.parametrize("coords", COORDS[:-1])
def test_increments_match_encoding(coords):
    gen = MortonKeyGenerator()
    x, y, z = coords
    key = gen(x, y, z)
    assert key == morton_encode(x, y, z)
    assert gen.inc_x(key) == morton_encode(x + 1, y, z)
    assert gen.inc_y(key) == morton_encode(x, y + 1, z)
    assert gen.inc_z(key) == morton_encode(x, y, z + 1)


def test_increment_difference_is_xor_mask():
    gen = MortonKeyGenerator()
    key = gen(3, 1, 0)
    diff = gen.inc_x(key) ^ key
    assert morton_decode(key ^ diff) == (4, 1, 0)


def test_nodes_order_by_key_and_ignore_weight():
    nodes = [OctreeNode(5, 1.0), OctreeNode(2, -2.0), OctreeNode(9, 0.5)]
    assert [n.key for n in sorted(nodes)] == [2, 5, 9]
    assert OctreeNode(5, 1.0) == OctreeNode(5, -3.0)
    assert OctreeNode(1, 9.0) < OctreeNode(2, 0.0)
    assert int(OctreeNode(42, 1.0)) == 42