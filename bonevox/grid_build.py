"""Turn a voxel weight image into the sorted node list of an octree grid."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from itertools import product

from .morton import MortonKeyGenerator, OctreeNode

BOUNDARY_NODE_WEIGHT = -2.0
"""Weight given to nodes that carry no element of their own."""

BoundaryEntry = tuple[int, int, float]


def element_node_keys(key_gen: MortonKeyGenerator, key: int) -> list[int]:
    """Return the keys of the eight corner nodes of the element at key.

    The order is 0 (origin), 1 (+x), 2 (+x+y), 3 (+y), then the same four
    one step up in z.
    """
    diffx = key_gen.inc_x(key) ^ key
    diffy = key_gen.inc_y(key) ^ key
    diffz = key_gen.inc_z(key) ^ key
    k1 = key ^ diffx
    k2 = k1 ^ diffy
    k3 = key ^ diffy
    bottom = [key, k1, k2, k3]
    return bottom + [k ^ diffz for k in bottom]


def build_octree(
    weights: Sequence[float],
    dims: tuple[int, int, int],
    corner: tuple[int, int, int],
    key_gen: MortonKeyGenerator,
) -> list[OctreeNode]:
    """Build the nodes of all elements of a local image, sorted by key.

    weights holds one value per voxel, x fastest, then y, then z. Every voxel
    with a positive weight becomes an element node keyed at its position
    shifted by corner. The remaining corners of an element are added with a
    negative weight when they lie past the image or over a voxel of weight
    zero. A key is stored once; the first node inserted for it is kept.
    """
    ldx, ldy, ldz = dims
    if min(ldx, ldy, ldz) < 0:
        raise ValueError(f"negative image dimensions: {dims}")
    if len(weights) != ldx * ldy * ldz:
        raise ValueError(
            f"image of size {dims} needs {ldx * ldy * ldz} weights, got {len(weights)}"
        )
    cx, cy, cz = corner
    plane = ldx * ldy
    nodes: dict[int, OctreeNode] = {}

    for z, y, x in product(range(ldz), range(ldy), range(ldx)):
        w = weights[z * plane + y * ldx + x]
        if not w > 0:
            continue
        key = key_gen(x + cx, y + cy, z + cz)
        nodes.setdefault(key, OctreeNode(key, float(w)))
        for tz, ty, tx in product(range(2), repeat=3):
            if tx + ty + tz == 0:
                continue
            nx, ny, nz = x + tx, y + ty, z + tz
            if (
                nz == ldz
                or ny == ldy
                or nx == ldx
                or weights[nz * plane + ny * ldx + nx] == 0
            ):
                corner_key = key_gen(nx + cx, ny + cy, nz + cz)
                nodes.setdefault(
                    corner_key, OctreeNode(corner_key, BOUNDARY_NODE_WEIGHT)
                )

    return sorted(nodes.values())


def build_boundary_list(
    coordinates: Iterable[Sequence[int]],
    values: Iterable[float],
    key_gen: MortonKeyGenerator,
) -> list[BoundaryEntry]:
    """Pair each constrained dof with its value as (key, direction, value).

    coordinates holds rows (x, y, z, d), one per value. Duplicate entries are
    dropped and the result is sorted by key, then direction, then value.
    """
    rows = list(coordinates)
    amounts = list(values)
    if len(rows) != len(amounts):
        raise ValueError(
            f"{len(rows)} boundary coordinates but {len(amounts)} values"
        )
    entries: set[BoundaryEntry] = set()
    for row, value in zip(rows, amounts):
        if len(row) != 4:
            raise ValueError(f"coordinate rows need 4 entries (x, y, z, d), got {len(row)}")
        x, y, z, d = row
        entries.add((key_gen(x, y, z), int(d), float(value)))
    return sorted(entries)


def add_missing_nodes(
    nodes: Sequence[OctreeNode], key_gen: MortonKeyGenerator
) -> list[OctreeNode]:
    """Append the corner nodes of local elements that the node list lacks.

    The missing nodes get a negative weight and follow the given nodes in key
    order; the given nodes keep their order.
    """
    present = {node.key for node in nodes}
    missing = {
        key
        for node in nodes
        if node.w > 0
        for key in element_node_keys(key_gen, node.key)
        if key not in present
    }
    return list(nodes) + [
        OctreeNode(key, BOUNDARY_NODE_WEIGHT) for key in sorted(missing)
    ]