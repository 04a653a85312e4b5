"""An octree grid of voxel elements with nodes stored in Morton key order."""

from __future__ import annotations

import math
from bisect import bisect_left
from collections.abc import Iterator, MutableSequence, Sequence
from itertools import product
from typing import Optional

from .grid_build import (
    BoundaryEntry,
    add_missing_nodes,
    build_octree,
    element_node_keys,
)
from .morton import MortonKeyGenerator, OctreeNode, morton_decode, morton_encode
from .partition import merge_duplicates

DOFS_PER_NODE = 3
NODES_PER_ELEMENT = 8
DOFS_PER_ELEMENT = DOFS_PER_NODE * NODES_PER_ELEMENT


class OctreeGrid:
    """Nodes of a voxel mesh sorted by key, with element and vector helpers.

    Every node carries three degrees of freedom; vectors over the grid hold
    them node after node in key order. Nodes with a positive weight are
    element origins, the weight being the element's modulus.
    """

    def __init__(
        self,
        weights: Sequence[float],
        dims: tuple[int, int, int],
        resolution: tuple[float, float, float] = (1.0, 1.0, 1.0),
        corner: tuple[int, int, int] = (0, 0, 0),
        key_gen: Optional[MortonKeyGenerator] = None,
    ) -> None:
        self.key_gen = key_gen if key_gen is not None else MortonKeyGenerator()
        self.dims = tuple(int(d) for d in dims)
        self.resolution = tuple(float(r) for r in resolution)
        self.corner = tuple(int(c) for c in corner)
        built = build_octree(weights, self.dims, self.corner, self.key_gen)
        merged = merge_duplicates(built)
        self.nodes: list[OctreeNode] = add_missing_nodes(merged, self.key_gen)
        self._keys = [node.key for node in self.nodes]
        self.private_count = len(self.nodes)
        self.element_count = sum(
            1 for node in self.nodes[: self.private_count] if node.w > 0
        )

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def dof_count(self) -> int:
        return DOFS_PER_NODE * len(self.nodes)

    def node_keys(self, key: int) -> list[int]:
        """Return the keys of the eight corner nodes of the element at key."""
        return element_node_keys(self.key_gen, key)

    def index_of(self, key: int) -> Optional[int]:
        """Return the position of the node with this key, or None if absent."""
        pos = bisect_left(self._keys, key)
        if pos < len(self._keys) and self._keys[pos] == key:
            return pos
        return None

    def elements(self) -> Iterator[int]:
        """Yield the node index of every local element in key order."""
        for index, node in enumerate(self.nodes[: self.private_count]):
            if node.w > 0:
                yield index

    def neighbours(self, index: int) -> list[int]:
        """Return the node indices of the eight corners of the element at index."""
        key = self.nodes[index].key
        result = []
        for corner_key in self.node_keys(key):
            found = self.index_of(corner_key)
            if found is None:
                raise KeyError(
                    f"corner node {corner_key} of element {key} is not in the grid"
                )
            result.append(found)
        return result

    def _check_vector(self, values: Sequence[float], what: str) -> None:
        if len(values) < self.dof_count:
            raise ValueError(
                f"{what} needs {self.dof_count} entries, got {len(values)}"
            )

    def gather_element(self, values: Sequence[float], index: int) -> list[float]:
        """Return the 24 nodal values of the element at index."""
        self._check_vector(values, "vector")
        return [
            float(values[DOFS_PER_NODE * node + j])
            for node in self.neighbours(index)
            for j in range(DOFS_PER_NODE)
        ]

    def scatter_element(
        self,
        values: MutableSequence[float],
        index: int,
        local: Sequence[float],
        factor: float = 1.0,
    ) -> None:
        """Add factor times the 24 local values to the element's nodes, in place."""
        self._check_vector(values, "vector")
        if len(local) != DOFS_PER_ELEMENT:
            raise ValueError(
                f"expected {DOFS_PER_ELEMENT} local values, got {len(local)}"
            )
        for i, node in enumerate(self.neighbours(index)):
            for j in range(DOFS_PER_NODE):
                values[DOFS_PER_NODE * node + j] += factor * local[DOFS_PER_NODE * i + j]

    def boundary_indices(
        self, entries: Sequence[BoundaryEntry]
    ) -> list[tuple[int, int, float]]:
        """Replace the key of each (key, direction, value) by its node index.

        Only the grid's own nodes are searched; a missing key raises KeyError.
        """
        private_keys = self._keys[: self.private_count]
        result = []
        for key, direction, value in entries:
            pos = bisect_left(private_keys, key)
            if pos == len(private_keys) or private_keys[pos] != key:
                raise KeyError(f"boundary node {key} is not in the grid")
            result.append((pos, direction, value))
        return result

    def dot(self, a: Sequence[float], b: Sequence[float]) -> float:
        """Return the dot product of two grid vectors over the grid's own nodes."""
        length = DOFS_PER_NODE * self.private_count
        if len(a) < length or len(b) < length:
            raise ValueError(
                f"vectors need {length} entries, got {len(a)} and {len(b)}"
            )
        return sum(x * y for x, y in zip(a[:length], b[:length]))

    def describe(self) -> str:
        """Return a short summary of the grid's size and density."""
        gx, gy, gz = self.dims
        rx, ry, rz = self.resolution
        cells = gx * gy * gz
        lattice = (gx + 1) * (gy + 1) * (gz + 1)
        elem_density = self.element_count / cells if cells else math.nan
        node_density = self.private_count / lattice
        return (
            "OctreeGrid:\n"
            f"   local Dimension: {gx}, {gy}, {gz}\n"
            f"   global Dimension: {gx}, {gy}, {gz}\n"
            f"   Resolution: {rx:g}, {ry:g}, {rz:g}\n"
            f"   Global Nr. Nodes: {self.private_count}"
            f" Global Nr. Elements: {self.element_count}\n"
            f"   elemental density: {elem_density:g}\n"
            f"   nodal density: {node_density:g}\n"
        )


def _lattice(grid: OctreeGrid) -> tuple[int, int, int]:
    gx, gy, gz = grid.dims
    return gx + 1, gy + 1, gz + 1


def lexicographic_to_octree(
    grid: OctreeGrid, values: Sequence[float], block: int
) -> list[float]:
    """Reorder a vector from x-fastest node order into the grid's key order.

    Lattice nodes that are not part of the grid are dropped.
    """
    if block < 1:
        raise ValueError(f"block must be at least 1, got {block}")
    nx, ny, nz = _lattice(grid)
    if len(values) != nx * ny * nz * block:
        raise ValueError(
            f"expected {nx * ny * nz * block} values, got {len(values)}"
        )
    out = [0.0] * (len(grid.nodes) * block)
    for z, y, x in product(range(nz), range(ny), range(nx)):
        index = grid.index_of(morton_encode(x, y, z))
        if index is None:
            continue
        source = ((z * ny + y) * nx + x) * block
        out[index * block:(index + 1) * block] = values[source:source + block]
    return out


def octree_to_lexicographic(
    grid: OctreeGrid, values: Sequence[float], block: int
) -> list[float]:
    """Reorder a vector from the grid's key order into x-fastest node order.

    Lattice nodes that are not part of the grid get zeros.
    """
    if block < 1:
        raise ValueError(f"block must be at least 1, got {block}")
    if len(values) < len(grid.nodes) * block:
        raise ValueError(
            f"expected {len(grid.nodes) * block} values, got {len(values)}"
        )
    nx, ny, nz = _lattice(grid)
    out = [0.0] * (nx * ny * nz * block)
    for index, node in enumerate(grid.nodes):
        x, y, z = morton_decode(node.key)
        if not (x < nx and y < ny and z < nz):
            raise ValueError(f"node ({x}, {y}, {z}) lies outside the grid lattice")
        target = ((z * ny + y) * nx + x) * block
        out[target:target + block] = values[index * block:(index + 1) * block]
    return out