# bonevox

Building blocks of an octree grid for finite element models of trabecular
bone made from voxel images. Each voxel with a positive weight (its elastic
modulus) becomes a hexahedral element; the nodes of the mesh are stored
sorted by their Morton key. Pure Python, no dependencies.

## Modules

- **`bonevox.morton`**: `morton_encode(x, y, z)` interleaves the low 16 bits
  of three coordinates into a key (x lowest), `morton_decode(key)` splits it
  back. `MortonKeyGenerator` is callable with `(x, y, z)` and steps a key one
  place along an axis with `inc_x`, `inc_y` and `inc_z`. `OctreeNode` is a
  dataclass with a `key` and a weight `w`, ordered and compared by key only.
- **`bonevox.grid_build`**: `build_octree(weights, dims, corner, key_gen)`
  turns a flat weight image (x fastest, then y, then z) into the key-sorted
  node list of its elements and their uncovered corners.
  `element_node_keys(key_gen, key)` gives the eight corner keys of an element.
  `build_boundary_list(coordinates, values, key_gen)` turns `(x, y, z, d)`
  rows and their values into sorted, duplicate-free `(key, direction, value)`
  entries. `add_missing_nodes(nodes, key_gen)` appends the corner nodes that a
  node list lacks.
- **`bonevox.partition`**: splitting a sorted key space into balanced buckets:
  `equal_distribution`, `bucket_starts`, `bucket_sizes`, `refine_boundaries`,
  `fill_buckets`, and `merge_duplicates`, which keeps one node per key.
- **`bonevox.octree`**: `OctreeGrid(weights, dims, resolution=(1, 1, 1),
  corner=(0, 0, 0), key_gen=None)` builds a grid from a weight image. It has
  `elements()` (indices of element nodes), `neighbours(index)`,
  `node_keys(key)`, `index_of(key)` (None when absent),
  `gather_element(values, index)` and `scatter_element(values, index, local,
  factor=1.0)` for the 24 nodal values of an element,
  `boundary_indices(entries)`, `dot(a, b)` and `describe()`. Vectors over the
  grid hold three values per node in key order. `lexicographic_to_octree` and
  `octree_to_lexicographic` reorder vectors between that order and x-fastest
  lattice order.
- **`bonevox.local_matrix`**: `apply_reference_stiffness(x)` multiplies a
  24-value element displacement by the stiffness matrix of the reference
  hexahedral element.

## Example

```python
from bonevox.octree import OctreeGrid
from bonevox.local_matrix import apply_reference_stiffness

grid = OctreeGrid([1.0] * 8, (2, 2, 2))
u = [0.0] * grid.dof_count
f = [0.0] * grid.dof_count
u[2] = 0.01

for index in grid.elements():
    local = grid.gather_element(u, index)
    grid.scatter_element(f, index, apply_reference_stiffness(local),
                         grid.nodes[index].w)

print(grid.describe())
print(grid.dot(u, f))
```

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What it does not do

The package works on data already in memory. It does not read or write voxel
image files, has no command-line program, does not generate test images or
boundary conditions, and contains no solver: assembling and solving the
system from these pieces is left to the caller. A grid is built and used in a
single process.