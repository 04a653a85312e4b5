"""Morton keys, octree grid building and reference element stiffness for voxel bone models."""

__version__ = "1.0.0"