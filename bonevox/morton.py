"""Morton (Z-order) keys for voxel coordinates and octree nodes."""

from __future__ import annotations

from dataclasses import dataclass, field

COORDINATE_BITS = 16

_X_MASK = sum(1 << (3 * bit) for bit in range(COORDINATE_BITS))
_Y_MASK = _X_MASK << 1
_Z_MASK = _X_MASK << 2


def _check_non_negative(**values: int) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")


def morton_encode(x: int, y: int, z: int) -> int:
    """Interleave the low 16 bits of x, y and z into a key (x lowest)."""
    _check_non_negative(x=x, y=y, z=z)
    key = 0
    for bit in range(COORDINATE_BITS):
        key |= ((x >> bit) & 1) << (3 * bit)
        key |= ((y >> bit) & 1) << (3 * bit + 1)
        key |= ((z >> bit) & 1) << (3 * bit + 2)
    return key


def morton_decode(key: int) -> tuple[int, int, int]:
    """Split a key back into its (x, y, z) coordinates."""
    _check_non_negative(key=key)
    x = y = z = 0
    for bit in range(COORDINATE_BITS):
        x |= ((key >> (3 * bit)) & 1) << bit
        y |= ((key >> (3 * bit + 1)) & 1) << bit
        z |= ((key >> (3 * bit + 2)) & 1) << bit
    return x, y, z


def _increment(key: int, mask: int) -> int:
    """Add one to the coordinate whose bits are selected by mask."""
    _check_non_negative(key=key)
    return (((key | ~mask) + 1) & mask) | (key & ~mask)


class MortonKeyGenerator:
    """Turns coordinates into keys and steps keys along one axis."""

    def __call__(self, x: int, y: int, z: int) -> int:
        return morton_encode(x, y, z)

    def inc_x(self, key: int) -> int:
        return _increment(key, _X_MASK)

    def inc_y(self, key: int) -> int:
        return _increment(key, _Y_MASK)

    def inc_z(self, key: int) -> int:
        return _increment(key, _Z_MASK)


@dataclass(order=True)
class OctreeNode:
    """A grid node: ordered and compared by key only; w is its weight."""

    key: int = 0
    w: float = field(default=0.0, compare=False)

    def __int__(self) -> int:
        return self.key