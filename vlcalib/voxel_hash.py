"""Hash functions for integer voxel coordinates (64-bit results)."""

from __future__ import annotations

from typing import Sequence

_MASK64 = (1 << 64) - 1
_GOLDEN = 0x9E3779B9

_P1 = 73856093
_P2 = 19349669  # 19349663 is not prime
_P3 = 83492791


def combine_hash(coord: Sequence[int]) -> int:
    """Hash a 3D integer coordinate by successive hash combining."""
    seed = 0
    for value in coord[:3]:
        h = int(value) & _MASK64
        seed ^= (h + _GOLDEN + ((seed << 6) & _MASK64) + (seed >> 2)) & _MASK64
    return seed


def xor_hash(coord: Sequence[int]) -> int:
    """Spatial hash: XOR of each coordinate multiplied by a large prime."""
    x, y, z = (int(v) for v in coord[:3])
    return ((x * _P1) ^ (y * _P2) ^ (z * _P3)) & _MASK64