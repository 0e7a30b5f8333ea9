"""
numba kernels for array input

Same construction as the pure Python path in tools.py, flattened so
that every value stays an int64. Callers guarantee dim * level <= 62.
"""

import numpy as np
from numba import jit


@jit(nopython=True)
def _rotate_right(b, i, dim, mask):
    i = i % dim
    if i == 0:
        return b
    return ((b >> i) | (b << (dim - i))) & mask


@jit(nopython=True)
def _rotate_left(b, i, dim, mask):
    i = i % dim
    if i == 0:
        return b
    return ((b << i) | (b >> (dim - i))) & mask


@jit(nopython=True)
def _gray_decode(g, dim):
    w = g
    for j in range(1, dim):
        w ^= g >> j
    return w


@jit(nopython=True)
def _trailing_ones(i):
    count = 0
    while i & 1:
        i >>= 1
        count += 1
    return count


@jit(nopython=True)
def _entry_corner(w):
    if w == 0:
        return 0
    k = 2 * ((w - 1) // 2)
    return k ^ (k >> 1)


@jit(nopython=True)
def _intra_direction(w, dim):
    if w == 0:
        return 0
    if w & 1 == 0:
        return _trailing_ones(w - 1) % dim
    return _trailing_ones(w) % dim


@jit(nopython=True)
def fast_point2hilbert(points, level):
    """Hilbert indices for an (N, D) int64 array of points"""
    n, dim = points.shape
    mask = (1 << dim) - 1
    out = np.zeros(n, dtype=np.int64)
    for row in range(n):
        h = 0
        entry = 0
        direction = 0
        for i in range(level - 1, -1, -1):
            r = 0
            for k in range(dim):
                r |= ((points[row, k] >> i) & 1) << k
            w = _gray_decode(_rotate_right(r ^ entry, direction + 1, dim, mask), dim)
            entry ^= _rotate_left(_entry_corner(w), direction + 1, dim, mask)
            direction = (direction + _intra_direction(w, dim) + 1) % dim
            h = (h << dim) | w
        out[row] = h
    return out


@jit(nopython=True)
def fast_hilbert2point(indices, dim, level):
    """(N, D) int64 points for a 1-D int64 array of Hilbert indices"""
    n = indices.shape[0]
    mask = (1 << dim) - 1
    out = np.zeros((n, dim), dtype=np.int64)
    for row in range(n):
        idx = indices[row]
        entry = 0
        direction = 0
        for i in range(level - 1, -1, -1):
            w = (idx >> (i * dim)) & mask
            g = w ^ (w >> 1)
            r = _rotate_left(g, direction + 1, dim, mask) ^ entry
            for k in range(dim):
                out[row, k] = (out[row, k] << 1) | ((r >> k) & 1)
            entry ^= _rotate_left(_entry_corner(w), direction + 1, dim, mask)
            direction = (direction + _intra_direction(w, dim) + 1) % dim
    return out
