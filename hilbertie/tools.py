"""
functions for hilbert indexing
"""

import numpy as np
import os

from .gray import gray_encode, gray_decode
from .transform import Transform
from . import _fast

# Allow forcing pure Python for testing/comparison
FORCE_PYTHON = os.environ.get('HILBERTIE_FORCE_PYTHON', '0') == '1'

# Largest dim * level served by the compiled kernels (indices fit int64)
FAST_MAX_BITS = 62


def level2side(level):
    '''lattice side length at a given level'''
    return 2**level


def max_level(dim):
    '''largest level whose indices are handled by the compiled kernels'''
    _check_dim(dim)
    return FAST_MAX_BITS // dim


def indices(dim, level):
    """All Hilbert indices for a curve, in ascending order

    Lazy and restartable; equivalent to range(2**(dim*level)).
    """
    _check_dim(dim)
    _check_level(level)
    return range(2**(dim * level))


def _check_dim(dim):
    if dim < 1:
        raise ValueError(f"Dimension must be a positive integer, got {dim}")


def _check_level(level):
    if level < 0:
        raise ValueError(f"Level must be non-negative, got {level}")


def _use_fast(dim, level):
    return not FORCE_PYTHON and dim * level <= FAST_MAX_BITS


def _python_point2hilbert_scalar(point, level):
    """Pure Python scalar implementation of point2hilbert"""
    point = [int(c) for c in point]
    dim = len(point)
    frame = Transform.identity(dim)
    index = 0

    for i in range(level - 1, -1, -1):
        r = 0
        for axis, c in enumerate(point):
            r |= ((c >> i) & 1) << axis
        w = gray_decode(frame.apply(r), dim)
        index = (index << dim) | w
        frame = frame.child(w)
    return index


def _python_hilbert2point_scalar(index, dim, level):
    """Pure Python scalar implementation of hilbert2point"""
    index = int(index)
    mask = (1 << dim) - 1
    frame = Transform.identity(dim)
    point = [0] * dim

    for i in range(level - 1, -1, -1):
        w = (index >> (i * dim)) & mask
        r = frame.apply_inverse(gray_encode(w))
        for axis in range(dim):
            point[axis] = (point[axis] << 1) | ((r >> axis) & 1)
        frame = frame.child(w)
    return tuple(point)


def _python_point2hilbert(points, level):
    """Pure Python vectorized implementation of point2hilbert"""
    dtype = np.int64 if points.shape[1] * level <= 63 else object
    return np.array([_python_point2hilbert_scalar(p, level) for p in points],
                    dtype=dtype)


def _python_hilbert2point(indices, dim, level):
    """Pure Python vectorized implementation of hilbert2point"""
    dtype = np.int64 if level <= 63 else object
    result = np.array([_python_hilbert2point_scalar(h, dim, level) for h in indices],
                      dtype=dtype)
    return result.reshape(len(indices), dim)


def validate_point(point, level):
    """Validate that a grid point lies inside the lattice of a level

    Parameters
    ----------
    point : sequence of int
        Grid point, one component per axis
    level : int
        Curve level

    Returns
    -------
    bool
        True if every component is in [0, 2**level)

    Raises
    ------
    ValueError
        If the point is empty or a component is out of range
    """
    _check_level(level)
    if len(point) == 0:
        raise ValueError("Grid point must have at least one component")
    side = level2side(level)
    for axis, c in enumerate(point):
        if c < 0 or c >= side:
            raise ValueError(f"Component {c} on axis {axis} is out of range "
                             f"[0, {side}) for level {level}")
    return True


def validate_hilbert(index, dim, level):
    """Validate that a Hilbert index is in range for a curve

    Parameters
    ----------
    index : int
        Hilbert index
    dim : int
        Curve dimension
    level : int
        Curve level

    Returns
    -------
    bool
        True if index is in [0, 2**(dim*level))

    Raises
    ------
    ValueError
        If the index is out of range
    """
    _check_dim(dim)
    _check_level(level)
    n_cells = 2**(dim * level)
    if index < 0 or index >= n_cells:
        raise ValueError(f"Hilbert index {index} is out of range [0, {n_cells}) "
                         f"for dimension {dim} at level {level}")
    return True


def point2hilbert(points, level, check=False):
    """Convert grid points to Hilbert indices

    A single point (1-D sequence) gives a Python int; an (N, D) array
    gives an array of N indices. Arrays are handled by the numba
    kernels if the indices fit in int64, otherwise by pure Python.

    Components outside [0, 2**level) are not supported; only their low
    `level` bits are used. Pass check=True to validate first.

    Args:
        points: sequence of D ints, or (N, D) array-like
        level: int - Curve level
        check: bool - Raise ValueError on out of range components

    Returns:
        Hilbert index as int, or array of indices
    """
    _check_level(level)
    is_scalar = np.ndim(points) == 1

    if is_scalar:
        _check_dim(len(points))
        if check:
            validate_point(points, level)
        return _python_point2hilbert_scalar(points, level)

    points = np.asarray(points)
    if points.ndim != 2:
        raise ValueError(f"Expected a point or an (N, D) array of points, got shape {points.shape}")
    dim = points.shape[1]
    _check_dim(dim)
    if check:
        for p in points:
            validate_point(p, level)

    if _use_fast(dim, level):
        # only the low `level` bits of each component are read
        points = points & ((1 << level) - 1)
        return _fast.fast_point2hilbert(np.ascontiguousarray(points, dtype=np.int64), level)
    else:
        return _python_point2hilbert(points, level)


def hilbert2point(indices, dim, level, check=False):
    """Convert Hilbert indices to grid points

    A scalar index gives a tuple of `dim` ints; an array of N indices
    gives an (N, dim) array.

    Indices outside [0, 2**(dim*level)) are not supported; only the low
    dim*level bits are used. Pass check=True to validate first.

    Args:
        indices: int or array-like - Hilbert indices
        dim: int - Curve dimension
        level: int - Curve level
        check: bool - Raise ValueError on out of range indices

    Returns:
        Grid point as tuple, or (N, dim) array
    """
    _check_dim(dim)
    _check_level(level)
    is_scalar = np.ndim(indices) == 0

    if is_scalar:
        if check:
            validate_hilbert(indices, dim, level)
        return _python_hilbert2point_scalar(indices, dim, level)

    indices = np.asarray(indices).ravel()
    if check:
        for h in indices:
            validate_hilbert(h, dim, level)

    if _use_fast(dim, level):
        indices = indices & ((1 << (dim * level)) - 1)
        return _fast.fast_hilbert2point(np.ascontiguousarray(indices, dtype=np.int64), dim, level)
    else:
        return _python_hilbert2point(indices, dim, level)


def hilbert_sort(points, level):
    """Order points along the Hilbert curve

    Parameters
    ----------
    points : (N, D) array-like
        Grid points at `level`
    level : int
        Curve level

    Returns
    -------
    ndarray
        argsort, e.g. points[A[0]] has the smallest Hilbert index
    """
    keys = point2hilbert(np.atleast_2d(points), level)
    return np.argsort(keys, kind='stable')


def level_offset(dim, level):
    """Number of cells on all levels coarser than `level`

    sum(2**(dim*k) for k in range(level))
    """
    _check_dim(dim)
    _check_level(level)
    offset = 0
    for _ in range(level):
        offset = (offset << dim) | 1
    return offset


def hilbert2uniq(index, dim, level):
    """Unique multi-level identifier for a Hilbert cell

    The identifiers of all levels are disjoint, in the same spirit as
    HEALPix UNIQ, so cells of different levels can share one key space.
    """
    return level_offset(dim, level) + int(index)


def infer_level_from_uniq(uniq, dim):
    """Level of a cell from its unique identifier

    Parameters
    ----------
    uniq : int
        Unique identifier, see hilbert2uniq
    dim : int
        Curve dimension

    Returns
    -------
    int
        Level of the cell
    """
    _check_dim(dim)
    uniq = int(uniq)
    if uniq < 0:
        raise ValueError(f"Unique identifier must be non-negative, got {uniq}")
    level = 0
    next_offset = 1
    while uniq >= next_offset:
        level += 1
        next_offset = (next_offset << dim) | 1
    return level


def uniq2hilbert(uniq, dim):
    """Inverse of hilbert2uniq

    Returns
    -------
    index : int
        Hilbert index within its level
    level : int
        Level of the cell
    """
    level = infer_level_from_uniq(uniq, dim)
    return int(uniq) - level_offset(dim, level), level


def hilbert_parent(index, dim, levels=1):
    '''Hilbert index of the enclosing cell `levels` levels up'''
    _check_dim(dim)
    if levels < 0:
        raise ValueError(f"levels ({levels}) must be >= 0")
    return index >> (dim * levels)


def generate_hilbert_children(index, dim, level_diff=1):
    """
    Generate all child Hilbert indices `level_diff` levels down.

    Parameters
    ----------
    index : int
        Parent Hilbert index
    dim : int
        Curve dimension
    level_diff : int
        Number of levels to descend (must be >= 0)

    Returns
    -------
    children : ndarray
        Child indices. These are contiguous along the curve, so the
        array is a single ascending run. level_diff == 0 returns the
        parent itself.

    Examples
    --------
    >>> generate_hilbert_children(5, dim=2)
    array([20, 21, 22, 23])
    """
    _check_dim(dim)
    if level_diff < 0:
        raise ValueError(f"level_diff ({level_diff}) must be >= 0")

    shift = dim * level_diff
    first = int(index) << shift
    children = [first + i for i in range(2**shift)]
    dtype = np.int64 if (first + 2**shift - 1).bit_length() <= 63 else object
    return np.array(children, dtype=dtype)


def clip2level(indices, dim, level, clip_level):
    """Convenience function to coarsen Hilbert indices to a lower level

    indices: int or array(ints) ; Hilbert indices at `level`
    clip_level: int ; level to degrade to
    """
    _check_dim(dim)
    if clip_level < 0:
        raise ValueError(f"clip_level ({clip_level}) must be >= 0")
    if clip_level > level:
        raise ValueError(f"clip_level ({clip_level}) must be <= level ({level})")
    shift = dim * (level - clip_level)
    if np.ndim(indices) == 0:
        return int(indices) >> shift
    return np.asarray(indices) >> shift
