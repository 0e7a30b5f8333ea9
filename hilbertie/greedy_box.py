"""
Greedy box cover for hilbert indices.

This module provides functions to cover an axis-aligned box of the
lattice with a bounded number of Hilbert cells, and to turn those cells
into index ranges for range scans over Hilbert-sorted data.
"""

import numpy as np


def greedy_hilbert_box(lower, upper, level, max_cells=16, levelmax=None, verbose=False):
    """
    Calculate compact Hilbert cell coverage of a box using greedy subdivision.

    A cell is a Hilbert index at a coarser level; it covers the sub-cube
    of the lattice reached by every finer index with that prefix. Starting
    from the root cell, the coarsest partially covered cell is split
    until the max_cells ceiling or the levelmax limit is reached.

    Parameters
    ----------
    lower : sequence of int
        Inclusive lower corner of the box, one component per axis
    upper : sequence of int
        Inclusive upper corner of the box
    level : int
        Curve level of the lattice
    max_cells : int or None, default=16
        Maximum number of cells allowed. None for no limit, which gives
        an exact cover.
    levelmax : int, optional
        Cells at this level are not subdivided further. If None, cells
        may be split down to `level`.
    verbose : bool, default=False
        Print subdivision progress

    Returns
    -------
    cells : ndarray
        Hilbert indices of the covering cells, each at its own level
    cell_levels : ndarray
        Level of each cell

    Examples
    --------
    >>> cells, levels = greedy_hilbert_box([0, 0], [2, 1], level=2, max_cells=None)
    >>> cells2ranges(cells, levels, dim=2, level=2)
    [(0, 4), (13, 15)]
    """
    from . import hilbert2point

    lower = np.asarray(lower, dtype=object)
    upper = np.asarray(upper, dtype=object)

    if lower.ndim != 1 or lower.shape != upper.shape:
        raise ValueError(f"Box corners must be 1-D and of equal length, "
                         f"got shapes {lower.shape} and {upper.shape}")
    dim = len(lower)
    if dim == 0:
        raise ValueError("Box corners must have at least one component")
    if levelmax is None or levelmax > level:
        levelmax = level

    # Clip to the lattice
    side = 2**level
    lower = np.array([max(int(c), 0) for c in lower], dtype=object)
    upper = np.array([min(int(c), side - 1) for c in upper], dtype=object)
    if np.any(lower > upper):
        raise ValueError("Box does not intersect the lattice")

    if verbose:
        print(f"Starting greedy subdivision with max_cells={max_cells}, levelmax={levelmax}")
        print(f"Box {list(lower)} .. {list(upper)} at level {level}\n")

    def classify(cell, cell_level):
        corner = hilbert2point(cell, dim, cell_level)
        width = 2**(level - cell_level)
        lo = np.array([c * width for c in corner], dtype=object)
        hi = lo + (width - 1)
        if np.any(lo > upper) or np.any(hi < lower):
            return None
        return bool(np.all(lo >= lower) and np.all(hi <= upper))

    cells = [{'cell': 0, 'level': 0, 'inside': classify(0, 0)}]

    iteration = 0
    # a split that leaves one child keeps the count, so the loop runs
    # at the cap too; every split moves a cell one level down
    while True:
        iteration += 1
        if verbose:
            print(f"Iteration {iteration}: Current cells: {len(cells)}/{max_cells}")

        # Find which cell to split
        best_idx = None
        best_split = None
        best_level = None

        for i, box in enumerate(cells):
            if box['inside'] or box['level'] >= levelmax:
                continue
            if best_level is not None and box['level'] >= best_level:
                continue

            split = _split(box, dim, classify)
            new_total = len(cells) - 1 + len(split)
            if max_cells is not None and new_total > max_cells:
                continue

            # Priority: lower level first
            best_idx = i
            best_split = split
            best_level = box['level']

        if best_idx is None:
            if verbose:
                print(f"  → No more splits possible within budget\n")
            break

        if verbose:
            old = cells[best_idx]
            print(f"  → Splitting cell {old['cell']} (level {best_level}) into {len(best_split)} sub-cells")

        cells[best_idx:best_idx + 1] = best_split

    if verbose:
        print(f"Final subdivision complete: {len(cells)} cells")
        for i, box in enumerate(cells, 1):
            state = 'inside' if box['inside'] else 'partial'
            print(f"  Cell {i:2d}: {box['cell']} at level {box['level']} ({state})")

    cell_ids = np.array([box['cell'] for box in cells], dtype=_index_dtype(dim, level))
    cell_levels = np.array([box['level'] for box in cells], dtype=np.int64)
    return cell_ids, cell_levels


def _split(box, dim, classify):
    """Children of a cell that intersect the box, in curve order"""
    sub_cells = []
    child_level = box['level'] + 1
    first = int(box['cell']) << dim
    for child in range(first, first + 2**dim):
        inside = classify(child, child_level)
        if inside is not None:
            sub_cells.append({'cell': child, 'level': child_level, 'inside': inside})
    return sub_cells


def _index_dtype(dim, level):
    return np.int64 if dim * level <= 63 else object


def cells2ranges(cells, cell_levels, dim, level):
    """
    Convert Hilbert cells to merged index ranges at a level.

    Parameters
    ----------
    cells : array-like of int
        Hilbert indices of cells, each at its own level
    cell_levels : array-like of int
        Level of each cell (<= level)
    dim : int
        Curve dimension
    level : int
        Target curve level

    Returns
    -------
    ranges : list of (int, int)
        Sorted, non-overlapping half-open ranges [start, stop); adjacent
        ranges are merged.
    """
    spans = []
    for cell, cell_level in zip(cells, cell_levels):
        cell_level = int(cell_level)
        if cell_level > level:
            raise ValueError(f"Cell level {cell_level} is finer than target level {level}")
        shift = dim * (level - cell_level)
        spans.append((int(cell) << shift, (int(cell) + 1) << shift))
    spans.sort()

    ranges = []
    for start, stop in spans:
        if ranges and start <= ranges[-1][1]:
            ranges[-1] = (ranges[-1][0], max(ranges[-1][1], stop))
        else:
            ranges.append((start, stop))
    return ranges
