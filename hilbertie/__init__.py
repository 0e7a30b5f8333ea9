"""
hilbertie: a library for generating D-dimensional hilbert indices
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("hilbertie")
except PackageNotFoundError:
    # package is not installed
    pass

from .tools import (
    level2side,
    max_level,
    indices,
    point2hilbert,
    hilbert2point,
    hilbert_sort,
    validate_point,
    validate_hilbert,
    # Multi-level addressing
    level_offset,
    hilbert2uniq,
    uniq2hilbert,
    infer_level_from_uniq,
    hilbert_parent,
    generate_hilbert_children,
    clip2level,
)
from .transform import Transform
from .greedy_box import greedy_hilbert_box, cells2ranges

__all__ = [
    'tools',
    'point2hilbert',
    'hilbert2point',
    'indices',
    'hilbert_sort',
    'validate_point',
    'validate_hilbert',
    'level2side',
    'max_level',
    'level_offset',
    'hilbert2uniq',
    'uniq2hilbert',
    'infer_level_from_uniq',
    'hilbert_parent',
    'generate_hilbert_children',
    'clip2level',
    'Transform',
    'greedy_hilbert_box',
    'cells2ranges',
]
