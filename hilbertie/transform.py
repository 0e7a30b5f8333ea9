"""
Sub-cube orientation for Butz's Hilbert curve construction.

Follows the notation of C. Hamilton, "Compact Hilbert Indices",
Technical Report CS-2006-07, Dalhousie University:

    e(w)  entry corner of the w-th sub-cube
    d(w)  intra sub-cube direction
    f(w)  exit corner, e(w) ^ 2**d(w)

A frame is a reflection (the entry corner) followed by a cyclic
rotation of the axes by direction + 1.
"""

from .gray import gray_encode, trailing_ones


def bitmask(dim):
    return (1 << dim) - 1


def rotate_right(b, i, dim):
    """Rotate the low `dim` bits of b right by i (mod dim)"""
    i = i % dim
    if i == 0:
        return b
    return ((b >> i) | (b << (dim - i))) & bitmask(dim)


def rotate_left(b, i, dim):
    """Rotate the low `dim` bits of b left by i (mod dim)"""
    i = i % dim
    if i == 0:
        return b
    return ((b << i) | (b >> (dim - i))) & bitmask(dim)


def entry_corner(w):
    """e(w): corner where the w-th sub-cube is entered"""
    if w == 0:
        return 0
    return gray_encode(2 * ((w - 1) // 2))


def intra_direction(w, dim):
    """d(w): axis along which the w-th sub-cube is left"""
    if w == 0:
        return 0
    if w & 1 == 0:
        return trailing_ones(w - 1) % dim
    return trailing_ones(w) % dim


def exit_corner(w, dim):
    """f(w): corner where the w-th sub-cube is left"""
    return entry_corner(w) ^ (1 << intra_direction(w, dim))


class Transform:
    """Rotation and reflection of a sub-cube relative to the canonical frame

    Parameters
    ----------
    dim : int
        Curve dimension
    entry : int
        Reflection mask, one bit per axis
    direction : int
        Rotation; axes are cycled by direction + 1
    """

    __slots__ = ('dim', 'entry', 'direction')

    def __init__(self, dim, entry=0, direction=0):
        self.dim = dim
        self.entry = entry
        self.direction = direction

    @classmethod
    def identity(cls, dim):
        return cls(dim)

    def __eq__(self, other):
        if not isinstance(other, Transform):
            return NotImplemented
        return ((self.dim, self.entry, self.direction)
                == (other.dim, other.entry, other.direction))

    def __repr__(self):
        return (f"Transform(dim={self.dim}, entry={self.entry:#b}, "
                f"direction={self.direction})")

    def apply(self, bits):
        """Map canonical-frame bits into this sub-cube's local frame"""
        return rotate_right(bits ^ self.entry, self.direction + 1, self.dim)

    def apply_inverse(self, bits):
        """Map local-frame bits back to the canonical frame"""
        return rotate_left(bits, self.direction + 1, self.dim) ^ self.entry

    def child(self, w):
        """Frame of the w-th sub-cube one level down

        The entry is updated with the current direction before the
        direction itself moves on.
        """
        entry = self.entry ^ rotate_left(entry_corner(w),
                                         self.direction + 1, self.dim)
        direction = (self.direction + intra_direction(w, self.dim) + 1) % self.dim
        return Transform(self.dim, entry, direction)
