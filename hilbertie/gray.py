"""
binary reflected Gray code on D-bit vectors
"""


def gray_encode(w):
    """Binary to reflected Gray code"""
    return w ^ (w >> 1)


def gray_decode(g, dim):
    """Inverse of `gray_encode` for a `dim`-bit value

    Each bit of the result is the XOR of all Gray bits at or above
    its position.

    Parameters
    ----------
    g : int
        Gray coded value, at most `dim` bits
    dim : int
        Number of bits (the curve dimension)

    Returns
    -------
    int
        Binary value w with gray_encode(w) == g
    """
    w = g
    for j in range(1, dim):
        w ^= g >> j
    return w


def trailing_ones(i):
    """Number of trailing set bits of i"""
    count = 0
    while i & 1:
        i >>= 1
        count += 1
    return count
