"""
Test point2hilbert / hilbert2point against the defining curve properties
"""
import pytest
import numpy as np
from hilbertie import tools

DIMS_LEVELS = [(dim, level) for dim in [1, 2, 3, 4] for level in [0, 1, 2, 3, 4]]

# D=2, level 2, worked out from e(w), d(w) by hand
SQUARE_LEVEL2 = [
    (0, 0), (1, 0), (1, 1), (0, 1),
    (0, 2), (0, 3), (1, 3), (1, 2),
    (2, 2), (2, 3), (3, 3), (3, 2),
    (3, 1), (2, 1), (2, 0), (3, 0),
]


class TestReferenceSequence:
    """Curve order must match Butz/Hamilton, not just any Hilbert-like walk"""

    def test_cube_level1_decode(self):
        expected = [
            (0, 0, 0), (0, 1, 0), (0, 1, 1), (0, 0, 1),
            (1, 0, 1), (1, 1, 1), (1, 1, 0), (1, 0, 0),
        ]
        for h, point in enumerate(expected):
            assert tools.hilbert2point(h, 3, 1) == point, f"Mismatch at index {h}"

    def test_cube_level1_encode(self):
        assert tools.point2hilbert([0, 0, 0], 1) == 0
        assert tools.point2hilbert([0, 1, 0], 1) == 1
        assert tools.point2hilbert([0, 1, 1], 1) == 2
        assert tools.point2hilbert([0, 0, 1], 1) == 3
        assert tools.point2hilbert([1, 0, 1], 1) == 4
        assert tools.point2hilbert([1, 1, 1], 1) == 5
        assert tools.point2hilbert([1, 1, 0], 1) == 6
        assert tools.point2hilbert([1, 0, 0], 1) == 7

    def test_square_level2(self):
        for h, point in enumerate(SQUARE_LEVEL2):
            assert tools.hilbert2point(h, 2, 2) == point
            assert tools.point2hilbert(point, 2) == h

    def test_square_level2_array(self):
        points = tools.hilbert2point(np.arange(16), 2, 2)
        assert np.array_equal(points, np.array(SQUARE_LEVEL2))

    def test_one_dimension_is_identity(self):
        for h in range(2**5):
            assert tools.hilbert2point(h, 1, 5) == (h,)
            assert tools.point2hilbert([h], 5) == h


class TestRoundTrip:
    """Test that the two conversions are inverse bijections"""

    @pytest.mark.parametrize("dim,level", DIMS_LEVELS)
    def test_index_point_index(self, dim, level):
        hs = np.arange(2**(dim * level))
        points = tools.hilbert2point(hs, dim, level)
        assert points.shape == (len(hs), dim)
        assert np.array_equal(tools.point2hilbert(points, level), hs)

    @pytest.mark.parametrize("dim,level", [(d, l) for d, l in DIMS_LEVELS if d * l <= 9])
    def test_index_point_index_scalar(self, dim, level):
        for h in tools.indices(dim, level):
            point = tools.hilbert2point(h, dim, level)
            assert tools.point2hilbert(point, level) == h

    @pytest.mark.parametrize("dim,level", DIMS_LEVELS)
    def test_point_index_point(self, dim, level):
        side = 2**level
        grid = np.indices((side,) * dim).reshape(dim, -1).T
        hs = tools.point2hilbert(grid, level)
        assert np.array_equal(tools.hilbert2point(hs, dim, level), grid)

    def test_wide_curve_round_trip(self):
        """Indices wider than 64 bits stay exact"""
        dim, level = 3, 30
        rng = np.random.default_rng(7)
        points = [tuple(int(c) for c in rng.integers(0, 2**level, dim)) for _ in range(50)]
        for point in points:
            h = tools.point2hilbert(point, level)
            assert 0 <= h < 2**(dim * level)
            assert tools.hilbert2point(h, dim, level) == point

        hs = tools.point2hilbert(np.array(points, dtype=object), level)
        assert hs.dtype == object
        back = tools.hilbert2point(hs, dim, level)
        assert [tuple(p) for p in back] == points

    def test_last_index(self):
        dim, level = 3, 20
        last = 2**(dim * level) - 1
        point = tools.hilbert2point(last, dim, level)
        assert tools.point2hilbert(point, level) == last


class TestLocality:
    """Test adjacency and coverage of the curve"""

    @pytest.mark.parametrize("dim,level", DIMS_LEVELS)
    def test_adjacency(self, dim, level):
        points = tools.hilbert2point(np.arange(2**(dim * level)), dim, level)
        steps = np.abs(np.diff(points, axis=0))
        if len(steps) == 0:
            return
        # exactly one axis changes, by exactly one unit
        assert np.all(steps.sum(axis=1) == 1)
        assert np.all(steps.max(axis=1) == 1)

    @pytest.mark.parametrize("dim,level", DIMS_LEVELS)
    def test_coverage(self, dim, level):
        n = 2**(dim * level)
        points = tools.hilbert2point(np.arange(n), dim, level)
        assert len({tuple(p) for p in points}) == n
        assert points.min() >= 0
        assert points.max() < 2**level

    def test_starts_at_origin(self):
        for dim in [1, 2, 3, 5]:
            assert tools.hilbert2point(0, dim, 4) == (0,) * dim


class TestLevelZero:

    @pytest.mark.parametrize("dim", [1, 2, 3, 7])
    def test_single_cell(self, dim):
        assert tools.hilbert2point(0, dim, 0) == (0,) * dim
        assert tools.point2hilbert([0] * dim, 0) == 0
        assert list(tools.indices(dim, 0)) == [0]


class TestIndices:
    """Test the ascending index range"""

    @pytest.mark.parametrize("dim,level", [(1, 3), (2, 2), (3, 1), (3, 2)])
    def test_ascending_and_complete(self, dim, level):
        hs = list(tools.indices(dim, level))
        assert hs == list(range(2**(dim * level)))

    def test_restartable(self):
        hs = tools.indices(3, 2)
        assert list(hs) == list(hs)
        assert len(hs) == 64

    def test_invalid_arguments(self):
        with pytest.raises(ValueError, match="Dimension"):
            tools.indices(0, 2)
        with pytest.raises(ValueError, match="Level"):
            tools.indices(2, -1)


class TestUncheckedInput:
    """Out of range input gives a result, not an exception"""

    def test_high_bits_of_components_are_ignored(self):
        assert tools.point2hilbert([4, 0], 2) == tools.point2hilbert([0, 0], 2)
        assert tools.point2hilbert([5, 7], 2) == tools.point2hilbert([1, 3], 2)

    def test_high_bits_of_index_are_ignored(self):
        assert tools.hilbert2point(16 + 9, 2, 2) == tools.hilbert2point(9, 2, 2)

    def test_array_components_beyond_int64(self):
        hs = tools.point2hilbert([[2**70, 1], [4, 0], [-4, 3]], 2)
        expected = [tools.point2hilbert(p, 2) for p in ([0, 1], [0, 0], [0, 3])]
        assert list(hs) == expected

    def test_array_indices_beyond_int64(self):
        points = tools.hilbert2point([2**64 + 9, 16 + 9, 9], 2, 2)
        assert [tuple(p) for p in points] == [tools.hilbert2point(9, 2, 2)] * 3

    def test_array_matches_scalar_out_of_range(self):
        points = np.array([[9, 6], [-1, 5]])
        hs = tools.point2hilbert(points, 2)
        assert list(hs) == [tools.point2hilbert(list(p), 2) for p in points]
