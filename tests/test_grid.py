"""Tests for iso2d grid construction and field sampling."""

import logging

import numpy as np
import numpy.testing as npt
import pytest

from iso2d import (
    CartesianGrid,
    FieldEvaluationError,
    InvalidGridError,
    cartesian_grid,
    sample_field,
    symmetric_grid,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _paraboloid(p, ctx=None):
    return p[..., 0] ** 2 + p[..., 1] ** 2


def _plane(p, ctx=None):
    return 2.0 * p[0] - p[1]


# ===========================================================================
# cartesian_grid
# ===========================================================================

class TestCartesianGrid:
    def test_fields(self):
        g = cartesian_grid(4, 3, -1.0, 0.5, 2.0, 0.25)
        assert g == CartesianGrid(4, 3, -1.0, 0.5, 2.0, 0.25)

    def test_shape(self):
        assert cartesian_grid(4, 3, 0, 1, 0, 1).shape == (4, 3)

    def test_node_coordinates(self):
        g = cartesian_grid(4, 3, -1.0, 0.5, 2.0, 0.25)
        npt.assert_allclose(g.xs, [-1.0, -0.5, 0.0, 0.5])
        npt.assert_allclose(g.ys, [2.0, 2.25, 2.5])

    def test_points_indexing(self):
        g = cartesian_grid(4, 3, -1.0, 0.5, 2.0, 0.25)
        pts = g.points()
        assert pts.shape == (4, 3, 2)
        npt.assert_allclose(pts[3, 1], [0.5, 2.25])

    def test_diagonal(self):
        g = cartesian_grid(2, 2, 0.0, 3.0, 0.0, 4.0)
        assert g.diagonal == pytest.approx(5.0)

    def test_immutable(self):
        g = cartesian_grid(2, 2, 0, 1, 0, 1)
        with pytest.raises(AttributeError):
            g.nx = 5

    @pytest.mark.parametrize("nx, ny", [(1, 3), (3, 1), (0, 0), (-2, 5)])
    def test_too_few_nodes(self, nx, ny):
        with pytest.raises(InvalidGridError):
            cartesian_grid(nx, ny, 0.0, 1.0, 0.0, 1.0)

    def test_non_integer_count(self):
        with pytest.raises(InvalidGridError):
            cartesian_grid(2.5, 3, 0.0, 1.0, 0.0, 1.0)

    def test_invalid_grid_is_value_error(self):
        with pytest.raises(ValueError):
            cartesian_grid(1, 1, 0.0, 1.0, 0.0, 1.0)

    def test_numpy_integer_counts(self):
        g = cartesian_grid(np.int64(3), np.int32(2), 0, 1, 0, 1)
        assert g.shape == (3, 2)

    @pytest.mark.parametrize(
        "dx, dy",
        [(0.0, 1.0), (1.0, 0.0), (-0.5, 1.0), (1.0, -0.5), (float("nan"), 1.0), (1.0, float("inf"))],
    )
    def test_non_positive_or_non_finite_step(self, dx, dy):
        with pytest.raises(InvalidGridError):
            cartesian_grid(3, 3, 0.0, dx, 0.0, dy)


# ===========================================================================
# symmetric_grid
# ===========================================================================

class TestSymmetricGrid:
    def test_three_by_three(self):
        g = symmetric_grid(-1.0, 1.0, -1.0, 1.0, 3)
        assert g == CartesianGrid(3, 3, -1.0, 1.0, -1.0, 1.0)
        npt.assert_allclose(g.xs, [-1.0, 0.0, 1.0])
        npt.assert_allclose(g.ys, [-1.0, 0.0, 1.0])

    @pytest.mark.parametrize("n", [0, 1, 2, 3, 10, 57])
    def test_always_at_least_two_nodes(self, n):
        g = symmetric_grid(-1.0, 1.0, -0.01, 0.01, n)
        assert g.nx >= 2
        assert g.ny >= 2

    def test_small_n_clamped_to_two(self):
        g = symmetric_grid(0.0, 1.0, 0.0, 1.0, 0)
        assert g.nx == 2
        assert g.dx == 1.0

    def test_square_cells(self):
        g = symmetric_grid(-2.0, 2.0, -1.0, 1.0, 41)
        assert g.dy == g.dx

    def test_x_axis_spans_range(self):
        g = symmetric_grid(-2.0, 3.0, 0.0, 1.0, 11)
        assert g.xs[0] == -2.0
        assert g.xs[-1] == pytest.approx(3.0)

    def test_y_nodes_centred(self):
        g = symmetric_grid(0.0, 1.0, 0.0, 0.55, 3)
        # step 0.5 fits 1.1 times into the y range -> 2 nodes, centred on 0.275
        assert g.ny == 2
        assert g.y0 == pytest.approx(0.025)
        assert g.ys.mean() == pytest.approx(0.275)

    def test_y_count_rounds_to_nearest(self):
        # 0.6 / 0.1 evaluates just below 6 in floating point
        g = symmetric_grid(0.0, 1.0, -0.3, 0.3, 11)
        assert g.ny == 7
        assert g.ys[0] == pytest.approx(-0.3)
        assert g.ys[-1] == pytest.approx(0.3)

    def test_zero_width_x_range(self):
        with pytest.raises(InvalidGridError):
            symmetric_grid(1.0, 1.0, 0.0, 1.0, 5)

    def test_reversed_x_range(self):
        with pytest.raises(InvalidGridError):
            symmetric_grid(2.0, -2.0, -2.0, 2.0, 50)

    @pytest.mark.parametrize("y1, y2", [(0.0, float("inf")), (float("-inf"), 0.0), (0.0, float("nan"))])
    def test_non_finite_y_range(self, y1, y2):
        with pytest.raises(InvalidGridError):
            symmetric_grid(-1.0, 1.0, y1, y2, 5)


# ===========================================================================
# sample_field
# ===========================================================================

class TestSampleField:
    def test_shape_and_dtype(self):
        g = cartesian_grid(5, 3, 0.0, 1.0, 0.0, 1.0)
        s = sample_field(g, _plane)
        assert s.shape == (5, 3)
        assert s.dtype == np.float64

    def test_values_are_shifted(self):
        g = cartesian_grid(4, 3, -1.0, 0.5, 2.0, 0.25)
        s = sample_field(g, _plane, iso=1.5)
        expected = 2.0 * g.xs[:, None] - g.ys[None, :] - 1.5
        npt.assert_allclose(s, expected)

    def test_context_forwarded_unchanged(self):
        seen = []
        ctx = {"scale": 3.0}

        def field(p, c):
            seen.append(c)
            return c["scale"] * p[0]

        g = cartesian_grid(3, 2, 0.0, 1.0, 0.0, 1.0)
        s = sample_field(g, field, ctx)
        assert len(seen) == 6
        assert all(c is ctx for c in seen)
        assert ctx == {"scale": 3.0}
        npt.assert_allclose(s[:, 0], [0.0, 3.0, 6.0])

    def test_vectorized_matches_pointwise(self):
        g = symmetric_grid(-1.0, 1.0, -1.0, 1.0, 9)
        pointwise = sample_field(g, _paraboloid, iso=0.5)
        vectorized = sample_field(g, _paraboloid, iso=0.5, vectorized=True)
        npt.assert_array_equal(pointwise, vectorized)

    def test_vectorized_wrong_shape(self):
        g = cartesian_grid(3, 3, 0.0, 1.0, 0.0, 1.0)
        with pytest.raises(FieldEvaluationError):
            sample_field(g, lambda p, c: np.zeros(4), vectorized=True)

    def test_field_failure_wrapped(self):
        def field(p, c):
            if p[0] > 0.5:
                raise KeyError("boom")
            return 1.0

        g = cartesian_grid(3, 2, 0.0, 1.0, 0.0, 1.0)
        with pytest.raises(FieldEvaluationError) as info:
            sample_field(g, field)
        assert isinstance(info.value.__cause__, KeyError)
        assert info.value.point == (1.0, 0.0)

    @pytest.mark.parametrize("bad, cause", [(None, TypeError), ("abc", ValueError)])
    def test_non_numeric_result_wrapped(self, bad, cause):
        g = cartesian_grid(3, 2, 0.0, 1.0, 0.0, 1.0)
        with pytest.raises(FieldEvaluationError) as info:
            sample_field(g, lambda p, c: bad)
        assert isinstance(info.value.__cause__, cause)
        assert info.value.point == (0.0, 0.0)

    def test_vectorized_non_numeric_result_wrapped(self):
        g = cartesian_grid(3, 3, 0.0, 1.0, 0.0, 1.0)
        with pytest.raises(FieldEvaluationError):
            sample_field(g, lambda p, c: "abc", vectorized=True)

    @pytest.mark.parametrize("vectorized", [False, True])
    def test_debug_log_on_both_paths(self, vectorized, caplog):
        caplog.set_level(logging.DEBUG, logger="iso2d")
        g = cartesian_grid(3, 2, 0.0, 1.0, 0.0, 1.0)
        sample_field(g, _paraboloid, vectorized=vectorized)
        assert "sampled 3 x 2 nodes" in caplog.text
