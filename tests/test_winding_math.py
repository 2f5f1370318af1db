"""Tests for the per-primitive angle kernels.

Internal math tested via winding._math (private but tested directly).
"""
from __future__ import annotations

import numpy as np
import numpy.testing as npt
import pytest

from winding._math import _solid_angle, _turning_angle


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _p(*xyz) -> np.ndarray:
    return np.array([list(xyz)], dtype=np.float64)


def _tri(*corners) -> tuple:
    return tuple(np.array(c, dtype=np.float64) for c in corners)


# ---------------------------------------------------------------------------
# _solid_angle
# ---------------------------------------------------------------------------

class TestSolidAngle:
    def setup_method(self):
        # Right-angle triangle in z=0, right-hand normal +Z
        self.abc = _tri([0, 0, 0], [1, 0, 0], [0, 1, 0])

    def test_octant(self):
        # The triangle through the three unit axis points covers one octant
        a, b, c = _tri([1, 0, 0], [0, 1, 0], [0, 0, 1])
        npt.assert_allclose(_solid_angle(_p(0, 0, 0), a, b, c), [np.pi / 2], atol=1e-12)

    def test_octant_reversed_is_negative(self):
        a, b, c = _tri([1, 0, 0], [0, 1, 0], [0, 0, 1])
        npt.assert_allclose(_solid_angle(_p(0, 0, 0), a, c, b), [-np.pi / 2], atol=1e-12)

    def test_back_side_positive(self):
        assert _solid_angle(_p(0.2, 0.2, -0.5), *self.abc)[0] > 0

    def test_front_side_negative(self):
        assert _solid_angle(_p(0.2, 0.2, 0.5), *self.abc)[0] < 0

    def test_half_cube_face_from_centre(self):
        # Half of one cube face seen from the centre: 4π / 12
        a, b, c = _tri([0, 0, 0], [1, 1, 0], [1, 0, 0])
        npt.assert_allclose(
            _solid_angle(_p(0.5, 0.5, 0.5), a, b, c), [np.pi / 3], atol=1e-12
        )

    def test_approaches_two_pi_just_behind(self):
        omega = _solid_angle(_p(0.2, 0.2, -1e-9), *self.abc)[0]
        assert omega == pytest.approx(2.0 * np.pi, abs=1e-6)

    def test_on_triangle_is_zero(self):
        assert _solid_angle(_p(0.2, 0.2, 0.0), *self.abc)[0] == 0.0

    def test_in_plane_outside_is_zero(self):
        assert _solid_angle(_p(3.0, 3.0, 0.0), *self.abc)[0] == 0.0

    def test_near_plane_far_away_is_tiny(self):
        omega = _solid_angle(_p(100.0, 100.0, 1e-9), *self.abc)[0]
        assert abs(omega) < 1e-12

    def test_far_away_small_and_signed(self):
        # Small-angle limit: Ω ≈ area * h / r^3 for a distant point on the axis
        omega = _solid_angle(_p(1 / 3, 1 / 3, -50.0), *self.abc)[0]
        npt.assert_allclose(omega, 0.5 / 50.0 ** 2, rtol=1e-3)

    @pytest.mark.parametrize("corner", [[0, 0, 0], [1, 0, 0], [0, 1, 0]])
    def test_at_vertex_is_zero(self, corner):
        assert _solid_angle(_p(*corner), *self.abc)[0] == 0.0

    def test_repeated_vertex_is_zero(self):
        a, b, c = _tri([0, 0, 0], [0, 0, 0], [0, 1, 0])
        assert _solid_angle(_p(0.3, 0.3, 0.3), a, b, c)[0] == 0.0

    def test_collinear_is_zero(self):
        a, b, c = _tri([0, 0, 0], [1, 1, 1], [2, 2, 2])
        assert _solid_angle(_p(0.3, -0.5, 0.1), a, b, c)[0] == 0.0

    def test_batch(self):
        P = np.array([[0.2, 0.2, -0.5], [0.2, 0.2, 0.5], [0.2, 0.2, 0.0]])
        omega = _solid_angle(P, *self.abc)
        assert omega.shape == (3,)
        assert omega[0] == pytest.approx(-omega[1], abs=1e-12)
        assert omega[2] == 0.0

    def test_tile_broadcast(self):
        P = np.random.default_rng(0).uniform(-1, 1, size=(5, 1, 3))
        corners = np.random.default_rng(1).uniform(-1, 1, size=(4, 3, 3))
        tile = _solid_angle(P, corners[:, 0], corners[:, 1], corners[:, 2])
        assert tile.shape == (5, 4)
        single = _solid_angle(P[:, 0], corners[2, 0], corners[2, 1], corners[2, 2])
        npt.assert_allclose(tile[:, 2], single, atol=1e-15)


# ---------------------------------------------------------------------------
# _turning_angle
# ---------------------------------------------------------------------------

class TestTurningAngle:
    def setup_method(self):
        self.ab = (np.array([1.0, 0.0]), np.array([0.0, 1.0]))

    def test_quarter_turn(self):
        npt.assert_allclose(_turning_angle(np.zeros((1, 2)), *self.ab), [np.pi / 2], atol=1e-12)

    def test_reversed_is_negative(self):
        a, b = self.ab
        npt.assert_allclose(_turning_angle(np.zeros((1, 2)), b, a), [-np.pi / 2], atol=1e-12)

    def test_on_segment_is_zero(self):
        assert _turning_angle(np.array([[0.5, 0.5]]), *self.ab)[0] == 0.0

    def test_collinear_outside_is_zero(self):
        assert _turning_angle(np.array([[2.0, -1.0]]), *self.ab)[0] == 0.0

    @pytest.mark.parametrize("end", [[1.0, 0.0], [0.0, 1.0]])
    def test_at_endpoint_is_zero(self, end):
        assert _turning_angle(np.array([end]), *self.ab)[0] == 0.0

    def test_zero_length_is_zero(self):
        a = np.array([1.0, 1.0])
        assert _turning_angle(np.zeros((1, 2)), a, a.copy())[0] == 0.0

    def test_near_line_close_to_pi(self):
        theta = _turning_angle(np.array([[0.5, 0.5 - 1e-9]]), *self.ab)[0]
        assert theta == pytest.approx(np.pi, abs=1e-6)

    def test_tile_broadcast(self):
        P = np.array([[[0.0, 0.0]], [[3.0, 3.0]]])
        a = np.array([[1.0, 0.0], [0.0, 1.0]])
        b = np.array([[0.0, 1.0], [1.0, 0.0]])
        tile = _turning_angle(P, a, b)
        assert tile.shape == (2, 2)
        npt.assert_allclose(tile[0], [np.pi / 2, -np.pi / 2], atol=1e-12)
