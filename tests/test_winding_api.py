"""Tests for the flat-buffer and dense entry points in winding.api."""
from __future__ import annotations

import array

import numpy as np
import numpy.testing as npt
import pytest

from winding import (
    ShapeMismatchError,
    WindingConfig,
    WindingNumberError,
    winding_number,
    winding_number_2,
    winding_number_3,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _unit_cube() -> tuple[np.ndarray, np.ndarray]:
    V = np.array([
        [0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0],
        [0, 0, 1], [1, 0, 1], [1, 1, 1], [0, 1, 1],
    ], dtype=np.float64)
    F = np.array([
        (0, 2, 1), (0, 3, 2), (4, 5, 6), (4, 6, 7),
        (0, 4, 7), (0, 7, 3), (1, 2, 6), (1, 6, 5),
        (0, 1, 5), (0, 5, 4), (3, 7, 6), (3, 6, 2),
    ], dtype=np.int32)
    return V, F


def _col(a: np.ndarray) -> np.ndarray:
    """Column-major flat copy."""
    return np.asarray(a).ravel(order="F")


_O3 = np.array([[0.5, 0.5, 0.5], [10.0, 10.0, 10.0], [0.75, 0.25, 0.0]])


# ===========================================================================
# winding_number_3
# ===========================================================================

class TestWindingNumber3:
    def setup_method(self):
        self.V, self.F = _unit_cube()

    def test_cube_scenario(self):
        w = winding_number_3(_col(self.V), 8, _col(self.F), 12, _col(_O3), 3)
        npt.assert_allclose(w, [1.0, 0.0, 0.5], atol=1e-6)

    def test_column_major_layout(self):
        # Row-major buffers describe a different (scrambled) mesh
        good = winding_number_3(_col(self.V), 8, _col(self.F), 12, _col(_O3), 3)
        scrambled = winding_number_3(self.V.ravel(), 8, self.F.ravel(), 12, _col(_O3), 3)
        assert not np.allclose(good, scrambled)

    def test_plain_python_buffers(self):
        V = array.array("d", _col(self.V))
        F = array.array("i", _col(self.F))
        O = list(_col(_O3))
        w = winding_number_3(V, 8, F, 12, O, 3)
        npt.assert_allclose(w, [1.0, 0.0, 0.5], atol=1e-6)

    def test_memoryview_buffers(self):
        V = memoryview(array.array("d", _col(self.V)))
        F = memoryview(array.array("q", _col(self.F)))
        w = winding_number_3(V, 8, F, 12, _col(_O3), 3)
        npt.assert_allclose(w, [1.0, 0.0, 0.5], atol=1e-6)

    def test_writes_into_output(self):
        S = np.full(3, np.nan)
        out = winding_number_3(_col(self.V), 8, _col(self.F), 12, _col(_O3), 3, S)
        assert out is S
        npt.assert_allclose(S, [1.0, 0.0, 0.5], atol=1e-6)

    def test_output_wrong_size(self):
        with pytest.raises(ShapeMismatchError):
            winding_number_3(_col(self.V), 8, _col(self.F), 12, _col(_O3), 3, np.zeros(2))

    def test_output_wrong_dtype(self):
        with pytest.raises(ShapeMismatchError):
            winding_number_3(_col(self.V), 8, _col(self.F), 12, _col(_O3), 3,
                             np.zeros(3, dtype=np.float32))

    def test_output_read_only(self):
        S = np.zeros(3)
        S.flags.writeable = False
        with pytest.raises(ShapeMismatchError):
            winding_number_3(_col(self.V), 8, _col(self.F), 12, _col(_O3), 3, S)

    def test_vertex_count_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            winding_number_3(_col(self.V), 7, _col(self.F), 12, _col(_O3), 3)

    def test_face_count_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            winding_number_3(_col(self.V), 8, _col(self.F), 11, _col(_O3), 3)

    def test_origin_count_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            winding_number_3(_col(self.V), 8, _col(self.F), 12, _col(_O3), 4)

    def test_non_flat_buffer(self):
        with pytest.raises(ShapeMismatchError):
            winding_number_3(self.V, 8, _col(self.F), 12, _col(_O3), 3)

    def test_negative_count(self):
        with pytest.raises(ShapeMismatchError):
            winding_number_3(_col(self.V), 8, _col(self.F), 12, [], -1)

    def test_no_origins(self):
        w = winding_number_3(_col(self.V), 8, _col(self.F), 12, [], 0)
        assert w.shape == (0,)

    def test_no_faces(self):
        w = winding_number_3(_col(self.V), 8, [], 0, _col(_O3), 3)
        npt.assert_array_equal(w, np.zeros(3))

    def test_config_forwarded(self):
        cfg = WindingConfig(min_parallel_work=1, max_workers=3)
        w = winding_number_3(_col(self.V), 8, _col(self.F), 12, _col(_O3), 3, config=cfg)
        npt.assert_allclose(w, [1.0, 0.0, 0.5], atol=1e-6)


# ===========================================================================
# winding_number_2
# ===========================================================================

class TestWindingNumber2:
    def test_square_hand_written_buffers(self):
        # Square corners (0,0) (1,0) (1,1) (0,1): all x first, then all y
        V = [0.0, 1.0, 1.0, 0.0,
             0.0, 0.0, 1.0, 1.0]
        # Edges (0,1) (1,2) (2,3) (3,0): all starts, then all ends
        E = [0, 1, 2, 3,
             1, 2, 3, 0]
        # Origins (0.5, 0.5) and (2, 0.5)
        O = [0.5, 2.0,
             0.5, 0.5]
        npt.assert_allclose(winding_number_2(V, 4, E, 4, O, 2), [1.0, 0.0], atol=1e-6)

    def test_count_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            winding_number_2([0.0, 1.0, 0.0], 2, [0, 1], 1, [0.0, 0.0], 1)

    def test_float_indices(self):
        with pytest.raises(TypeError):
            winding_number_2([0.0, 1.0, 0.0, 0.0], 2, [0.0, 1.0], 1, [0.0, 1.0], 1)


# ===========================================================================
# winding_number (dense)
# ===========================================================================

class TestWindingNumberDense:
    def test_dispatch_3d(self):
        V, F = _unit_cube()
        npt.assert_allclose(winding_number(V, F, _O3), [1.0, 0.0, 0.5], atol=1e-6)

    def test_dispatch_2d(self):
        V = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
        E = np.array([[0, 1], [1, 2], [2, 3], [3, 0]])
        npt.assert_allclose(winding_number(V, E, [[0.5, 0.5], [0.5, 0.0]]), [1.0, 0.5], atol=1e-6)

    def test_matches_flat_entry(self):
        V, F = _unit_cube()
        O = np.random.default_rng(3).uniform(-1, 2, size=(25, 3))
        npt.assert_array_equal(
            winding_number(V, F, O),
            winding_number_3(_col(V), 8, _col(F), 12, _col(O), 25),
        )

    def test_fortran_ordered_input(self):
        V, F = _unit_cube()
        w = winding_number(np.asfortranarray(V), np.asfortranarray(F), np.asfortranarray(_O3))
        npt.assert_allclose(w, [1.0, 0.0, 0.5], atol=1e-6)

    def test_wrong_connectivity_width(self):
        V, _ = _unit_cube()
        with pytest.raises(ShapeMismatchError):
            winding_number(V, [[0, 1, 2, 3]], _O3)

    def test_triangles_with_2d_vertices(self):
        V = np.zeros((3, 2))
        with pytest.raises(ShapeMismatchError):
            winding_number(V, [[0, 1, 2]], [[0.0, 0.0]])

    def test_edges_with_3d_vertices(self):
        V, _ = _unit_cube()
        with pytest.raises(ShapeMismatchError):
            winding_number(V, [[0, 1]], _O3)

    def test_origin_width_mismatch(self):
        V, F = _unit_cube()
        with pytest.raises(ShapeMismatchError):
            winding_number(V, F, [[0.5, 0.5]])

    def test_vertices_not_matrix(self):
        with pytest.raises(ShapeMismatchError):
            winding_number([0.0, 1.0, 2.0], [[0, 1, 2]], _O3)

    def test_empty_connectivity_list(self):
        V, _ = _unit_cube()
        npt.assert_array_equal(winding_number(V, [], _O3), np.zeros(3))

    def test_empty_origin_list(self):
        V, F = _unit_cube()
        assert winding_number(V, F, []).shape == (0,)

    def test_errors_share_base_class(self):
        V, F = _unit_cube()
        with pytest.raises(WindingNumberError):
            winding_number(V, F, [[0.5, 0.5]])
        with pytest.raises(ValueError):
            winding_number(V, F, [[0.5, 0.5]])
