"""Tests for the randomised finishing passes."""

import numpy as np
import pytest

from tileterrain.builder import compile_terrain
from tileterrain.cosmetics import (
    centering_translation,
    jitter_offsets,
    nudge,
    rotate_diagonals,
)
from tileterrain.models import CompileOptions, Offset


class _FixedDraws:
    """Stands in for a RandomState, returning one value for every draw."""

    def __init__(self, value):
        self.value = value

    def random_sample(self, size):
        return np.full(size, self.value)


class TestRotateDiagonals:
    def test_flipped_pair(self):
        faces = [[1, 0, 2], [1, 2, 3]]
        rotated = rotate_diagonals(faces, _FixedDraws(0.0))
        np.testing.assert_array_equal(rotated, [[1, 0, 3], [0, 2, 3]])

    def test_unflipped_pair(self):
        faces = [[1, 0, 2], [1, 2, 3]]
        rotated = rotate_diagonals(faces, _FixedDraws(0.9))
        np.testing.assert_array_equal(rotated, faces)

    def test_trailing_single_face_is_untouched(self):
        faces = [[1, 0, 2], [1, 2, 3], [4, 5, 6]]
        rotated = rotate_diagonals(faces, _FixedDraws(0.0))
        np.testing.assert_array_equal(rotated[2], [4, 5, 6])

    def test_empty(self):
        assert rotate_diagonals([], np.random.RandomState(0)).shape == (0, 3)

    def test_rotation_keeps_quad_corners(self):
        """Every pair still covers exactly the four corners of its quad."""
        faces = np.array([[1, 0, 2], [1, 2, 3]] * 50) + np.repeat(np.arange(50) * 4, 2)[:, None]
        rotated = rotate_diagonals(faces, np.random.RandomState(7))
        for i in range(0, len(faces), 2):
            assert set(rotated[i:i + 2].ravel()) == set(faces[i:i + 2].ravel())

    def test_rotation_keeps_floor_facing_up(self):
        vertices = np.array([[0, 0, 0], [1, 0, 0], [0, -1, 0], [1, -1, 0]], dtype=float)
        rotated = rotate_diagonals([[1, 0, 2], [1, 2, 3]], _FixedDraws(0.0))
        tri = vertices[rotated]
        normals = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
        assert np.all(normals[:, 2] > 0)


class TestNoise:
    def test_nudge_bounded_by_quarter_factor(self):
        values = nudge(np.random.RandomState(1), 1000, 0.5)
        assert np.all(np.abs(values) <= 0.125)

    def test_nudge_is_centred(self):
        assert nudge(_FixedDraws(0.5), 3, 10.0).tolist() == [0.0, 0.0, 0.0]

    def test_jitter_is_larger_across_than_up(self):
        deltas = jitter_offsets(np.random.RandomState(2), 500)
        assert deltas.shape == (500, 3)
        assert np.all(np.abs(deltas[:, :2]) <= 0.75 / 4)
        assert np.all(np.abs(deltas[:, 2]) <= 0.5 / 4)


class TestCentering:
    def test_translation_signs(self):
        np.testing.assert_allclose(centering_translation(Offset(1.5, 1.5, 0.25)),
                                   [-1.5, 1.5, 0.25])

    def test_offset_centers_the_chunk(self, pool_definition, flat_options):
        pool_definition.offset = Offset(1.5, 1.5, 0.0)
        ground = compile_terrain(pool_definition, flat_options).ground
        np.testing.assert_allclose(ground.bounds, [[-1.5, -1.5, 0.0], [1.5, 1.5, 1.0]])


class TestJitterInCompilation:
    def test_jitter_keeps_connectivity(self, pool_definition, flat_options):
        flat = compile_terrain(pool_definition, flat_options).ground
        options = CompileOptions(seed=11, rotate_diagonals=False,
                                 jitter=True, water_nudge=False)
        jittered = compile_terrain(pool_definition, options).ground

        np.testing.assert_array_equal(jittered.faces, flat.faces)
        moved = jittered.vertices - flat.vertices
        assert np.any(np.abs(moved) > 0)
        assert np.all(np.abs(moved[:, :2]) <= 0.75 / 4 + 1e-12)
        assert np.all(np.abs(moved[:, 2]) <= 0.5 / 4 + 1e-12)

    def test_water_meets_jittered_cliff(self, pool_definition):
        """Water corners stay on the jittered cliff faces they hug."""
        options = CompileOptions(seed=5, rotate_diagonals=False,
                                 jitter=True, water_nudge=False)
        result = compile_terrain(pool_definition, options)
        assert np.all(np.abs(result.water.vertices[:, 0] - np.array([1, 2, 1, 2]))
                      <= 0.75 / 4 + 1e-12)
        assert np.all(np.abs(result.water.vertices[:, 1] - np.array([-1, -1, -2, -2]))
                      <= 0.75 / 4 + 1e-12)


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_cosmetics_do_not_change_face_count(seed, pool_definition, flat_options):
    flat = compile_terrain(pool_definition, flat_options)
    finished = compile_terrain(pool_definition, CompileOptions(seed=seed))
    assert len(finished.ground) == len(flat.ground)
    assert len(finished.water) == len(flat.water)
