"""Tests for TerrainBuilder and the mesh hand-off."""

import numpy as np
import pytest
import trimesh

from tileterrain import TerrainBuilder, compile_terrain
from tileterrain.models import CompileOptions, Triangle


def assert_same_mesh(a, b):
    np.testing.assert_array_equal(a.vertices, b.vertices)
    np.testing.assert_array_equal(a.faces, b.faces)
    np.testing.assert_array_equal(a.colors, b.colors)


class TestRepeatability:
    def test_deterministic_compile_is_idempotent(self, pool_definition, flat_options):
        first = compile_terrain(pool_definition, flat_options)
        second = compile_terrain(pool_definition, flat_options)
        assert_same_mesh(first.ground, second.ground)
        assert_same_mesh(first.water, second.water)

    def test_same_seed_same_mesh(self, pool_definition):
        builder = TerrainBuilder(CompileOptions(seed=42))
        first = builder.compile(pool_definition)
        second = builder.compile(pool_definition)
        assert_same_mesh(first.ground, second.ground)
        assert_same_mesh(first.water, second.water)

    def test_different_seeds_differ(self, pool_definition):
        a = compile_terrain(pool_definition, CompileOptions(seed=1))
        b = compile_terrain(pool_definition, CompileOptions(seed=2))
        assert not np.array_equal(a.ground.vertices, b.ground.vertices)

    def test_no_state_shared_between_compiles(self, definition_factory, flat_options):
        builder = TerrainBuilder(flat_options)
        small = builder.compile(definition_factory("0"))
        builder.compile(definition_factory("00\n00"))
        again = builder.compile(definition_factory("0"))
        assert len(again.ground.vertices) == len(small.ground.vertices) == 4


class TestOutputs:
    def test_triangles(self, definition_factory, flat_options):
        ground = compile_terrain(definition_factory("0"), flat_options).ground
        triangles = ground.triangles()
        assert len(triangles) == 2
        assert isinstance(triangles[0], Triangle)
        assert triangles[0].a == (1.0, 0.0, 0.0)
        assert triangles[0].b == (0.0, 0.0, 0.0)
        assert triangles[0].c == (0.0, -1.0, 0.0)
        assert triangles[0].color == pytest.approx((0.0, 128 / 255, 0.0))

    def test_to_trimesh_keeps_layout(self, pool_definition, flat_options):
        ground = compile_terrain(pool_definition, flat_options).ground
        mesh = ground.to_trimesh()
        assert isinstance(mesh, trimesh.Trimesh)
        assert len(mesh.faces) == len(ground)
        assert len(mesh.vertices) == len(ground.vertices)
        assert tuple(mesh.visual.face_colors[0][:3]) == (0, 128, 0)

    def test_scene_names_geometry(self, pool_definition, flat_options):
        scene = compile_terrain(pool_definition, flat_options).to_scene()
        assert set(scene.geometry) == {"ground", "water"}

    def test_scene_skips_empty_water(self, definition_factory, flat_options):
        scene = compile_terrain(definition_factory("00"), flat_options).to_scene()
        assert set(scene.geometry) == {"ground"}
