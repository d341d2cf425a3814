"""
Tests for the gradient noise primitives.
"""

import math

import numpy as np
import pytest

from terrain_generator import noise


class TestInterpolationHelpers:
    """Test fade, lerp and normalize."""

    def test_fade_boundaries(self):
        assert noise.fade(0.0) == 0.0
        assert noise.fade(1.0) == 1.0
        assert noise.fade(0.5) == 0.5

    def test_fade_is_symmetric(self):
        for t in (0.1, 0.25, 0.4):
            assert noise.fade(t) + noise.fade(1.0 - t) == pytest.approx(1.0)

    def test_fade_is_monotonic(self):
        samples = [noise.fade(t) for t in np.linspace(0.0, 1.0, 21)]
        assert all(a <= b for a, b in zip(samples, samples[1:]))

    @pytest.mark.parametrize("a,b", [(0.0, 1.0), (-3.5, 2.25), (0.1, 0.7), (5.0, 5.0)])
    def test_lerp_endpoints(self, a, b):
        assert noise.lerp(0.0, a, b) == a
        assert noise.lerp(1.0, a, b) == pytest.approx(b)

    def test_lerp_midpoint(self):
        assert noise.lerp(0.5, 2.0, 4.0) == 3.0

    def test_normalize_boundaries(self):
        assert noise.normalize(-1.0) == 0.0
        assert noise.normalize(1.0) == 1.0
        assert noise.normalize(0.0) == 0.5

    def test_normalize_is_not_clamped(self):
        assert noise.normalize(1.5) == 1.25
        assert noise.normalize(-2.0) == -0.5

    def test_normalize_arrays(self):
        values = np.array([-1.0, 0.0, 1.0])
        np.testing.assert_array_equal(noise.normalize(values), [0.0, 0.5, 1.0])


class TestGrad:
    """Test the hash-to-direction function."""

    @pytest.mark.parametrize("hash_value,expected", [
        (0, 0.75),    # x + y
        (1, 0.25),    # -x + y
        (2, -0.25),   # x - y
        (3, -0.75),   # -x - y
        (4, 0.75),    # x + y
        (8, 1.0),     # y + y
        (11, -1.0),   # -y - y
        (12, 0.75),   # y + x
        (13, 0.0),    # -y + y
        (14, 0.25),   # y - x
        (15, -1.0),   # -y - y
    ])
    def test_grad_cases(self, hash_value, expected):
        assert noise.grad(hash_value, 0.25, 0.5) == expected

    def test_grad_uses_low_four_bits(self):
        for h in range(16):
            assert noise.grad(h + 16, 0.25, 0.5) == noise.grad(h, 0.25, 0.5)
            assert noise.grad(h + 240, 0.25, 0.5) == noise.grad(h, 0.25, 0.5)

    def test_grad_of_zero_offset_is_zero(self):
        for h in range(16):
            assert noise.grad(h, 0.0, 0.0) == 0.0


class TestPermutationTable:
    """Test permutation table construction."""

    def test_table_shape_and_range(self):
        p = noise.make_permutation_table(np.random.default_rng(7))
        assert p.shape == (512,)
        assert np.all(p >= 0)
        assert np.all(p < 256)

    def test_table_is_duplicated(self):
        p = noise.make_permutation_table(np.random.default_rng(7))
        np.testing.assert_array_equal(p[:256], p[256:])

    def test_seeded_source_is_reproducible(self):
        p1 = noise.make_permutation_table(np.random.default_rng(99))
        p2 = noise.make_permutation_table(np.random.default_rng(99))
        np.testing.assert_array_equal(p1, p2)

    def test_gradient_vectors_are_fixed(self):
        assert noise.GRADIENT_VECTORS.shape == (4, 2)
        assert set(np.abs(noise.GRADIENT_VECTORS).ravel()) == {1}
        with pytest.raises(ValueError):
            noise.GRADIENT_VECTORS[0, 0] = 5


class TestPerlinNoise:
    """Test scalar and grid noise sampling."""

    @pytest.fixture
    def identity(self):
        p = np.arange(256, dtype=np.int64)
        return np.concatenate([p, p])

    def test_known_value_with_identity_table(self, identity):
        assert noise.perlin_noise_2d(identity, 0.5, 0.5) == 0.25

    def test_zero_at_lattice_points(self):
        p = noise.make_permutation_table(np.random.default_rng(3))
        for x, y in [(0.0, 0.0), (1.0, 2.0), (-3.0, 7.0), (100.0, -40.0)]:
            assert noise.perlin_noise_2d(p, x, y) == 0.0

    def test_repeated_samples_are_identical(self):
        p = noise.make_permutation_table(np.random.default_rng(5))
        first = noise.perlin_noise_2d(p, 0.37, -1.91)
        for _ in range(5):
            assert noise.perlin_noise_2d(p, 0.37, -1.91) == first

    def test_lattice_wraps_every_256_cells(self, identity):
        assert noise.perlin_noise_2d(identity, -0.5, -0.5) == noise.perlin_noise_2d(identity, 255.5, 255.5)

    def test_noise_is_bounded(self):
        p = noise.make_permutation_table(np.random.default_rng(11))
        xs, ys = np.meshgrid(np.linspace(-4.0, 4.0, 41), np.linspace(-4.0, 4.0, 41))
        values = noise.perlin_noise_grid(p, xs, ys)
        assert np.all(np.isfinite(values))
        assert np.max(np.abs(values)) <= 2.0

    def test_noise_is_continuous(self):
        p = noise.make_permutation_table(np.random.default_rng(13))
        a = noise.perlin_noise_2d(p, 0.999999, 0.3)
        b = noise.perlin_noise_2d(p, 1.000001, 0.3)
        assert math.isclose(a, b, abs_tol=1e-4)

    def test_grid_matches_scalar_samples(self):
        p = noise.make_permutation_table(np.random.default_rng(17))
        xs, ys = np.meshgrid(np.linspace(-1.0, 1.0, 4), np.linspace(-0.5, 2.0, 3))
        values = noise.perlin_noise_grid(p, xs, ys)
        assert values.shape == (3, 4)
        for i in range(3):
            for j in range(4):
                assert values[i, j] == pytest.approx(noise.perlin_noise_2d(p, xs[i, j], ys[i, j]))
