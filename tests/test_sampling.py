"""Tests for random sample generation and representation building."""

import numpy as np

from isobench.geometry import Isometry3, IsometryMatrix3, Transform3
from isobench.sampling import (
    RigidSample,
    build_representations,
    make_rng,
    random_axis_angle,
    random_point,
    random_sample,
    random_translation,
)


class TestRandomDraws:
    """Test uniform draws."""

    def test_axis_angle_draw_order(self):
        """Axis-angle is three uniform components scaled by a fourth."""
        rng = make_rng(5)
        aa = random_axis_angle(rng)

        ref = make_rng(5)
        direction = ref.random(3)
        scale = ref.random()
        np.testing.assert_array_equal(aa, direction * scale)

    def test_ranges(self):
        """All components lie in the unit interval."""
        rng = make_rng(9)
        for _ in range(100):
            for draw in (random_axis_angle(rng), random_translation(rng), random_point(rng)):
                assert draw.shape == (3,)
                assert np.all(draw >= 0.0) and np.all(draw < 1.0)

    def test_seeded_rng_is_deterministic(self):
        """Same seed gives the same sample."""
        a = random_sample(make_rng(123))
        b = random_sample(make_rng(123))
        np.testing.assert_array_equal(a.axis_angle, b.axis_angle)
        np.testing.assert_array_equal(a.translation, b.translation)
        np.testing.assert_array_equal(a.transform.matrix, b.transform.matrix)

    def test_sample_draws_axis_angle_then_translation(self):
        """random_sample consumes the source in a fixed order."""
        sample = random_sample(make_rng(77))

        ref = make_rng(77)
        aa = ref.random(3) * ref.random()
        t = ref.random(3)
        np.testing.assert_array_equal(sample.axis_angle, aa)
        np.testing.assert_array_equal(sample.translation, t)


class TestBuildRepresentations:
    """Test the representation converter."""

    def test_types(self):
        """Each field holds the expected representation."""
        sample = build_representations([0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        assert isinstance(sample, RigidSample)
        assert isinstance(sample.isometry, Isometry3)
        assert isinstance(sample.isometry_matrix, IsometryMatrix3)
        assert isinstance(sample.transform, Transform3)

    def test_transform_wraps_isometry_matrix(self):
        """The affine transform is exactly the isometry's homogeneous matrix."""
        sample = build_representations([0.4, -0.2, 0.9], [0.5, 0.5, 0.5])
        np.testing.assert_array_equal(sample.transform.matrix, sample.isometry.to_homogeneous())

    def test_identity_rotation(self):
        """A zero axis-angle yields pure translations."""
        sample = build_representations([0.0, 0.0, 0.0], [1.0, -1.0, 2.0])
        p = np.array([3.0, 4.0, 5.0])
        for transform in (sample.isometry, sample.isometry_matrix, sample.transform):
            np.testing.assert_allclose(transform * p, [4.0, 3.0, 7.0])


class TestEndToEnd:
    """Seeded single-sample scenario."""

    def test_representations_agree(self):
        """All three representations act identically within 1e-9."""
        sample = random_sample(make_rng(2024))
        points = [np.zeros(3), np.array([0.3, -1.2, 2.5])]

        for p in points:
            expected = sample.isometry * p
            np.testing.assert_allclose(sample.isometry_matrix * p, expected, rtol=0, atol=1e-9)
            np.testing.assert_allclose(
                sample.transform.transform_point(p), expected, rtol=0, atol=1e-9
            )

        # The origin maps to the translation
        np.testing.assert_allclose(sample.isometry * np.zeros(3), sample.translation, atol=1e-9)
