"""
Tests for rosette and identity transform sets.
"""
import math
import pytest

from models.transform import AffineTransform, compose
from services.symmetry_transforms import generate_rosette, identity_set


# ══════════════════════════════════════════════════════════════════════════
# Rosette
# ══════════════════════════════════════════════════════════════════════════

class TestRosette:

    def test_rotations_only(self):
        transforms = generate_rosette(6, 0, 100, 50, 0.0)
        assert len(transforms) == 6
        assert all(t.determinant() == pytest.approx(1.0) for t in transforms)

    def test_rotations_with_reflections(self):
        transforms = generate_rosette(6, 1, 100, 50, 0.0)
        assert len(transforms) == 12
        dets = [round(t.determinant()) for t in transforms]
        assert dets.count(1) == 6
        assert dets.count(-1) == 6

    def test_reflection_count_is_a_toggle(self):
        assert len(generate_rosette(5, 3, 0, 0, 0.0)) == 10

    def test_center_is_fixed_by_every_element(self):
        for t in generate_rosette(7, 1, 12.5, -3.0, 0.4):
            x, y = t.apply((12.5, -3.0))
            assert x == pytest.approx(12.5)
            assert y == pytest.approx(-3.0)

    def test_first_element_rotates_by_offset(self):
        rot = math.pi / 6
        first = generate_rosette(4, 0, 0, 0, rot)[0]
        assert first.is_close(AffineTransform.rotation(rot))

    def test_zero_offset_starts_with_identity(self):
        assert generate_rosette(3, 0, 40, 40, 0.0)[0].is_close(AffineTransform.identity())

    def test_rotation_step(self):
        transforms = generate_rosette(4, 0, 0, 0, 0.0)
        x, y = transforms[1].apply((1, 0))
        assert (x, y) == pytest.approx((0.0, 1.0), abs=1e-12)

    def test_mirror_axis_follows_offset(self):
        rot = math.pi / 4
        rotation, reflected = generate_rosette(1, 1, 0, 0, rot)
        expected = compose(rotation, AffineTransform.reflection(rot))
        assert reflected.is_close(expected)
        # the mirror keeps points on the axis at angle rot
        x, y = compose(rotation.inverse(), reflected).apply((1, 1))
        assert (x, y) == pytest.approx((1.0, 1.0))

    @pytest.mark.parametrize("n_rot", [0, -4])
    def test_non_positive_rotation_count_clamped(self, n_rot):
        transforms = generate_rosette(n_rot, 0, 0, 0, 0.0)
        assert len(transforms) == 1


class TestIdentitySet:

    def test_single_identity(self):
        s = identity_set()
        assert len(s) == 1
        assert s[0] == AffineTransform.identity()
