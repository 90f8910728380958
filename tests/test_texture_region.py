"""
Tests for texatlas.resource.texture_region
"""

import pytest

from texatlas import InvalidArgumentError, Rect, SubTexture

from conftest import BLUE, RED


class TestRect:

    def test_edges(self):
        rect = Rect(10, 20, 30, 40)
        assert rect.right == 40
        assert rect.bottom == 60
        assert rect.as_tuple() == (10, 20, 30, 40)

    def test_from_tuple(self):
        rect = Rect(1, 2, 3, 4)
        assert Rect.from_tuple((1, 2, 3, 4)) == rect
        assert Rect.from_tuple(rect) is rect

    def test_from_tuple_wrong_length(self):
        with pytest.raises(InvalidArgumentError):
            Rect.from_tuple((1, 2, 3))

    def test_fits_within(self):
        assert Rect(0, 0, 64, 32).fits_within((64, 32))
        assert not Rect(1, 0, 64, 32).fits_within((64, 32))
        assert not Rect(-1, 0, 4, 4).fits_within((64, 32))


class TestSubTextureSize:

    def test_plain_size_is_region_size(self, atlas_image):
        texture = SubTexture(atlas_image, (0, 0, 20, 10))
        assert (texture.width, texture.height) == (20, 10)

    def test_rotated_size_is_swapped(self, atlas_image):
        texture = SubTexture(atlas_image, (0, 0, 20, 10), rotated=True)
        assert (texture.width, texture.height) == (10, 20)

    def test_trimmed_size_is_frame_size(self, atlas_image):
        texture = SubTexture(atlas_image, (0, 0, 10, 10), frame=(-10, -10, 30, 30))
        assert (texture.width, texture.height) == (30, 30)


class TestSubTextureUV:

    def test_get_uv(self, pixel_image):
        texture = SubTexture(pixel_image, (0, 0, 2, 1))
        assert texture.get_uv() == (0.0, 0.0, 0.5, 0.5)
        assert texture.get_uv(flip_y=True) == (0.0, 0.5, 0.5, 1.0)

    def test_corner_uvs_upright(self, pixel_image):
        texture = SubTexture(pixel_image, (0, 0, 2, 1))
        assert texture.get_corner_uvs() == [(0.0, 0.0), (0.5, 0.0), (0.5, 0.5), (0.0, 0.5)]

    def test_corner_uvs_rotated(self, pixel_image):
        texture = SubTexture(pixel_image, (0, 0, 2, 1), rotated=True)
        # logical top-left sits at the stored top-right
        assert texture.get_corner_uvs() == [(0.5, 0.0), (0.5, 0.5), (0.0, 0.5), (0.0, 0.0)]


class TestSubTextureSurface:

    def test_plain_surface(self, pixel_image):
        surface = SubTexture(pixel_image, (0, 0, 2, 1)).get_surface()
        assert surface.get_size() == (2, 1)
        assert surface.get_at((0, 0)) == BLUE
        assert surface.get_at((1, 0)) == RED

    def test_rotated_surface_comes_back_upright(self, pixel_image):
        surface = SubTexture(pixel_image, (0, 0, 2, 1), rotated=True).get_surface()
        assert surface.get_size() == (1, 2)
        assert surface.get_at((0, 0)) == RED
        assert surface.get_at((0, 1)) == BLUE

    def test_trimmed_surface_is_padded_to_frame(self, pixel_image):
        surface = SubTexture(pixel_image, (0, 0, 2, 1), frame=(-1, -1, 4, 3)).get_surface()
        assert surface.get_size() == (4, 3)
        assert surface.get_at((1, 1)) == BLUE
        assert surface.get_at((2, 1)) == RED
        assert surface.get_at((0, 0))[3] == 0

    def test_surface_is_cached_until_dispose(self, pixel_image):
        texture = SubTexture(pixel_image, (0, 0, 2, 1))
        first = texture.get_surface()
        assert texture.get_surface() is first

        texture.dispose()
        assert texture.get_surface() is not first
        assert not pixel_image.disposed
