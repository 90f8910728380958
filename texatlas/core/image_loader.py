"""
Image loading abstraction - Pillow backend

Provides:
- load_image_surface(): Load image file to a SoftwareSurface
- SoftwareSurface: RGBA surface used for sub-region extraction
- AtlasImage: the disposable base image shared by every sub-texture of an atlas
"""

import logging
from typing import Tuple, Optional, TYPE_CHECKING
from PIL import Image

from .config import get_config
from .errors import AtlasDisposedError, AtlasError

# Optional ModernGL support
try:
    import moderngl
    HAS_MODERNGL = True
except ImportError:
    HAS_MODERNGL = False
    moderngl = None

if TYPE_CHECKING:
    import moderngl

logger = logging.getLogger(__name__)


def load_image_surface(path: str) -> 'SoftwareSurface':
    """Load image file as a SoftwareSurface."""
    with Image.open(path) as img:
        return SoftwareSurface(img.convert("RGBA"))


class SoftwareSurface:
    """
    RGBA software surface backed by Pillow Image.
    """

    def __init__(self, width_or_image, height=None):
        if isinstance(width_or_image, Image.Image):
            self._image = width_or_image if width_or_image.mode == "RGBA" else width_or_image.convert("RGBA")
        elif height is not None:
            self._image = Image.new("RGBA", (max(1, int(width_or_image)), max(1, int(height))), (0, 0, 0, 0))
        else:
            raise ValueError("SoftwareSurface requires (width, height) or a PIL Image")

    @property
    def image(self) -> Image.Image:
        return self._image

    # ---- Size queries ----

    def get_size(self) -> Tuple[int, int]:
        return self._image.size

    def get_width(self) -> int:
        return self._image.width

    def get_height(self) -> int:
        return self._image.height

    def get_at(self, pos) -> Tuple[int, int, int, int]:
        return self._image.getpixel((int(pos[0]), int(pos[1])))

    # ---- Sub-surface / crop ----

    def subsurface(self, rect) -> 'SoftwareSurface':
        x, y, w, h = int(rect[0]), int(rect[1]), int(rect[2]), int(rect[3])
        cropped = self._image.crop((x, y, x + w, y + h)).copy()
        return SoftwareSurface(cropped)

    # ---- Transforms ----

    def rotate_ccw(self) -> 'SoftwareSurface':
        """Rotate 90 degrees counter-clockwise."""
        return SoftwareSurface(self._image.transpose(Image.Transpose.ROTATE_90))

    def pad_to(self, size, offset) -> 'SoftwareSurface':
        """
        Place this surface on a transparent canvas.

        Args:
            size: (width, height) of the new canvas
            offset: (x, y) where this surface's top-left lands
        """
        canvas = Image.new("RGBA", (max(1, int(size[0])), max(1, int(size[1]))), (0, 0, 0, 0))
        canvas.paste(self._image, (int(offset[0]), int(offset[1])))
        return SoftwareSurface(canvas)

    # ---- Export to bytes ----

    def to_bytes(self, fmt: str = "RGBA", flip_y: bool = False) -> bytes:
        img = self._image
        if flip_y:
            img = img.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        return img.tobytes("raw", fmt)

    def to_bytes_size(self, fmt: str = "RGBA", flip_y: bool = False) -> Tuple[Tuple[int, int], bytes]:
        """Return ((w, h), bytes)."""
        return self.get_size(), self.to_bytes(fmt, flip_y)


class AtlasImage:
    """
    Base image of a texture atlas.

    Owns the decoded pixel buffer and, once uploaded, the GPU texture.
    Every sub-texture refers back to it; only dispose() releases it.
    """

    def __init__(self, surface: SoftwareSurface, path: Optional[str] = None):
        self._surface: Optional[SoftwareSurface] = surface
        self._size = surface.get_size()
        self.path = path
        self._gl_texture = None

    @classmethod
    def load(cls, path: str) -> 'AtlasImage':
        """Decode an image file into an AtlasImage."""
        image = cls(load_image_surface(path), path=str(path))
        logger.info("Loaded atlas image %s (%dx%d)", path, image.width, image.height)
        return image

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    @property
    def width(self) -> int:
        return self._size[0]

    @property
    def height(self) -> int:
        return self._size[1]

    @property
    def disposed(self) -> bool:
        return self._surface is None

    @property
    def surface(self) -> SoftwareSurface:
        if self._surface is None:
            raise AtlasDisposedError("Atlas image has been disposed")
        return self._surface

    @property
    def gl_texture(self):
        return self._gl_texture

    def create_gl_texture(self, ctx: 'moderngl.Context', flip_y: Optional[bool] = None) -> 'moderngl.Texture':
        """
        Upload the pixels to a ModernGL texture (cached until dispose).

        Args:
            ctx: ModernGL context
            flip_y: flip rows for OpenGL, defaults to the global config

        Returns:
            moderngl.Texture
        """
        if not HAS_MODERNGL:
            raise AtlasError("ModernGL is not available, install the 'gl' extra")
        if self._gl_texture is not None:
            return self._gl_texture

        config = get_config()
        if flip_y is None:
            flip_y = config.flip_y

        size, data = self.surface.to_bytes_size("RGBA", flip_y)
        texture = ctx.texture(size, 4, data)
        gl_filter = moderngl.LINEAR if config.texture_filter == 'linear' else moderngl.NEAREST
        texture.filter = (gl_filter, gl_filter)
        self._gl_texture = texture
        return texture

    def dispose(self):
        """Release the pixel buffer and the GPU texture. Safe to call twice."""
        if self._gl_texture is not None:
            self._gl_texture.release()
            self._gl_texture = None
        if self._surface is not None:
            self._surface = None
            logger.debug("Disposed atlas image %s", self.path or "<memory>")
