import sys
from pathlib import Path

import pytest
from PIL import Image

# Make the package importable without installing it
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from texatlas import AtlasImage, SoftwareSurface, init_config

BLUE = (0, 0, 255, 255)
RED = (255, 0, 0, 255)


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the default global config."""
    return init_config()


@pytest.fixture
def atlas_image():
    """A blank 128x64 atlas image."""
    return AtlasImage(SoftwareSurface(128, 64))


@pytest.fixture
def pixel_image():
    """
    4x2 atlas image whose top-left 2x1 block is blue, red.

    Read as stored data rotated 90 degrees clockwise, that block is an
    upright 1x2 image with red on top and blue below.
    """
    img = Image.new("RGBA", (4, 2), (0, 0, 0, 0))
    img.putpixel((0, 0), BLUE)
    img.putpixel((1, 0), RED)
    return AtlasImage(SoftwareSurface(img))


@pytest.fixture
def image_file(tmp_path: Path):
    """A 64x32 PNG on disk."""
    img = Image.new("RGBA", (64, 32), (0, 255, 0, 255))
    img_path = tmp_path / "sheet.png"
    img.save(img_path)
    return img_path
