"""
texatlas - 纹理图集查找表

把名称映射到一张底图上的子区域，支持按名称、按前缀查找。
"""

from .core import (
    AtlasConfig, get_config, init_config,
    AtlasError, InvalidArgumentError, ManifestFormatError, AtlasDisposedError,
    AtlasImage, SoftwareSurface, IRegionDescriptor,
)
from .resource import (
    Rect, SubTexture, TextureAtlas,
    ManifestRecord, AtlasDataParser,
    StarlingXmlParser, TexturePackerJsonParser, SpriteConfigParser,
    get_parser, parse_manifest_file,
)

__version__ = "0.1.0"

__all__ = [
    'AtlasConfig', 'get_config', 'init_config',
    'AtlasError', 'InvalidArgumentError', 'ManifestFormatError', 'AtlasDisposedError',
    'AtlasImage', 'SoftwareSurface', 'IRegionDescriptor',
    'Rect', 'SubTexture', 'TextureAtlas',
    'ManifestRecord', 'AtlasDataParser',
    'StarlingXmlParser', 'TexturePackerJsonParser', 'SpriteConfigParser',
    'get_parser', 'parse_manifest_file',
]
