"""
资源模块 - 纹理图集、子纹理与清单解析
"""

from .texture_region import Rect, SubTexture, region_uv
from .manifest import (
    ManifestRecord, AtlasDataParser,
    StarlingXmlParser, TexturePackerJsonParser, SpriteConfigParser,
    get_parser, parse_manifest_file
)
from .texture_atlas import TextureAtlas, SortedNameCache

__all__ = [
    'Rect',
    'SubTexture',
    'region_uv',
    'ManifestRecord',
    'AtlasDataParser',
    'StarlingXmlParser',
    'TexturePackerJsonParser',
    'SpriteConfigParser',
    'get_parser',
    'parse_manifest_file',
    'TextureAtlas',
    'SortedNameCache',
]
