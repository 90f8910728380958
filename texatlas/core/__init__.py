"""
核心模块 - 包含配置、异常、图片加载、抽象接口等基础组件
"""

from .config import AtlasConfig, get_config, init_config
from .errors import AtlasError, InvalidArgumentError, ManifestFormatError, AtlasDisposedError
from .image_loader import AtlasImage, SoftwareSurface, load_image_surface
from .interfaces import IRegionDescriptor

__all__ = [
    # 配置
    'AtlasConfig',
    'get_config',
    'init_config',

    # 异常
    'AtlasError',
    'InvalidArgumentError',
    'ManifestFormatError',
    'AtlasDisposedError',

    # 图片
    'AtlasImage',
    'SoftwareSurface',
    'load_image_surface',

    # 接口
    'IRegionDescriptor',
]
