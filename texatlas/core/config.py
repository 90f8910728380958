"""
图集配置管理

使用方式:
    from texatlas.core import AtlasConfig, get_config, init_config

    # 初始化（启动时调用一次）
    config = init_config(flip_y=False, validate_bounds=True)

    # 获取全局配置实例
    config = get_config()
    print(config.texture_filter)
"""

from dataclasses import dataclass
from typing import Optional
import json
import os


# 支持的纹理过滤方式
TEXTURE_FILTERS = ('nearest', 'linear')


@dataclass
class AtlasConfig:
    """
    纹理图集全局配置
    """
    # OpenGL纹理坐标Y轴从下往上，默认按翻转后的纹理计算UV
    flip_y: bool = True

    # 上传到GPU时使用的过滤方式
    texture_filter: str = 'nearest'

    # 添加区域时是否检查区域落在底图范围内
    validate_bounds: bool = False

    # 读取清单文件使用的编码
    manifest_encoding: str = 'utf-8'

    def __post_init__(self):
        if self.texture_filter not in TEXTURE_FILTERS:
            raise ValueError(
                f"Unknown texture filter '{self.texture_filter}', "
                f"expected one of {TEXTURE_FILTERS}"
            )

    def to_dict(self) -> dict:
        """导出为字典"""
        return {
            'flip_y': self.flip_y,
            'texture_filter': self.texture_filter,
            'validate_bounds': self.validate_bounds,
            'manifest_encoding': self.manifest_encoding,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'AtlasConfig':
        """从字典创建配置"""
        return cls(
            flip_y=data.get('flip_y', True),
            texture_filter=data.get('texture_filter', 'nearest'),
            validate_bounds=data.get('validate_bounds', False),
            manifest_encoding=data.get('manifest_encoding', 'utf-8'),
        )

    def save(self, filepath: str):
        """保存配置到文件"""
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: str) -> 'AtlasConfig':
        """从文件加载配置，文件不存在时返回默认配置"""
        if os.path.exists(filepath):
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return cls.from_dict(data)
        return cls()


# ===== 全局配置实例 =====
_config_instance: Optional[AtlasConfig] = None


def init_config(**kwargs) -> AtlasConfig:
    """
    初始化全局配置

    Args:
        **kwargs: 配置参数，会覆盖默认值

    Returns:
        AtlasConfig实例
    """
    global _config_instance
    _config_instance = AtlasConfig(**kwargs)
    return _config_instance


def get_config() -> AtlasConfig:
    """
    获取全局配置实例

    Returns:
        AtlasConfig实例，如未初始化则使用默认值
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AtlasConfig()
    return _config_instance
