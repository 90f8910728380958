"""
抽象接口定义 - 用于解耦图集与具体的子纹理实现

包含:
- IRegionDescriptor: 子区域描述接口（图集只依赖这一组能力）
"""

from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .image_loader import AtlasImage
    from ..resource.texture_region import Rect


class IRegionDescriptor(ABC):
    """
    子区域描述接口

    任何子纹理变体只要实现以下属性和 dispose()，即可通过
    TextureAtlas.add_sub_texture 插入图集。
    """

    # 插入图集时由图集写入条目名称
    name: Optional[str] = None

    @property
    @abstractmethod
    def parent(self) -> 'AtlasImage':
        """所属底图"""
        pass

    @property
    @abstractmethod
    def region(self) -> 'Rect':
        """像素数据在底图中的位置（可能已旋转、已裁剪）"""
        pass

    @property
    @abstractmethod
    def frame(self) -> Optional['Rect']:
        """未裁剪时的逻辑尺寸与偏移，None 表示没有裁剪"""
        pass

    @property
    @abstractmethod
    def rotated(self) -> bool:
        """像素数据是否顺时针旋转了90度存放"""
        pass

    @abstractmethod
    def dispose(self):
        """释放子区域自身的附属资源（不释放共享底图）"""
        pass
