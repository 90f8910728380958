"""
纹理图集 - 名称到子纹理的查找表

一张底图 + 名称到子区域的映射，支持精确查找、前缀查找以及增删。

使用方式:
    from texatlas import TextureAtlas

    atlas = TextureAtlas.load("images/bullet/bullet1.xml")

    region = atlas.get_region("star_small1")
    names = atlas.get_names("star_")          # 按名称不区分大小写排序
    textures = atlas.get_textures("star_")    # 顺序与 get_names 一致

    atlas.dispose()
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

import numpy as np

from ..core.config import get_config
from ..core.errors import AtlasDisposedError, InvalidArgumentError
from ..core.image_loader import AtlasImage
from ..core.interfaces import IRegionDescriptor
from .manifest import AtlasDataParser, ManifestRecord, get_parser
from .texture_region import Rect, RectLike, SubTexture, region_uv

logger = logging.getLogger(__name__)


AtlasData = Union[AtlasDataParser, Sequence[ManifestRecord]]


class SortedNameCache:
    """
    排序名称缓存

    两种状态：未构建（names 为 None）/ 已构建。
    任何增删都必须调用 invalidate()。
    """

    def __init__(self):
        self._names: Optional[List[str]] = None

    @property
    def built(self) -> bool:
        return self._names is not None

    def invalidate(self):
        self._names = None

    def get(self, keys: Iterable[str]) -> List[str]:
        """取缓存，未构建时先排序。(小写, 原名) 作为键保证与插入顺序无关"""
        if self._names is None:
            self._names = sorted(keys, key=lambda name: (name.lower(), name))
            logger.debug("Rebuilt sorted name cache (%d names)", len(self._names))
        return self._names


class TextureAtlas:
    """
    纹理图集

    管理一张底图以及其上所有命名子纹理。底图的生命周期由图集决定：
    只有 dispose() 会释放它。
    """

    def __init__(self, texture: AtlasImage, data: Optional[AtlasData] = None):
        """
        Args:
            texture: 底图
            data: 已解析的记录序列，或一个清单解析器
        """
        self._texture = texture
        self._sub_textures: Dict[str, IRegionDescriptor] = {}
        self._name_cache = SortedNameCache()
        self._disposed = False

        if data is not None:
            records = data.parse() if isinstance(data, AtlasDataParser) else data
            for record in records:
                self.add_region(record.name, record.region, record.frame, record.rotated)

    # ==================== 创建 ====================

    @classmethod
    def from_files(cls, image_path, manifest_path) -> 'TextureAtlas':
        """
        从图片文件和清单文件创建图集

        Args:
            image_path: 底图路径
            manifest_path: 清单路径（.xml / .json）
        """
        parser = get_parser(manifest_path)
        atlas = cls._build(AtlasImage.load(str(image_path)), parser)
        logger.info("Loaded atlas '%s': %d regions", Path(manifest_path).name, len(atlas))
        return atlas

    @classmethod
    def load(cls, manifest_path) -> 'TextureAtlas':
        """
        只给清单路径，底图路径取清单中记录的文件名（相对于清单所在目录）
        """
        manifest_path = Path(manifest_path)
        parser = get_parser(manifest_path)
        records = parser.parse()

        if not parser.image_path:
            raise InvalidArgumentError(f"Manifest does not name its image: {manifest_path}")

        manifest_dir = manifest_path.parent
        possible_paths = [
            manifest_dir / parser.image_path,
            manifest_dir / Path(parser.image_path).name,
            Path(parser.image_path),
        ]
        image_path = next((p for p in possible_paths if p.exists()), possible_paths[0])

        atlas = cls._build(AtlasImage.load(str(image_path)), records)
        logger.info("Loaded atlas '%s': %d regions", manifest_path.name, len(atlas))
        return atlas

    @classmethod
    def _build(cls, image: AtlasImage, data: AtlasData) -> 'TextureAtlas':
        """构建失败时释放刚加载的底图"""
        try:
            return cls(image, data)
        except Exception:
            image.dispose()
            raise

    def dispose(self):
        """释放底图。子纹理共享同一底图，不单独释放"""
        if self._disposed:
            return
        self._texture.dispose()
        self._disposed = True
        logger.info("Disposed atlas (%d regions)", len(self._sub_textures))

    # ==================== 属性 ====================

    @property
    def texture(self) -> AtlasImage:
        self._check_alive()
        return self._texture

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __len__(self) -> int:
        return len(self._sub_textures)

    def __contains__(self, name: str) -> bool:
        return name in self._sub_textures

    def _check_alive(self):
        if self._disposed:
            raise AtlasDisposedError("TextureAtlas has been disposed")

    # ==================== 查询 ====================

    def get_texture(self, name: str) -> Optional[IRegionDescriptor]:
        """获取子纹理，未注册返回None"""
        self._check_alive()
        return self._sub_textures.get(name)

    def get_region(self, name: str) -> Optional[Rect]:
        """获取子纹理在底图中的区域，未注册返回None"""
        sub_texture = self.get_texture(name)
        return sub_texture.region if sub_texture is not None else None

    def get_frame(self, name: str) -> Optional[Rect]:
        """获取子纹理的 frame，未裁剪或未注册返回None"""
        sub_texture = self.get_texture(name)
        return sub_texture.frame if sub_texture is not None else None

    def get_rotation(self, name: str) -> bool:
        """子纹理是否旋转存放。未注册的名称同样返回False"""
        sub_texture = self.get_texture(name)
        return sub_texture.rotated if sub_texture is not None else False

    def get_names(self, prefix: str = "", out: Optional[List[str]] = None) -> List[str]:
        """
        获取以 prefix 开头的全部名称

        名称按不区分大小写的顺序排列；前缀比较区分大小写。

        Args:
            prefix: 名称前缀，空字符串表示全部
            out: 可复用的结果列表，结果追加在末尾

        Returns:
            out（若提供）或新列表
        """
        self._check_alive()
        if out is None:
            out = []

        for name in self._name_cache.get(self._sub_textures.keys()):
            if name.startswith(prefix):
                out.append(name)
        return out

    def get_textures(self, prefix: str = "",
                     out: Optional[List[IRegionDescriptor]] = None) -> List[IRegionDescriptor]:
        """
        获取以 prefix 开头的全部子纹理，顺序与 get_names 相同

        Args:
            prefix: 名称前缀
            out: 可复用的结果列表
        """
        if out is None:
            out = []

        for name in self.get_names(prefix):
            out.append(self.get_texture(name))
        return out

    def get_uv(self, name: str, flip_y: Optional[bool] = None):
        """
        获取子纹理的UV坐标

        Returns:
            (u_left, v_top, u_right, v_bottom) 或 None
        """
        sub_texture = self.get_texture(name)
        if sub_texture is None:
            return None
        if flip_y is None:
            flip_y = get_config().flip_y
        return region_uv(sub_texture.region, sub_texture.parent.size, flip_y)

    def get_uv_array(self, prefix: str = "", flip_y: Optional[bool] = None) -> np.ndarray:
        """
        获取UV数组（用于批量渲染）

        Returns:
            shape (N, 4) 的 float32 数组，行顺序与 get_names(prefix) 一致
        """
        if flip_y is None:
            flip_y = get_config().flip_y

        sub_textures = self.get_textures(prefix)
        uv_array = np.zeros((len(sub_textures), 4), dtype=np.float32)
        for i, sub_texture in enumerate(sub_textures):
            uv_array[i] = region_uv(sub_texture.region, sub_texture.parent.size, flip_y)
        return uv_array

    # ==================== 增删 ====================

    def add_region(self, name: str, region: RectLike,
                   frame: Optional[RectLike] = None, rotated: bool = False) -> SubTexture:
        """
        添加（或覆盖）一个子区域

        Args:
            name: 名称
            region: 底图中的区域 (x, y, width, height)
            frame: 未裁剪时的 frame，None 表示没有裁剪
            rotated: 像素是否顺时针旋转90度存放

        Returns:
            新建的子纹理
        """
        self._check_alive()
        sub_texture = SubTexture(self._texture, region, frame, rotated, name=name)

        if get_config().validate_bounds and not sub_texture.region.fits_within(self._texture.size):
            raise InvalidArgumentError(
                f"Region '{name}' {sub_texture.region.as_tuple()} is outside "
                f"the atlas image {self._texture.size}"
            )

        self._insert(name, sub_texture)
        return sub_texture

    def add_sub_texture(self, name: str, sub_texture: IRegionDescriptor):
        """
        添加一个已构建的子纹理（可以是 SubTexture 的子类）

        Raises:
            InvalidArgumentError: 子纹理不属于本图集的底图
        """
        self._check_alive()
        if sub_texture.parent is not self._texture:
            raise InvalidArgumentError(
                f"SubTexture '{name}' belongs to a different atlas image"
            )

        sub_texture.name = name
        self._insert(name, sub_texture)

    def _insert(self, name: str, sub_texture: IRegionDescriptor):
        """插入或覆盖；被覆盖的旧子纹理释放其附属资源"""
        old = self._sub_textures.pop(name, None)
        if old is not None and old is not sub_texture:
            old.dispose()
        self._sub_textures[name] = sub_texture
        self._name_cache.invalidate()

    def remove_region(self, name: str):
        """移除子区域并释放其附属资源；名称不存在时什么也不做"""
        self._check_alive()
        sub_texture = self._sub_textures.pop(name, None)
        if sub_texture is not None:
            sub_texture.dispose()
        self._name_cache.invalidate()

