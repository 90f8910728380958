"""
纹理区域与子纹理

核心概念:
- Rect: 底图坐标系中的矩形 (x, y, width, height)
- SubTexture: 图集中的一个子纹理，绑定底图 + 区域 + 可选的frame/旋转

frame 描述未裁剪时的逻辑尺寸，x/y 为负表示该边的透明像素被裁掉了。
rotated 为 True 表示像素数据顺时针旋转90度存放，显示时需逆时针转回。
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ..core.errors import InvalidArgumentError
from ..core.image_loader import AtlasImage, SoftwareSurface
from ..core.interfaces import IRegionDescriptor


@dataclass(frozen=True)
class Rect:
    """矩形区域"""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_tuple(cls, value: Union['Rect', Tuple[float, float, float, float]]) -> 'Rect':
        if isinstance(value, Rect):
            return value
        if len(value) != 4:
            raise InvalidArgumentError(f"Rect needs (x, y, width, height), got {value!r}")
        return cls(*value)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def fits_within(self, size: Tuple[int, int]) -> bool:
        """是否完全落在 (0, 0, width, height) 范围内"""
        return (
            self.x >= 0 and self.y >= 0 and
            self.right <= size[0] and self.bottom <= size[1]
        )


RectLike = Union[Rect, Tuple[float, float, float, float]]


def region_uv(region: Rect, texture_size: Tuple[int, int],
              flip_y: bool = False) -> Tuple[float, float, float, float]:
    """
    底图坐标转换为UV (u_left, v_top, u_right, v_bottom)

    OpenGL纹理坐标Y轴从下往上，flip_y 用于 flip 后上传的纹理。
    """
    tex_w, tex_h = texture_size
    u_left = region.x / tex_w
    u_right = region.right / tex_w
    if flip_y:
        v_top = (tex_h - region.bottom) / tex_h
        v_bottom = (tex_h - region.y) / tex_h
    else:
        v_top = region.y / tex_h
        v_bottom = region.bottom / tex_h
    return (u_left, v_top, u_right, v_bottom)


def _check_size(rect: Rect, what: str):
    if rect.width < 0 or rect.height < 0:
        raise InvalidArgumentError(f"{what} has negative size: {rect.as_tuple()}")


class SubTexture(IRegionDescriptor):
    """
    子纹理

    既是图集条目的描述数据，也是 get_texture 返回给渲染端的句柄。
    底图由图集共享，这里只持有引用。
    """

    def __init__(self, parent: AtlasImage, region: RectLike,
                 frame: Optional[RectLike] = None, rotated: bool = False,
                 name: Optional[str] = None):
        self._parent = parent
        self._region = Rect.from_tuple(region)
        self._frame = Rect.from_tuple(frame) if frame is not None else None
        self._rotated = bool(rotated)
        self.name = name

        _check_size(self._region, "region")
        if self._frame is not None:
            _check_size(self._frame, "frame")

        # 附属资源：裁剪并转正后的 Surface 缓存
        self._surface_cache: Optional[SoftwareSurface] = None

    def __repr__(self):
        return (f"SubTexture(name={self.name!r}, region={self._region.as_tuple()}, "
                f"frame={self._frame.as_tuple() if self._frame else None}, rotated={self._rotated})")

    @property
    def parent(self) -> AtlasImage:
        return self._parent

    @property
    def region(self) -> Rect:
        return self._region

    @property
    def frame(self) -> Optional[Rect]:
        return self._frame

    @property
    def rotated(self) -> bool:
        return self._rotated

    @property
    def width(self) -> float:
        """逻辑宽度（显示尺寸）"""
        if self._frame is not None:
            return self._frame.width
        return self._region.height if self._rotated else self._region.width

    @property
    def height(self) -> float:
        """逻辑高度（显示尺寸）"""
        if self._frame is not None:
            return self._frame.height
        return self._region.width if self._rotated else self._region.height

    # ==================== UV ====================

    def get_uv(self, flip_y: bool = False) -> Tuple[float, float, float, float]:
        """
        获取存储区域的UV坐标 (归一化到0-1)

        Args:
            flip_y: 是否翻转Y轴（用于 flip 后上传的 OpenGL 纹理）

        Returns:
            (u_left, v_top, u_right, v_bottom)
        """
        return region_uv(self._region, self._parent.size, flip_y)

    def get_corner_uvs(self, flip_y: bool = False) -> List[Tuple[float, float]]:
        """
        获取逻辑四角（左上、右上、右下、左下）对应的UV

        旋转存放时，逻辑左上角位于存储区域的右上角，依次类推。
        """
        tex_w, tex_h = self._parent.size
        r = self._region

        def uv(px, py):
            v = (tex_h - py) / tex_h if flip_y else py / tex_h
            return (px / tex_w, v)

        top_left = uv(r.x, r.y)
        top_right = uv(r.right, r.y)
        bottom_right = uv(r.right, r.bottom)
        bottom_left = uv(r.x, r.bottom)

        if self._rotated:
            return [top_right, bottom_right, bottom_left, top_left]
        return [top_left, top_right, bottom_right, bottom_left]

    # ==================== 像素 ====================

    def get_surface(self) -> SoftwareSurface:
        """
        获取转正、恢复裁剪边距后的 Surface（带缓存）

        Returns:
            逻辑尺寸的 SoftwareSurface
        """
        if self._surface_cache is not None:
            return self._surface_cache

        surface = self._parent.surface.subsurface(self._region.as_tuple())
        if self._rotated:
            surface = surface.rotate_ccw()
        if self._frame is not None:
            surface = surface.pad_to(
                (self._frame.width, self._frame.height),
                (-self._frame.x, -self._frame.y),
            )

        self._surface_cache = surface
        return surface

    def dispose(self):
        """释放 Surface 缓存，共享底图不受影响"""
        self._surface_cache = None
