"""
图集清单解析

把不同格式的清单文件转换为统一的 ManifestRecord 列表，图集本身不做格式识别。

支持格式:
- Starling XML: <TextureAtlas imagePath="..."><SubTexture name=... x=... /></TextureAtlas>
- TexturePacker JSON (hash / array 两种布局)
- 精灵配置 JSON: {"texture": "...", "sprites": {"name": {"rect": [x, y, w, h]}}}
  以及使用 "__image_filename" 的旧格式

使用方式:
    records = parse_manifest_file("images/bullet/bullet1.xml")
    parser = get_parser("atlas.json")
"""

import json
import logging
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.config import get_config
from ..core.errors import ManifestFormatError
from .texture_region import Rect

logger = logging.getLogger(__name__)


@dataclass
class ManifestRecord:
    """清单中的一条子区域记录"""
    name: str
    x: float
    y: float
    width: float
    height: float
    frame_x: float = 0.0
    frame_y: float = 0.0
    frame_width: float = 0.0
    frame_height: float = 0.0
    rotated: bool = False

    @property
    def region(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def frame(self) -> Optional[Rect]:
        """frame 宽高都大于0时才视为有裁剪"""
        if self.frame_width > 0 and self.frame_height > 0:
            return Rect(self.frame_x, self.frame_y, self.frame_width, self.frame_height)
        return None


class AtlasDataParser(ABC):
    """
    清单解析器接口

    TextureAtlas 接收解析器时只调用 parse()。
    """

    def __init__(self, text: str, source: Optional[str] = None):
        self.text = text
        self.source = source
        self.image_path: Optional[str] = None

    @abstractmethod
    def parse(self) -> List[ManifestRecord]:
        """解析为记录列表"""
        pass

    def _fail(self, message: str) -> ManifestFormatError:
        return ManifestFormatError(message, self.source)


def _parse_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes')
    return bool(value)


class StarlingXmlParser(AtlasDataParser):
    """Starling / Sparrow 格式的 XML 清单"""

    def parse(self) -> List[ManifestRecord]:
        try:
            root = ET.fromstring(self.text)
        except ET.ParseError as e:
            raise self._fail(f"Malformed atlas XML ({e})") from e

        if root.tag != 'TextureAtlas':
            raise self._fail(f"Expected <TextureAtlas> root, got <{root.tag}>")

        self.image_path = root.get('imagePath')

        records = []
        for node in root.iter('SubTexture'):
            name = node.get('name')
            if name is None:
                logger.warning("Skipping <SubTexture> without name in %s", self.source or "<string>")
                continue
            try:
                records.append(ManifestRecord(
                    name=name,
                    x=float(node.get('x', 0)),
                    y=float(node.get('y', 0)),
                    width=float(node.get('width', 0)),
                    height=float(node.get('height', 0)),
                    frame_x=float(node.get('frameX', 0)),
                    frame_y=float(node.get('frameY', 0)),
                    frame_width=float(node.get('frameWidth', 0)),
                    frame_height=float(node.get('frameHeight', 0)),
                    rotated=_parse_bool(node.get('rotated', 'false')),
                ))
            except ValueError as e:
                raise self._fail(f"Bad number in <SubTexture name=\"{name}\"> ({e})") from e
        return records


class TexturePackerJsonParser(AtlasDataParser):
    """
    TexturePacker JSON 清单（hash 或 array 布局）

    rotated 的帧在 "frame" 里记录的是转正后的宽高，存放在图集中的区域宽高互换。
    """

    def __init__(self, text: str, source: Optional[str] = None, data: Optional[Dict[str, Any]] = None):
        super().__init__(text, source)
        self._data = data

    def parse(self) -> List[ManifestRecord]:
        data = self._data if self._data is not None else _load_json(self.text, self.source)
        frames = data.get('frames')
        if frames is None:
            raise self._fail("TexturePacker JSON has no 'frames'")

        meta = data.get('meta')
        self.image_path = meta.get('image') if isinstance(meta, dict) else None

        if isinstance(frames, dict):
            items = list(frames.items())
        elif isinstance(frames, list):
            items = [(entry.get('filename') if isinstance(entry, dict) else None, entry) for entry in frames]
        else:
            raise self._fail("'frames' must be an object or an array")

        records = []
        for name, entry in items:
            if not name or not isinstance(entry, dict) or 'frame' not in entry:
                logger.warning("Skipping frame entry without name or rect in %s", self.source or "<string>")
                continue
            records.append(self._parse_frame(name, entry))
        return records

    def _parse_frame(self, name: str, entry: dict) -> ManifestRecord:
        try:
            rect = entry['frame']
            rotated = _parse_bool(entry.get('rotated', False))
            w, h = float(rect['w']), float(rect['h'])
            if rotated:
                w, h = h, w
            record = ManifestRecord(name=name, x=float(rect['x']), y=float(rect['y']),
                                    width=w, height=h, rotated=rotated)

            if entry.get('trimmed'):
                sprite_source = entry['spriteSourceSize']
                source_size = entry['sourceSize']
                record.frame_x = -float(sprite_source['x'])
                record.frame_y = -float(sprite_source['y'])
                record.frame_width = float(source_size['w'])
                record.frame_height = float(source_size['h'])
        except (KeyError, TypeError, ValueError) as e:
            raise self._fail(f"Incomplete frame '{name}' ({e})") from e
        return record


class SpriteConfigParser(AtlasDataParser):
    """
    精灵配置 JSON

    新格式: {"texture": "bullet1.png", "sprites": {"name": {"rect": [x, y, w, h]}}}
    旧格式: {"__image_filename": "bullet1.png", "name": {"rect": [...]}, ...}
    """

    def __init__(self, text: str, source: Optional[str] = None, data: Optional[Dict[str, Any]] = None):
        super().__init__(text, source)
        self._data = data

    def parse(self) -> List[ManifestRecord]:
        config = self._data if self._data is not None else _load_json(self.text, self.source)
        self.image_path = config.get('texture') or config.get('__image_filename') or None

        sprites_data = config.get('sprites', config)
        if not isinstance(sprites_data, dict):
            raise self._fail("'sprites' must be an object")

        # 旧格式的顶层还放着纹理文件名
        legacy = sprites_data is config

        records = []
        for sprite_name, sprite_data in sprites_data.items():
            if sprite_name.startswith('__') or (legacy and sprite_name == 'texture'):
                continue
            if not isinstance(sprite_data, dict) or 'rect' not in sprite_data:
                logger.warning("Skipping sprite '%s' without rect in %s", sprite_name, self.source or "<string>")
                continue

            rect = self._four_numbers(sprite_data['rect'], sprite_name, 'rect')
            frame = self._four_numbers(sprite_data.get('frame') or [0, 0, 0, 0], sprite_name, 'frame')

            records.append(ManifestRecord(
                sprite_name, *rect,
                frame_x=frame[0], frame_y=frame[1], frame_width=frame[2], frame_height=frame[3],
                rotated=_parse_bool(sprite_data.get('rotated', False)),
            ))
        return records

    def _four_numbers(self, value, sprite_name: str, what: str) -> List[float]:
        if not isinstance(value, (list, tuple)) or len(value) != 4:
            raise self._fail(f"Sprite '{sprite_name}' {what} must have 4 numbers")
        try:
            return [float(v) for v in value]
        except (TypeError, ValueError) as e:
            raise self._fail(f"Bad number in sprite '{sprite_name}' {what} ({e})") from e


def _load_json(text: str, source: Optional[str]) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestFormatError(f"Malformed atlas JSON ({e})", source) from e
    if not isinstance(data, dict):
        raise ManifestFormatError("Atlas JSON must be an object", source)
    return data


def get_parser(path, text: Optional[str] = None) -> AtlasDataParser:
    """
    根据文件后缀（JSON 再看顶层字段）选择解析器

    Args:
        path: 清单文件路径
        text: 已读取的文本，None 时从文件读取

    Returns:
        对应的解析器
    """
    path = Path(path)
    if text is None:
        with open(path, 'r', encoding=get_config().manifest_encoding) as f:
            text = f.read()

    suffix = path.suffix.lower()
    if suffix == '.xml':
        return StarlingXmlParser(text, str(path))
    if suffix == '.json':
        data = _load_json(text, str(path))
        if 'frames' in data:
            return TexturePackerJsonParser(text, str(path), data)
        return SpriteConfigParser(text, str(path), data)

    raise ManifestFormatError(f"Unsupported manifest format '{suffix}'", str(path))


def parse_manifest_file(path) -> List[ManifestRecord]:
    """读取并解析清单文件"""
    return get_parser(path).parse()
