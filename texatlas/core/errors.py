"""
异常定义

查询接口对未知名称一律返回 None，不抛异常。
这里只包含参数错误、清单格式错误以及释放后继续使用的错误。
"""


class AtlasError(Exception):
    """纹理图集相关错误的基类"""


class InvalidArgumentError(AtlasError, ValueError):
    """参数非法（负尺寸、越界区域、子纹理不属于当前图集等）"""


class ManifestFormatError(AtlasError):
    """清单文件格式不支持或内容损坏"""

    def __init__(self, message: str, path=None):
        self.path = path
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)


class AtlasDisposedError(AtlasError):
    """图集已释放后仍被访问"""
