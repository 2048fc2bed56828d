"""
语言系统错误类型

所有错误都继承自 LocalizationError，调用方可以一次性捕获。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class LocalizationError(Exception):
    """语言系统错误基类"""


class ParseError(LocalizationError):
    """语言文件 / 项目描述文件 JSON 格式错误"""

    def __init__(self, message: str, source: Optional[Union[str, Path]] = None) -> None:
        self.source = str(source) if source is not None else None
        if self.source:
            message = f"{self.source}: {message}"
        super().__init__(message)


class ConfigError(LocalizationError):
    """项目配置不合法（例如主语言不在语言列表中）"""


class UnknownLanguageError(LocalizationError):
    """请求切换到项目未声明的语言"""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Unknown language code: {code!r}")


class MissingFileError(LocalizationError):
    """期望的语言文件不存在"""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        super().__init__(f"File not found: {self.path}")


class CatalogStateError(LocalizationError):
    """Catalog 尚未打开 / 已关闭时执行了需要 READY 状态的操作"""


class DuplicateKeyError(LocalizationError):
    """新增 key 与主语言表中已有 key 冲突（大小写不敏感）"""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Key already exists: {key!r}")


class UnknownKeyError(LocalizationError):
    """主语言表中不存在该 key"""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Key not found: {key!r}")
