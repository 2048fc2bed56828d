"""
LangTable localization — 多语言文本查找核心

提供：
- LanguageTable: 单语言 key → 文本表，key 大小写不敏感
- LanguageProject: 项目描述（主语言 + 语言列表）
- LanguageCatalog: 运行时语言切换，同步通知订阅者
- fallback: 当前语言 → "[key]"
- runtime: 进程级 Catalog 句柄 (install / get_catalog / teardown)

Qt 信号桥接位于 localization.qt_bridge，按需导入。
"""

from localization.errors import (
    CatalogStateError,
    ConfigError,
    DuplicateKeyError,
    LocalizationError,
    MissingFileError,
    ParseError,
    UnknownKeyError,
    UnknownLanguageError,
)
from localization.language_table import LanguageEntry, LanguageTable, normalize_key
from localization.project import LanguageProject
from localization.language_catalog import CatalogState, LanguageCatalog

__all__ = [
    "CatalogState",
    "CatalogStateError",
    "ConfigError",
    "DuplicateKeyError",
    "LanguageCatalog",
    "LanguageEntry",
    "LanguageProject",
    "LanguageTable",
    "LocalizationError",
    "MissingFileError",
    "ParseError",
    "UnknownKeyError",
    "UnknownLanguageError",
    "normalize_key",
]
