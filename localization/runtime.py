"""
进程级 Catalog 句柄

启动时由 main.py 创建并 install()，退出前 teardown()。
业务代码优先显式传递 LanguageCatalog，只有拿不到引用的地方才用 get_catalog()。
"""

from __future__ import annotations

import logging
from typing import Optional

from localization.errors import CatalogStateError
from localization.language_catalog import LanguageCatalog

logger = logging.getLogger(__name__)

_catalog: Optional[LanguageCatalog] = None


def install(catalog: LanguageCatalog) -> LanguageCatalog:
    """注册进程级 Catalog；已有实例时先关闭旧的"""
    global _catalog
    if _catalog is not None and _catalog is not catalog:
        logger.warning("Replacing installed language catalog")
        _catalog.close()
    _catalog = catalog
    return catalog


def get_catalog() -> LanguageCatalog:
    if _catalog is None:
        raise CatalogStateError("No language catalog installed")
    return _catalog


def teardown() -> None:
    """关闭并移除进程级 Catalog（可重复调用）"""
    global _catalog
    if _catalog is not None:
        _catalog.close()
        _catalog = None
