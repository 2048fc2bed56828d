"""
CatalogSignals — 将 Catalog 的语言切换通知转发为 Qt Signal

界面控件连接 language_changed 即可在切换语言后刷新文本。
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Signal

from localization.language_catalog import LanguageCatalog


class CatalogSignals(QObject):
    """
    Usage::

        signals = CatalogSignals()
        signals.attach(catalog)
        signals.language_changed.connect(label_refresh)
    """

    language_changed = Signal(str)  # 新的语言代码，如 "es"

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._catalog: Optional[LanguageCatalog] = None

    def attach(self, catalog: LanguageCatalog) -> None:
        self.detach()
        catalog.subscribe(self._forward)
        self._catalog = catalog

    def detach(self) -> None:
        if self._catalog is not None:
            self._catalog.unsubscribe(self._forward)
            self._catalog = None

    @property
    def catalog(self) -> Optional[LanguageCatalog]:
        return self._catalog

    def _forward(self, code: str) -> None:
        self.language_changed.emit(code)
