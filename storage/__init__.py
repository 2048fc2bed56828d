"""LangTable storage — 项目目录与偏好存储"""

from storage.preferences import (
    MemoryPreferenceStore,
    PreferenceStore,
    QSettingsPreferenceStore,
)
from storage.project_storage import ProjectStorage

__all__ = [
    "MemoryPreferenceStore",
    "PreferenceStore",
    "QSettingsPreferenceStore",
    "ProjectStorage",
]
