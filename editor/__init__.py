"""LangTable editor — 翻译文件编辑与项目创建"""

from editor.language_editor import LanguageEditor
from editor.project_setup import ProjectDraft

__all__ = ["LanguageEditor", "ProjectDraft"]
