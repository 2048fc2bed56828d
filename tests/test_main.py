"""
测试命令行入口
"""

import shutil
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

import main  # noqa: E402
from storage import ProjectStorage  # noqa: E402


@pytest.fixture
def config_file(tmp_path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(
        "language_system:\n"
        "  language: auto\n"
        "preferences:\n"
        "  backend: memory\n"
        "logging:\n"
        "  level: WARNING\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def project_dir(tmp_path) -> Path:
    target = tmp_path / "DemoProject"
    shutil.copytree(ROOT / "resources" / "DemoProject", target)
    return target


def _run(config_file, project_dir, *args) -> int:
    return main.main(["--config", str(config_file), "--project", str(project_dir), *args])


class TestConfig:

    def test_load_missing_config(self, tmp_path):
        assert main.load_config(tmp_path / "missing.yaml") == {}

    def test_load_config(self, config_file):
        config = main.load_config(config_file)
        assert config["preferences"]["backend"] == "memory"

    def test_parse_assignments(self):
        assert main.parse_assignments(["es=Hola", "fr=a=b"]) == {"es": "Hola", "fr": "a=b"}


class TestCommands:

    def test_show(self, config_file, project_dir, capsys):
        assert _run(config_file, project_dir, "show", "Confirm", "--lang", "es") == 0
        assert capsys.readouterr().out.strip() == "Confirmar"

    def test_show_case(self, config_file, project_dir, capsys):
        assert _run(config_file, project_dir, "show", "missing", "--case", "upper") == 0
        assert capsys.readouterr().out.strip() == "[MISSING]"

    def test_switch_unknown_language(self, config_file, project_dir):
        assert _run(config_file, project_dir, "switch", "de") == 1

    def test_add_edit_delete(self, config_file, project_dir):
        storage = ProjectStorage(project_dir)

        assert _run(config_file, project_dir, "add", "Load Game", "--set", "es=Cargar partida") == 0
        assert storage.read_table("en").lookup("load game") == "Load Game"
        assert storage.read_table("es").lookup("load game") == "Cargar partida"
        assert storage.read_table("fr").lookup("load game") == ""

        assert _run(config_file, project_dir, "edit", "Load Game", "--set", "fr=Charger") == 0
        assert storage.read_table("fr").lookup("load game") == "Charger"

        assert _run(config_file, project_dir, "delete", "load game") == 0
        assert not storage.read_table("es").has_key("Load Game")

    def test_add_duplicate_fails(self, config_file, project_dir):
        assert _run(config_file, project_dir, "add", "CONFIRM") == 1

    def test_keys(self, config_file, project_dir, capsys):
        assert _run(config_file, project_dir, "keys", "--search", "quit") == 0
        assert capsys.readouterr().out.strip() == "Quit | en: Quit | es: Salir | fr: Quitter"

    def test_create(self, config_file, tmp_path):
        root = tmp_path / "projects"
        assert main.main(["--config", str(config_file), "create", "Menus",
                          "--language", "en", "--language", "ja", "--main", "ja",
                          "--root", str(root)]) == 0
        project = ProjectStorage(root / "Menus").read_project()
        assert project.main_language == "ja"
        assert project.languages == ["en", "ja"]
