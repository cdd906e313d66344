"""Fixtures compartidas."""

import json
import logging
import shutil
from pathlib import Path

import pytest

from react_learning.config import Config

REPO_TEMPLATES = Path(__file__).resolve().parents[1] / "templates"

README_WITH_MARKERS = """# Hello

**Difficulty:** beginner
**Type:** Fix Broken Code

## Learning Objectives

- props
"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Quitar los handlers que añade setup_logging entre tests."""
    yield
    logger = logging.getLogger("react_learning")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def curriculum(tmp_path: Path) -> Path:
    """Raíz de currículo con las plantillas del repositorio y sin ejercicios."""
    shutil.copytree(REPO_TEMPLATES, tmp_path / "templates")
    (tmp_path / "exercises").mkdir()
    return tmp_path


@pytest.fixture
def config(curriculum: Path) -> Config:
    return Config(root_dir=curriculum, log_dir=curriculum / "logs")


def _make_exercise(
    exercises_dir: Path,
    topic: str,
    name: str,
    readme: str | None = README_WITH_MARKERS,
    files: tuple[str, ...] = (
        "package.json",
        "src/App.tsx",
        "src/App.test.tsx",
        "src/main.tsx",
        "tsconfig.json",
        "vite.config.ts",
    ),
) -> Path:
    """Crear un directorio de ejercicio con los archivos indicados."""
    path = exercises_dir / topic / name
    path.mkdir(parents=True)
    for rel_path in files:
        target = path / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        if rel_path == "package.json":
            target.write_text(json.dumps({"name": name}), encoding="utf-8")
        else:
            target.write_text("", encoding="utf-8")
    if readme is not None:
        (path / "README.md").write_text(readme, encoding="utf-8")
    return path


@pytest.fixture
def make_exercise():
    return _make_exercise
