"""Escaneo del catálogo de ejercicios en disco."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from .exercise import MANIFEST_FILE, README_FILE, ExerciseRecord

logger = logging.getLogger(__name__)

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)", re.DOTALL)
DIFFICULTY_RE = re.compile(r"\*\*Difficulty:\*\*\s*(\w+)")
TYPE_RE = re.compile(r"\*\*Type:\*\*\s*(.+)")
SEQUENCE_RE = re.compile(r"^(\d+)")


def _is_visible_dir(path: Path) -> bool:
    return path.is_dir() and not path.name.startswith(".")


def parse_front_matter(text: str) -> dict[str, Any] | None:
    """Extraer el bloque YAML inicial de un Markdown.

    Devuelve None si no hay bloque o si no es un mapa YAML válido.
    """
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return None
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.debug("Front matter inválido: %s", e)
        return None
    return data if isinstance(data, dict) else None


def read_readme_metadata(readme_path: Path) -> dict[str, str]:
    """Leer metadata (título, dificultad, tipo, tiempo) del README."""
    metadata = {"title": "", "difficulty": "", "type": "", "estimated_time": ""}
    try:
        text = readme_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return metadata

    front = parse_front_matter(text)
    if front is not None:
        for key in metadata:
            value = front.get(key)
            if value is not None:
                metadata[key] = str(value).strip()
        return metadata

    # READMEs sin front matter: marcadores en negrita
    difficulty = DIFFICULTY_RE.search(text)
    exercise_type = TYPE_RE.search(text)
    metadata["difficulty"] = difficulty.group(1) if difficulty else ""
    metadata["type"] = exercise_type.group(1).strip() if exercise_type else ""
    return metadata


def scan_catalog(exercises_dir: Path, require_manifest: bool = False) -> list[ExerciseRecord]:
    """Listar ejercicios ``<topic>/<NN-slug>`` ordenados por nombre completo."""
    exercises_dir = Path(exercises_dir)
    if not exercises_dir.is_dir():
        logger.info("Directorio de ejercicios no encontrado: %s", exercises_dir)
        return []

    records = []
    for topic_dir in exercises_dir.iterdir():
        if not _is_visible_dir(topic_dir):
            continue

        try:
            candidates = list(topic_dir.iterdir())
        except OSError as e:
            logger.warning("No se pudo leer el tema %s: %s", topic_dir.name, e)
            continue

        for exercise_dir in candidates:
            if not _is_visible_dir(exercise_dir):
                continue
            if require_manifest and not (exercise_dir / MANIFEST_FILE).is_file():
                continue

            metadata = read_readme_metadata(exercise_dir / README_FILE)
            records.append(
                ExerciseRecord(
                    topic=topic_dir.name,
                    name=exercise_dir.name,
                    path=exercise_dir,
                    **metadata,
                )
            )

    return sorted(records, key=lambda r: r.full_name)


def parse_sequence(name: str) -> int | None:
    """Número inicial de un nombre ``NN-slug`` o None."""
    match = SEQUENCE_RE.match(name.split("-")[0])
    return int(match.group(1)) if match else None


def next_sequence_number(topic_dir: Path) -> int:
    """Siguiente número de secuencia libre dentro de un tema."""
    topic_dir = Path(topic_dir)
    if not topic_dir.is_dir():
        return 1

    numbers = [
        n for n in (parse_sequence(d.name) for d in topic_dir.iterdir() if _is_visible_dir(d))
        if n is not None
    ]
    return max(numbers) + 1 if numbers else 1


def find_by_slug(topic_dir: Path, slug: str) -> Path | None:
    """Buscar un ejercicio existente ``NN-<slug>`` en el tema."""
    topic_dir = Path(topic_dir)
    if not topic_dir.is_dir():
        return None
    for exercise_dir in sorted(topic_dir.iterdir()):
        if not _is_visible_dir(exercise_dir):
            continue
        prefix, _, rest = exercise_dir.name.partition("-")
        if prefix.isdigit() and rest == slug:
            return exercise_dir
    return None
