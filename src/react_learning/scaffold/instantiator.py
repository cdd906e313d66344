"""Creación de ejercicios a partir de plantillas."""

from __future__ import annotations

import json
import logging
import re
import shutil
import uuid
from pathlib import Path

import yaml

from ..core.catalog import FRONT_MATTER_RE, find_by_slug, next_sequence_number, read_readme_metadata
from ..core.exercise import (
    DIFFICULTIES,
    EXERCISE_TYPES,
    MANIFEST_FILE,
    README_FILE,
    SOLUTION_FILE,
    ExerciseRecord,
    ExerciseSpec,
)
from .dependencies import add_dependencies

logger = logging.getLogger(__name__)

SLUG_RE = re.compile(r"^[a-z0-9-]+$")

TITLE_TOKEN = "EXERCISE_TITLE"
DIFFICULTY_TOKEN = "DIFFICULTY_LEVEL"
TIME_TOKEN = "ESTIMATED_TIME"


class ScaffoldError(Exception):
    """Error en creación de ejercicio."""

    pass


class InvalidSlugError(ScaffoldError):
    """Slug con caracteres no permitidos."""

    pass


class ExerciseExistsError(ScaffoldError):
    """El ejercicio ya existe en el tema."""

    def __init__(self, name: str, path: Path) -> None:
        super().__init__(f"El ejercicio ya existe: {name}")
        self.name = name
        self.path = path


class TemplateNotFoundError(ScaffoldError):
    """No hay plantilla para el tipo pedido."""

    pass


def validate_slug(slug: str) -> str | None:
    """Mensaje de error para un slug inválido, None si es válido."""
    if not SLUG_RE.match(slug or ""):
        return "Usa solo minúsculas, números y guiones"
    return None


def format_exercise_name(sequence: int, slug: str) -> str:
    return f"{sequence:02d}-{slug}"


def replace_tokens(text: str, replacements: dict[str, str]) -> str:
    """Sustitución literal de todos los tokens."""
    for token, value in replacements.items():
        text = text.replace(token, value)
    return text


def render_readme(text: str, replacements: dict[str, str]) -> str:
    """Sustituir tokens en un README con front matter YAML.

    Los valores del front matter se vuelven a serializar con PyYAML, así
    comillas o barras invertidas en el título no rompen el bloque. El
    cuerpo Markdown usa sustitución literal.
    """
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return replace_tokens(text, replacements)

    front = yaml.safe_load(match.group(1))
    if not isinstance(front, dict):
        return replace_tokens(text, replacements)

    front = {
        key: replace_tokens(value, replacements) if isinstance(value, str) else value
        for key, value in front.items()
    }
    dumped = yaml.safe_dump(front, sort_keys=False, allow_unicode=True, width=float("inf"))
    body = replace_tokens(text[match.end():], replacements)
    return f"---\n{dumped}---\n{body}"


class ExerciseInstantiator:
    """Copia una plantilla y la personaliza como ejercicio nuevo."""

    def __init__(
        self,
        exercises_dir: Path,
        templates_dir: Path,
        scope: str = "@react-learning",
    ) -> None:
        """Inicializar con las rutas del currículo."""
        self.exercises_dir = Path(exercises_dir)
        self.templates_dir = Path(templates_dir)
        self.scope = scope

    def template_path(self, exercise_type: str) -> Path:
        return self.templates_dir / exercise_type

    def manifest_name(self, exercise_name: str) -> str:
        """Nombre del paquete con namespace, p. ej. ``@react-learning/03-props``."""
        return f"{self.scope}/{exercise_name}"

    def check(self, spec: ExerciseSpec) -> None:
        """Validar la petición sin tocar disco."""
        error = validate_slug(spec.slug)
        if error:
            raise InvalidSlugError(f"Slug inválido '{spec.slug}': {error}")
        if spec.type not in EXERCISE_TYPES:
            raise ScaffoldError(f"Tipo desconocido: {spec.type}")
        if spec.difficulty not in DIFFICULTIES:
            raise ScaffoldError(f"Dificultad desconocida: {spec.difficulty}")
        if not spec.topic or "/" in spec.topic or spec.topic.startswith("."):
            raise ScaffoldError(f"Tema inválido: {spec.topic!r}")
        if not self.template_path(spec.type).is_dir():
            raise TemplateNotFoundError(f"Plantilla no encontrada: {self.template_path(spec.type)}")

    def plan(self, spec: ExerciseSpec) -> tuple[str, Path]:
        """Calcular nombre y ruta finales; falla si ya existe."""
        topic_path = self.exercises_dir / spec.topic
        name = format_exercise_name(next_sequence_number(topic_path), spec.slug)
        exercise_path = topic_path / name

        if exercise_path.exists():
            raise ExerciseExistsError(name, exercise_path)

        existing = find_by_slug(topic_path, spec.slug)
        if existing is not None:
            raise ExerciseExistsError(existing.name, existing)

        return name, exercise_path

    def create(self, spec: ExerciseSpec) -> ExerciseRecord:
        """Crear el ejercicio.

        Todo se construye en un directorio oculto de staging dentro del tema
        y se renombra al nombre final al terminar, así un fallo a mitad no
        deja un ejercicio incompleto visible.
        """
        self.check(spec)
        name, exercise_path = self.plan(spec)

        topic_path = exercise_path.parent
        topic_path.mkdir(parents=True, exist_ok=True)
        staging = topic_path / f".staging-{name}-{uuid.uuid4().hex[:8]}"

        logger.info("Creando %s/%s desde plantilla %s", spec.topic, name, spec.type)
        try:
            shutil.copytree(self.template_path(spec.type), staging)
            self._update_manifest(staging / MANIFEST_FILE, name, spec.deps)
            self._update_docs(staging, spec)
            staging.rename(exercise_path)
        except BaseException:
            logger.exception("Fallo creando %s, limpiando staging", name)
            shutil.rmtree(staging, ignore_errors=True)
            raise

        logger.debug("Renombrado %s -> %s", staging.name, exercise_path)
        metadata = read_readme_metadata(exercise_path / README_FILE)
        return ExerciseRecord(topic=spec.topic, name=name, path=exercise_path, **metadata)

    def _update_manifest(self, manifest_path: Path, exercise_name: str, deps: list[str]) -> None:
        """Fijar el nombre del paquete y añadir dependencias."""
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        manifest["name"] = self.manifest_name(exercise_name)
        if deps:
            add_dependencies(manifest, deps)
            logger.debug("Dependencias añadidas a %s: %s", exercise_name, ", ".join(deps))

        manifest_path.write_text(
            json.dumps(manifest, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )

    def _update_docs(self, exercise_path: Path, spec: ExerciseSpec) -> None:
        """Rellenar los tokens de README.md y, si existe, SOLUTION.md."""
        title = spec.title or spec.slug
        replacements = {
            TITLE_TOKEN: title,
            DIFFICULTY_TOKEN: spec.difficulty,
            TIME_TOKEN: spec.estimated_time,
        }

        readme_path = exercise_path / README_FILE
        readme = readme_path.read_text(encoding="utf-8")
        readme_path.write_text(render_readme(readme, replacements), encoding="utf-8")

        solution_path = exercise_path / SOLUTION_FILE
        if solution_path.is_file():
            solution = solution_path.read_text(encoding="utf-8")
            solution_path.write_text(replace_tokens(solution, {TITLE_TOKEN: title}), encoding="utf-8")
