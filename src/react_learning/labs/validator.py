"""Validación de la estructura de los ejercicios."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..core.exercise import README_FILE

if TYPE_CHECKING:
    from ..core.exercise import ExerciseRecord

REQUIRED_FILES = [
    "package.json",
    "README.md",
    "src/App.tsx",
    "src/App.test.tsx",
    "src/main.tsx",
    "tsconfig.json",
    "vite.config.ts",
]

# marcador -> issue si falta
REQUIRED_MARKERS = {
    "**Difficulty:**": "README sin dificultad",
    "**Type:**": "README sin tipo",
    "## Learning Objectives": "README sin objetivos de aprendizaje",
}


@dataclass
class ValidationReport:
    """Problemas encontrados en un ejercicio."""

    exercise: ExerciseRecord
    issues: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues


@dataclass
class ValidationSummary:
    """Resumen de la validación del catálogo."""

    reports: list[ValidationReport] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.reports)

    @property
    def with_issues(self) -> int:
        return sum(1 for r in self.reports if not r.valid)

    @property
    def valid(self) -> int:
        return self.total - self.with_issues

    @property
    def exit_code(self) -> int:
        return 1 if self.with_issues else 0


def validate_exercise(exercise: ExerciseRecord) -> ValidationReport:
    """Comprobar archivos obligatorios y secciones del README."""
    issues = []

    for rel_path in REQUIRED_FILES:
        if not (exercise.path / rel_path).is_file():
            issues.append(f"Falta archivo: {rel_path}")

    readme_path = exercise.path / README_FILE
    if readme_path.is_file():
        readme = readme_path.read_text(encoding="utf-8", errors="replace")
        for marker, issue in REQUIRED_MARKERS.items():
            if marker not in readme:
                issues.append(issue)

    return ValidationReport(exercise=exercise, issues=issues)


def validate_catalog(exercises: list[ExerciseRecord]) -> ValidationSummary:
    """Validar todos los ejercicios en orden."""
    return ValidationSummary(reports=[validate_exercise(ex) for ex in exercises])
