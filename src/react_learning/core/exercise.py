"""Modelos de datos para ejercicios."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

TOPICS = [
    "01-fundamentals",
    "02-hooks",
    "03-styling",
    "04-state-patterns",
    "05-performance",
]

# valor -> etiqueta
EXERCISE_TYPES = {
    "fix-broken": "Fix Broken Code",
    "complete-missing": "Complete Missing Parts",
    "build-from-scratch": "Build From Scratch",
}

DIFFICULTIES = {
    "beginner": "Beginner",
    "intermediate": "Intermediate",
    "advanced": "Advanced",
}

DEFAULT_ESTIMATED_TIME = "15-20 minutes"

MANIFEST_FILE = "package.json"
README_FILE = "README.md"
SOLUTION_FILE = "SOLUTION.md"


@dataclass(frozen=True)
class ExerciseRecord:
    """Un ejercicio encontrado en disco."""

    topic: str
    name: str  # NN-slug
    path: Path
    title: str = ""
    difficulty: str = ""
    estimated_time: str = ""
    type: str = ""

    @property
    def full_name(self) -> str:
        """Identificador legible ``topic/name``."""
        return f"{self.topic}/{self.name}"


@dataclass
class ExerciseSpec:
    """Petición de creación de un ejercicio (interactiva o por lote)."""

    topic: str
    slug: str
    title: str
    type: str
    difficulty: str
    estimated_time: str = DEFAULT_ESTIMATED_TIME
    deps: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExerciseSpec:
        """Crear desde diccionario.

        Acepta ``name`` o ``slug`` y ``time`` o ``estimated_time``. Un campo
        opcional vacío (``title:`` sin valor) cuenta como ausente.
        """
        deps = data.get("deps") or []
        if isinstance(deps, str):
            deps = [deps]
        estimated_time = data.get("time") or data.get("estimated_time") or DEFAULT_ESTIMATED_TIME
        return cls(
            topic=str(data["topic"]),
            slug=str(data["name"] if "name" in data else data["slug"]),
            title=str(data.get("title") or ""),
            type=str(data["type"]),
            difficulty=str(data["difficulty"]),
            estimated_time=str(estimated_time),
            deps=[str(dep) for dep in deps if dep],
        )
