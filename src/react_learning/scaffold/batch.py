"""Creación de ejercicios por lote desde un archivo YAML."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Callable

import yaml

from ..core.exercise import ExerciseSpec
from .instantiator import ExerciseExistsError, ExerciseInstantiator, ScaffoldError

logger = logging.getLogger(__name__)

DEFAULT_BATCH_RESOURCE = "batch_exercises.yaml"


class BatchFileError(Exception):
    """Archivo de lote mal formado."""

    pass


@dataclass
class CreationResult:
    """Resultado de crear un ejercicio del lote."""

    name: str
    success: bool
    skipped: bool = False
    error: str | None = None
    path: Path | None = None


def parse_batch(data: Any, source: str = "<lote>") -> list[ExerciseSpec]:
    """Convertir el contenido YAML en peticiones de creación."""
    if isinstance(data, dict):
        data = data.get("exercises")
    if not isinstance(data, list):
        raise BatchFileError(f"{source}: se esperaba una lista 'exercises'")

    specs = []
    for i, item in enumerate(data, 1):
        if not isinstance(item, dict):
            raise BatchFileError(f"{source}: la entrada {i} no es un mapa")
        try:
            specs.append(ExerciseSpec.from_dict(item))
        except KeyError as e:
            raise BatchFileError(f"{source}: la entrada {i} no tiene el campo {e}") from e
    return specs


def load_batch_file(path: Path | None = None) -> list[ExerciseSpec]:
    """Cargar el lote desde un archivo o el lote incluido en el paquete."""
    try:
        if path is None:
            source = DEFAULT_BATCH_RESOURCE
            resource = resources.files("react_learning") / "data" / DEFAULT_BATCH_RESOURCE
            text = resource.read_text(encoding="utf-8")
        else:
            source = str(path)
            text = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(text)
    except FileNotFoundError as e:
        raise BatchFileError(f"Archivo de lote no encontrado: {e.filename or path}") from e
    except yaml.YAMLError as e:
        raise BatchFileError(f"YAML inválido en {source}: {e}") from e

    return parse_batch(data, source)


def create_batch(
    instantiator: ExerciseInstantiator,
    specs: list[ExerciseSpec],
    on_result: Callable[[CreationResult], None] | None = None,
) -> list[CreationResult]:
    """Crear los ejercicios en orden; los fallos no detienen el lote."""
    results = []
    for spec in specs:
        try:
            record = instantiator.create(spec)
            result = CreationResult(name=record.name, success=True, path=record.path)
        except ExerciseExistsError as e:
            logger.info("Saltado, ya existe: %s/%s", spec.topic, e.name)
            result = CreationResult(name=e.name, success=True, skipped=True, path=e.path)
        except (ScaffoldError, OSError, ValueError) as e:
            logger.error("Fallo creando %s/%s: %s", spec.topic, spec.slug, e)
            result = CreationResult(name=spec.slug, success=False, error=str(e))

        results.append(result)
        if on_result:
            on_result(result)

    return results
