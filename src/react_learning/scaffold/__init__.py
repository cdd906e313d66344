"""Scaffold: creación de ejercicios desde plantillas."""

from .batch import BatchFileError, CreationResult, create_batch, load_batch_file
from .dependencies import add_dependencies, resolve_dependency
from .instantiator import (
    ExerciseExistsError,
    ExerciseInstantiator,
    InvalidSlugError,
    ScaffoldError,
    TemplateNotFoundError,
    validate_slug,
)

__all__ = [
    "ExerciseInstantiator",
    "ScaffoldError",
    "InvalidSlugError",
    "ExerciseExistsError",
    "TemplateNotFoundError",
    "validate_slug",
    "resolve_dependency",
    "add_dependencies",
    "BatchFileError",
    "CreationResult",
    "create_batch",
    "load_batch_file",
]
