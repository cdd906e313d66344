"""Core: modelos de ejercicio y escaneo del catálogo."""

from .catalog import next_sequence_number, read_readme_metadata, scan_catalog
from .exercise import DIFFICULTIES, EXERCISE_TYPES, TOPICS, ExerciseRecord, ExerciseSpec

__all__ = [
    "ExerciseRecord",
    "ExerciseSpec",
    "TOPICS",
    "EXERCISE_TYPES",
    "DIFFICULTIES",
    "scan_catalog",
    "next_sequence_number",
    "read_readme_metadata",
]
