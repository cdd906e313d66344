"""Servidor de desarrollo de un ejercicio."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from .runner import resolve_command

if TYPE_CHECKING:
    from ..core.exercise import ExerciseRecord

logger = logging.getLogger(__name__)


class RunnerError(Exception):
    """Error lanzando un comando en un ejercicio."""

    pass


def run_dev_server(exercise: ExerciseRecord, command: list[str]) -> int:
    """Lanzar el servidor de desarrollo y esperar a que termine.

    Hereda stdin/stdout/stderr; devuelve el código de salida del proceso.
    """
    cmd = resolve_command(command)
    logger.info("Servidor de desarrollo: %s en %s", " ".join(command), exercise.path)

    try:
        result = subprocess.run(cmd, cwd=exercise.path, check=False)
    except FileNotFoundError:
        raise RunnerError(f"Comando no encontrado: {command[0]}")
    except OSError as e:
        raise RunnerError(f"Error ejecutando {command[0]}: {e}")

    logger.info("Servidor de desarrollo terminó con código %s", result.returncode)
    return result.returncode
