"""Ejecución de los tests de todos los ejercicios."""

from __future__ import annotations

import asyncio
import logging
import shutil
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from ..core.exercise import ExerciseRecord

logger = logging.getLogger(__name__)

# Marcadores de fallo en la salida del runner de tests (vitest)
FAILURE_MARKERS = ("FAIL", "✗")


def classify_output(output: str) -> bool:
    """True (aprobado) si la salida no contiene ningún marcador de fallo."""
    return not any(marker in output for marker in FAILURE_MARKERS)


def resolve_command(command: list[str]) -> list[str]:
    """Resolver el ejecutable en PATH (``pnpm`` -> ``pnpm.cmd`` en Windows)."""
    if not command:
        raise ValueError("Comando vacío")
    executable = shutil.which(command[0]) or command[0]
    return [executable, *command[1:]]


@dataclass
class TestRunReport:
    """Resultado de los tests de un ejercicio."""

    __test__ = False

    exercise: ExerciseRecord
    passed: bool
    output: str = ""
    exit_code: int | None = None
    error: str | None = None
    duration: float = 0.0


@dataclass
class TestRunSummary:
    """Resumen de una ejecución completa."""

    __test__ = False

    reports: list[TestRunReport] = field(default_factory=list)

    @classmethod
    def from_reports(cls, reports: list[TestRunReport]) -> TestRunSummary:
        """Crear resumen desde reportes en orden de catálogo."""
        return cls(reports=list(reports))

    @property
    def total(self) -> int:
        return len(self.reports)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.reports if r.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def failed_exercises(self) -> list[str]:
        return [r.exercise.full_name for r in self.reports if not r.passed]

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


class BatchTestRunner:
    """Lanza el comando de tests en cada ejercicio.

    Con ``concurrency=1`` (por defecto) los ejercicios se procesan de uno en
    uno en orden de catálogo. ``timeout`` es por ejercicio, None = sin límite.
    """

    def __init__(
        self,
        command: list[str],
        concurrency: int = 1,
        timeout: float | None = None,
        on_start: Callable[[ExerciseRecord], None] | None = None,
        on_result: Callable[[TestRunReport], None] | None = None,
    ) -> None:
        """Inicializar runner."""
        if concurrency < 1:
            raise ValueError("concurrency debe ser >= 1")
        self.command = list(command)
        self.concurrency = concurrency
        self.timeout = timeout
        self.on_start = on_start
        self.on_result = on_result
        self._tasks: list[asyncio.Task] = []

    async def run_exercise(self, exercise: ExerciseRecord) -> TestRunReport:
        """Ejecutar los tests de un ejercicio y clasificar la salida."""
        start_time = time.monotonic()
        cmd = resolve_command(self.command)
        logger.info("Ejecutando %s en %s", " ".join(self.command), exercise.full_name)

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=exercise.path,
            )
        except OSError as e:
            logger.error("No se pudo lanzar %s: %s", cmd[0], e)
            return TestRunReport(
                exercise=exercise,
                passed=False,
                error=f"No se pudo ejecutar {self.command[0]}: {e}",
                duration=time.monotonic() - start_time,
            )

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            await self._kill(process)
            logger.warning("Timeout en %s tras %ss", exercise.full_name, self.timeout)
            return TestRunReport(
                exercise=exercise,
                passed=False,
                exit_code=process.returncode,
                error=f"Timeout: los tests tardaron más de {self.timeout}s",
                duration=time.monotonic() - start_time,
            )
        except asyncio.CancelledError:
            await self._kill(process)
            raise

        output = stdout.decode("utf-8", errors="replace") + stderr.decode("utf-8", errors="replace")
        passed = classify_output(output)
        logger.debug("%s terminó con código %s (aprobado=%s)", exercise.full_name, process.returncode, passed)

        return TestRunReport(
            exercise=exercise,
            passed=passed,
            output=output,
            exit_code=process.returncode,
            duration=time.monotonic() - start_time,
        )

    async def run_all(self, exercises: list[ExerciseRecord]) -> TestRunSummary:
        """Ejecutar todos los ejercicios con a lo sumo ``concurrency`` a la vez."""
        semaphore = asyncio.Semaphore(self.concurrency)

        async def run_with_semaphore(exercise: ExerciseRecord) -> TestRunReport:
            async with semaphore:
                if self.on_start:
                    self.on_start(exercise)
                report = await self.run_exercise(exercise)
                if self.on_result:
                    self.on_result(report)
                return report

        self._tasks = [asyncio.ensure_future(run_with_semaphore(ex)) for ex in exercises]
        try:
            reports = await asyncio.gather(*self._tasks)
        finally:
            self._tasks = []

        return TestRunSummary.from_reports(reports)

    def cancel(self) -> None:
        """Cancelar las tareas en curso; sus procesos hijos se matan."""
        for task in self._tasks:
            task.cancel()

    async def _kill(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                return
            await process.wait()
