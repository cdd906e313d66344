"""Aplicación de consola - React Learning."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .. import console
from ..config import Config, get_config
from ..console import PromptCancelled
from ..core.catalog import scan_catalog
from ..core.exercise import (
    DEFAULT_ESTIMATED_TIME,
    DIFFICULTIES,
    EXERCISE_TYPES,
    TOPICS,
    ExerciseRecord,
    ExerciseSpec,
)
from ..labs.dev_server import RunnerError, run_dev_server
from ..labs.runner import BatchTestRunner, TestRunReport
from ..labs.validator import validate_catalog
from ..log import setup_logging
from ..scaffold.batch import BatchFileError, CreationResult, create_batch, load_batch_file
from ..scaffold.instantiator import ExerciseExistsError, ExerciseInstantiator, ScaffoldError, validate_slug

logger = logging.getLogger(__name__)


class ReactLearningApp:
    """Comandos de andamiaje del currículo."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or get_config()
        self.instantiator = ExerciseInstantiator(
            self.config.exercises_dir,
            self.config.templates_dir,
            scope=self.config.manifest_scope,
        )

    async def run(self, argv: list[str]) -> int:
        """Ejecutar un comando y devolver el código de salida."""
        setup_logging(self.config)

        if not argv:
            await self.cmd_help([])
            return 0

        cmd = argv[0].lower().lstrip("/")
        args = argv[1:]

        handlers = {
            "help": self.cmd_help,
            "create": self.cmd_create,
            "batch-create": self.cmd_batch_create,
            "run": self.cmd_run,
            "test-all": self.cmd_test_all,
            "validate": self.cmd_validate,
        }

        handler = handlers.get(cmd)
        if handler is None:
            console.print_error(f"Comando desconocido: {cmd}")
            console.print_info("Escribe 'react-learning help' para ver los comandos disponibles")
            return 1

        logger.info("Comando %s %s (raíz %s)", cmd, " ".join(args), self.config.root_dir)
        try:
            return await handler(args)
        except Exception as e:
            logger.exception("Error no controlado en %s", cmd)
            console.print_error(f"Error: {e}")
            return 1

    async def cmd_help(self, args) -> int:
        """Mostrar ayuda."""
        print(f"{console.GREEN}🎓 {self.config.app_name} - Comandos disponibles{console.RESET}")
        print()
        print(f"  {console.highlight('create')}                 - Crear un ejercicio nuevo (interactivo)")
        print(f"  {console.highlight('batch-create [archivo]')} - Crear ejercicios desde un archivo YAML")
        print(f"  {console.highlight('run')}                    - Elegir un ejercicio y arrancar su servidor")
        print(f"  {console.highlight('test-all')}               - Ejecutar los tests de todos los ejercicios")
        print(f"  {console.highlight('validate')}               - Validar la estructura de los ejercicios")
        print(f"  {console.highlight('help')}                   - Mostrar esta ayuda")
        return 0

    # ------------------------------------------------------------------
    # create
    # ------------------------------------------------------------------

    async def cmd_create(self, args) -> int:
        """Crear un ejercicio con preguntas interactivas."""
        console.print_title("🎓 Crear nuevo ejercicio React")

        try:
            spec = self._ask_exercise_spec()
        except PromptCancelled:
            spec = None

        if spec is None:
            console.print_error("Creación de ejercicio cancelada")
            return 0

        console.print_muted(f"Copiando plantilla {spec.type}...")
        try:
            record = await asyncio.to_thread(self.instantiator.create, spec)
        except ExerciseExistsError as e:
            console.print_error(f"El ejercicio ya existe: {e.name}")
            return 1
        except ScaffoldError as e:
            console.print_error(str(e))
            return 1

        rel_path = f"exercises/{record.topic}/{record.name}"
        console.print_success(f"Ejercicio creado: {record.name}")
        console.print_muted(f"   Ubicación: {rel_path}")
        print()
        console.print_info("Siguientes pasos:")
        console.print_muted(f"   1. cd {rel_path}")
        console.print_muted("   2. Edita src/App.tsx con el código del ejercicio")
        console.print_muted("   3. Edita src/App.test.tsx con los tests")
        console.print_muted("   4. Completa README.md con las instrucciones")
        return 0

    def _ask_exercise_spec(self) -> ExerciseSpec | None:
        """Recopilar las respuestas; None si el usuario deja tema o slug vacío."""
        topic = console.ask_choice("Tema:", [(t, t) for t in TOPICS])
        if not topic:
            return None

        slug = console.ask_text("Nombre del ejercicio (kebab-case)", validate=validate_slug)
        if not slug:
            return None

        title = console.ask_text("Título del ejercicio")
        exercise_type = console.ask_choice(
            "Tipo de ejercicio:", [(label, value) for value, label in EXERCISE_TYPES.items()]
        )
        if not exercise_type:
            return None

        difficulty = console.ask_choice(
            "Dificultad:", [(label, value) for value, label in DIFFICULTIES.items()]
        )
        if not difficulty:
            return None

        estimated_time = console.ask_text("Tiempo estimado", default=DEFAULT_ESTIMATED_TIME)
        deps_answer = console.ask_text("Dependencias extra (separadas por comas, opcional)")
        deps = [d.strip() for d in deps_answer.split(",") if d.strip()]

        return ExerciseSpec(
            topic=topic,
            slug=slug,
            title=title,
            type=exercise_type,
            difficulty=difficulty,
            estimated_time=estimated_time,
            deps=deps,
        )

    # ------------------------------------------------------------------
    # batch-create
    # ------------------------------------------------------------------

    async def cmd_batch_create(self, args) -> int:
        """Crear todos los ejercicios de un archivo de lote."""
        batch_file = Path(args[0]) if args else self.config.batch_file
        try:
            specs = await asyncio.to_thread(load_batch_file, batch_file)
        except BatchFileError as e:
            console.print_error(str(e))
            return 1

        console.print_title(f"🚀 Creando {len(specs)} ejercicios React por lote")

        def report(result: CreationResult) -> None:
            if result.skipped:
                console.print_warning(f"Ya existe, se salta: {result.name}")
            elif result.success:
                console.print_success(f"Creado: {result.name}")
            else:
                console.print_error(f"Fallo creando {result.name}: {result.error}")

        results = await asyncio.to_thread(create_batch, self.instantiator, specs, on_result=report)

        created = sum(1 for r in results if r.success and not r.skipped)
        skipped = sum(1 for r in results if r.skipped)
        failed = [r for r in results if not r.success]

        console.print_title("📊 Resumen")
        console.print_success(f"Creados: {created}")
        if skipped:
            console.print_warning(f"Saltados (ya existían): {skipped}")
        if failed:
            console.print_error(f"Fallidos: {len(failed)}")
            for r in failed:
                console.print_error(f"   - {r.name}: {r.error}")

        print()
        console.print_info("Siguientes pasos:")
        console.print_muted("   1. Revisa cada directorio de ejercicio")
        console.print_muted("   2. Implementa el código inicial en src/App.tsx")
        console.print_muted("   3. Escribe los tests en src/App.test.tsx")
        console.print_muted("   4. Completa README.md con instrucciones detalladas")
        console.print_muted("   5. Escribe la solución completa en SOLUTION.md")
        return 0

    # ------------------------------------------------------------------
    # run
    # ------------------------------------------------------------------

    async def cmd_run(self, args) -> int:
        """Elegir un ejercicio y arrancar su servidor de desarrollo."""
        console.print_title("🎓 React Learning - Ejecutar ejercicio")

        exercises = await asyncio.to_thread(scan_catalog, self.config.exercises_dir)
        if not exercises:
            console.print_warning("No se encontraron ejercicios. Crea uno con: react-learning create")
            return 0

        try:
            exercise = self._select_exercise(exercises)
        except PromptCancelled:
            exercise = None

        if exercise is None:
            console.print_error("Ningún ejercicio seleccionado")
            return 0

        console.print_success(f"Iniciando: {exercise.full_name}")
        console.print_muted(f"📂 Ubicación: {exercise.path}")
        console.print_info("Arrancando servidor de desarrollo...")
        print()

        try:
            code = await asyncio.to_thread(run_dev_server, exercise, self.config.dev_command)
        except RunnerError as e:
            console.print_error(str(e))
            return 1

        if code != 0:
            console.print_error(f"El servidor de desarrollo terminó con código {code}")
        return code

    def _select_exercise(self, exercises: list[ExerciseRecord]) -> ExerciseRecord | None:
        choices = []
        for ex in exercises:
            label = console.highlight(ex.full_name)
            if ex.difficulty:
                label += f" {console.GRAY}[{ex.difficulty}]{console.RESET}"
            if ex.type:
                label += f" {console.GRAY}{ex.type}{console.RESET}"
            choices.append((label, ex.full_name))

        selected = console.ask_choice("Elige un ejercicio:", choices)
        if not selected:
            return None
        return next(ex for ex in exercises if ex.full_name == selected)

    # ------------------------------------------------------------------
    # test-all
    # ------------------------------------------------------------------

    async def cmd_test_all(self, args) -> int:
        """Ejecutar los tests de todos los ejercicios."""
        console.print_title("🧪 Ejecutando los tests de todos los ejercicios")

        exercises = await asyncio.to_thread(scan_catalog, self.config.exercises_dir, require_manifest=True)
        if not exercises:
            console.print_warning("No se encontraron ejercicios.")
            return 0

        console.print_muted(f"Encontrados {len(exercises)} ejercicios")

        def on_start(exercise: ExerciseRecord) -> None:
            print(f"\n{console.BLUE_BOLD}▶ Testing {exercise.full_name}{console.RESET}")

        def on_result(report: TestRunReport) -> None:
            name = report.exercise.full_name
            if report.passed:
                console.print_success(f"{name} - Todos los tests pasan")
            elif report.error:
                console.print_error(f"{name} - Error ejecutando tests")
                console.print_muted(report.error)
            else:
                console.print_error(f"{name} - Tests fallidos")
                console.print_muted(report.output)

        runner = BatchTestRunner(
            self.config.test_command,
            concurrency=self.config.concurrency,
            timeout=self.config.test_timeout,
            on_start=on_start,
            on_result=on_result,
        )
        summary = await runner.run_all(exercises)

        console.print_title("📊 Resumen de tests")
        console.print_success(f"Aprobados: {summary.passed}")
        console.print_error(f"Fallidos: {summary.failed}")
        console.print_muted(f"  Total:  {summary.total}")

        if summary.failed:
            print()
            console.print_warning("Ejercicios fallidos:")
            for name in summary.failed_exercises:
                console.print_error(f"  - {name}")
            return summary.exit_code

        console.print_success("✨ ¡Todos los tests pasan!")
        return 0

    # ------------------------------------------------------------------
    # validate
    # ------------------------------------------------------------------

    async def cmd_validate(self, args) -> int:
        """Validar la estructura de todos los ejercicios."""
        console.print_title("🔍 Validando la estructura de los ejercicios")

        exercises = await asyncio.to_thread(scan_catalog, self.config.exercises_dir)
        if not exercises:
            console.print_warning("No se encontraron ejercicios.")
            return 0

        console.print_muted(f"Validando {len(exercises)} ejercicios...")
        print()

        summary = await asyncio.to_thread(validate_catalog, exercises)
        for report in summary.reports:
            if report.valid:
                console.print_success(report.exercise.full_name)
            else:
                console.print_error(report.exercise.full_name)
                for issue in report.issues:
                    print(f"{console.YELLOW}  - {issue}{console.RESET}")

        console.print_title("📊 Resumen de validación")
        console.print_muted(f"  Total de ejercicios: {summary.total}")
        console.print_success(f"Válidos: {summary.valid}")
        console.print_error(f"Con problemas: {summary.with_issues}")

        if summary.exit_code == 0:
            console.print_success("✨ ¡Todos los ejercicios son válidos!")
        return summary.exit_code
