"""Configuración global de la herramienta."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_log_dir


@dataclass(frozen=True)
class Config:
    """Configuración inmutable de la herramienta."""

    # Paths
    root_dir: Path = field(default_factory=Path.cwd)
    exercises_dir: Path = field(init=False)
    templates_dir: Path = field(init=False)
    log_dir: Path = Path(user_log_dir("react-learning", "react-learning"))
    batch_file: Path | None = None

    # Ejecución
    package_manager: str = "pnpm"
    test_timeout: float | None = None  # segundos, None = sin límite
    concurrency: int = 1

    # Manifest
    manifest_scope: str = "@react-learning"

    # Logging
    log_level: str = "INFO"

    # App
    app_name: str = "React Learning"
    version: str = "0.1.0"

    def __post_init__(self) -> None:
        object.__setattr__(self, "root_dir", Path(self.root_dir))
        object.__setattr__(self, "exercises_dir", self.root_dir / "exercises")
        object.__setattr__(self, "templates_dir", self.root_dir / "templates")
        if self.concurrency < 1:
            raise ValueError(f"concurrency debe ser >= 1, recibido {self.concurrency}")

    @property
    def test_command(self) -> list[str]:
        """Comando de tests de cada ejercicio."""
        return [self.package_manager, "test"]

    @property
    def dev_command(self) -> list[str]:
        """Comando del servidor de desarrollo de cada ejercicio."""
        return [self.package_manager, "dev"]

    @classmethod
    def from_env(cls) -> Config:
        """Crear configuración desde variables de entorno."""
        root_dir = os.getenv("REACT_LEARNING_ROOT")
        log_dir = os.getenv("REACT_LEARNING_LOG_DIR")
        batch_file = os.getenv("REACT_LEARNING_BATCH_FILE")
        timeout = float(os.getenv("REACT_LEARNING_TEST_TIMEOUT", "0"))

        return cls(
            root_dir=Path(root_dir) if root_dir else Path.cwd(),
            log_dir=Path(log_dir) if log_dir else Path(user_log_dir("react-learning", "react-learning")),
            batch_file=Path(batch_file) if batch_file else None,
            package_manager=os.getenv("REACT_LEARNING_PM", "pnpm"),
            test_timeout=timeout if timeout > 0 else None,
            concurrency=int(os.getenv("REACT_LEARNING_CONCURRENCY", "1")),
            manifest_scope=os.getenv("REACT_LEARNING_SCOPE", "@react-learning"),
            log_level=os.getenv("REACT_LEARNING_LOG_LEVEL", "INFO").upper(),
        )

    def ensure_dirs(self) -> None:
        """Crear directorios necesarios si no existen."""
        self.log_dir.mkdir(parents=True, exist_ok=True)


# Instancia global
_config: Config | None = None


def get_config() -> Config:
    """Obtener instancia de configuración (singleton)."""
    global _config
    if _config is None:
        _config = Config.from_env()
        _config.ensure_dirs()
    return _config


def set_config(config: Config) -> None:
    """Establecer configuración (para tests)."""
    global _config
    _config = config
    _config.ensure_dirs()
