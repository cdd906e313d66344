"""Configuración del logging de diagnóstico."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Config

LOG_FILENAME = "react-learning.log"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(config: Config) -> logging.Logger:
    """Enviar el logging del paquete a un archivo en el directorio de logs.

    La salida para el usuario va por ``console``; el archivo guarda el
    detalle de cada ejecución (comandos lanzados, copias, renombrados).
    """
    logger = logging.getLogger("react_learning")
    logger.setLevel(getattr(logging, config.log_level, logging.INFO))

    log_file = config.log_dir / LOG_FILENAME
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.path.abspath(log_file):
            return logger

    config.log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
