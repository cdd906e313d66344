"""Tabla de versiones para dependencias extra de los ejercicios."""

from __future__ import annotations

from typing import Any

DEPENDENCIES = "dependencies"
DEV_DEPENDENCIES = "devDependencies"

UNPINNED = "latest"
TYPES_VERSION = "^18.0.0"

# paquete -> (sección del manifest, versión)
DEPENDENCY_TABLE: dict[str, tuple[str, str]] = {
    "styled-components": (DEPENDENCIES, "^6.1.8"),
    "clsx": (DEPENDENCIES, "^2.1.0"),
    "framer-motion": (DEPENDENCIES, "^11.0.3"),
    "xstate": (DEPENDENCIES, "^5.7.0"),
    "swr": (DEPENDENCIES, "^2.2.4"),
    "react-window": (DEPENDENCIES, "^1.8.10"),
    "tailwindcss": (DEV_DEPENDENCIES, "^3.4.1"),
    "autoprefixer": (DEV_DEPENDENCIES, "^10.4.17"),
    "postcss": (DEV_DEPENDENCIES, "^8.4.35"),
}


def resolve_dependency(name: str) -> tuple[str, str]:
    """Sección y versión para un paquete.

    Los ``@types/*`` van a devDependencies; lo desconocido queda sin fijar.
    """
    if name.startswith("@types/"):
        return DEV_DEPENDENCIES, TYPES_VERSION
    return DEPENDENCY_TABLE.get(name, (DEPENDENCIES, UNPINNED))


def add_dependencies(manifest: dict[str, Any], deps: list[str]) -> dict[str, Any]:
    """Añadir dependencias al manifest (modifica y devuelve el mismo dict)."""
    for dep in deps:
        section, version = resolve_dependency(dep)
        manifest.setdefault(section, {})[dep] = version
    return manifest
