"""Salida de consola con color y preguntas interactivas."""

from __future__ import annotations

import sys
from typing import Callable, Sequence

if sys.platform == "win32":
    import colorama
    colorama.init()

RESET = "\033[0m"
BLUE_BOLD = "\033[1;34m"
ORANGE = "\033[38;5;208m"
GREEN = "\033[32m"
RED = "\033[31m"
YELLOW = "\033[33m"
CYAN = "\033[36m"
GRAY = "\033[90m"


class PromptCancelled(Exception):
    """El usuario canceló una pregunta interactiva."""

    pass


def print_title(message: str) -> None:
    """Imprimir título de sección."""
    print(f"\n{BLUE_BOLD}{message}{RESET}\n")


def print_info(message: str) -> None:
    """Imprimir mensaje informativo."""
    print(f"{ORANGE}ℹ {message}{RESET}")


def print_success(message: str) -> None:
    """Imprimir mensaje de éxito."""
    print(f"{GREEN}✓ {message}{RESET}")


def print_error(message: str) -> None:
    """Imprimir mensaje de error."""
    print(f"{RED}✗ {message}{RESET}")


def print_warning(message: str) -> None:
    """Imprimir advertencia."""
    print(f"{YELLOW}⚠ {message}{RESET}")


def print_muted(message: str) -> None:
    """Imprimir texto secundario."""
    print(f"{GRAY}{message}{RESET}")


def highlight(text: str) -> str:
    return f"{CYAN}{text}{RESET}"


def get_input(prompt: str = "> ") -> str:
    """Obtener input del usuario.

    Ctrl-C y fin de entrada se traducen a ``PromptCancelled``.
    """
    try:
        return input(f"{ORANGE}{prompt}{RESET}").strip()
    except (KeyboardInterrupt, EOFError):
        print()
        raise PromptCancelled()


def ask_text(
    prompt: str,
    default: str = "",
    validate: Callable[[str], str | None] | None = None,
) -> str:
    """Preguntar texto libre.

    ``validate`` devuelve un mensaje de error o None; se repite la pregunta
    hasta recibir un valor válido. Una respuesta vacía no se valida.
    """
    suffix = f" [{default}]" if default else ""
    while True:
        value = get_input(f"{prompt}{suffix}: ") or default
        if not value or validate is None:
            return value
        error = validate(value)
        if error is None:
            return value
        print_error(error)


def ask_choice(prompt: str, choices: Sequence[tuple[str, str]]) -> str:
    """Elegir una opción de una lista cerrada por número.

    ``choices`` son pares (etiqueta, valor). Respuesta vacía = cancelar.
    """
    print(f"{YELLOW}{prompt}{RESET}")
    for i, (label, _) in enumerate(choices, 1):
        print(f"  {highlight(f'{i:>2}')}  {label}")

    while True:
        answer = get_input("Opción: ")
        if not answer:
            return ""
        try:
            index = int(answer)
        except ValueError:
            index = 0
        if 1 <= index <= len(choices):
            return choices[index - 1][1]
        print_error(f"Por favor elige un número entre 1 y {len(choices)}")
