"""Punto de entrada principal."""

import asyncio
import sys


def main(argv: list[str] | None = None) -> int:
    """Ejecutar un comando de la herramienta."""
    from .cli.app import ReactLearningApp

    app = ReactLearningApp()
    try:
        return asyncio.run(app.run(sys.argv[1:] if argv is None else argv))
    except KeyboardInterrupt:
        print("\n\033[33mInterrumpido\033[0m")
        return 130


if __name__ == "__main__":
    sys.exit(main())
