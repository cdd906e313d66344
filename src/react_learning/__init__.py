"""React Learning: andamiaje, ejecución y validación de ejercicios."""

__version__ = "0.1.0"
