"""Labs: tests, servidor de desarrollo y validación de ejercicios."""
