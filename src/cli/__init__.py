"""CLI de dotkit (Typer + Rich).

Por qué una capa aparte:
- Los comandos solo traducen argumentos y pintan resultados; la lógica vive en `core`.
"""
