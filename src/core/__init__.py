"""Core de dotkit.

Por qué un paquete separado:
- Aquí vive la lógica pura (walker, lectura/escritura, secuenciador del doctor).
- No conoce la CLI ni Rich; los adaptadores y la CLI dependen del Core, no al revés.
"""

__version__ = "0.1.0"
