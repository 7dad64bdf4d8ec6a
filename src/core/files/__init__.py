"""Librería de ficheros del framework.

Por qué un paquete:
- Agrupa helpers sin estado (rutas, walker, lectura, escritura) que usan tanto
  los checks del doctor como la CLI `dotkit files`.
"""

from core.files.paths import (
    AllOf,
    AnyOf,
    build_exists_check,
    directory_size,
    expand_glob,
    file_exists,
    file_size,
    path,
)
from core.files.reader import ReadMode, iter_records, read_file
from core.files.walker import EntryType, WalkSpec, files_in, walk
from core.files.writer import file_modes, write_file

__all__ = [
    "AllOf",
    "AnyOf",
    "EntryType",
    "ReadMode",
    "WalkSpec",
    "build_exists_check",
    "directory_size",
    "expand_glob",
    "file_exists",
    "file_modes",
    "file_size",
    "files_in",
    "iter_records",
    "path",
    "read_file",
    "walk",
    "write_file",
]
