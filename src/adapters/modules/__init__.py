"""Descubrimiento de módulos del framework y carga de sus scripts `doctor.py`."""

from adapters.modules.doctor_script import load_module_check, run_module_doctor
from adapters.modules.registry import FilesystemModuleRegistry, load_init_file

__all__ = [
    "FilesystemModuleRegistry",
    "load_init_file",
    "load_module_check",
    "run_module_doctor",
]
