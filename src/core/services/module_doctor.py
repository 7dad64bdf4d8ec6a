"""API que reciben los `doctor.py` de cada módulo.

Ejemplo de script de módulo:

    def check(doctor):
        if not doctor.executable("black"):
            doctor.warn("Couldn't find black; formatting won't work")
        if doctor.has_flag("+lsp") and not doctor.module_enabled("tools", "lsp"):
            doctor.error("+lsp requires the tools/lsp module")
"""

from __future__ import annotations

from core.domain.models import Finding, ModuleInfo
from core.services.doctor import CheckContext, DoctorState


class ModuleDoctor:
    def __init__(self, ctx: CheckContext, module: ModuleInfo, state: DoctorState) -> None:
        self._ctx = ctx
        self._module = module
        self._state = state

    @property
    def module(self) -> ModuleInfo:
        return self._module

    @property
    def flags(self) -> tuple[str, ...]:
        return self._module.flags

    def has_flag(self, flag: str) -> bool:
        return flag in self._module.flags

    def executable(self, name: str) -> str | None:
        return self._state.env.which(name)

    def module_enabled(self, category: str, name: str) -> bool:
        return any(m.category == category and m.name == name for m in self._state.modules or [])

    def info(self, message: str) -> None:
        self._ctx.info(message)

    def warn(self, message: str, *, explanation: str | None = None) -> Finding:
        return self._ctx.warn(message, explanation=explanation)

    def error(self, message: str, *, explanation: str | None = None) -> Finding:
        return self._ctx.error(message, explanation=explanation)

    def explain(self, text: str) -> None:
        self._ctx.explain(text)
