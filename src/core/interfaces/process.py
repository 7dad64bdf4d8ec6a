"""Contrato para ejecutar herramientas externas (git, rg, fc-list, du)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ProcessResult:
    status: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.status == 0


class ProcessRunner(Protocol):
    def __call__(self, *args: str) -> ProcessResult:
        ...
