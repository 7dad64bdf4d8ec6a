"""Acumulador de hallazgos del doctor.

Por qué un valor explícito (y no estado global):
- Cada check recibe su propio acumulador y el llamador hace el merge.
- Los scopes anidados (un módulo) se aíslan y luego se integran etiquetados.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.domain.models import Finding, Severity


@dataclass
class Findings:
    """Append-only warning/error lists for one run, check or scope."""

    warnings: list[Finding] = field(default_factory=list)
    errors: list[Finding] = field(default_factory=list)

    def add(self, finding: Finding) -> Finding:
        if finding.severity is Severity.WARNING:
            self.warnings.append(finding)
        elif finding.severity is Severity.ERROR:
            self.errors.append(finding)
        else:
            raise ValueError(f"{finding.severity.value} messages are not accumulated")
        return finding

    def replace_last(self, old: Finding, new: Finding) -> None:
        """Swap `old` for `new` in place (used to attach explanations)."""

        bucket = self.errors if old.severity is Severity.ERROR else self.warnings
        for index in range(len(bucket) - 1, -1, -1):
            if bucket[index] is old:
                bucket[index] = new
                return
        raise ValueError("finding not found in accumulator")

    def merge(self, other: Findings, *, scope: str | None = None) -> None:
        """Append `other`'s entries, tagging untagged ones with `scope`."""

        for source, target in ((other.warnings, self.warnings), (other.errors, self.errors)):
            for finding in source:
                if scope and finding.scope is None:
                    finding = finding.model_copy(update={"scope": scope})
                target.append(finding)

    @property
    def count(self) -> int:
        return len(self.warnings) + len(self.errors)

    def __bool__(self) -> bool:
        return self.count > 0

    def ordered(self) -> list[Finding]:
        """Errors first, then warnings (the order modules are reported in)."""

        return [*self.errors, *self.warnings]
