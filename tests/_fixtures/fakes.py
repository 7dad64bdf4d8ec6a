"""Test doubles for external tools."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from core.interfaces.process import ProcessResult


class FakeRunner:
    """Records calls and answers from a table keyed by argv (or its program)."""

    def __init__(self, responses: Mapping[object, ProcessResult] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, *args: str) -> ProcessResult:
        self.calls.append(args)
        if args in self.responses:
            return self.responses[args]
        if args and args[0] in self.responses:
            return self.responses[args[0]]
        return ProcessResult(status=0, stdout="")


def fake_which(available: Iterable[str]):
    names = set(available)

    def _which(name: str) -> str | None:
        return f"/usr/bin/{name}" if name in names else None

    return _which


__all__ = ["FakeRunner", "fake_which"]
