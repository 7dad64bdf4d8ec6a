"""Ejecución de herramientas externas.

Por qué un wrapper:
- Estandariza captura de stdout/stderr, encoding y logging de cada llamada.
- Nunca lanza si el binario no existe: devuelve status 127 como haría un shell.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from core.interfaces.process import ProcessResult

logger = logging.getLogger(__name__)

_NOT_FOUND_STATUS = 127


def call_process(*args: str) -> ProcessResult:
    """Run `args` synchronously and return (status, stdout, stderr)."""

    logger.debug("exec: %s", " ".join(args))
    try:
        completed = subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except FileNotFoundError as exc:
        logger.debug("exec failed: %s", exc)
        return ProcessResult(status=_NOT_FOUND_STATUS, stdout="", stderr=str(exc))
    except OSError as exc:
        logger.debug("exec failed: %s", exc)
        return ProcessResult(status=1, stdout="", stderr=str(exc))

    logger.debug("exit %d (%d bytes stdout)", completed.returncode, len(completed.stdout))
    return ProcessResult(
        status=completed.returncode,
        stdout=completed.stdout.strip(),
        stderr=completed.stderr.strip(),
    )


def which(name: str) -> str | None:
    return shutil.which(name)
