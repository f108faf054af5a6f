"""Open a poem's source document in an external program."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


class OpenerError(Exception):
    """No usable program, or it could not be started."""


def opener_command(configured: str = "") -> list[str]:
    """Resolve the command used to open files.

    Order: the configured command, ``$VISUAL``/``$EDITOR``, then the
    platform's default opener.
    """
    for candidate in (configured, os.environ.get("VISUAL", ""), os.environ.get("EDITOR", "")):
        if candidate.strip():
            return shlex.split(candidate)

    if sys.platform == "darwin":
        return ["open"]
    if sys.platform.startswith("win"):
        return ["cmd", "/C", "start", ""]

    xdg = shutil.which("xdg-open")
    if xdg is None:
        raise OpenerError("No $EDITOR set and xdg-open not found")
    return [xdg]


def open_path(path: Path, configured: str = "", *, wait: bool = False) -> None:
    """Launch the opener on *path*.

    Terminal editors need the terminal, so callers that suspend the TUI
    pass ``wait=True`` to block until the editor exits.
    """
    if not path.exists():
        raise OpenerError(f"File not found: {path}")
    cmd = [*opener_command(configured), str(path)]
    logger.debug("Opening %s with %s", path, cmd[0])
    try:
        if wait:
            subprocess.run(cmd, check=True)
        else:
            subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except (subprocess.CalledProcessError, OSError) as exc:
        raise OpenerError(f"Failed to open {path}: {exc}") from exc
