"""Filesystem primitives used by the provisioner, the writers and the assembler.

Both helpers push the blocking call onto a worker thread so they are real
suspension points for the event loop.
"""

from __future__ import annotations

import asyncio
from pathlib import Path


def _mkdir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _write_text(path: Path, contents: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")


async def make_dir(path: str | Path) -> None:
    """Ensure ``path`` exists as a directory. An existing directory is success."""
    await asyncio.to_thread(_mkdir, Path(path))


async def write_text_file(path: str | Path, contents: str) -> None:
    """Write ``contents`` to ``path``, overwriting unconditionally."""
    await asyncio.to_thread(_write_text, Path(path), contents)
