"""Project-level entry points: write a starter config, assemble a project."""

from __future__ import annotations

import asyncio
from pathlib import Path

from dais.assembler import ProjectAssembler
from dais.config import DaisConfig, dump_default_config, load_config
from dais.utils.logging import get_logger

logger = get_logger("dais.project")


def init(project_dir: str | Path) -> Path:
    """Write the starter ``.daisconfig``, replacing any existing one."""
    path = dump_default_config(project_dir)
    logger.info("Wrote starter config to %s", path)
    return path


async def assemble(
    project_dir: str | Path,
    assembler: ProjectAssembler | None = None,
    config: DaisConfig | None = None,
) -> list[str]:
    """Scaffold ``project_dir`` from its config and return the packs to install."""
    if config is None:
        config = load_config(project_dir)
    if assembler is None:
        assembler = ProjectAssembler(max_concurrency=config.max_concurrency)

    packs = await assembler.run(
        project_dir,
        config.contract_imports,
        config.solversion,
        config.default_net,
    )
    logger.info("Dependency packs: %s", packs)
    return packs


def assemble_sync(
    project_dir: str | Path,
    assembler: ProjectAssembler | None = None,
    config: DaisConfig | None = None,
) -> list[str]:
    return asyncio.run(assemble(project_dir, assembler, config))
