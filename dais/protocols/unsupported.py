from __future__ import annotations

from pathlib import Path

from rich.markup import escape

from dais.models import ContractImport, NetworkSelection, WriterResult
from dais.utils.logging import get_logger

logger = get_logger("dais.protocols")


async def write_unsupported(
    target_dir: Path,
    solver_version: str,
    network: NetworkSelection,
    spec: ContractImport,
) -> WriterResult:
    # User text goes through the markup-enabled rich handler.
    logger.warning("--- [red]%s[/red] is not a supported protocol", escape(spec.protocol))
    return WriterResult.empty()
