from __future__ import annotations

from pathlib import Path

from dais.models import ContractImport, NetworkSelection, WriterResult


async def write_noop(
    target_dir: Path,
    solver_version: str,
    network: NetworkSelection,
    spec: ContractImport,
) -> WriterResult:
    """Accepted protocol with nothing to scaffold yet."""
    return WriterResult.empty()
