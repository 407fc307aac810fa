"""Top-level run sequencing: skeleton, dispatch, registries."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

from dais.accumulator import AccumulatorState
from dais.constants import ABI_REGISTRY_PATH, ADDRESS_REGISTRY_PATH
from dais.dispatch import DispatchEngine
from dais.fs import make_dir, write_text_file
from dais.internal.events import EventBus, InternalEvent
from dais.models import ContractImport, NetworkSelection, Protocol
from dais.protocols.base import ProtocolWriter
from dais.provision import DirectoryProvisioner, MakeDirFn
from dais.render import render_abi_registry, render_address_registry
from dais.utils.logging import get_logger


class ProjectAssembler:
    """Reusable run driver. Each :meth:`run` starts from fresh state and flags."""

    def __init__(
        self,
        *,
        writers: dict[Protocol, ProtocolWriter] | None = None,
        max_concurrency: int | None = None,
        make_dir_fn: MakeDirFn = make_dir,
    ) -> None:
        self.writers = writers
        self.max_concurrency = max_concurrency
        self.state = AccumulatorState()
        self.provisioner = DirectoryProvisioner(".", make_dir_fn)
        self.event_bus = EventBus()
        self.logger = get_logger("dais.assembler")

    async def run(
        self,
        root_dir: str | Path,
        imports: Sequence[ContractImport],
        solver_version: str,
        default_network: NetworkSelection,
    ) -> list[str]:
        """Scaffold ``root_dir`` and return the unique dependency packs to install."""
        root = Path(root_dir).resolve()
        self.state = AccumulatorState()
        self.provisioner.reset(root)
        self.event_bus.emit("run.started", root=str(root), imports=len(imports))

        await self.provisioner.ensure_base_dirs()

        engine = DispatchEngine(
            root,
            self.state,
            self.provisioner,
            writers=self.writers,
            max_concurrency=self.max_concurrency,
            event_bus=self.event_bus,
        )
        packs = await engine.dispatch(imports, solver_version, default_network)

        abi_path = root / ABI_REGISTRY_PATH
        address_path = root / ADDRESS_REGISTRY_PATH
        await asyncio.gather(
            write_text_file(abi_path, render_abi_registry(self.state)),
            write_text_file(address_path, render_address_registry(self.state)),
        )
        self.logger.info("Wrote %s and %s", abi_path, address_path)

        unique = list(dict.fromkeys(packs))
        self.event_bus.emit("run.completed", root=str(root), packs=unique)
        return unique

    def recent_events(self, limit: int = 100) -> list[InternalEvent]:
        return self.event_bus.recent(limit)
