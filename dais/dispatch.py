"""Concurrent fan-out of contract imports to protocol writers."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager, nullcontext
from pathlib import Path

from dais.accumulator import AccumulatorState
from dais.internal.events import EventBus
from dais.models import ContractImport, NetworkSelection, Protocol
from dais.protocols.base import ProtocolWriter
from dais.protocols.registry import resolve_protocol, validate_writers, writer_for
from dais.provision import DirectoryProvisioner
from dais.utils.logging import debug_event, get_logger


class DispatchEngine:
    """Runs every import of a batch concurrently and folds results into ``state``.

    The first writer failure cancels the rest of the batch and propagates out
    of :meth:`dispatch` unchanged; there is no per-import isolation. Unsupported protocols are routed to the
    ``ERROR`` writer and never fail the batch.
    """

    def __init__(
        self,
        target_dir: str | Path,
        state: AccumulatorState,
        provisioner: DirectoryProvisioner,
        *,
        writers: dict[Protocol, ProtocolWriter] | None = None,
        max_concurrency: int | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency must be a positive integer")
        self.target_dir = Path(target_dir).resolve()
        self.state = state
        self.provisioner = provisioner
        self.writers = None if writers is None else dict(writers)
        if self.writers is not None:
            validate_writers(self.writers)
        self.max_concurrency = max_concurrency
        self.event_bus = event_bus or EventBus()
        self.logger = get_logger("dais.dispatch")

    def _writer(self, protocol: Protocol) -> ProtocolWriter:
        if self.writers is None:
            return writer_for(protocol)
        return self.writers[protocol]

    def _slot(self) -> AbstractAsyncContextManager:
        if self.max_concurrency is None:
            return nullcontext()
        return asyncio.Semaphore(self.max_concurrency)

    async def dispatch(
        self,
        imports: Sequence[ContractImport],
        solver_version: str,
        default_network: NetworkSelection,
    ) -> list[str]:
        """Return the non-empty dependency packs of the batch, duplicates kept."""
        slot = self._slot()
        self.event_bus.emit("dispatch.started", imports=len(imports), max_concurrency=self.max_concurrency)
        self.logger.info("Dispatching %d contract import(s)", len(imports))

        async def _one(spec: ContractImport) -> str:
            protocol = resolve_protocol(spec.protocol)
            if protocol is Protocol.ERROR:
                self.event_bus.emit("protocol.unsupported", protocol=spec.protocol, contract=spec.name)
            async with slot:
                await self.provisioner.ensure_protocol_dirs(protocol)
                result = await self._writer(protocol)(self.target_dir, solver_version, default_network, spec)
            pack = self.state.fold(protocol, result)
            self.event_bus.emit(
                "writer.completed",
                protocol=protocol.value,
                contract=spec.name,
                abi_fragments=len(result.abi_fragments),
                address_records=len(result.address_records),
                pack=pack,
            )
            debug_event(
                self.logger,
                "dispatch.folded",
                protocol=protocol.value,
                contract=spec.name,
                abis=result.abi_fragments,
                addresses=result.address_records,
                pack=pack or None,
            )
            return pack

        # The first failure cancels the remaining writers before it propagates.
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(_one(spec)) for spec in imports]
        except BaseExceptionGroup as failure:
            raise failure.exceptions[0] from None
        non_empty = [pack for task in tasks if (pack := task.result())]
        self.event_bus.emit("dispatch.completed", imports=len(imports), packs=len(non_empty))
        return non_empty
