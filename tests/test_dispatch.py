from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from dais.accumulator import AccumulatorState
from dais.dispatch import DispatchEngine
from dais.internal.events import EventBus
from dais.models import (
    SUPPORTED_PROTOCOLS,
    ABIEntry,
    ContractImport,
    Network,
    NetworkSelection,
    Protocol,
    WriterResult,
)
from dais.protocols import registry
from dais.protocols.base import ProtocolWriter
from dais.provision import DirectoryProvisioner
from dais.utils.logging import setup_logging


async def _no_mkdir(path: Path) -> None:
    return None


def _recording_writers(calls: list[tuple[Protocol, ContractImport, NetworkSelection]]) -> dict[Protocol, ProtocolWriter]:
    def _make(protocol: Protocol) -> ProtocolWriter:
        async def _writer(
            target_dir: Path, solver_version: str, network: NetworkSelection, spec: ContractImport
        ) -> WriterResult:
            calls.append((protocol, spec, network))
            return WriterResult(
                abi_fragments=[ABIEntry(raw_abi=f"{spec.name}: []")] if spec.name else [],
                dependency_pack=str(spec.options.get("pack", "")),
            )

        return _writer

    return {protocol: _make(protocol) for protocol in Protocol}


def _engine(tmp_path: Path, **kwargs) -> DispatchEngine:
    return DispatchEngine(
        tmp_path,
        AccumulatorState(),
        DirectoryProvisioner(tmp_path, _no_mkdir),
        **kwargs,
    )


@pytest.mark.parametrize("protocol", SUPPORTED_PROTOCOLS)
@pytest.mark.parametrize("casing", [str.lower, str.upper, str.title])
def test_supported_protocols_route_in_any_case(tmp_path: Path, protocol: Protocol, casing) -> None:
    calls: list = []
    engine = _engine(tmp_path, writers=_recording_writers(calls))

    asyncio.run(engine.dispatch([ContractImport(protocol=casing(protocol.value))], "0.6.12", Network.MAINNET))

    assert [call[0] for call in calls] == [protocol]


def test_unknown_protocol_routes_to_error_without_aborting(tmp_path: Path) -> None:
    engine = _engine(tmp_path)
    imports = [ContractImport(protocol="made_up"), ContractImport(protocol="kyber")]

    packs = asyncio.run(engine.dispatch(imports, "0.6.12", Network.MAINNET))

    assert packs == []
    assert all(bucket.is_empty for _, bucket in engine.state.buckets())
    assert "protocol.unsupported" in engine.event_bus.topics()


def test_default_network_and_solver_reach_writer(tmp_path: Path) -> None:
    calls: list = []
    engine = _engine(tmp_path, writers=_recording_writers(calls))

    asyncio.run(engine.dispatch([ContractImport(protocol="UNISWAP")], "0.7.6", "all"))

    assert calls[0][2] == "all"


def test_empty_packs_dropped_and_duplicates_kept(tmp_path: Path) -> None:
    calls: list = []
    engine = _engine(tmp_path, writers=_recording_writers(calls))
    imports = [
        ContractImport(protocol="BANCOR", options={"pack": "@bancor/contracts-solidity"}),
        ContractImport(protocol="BANCOR", options={"pack": "@bancor/contracts-solidity"}),
        ContractImport(protocol="KYBER"),
    ]

    packs = asyncio.run(engine.dispatch(imports, "0.6.12", Network.MAINNET))

    assert packs == ["@bancor/contracts-solidity", "@bancor/contracts-solidity"]


def test_bucket_order_follows_completion_order(tmp_path: Path) -> None:
    async def _slow_first(
        target_dir: Path, solver_version: str, network: NetworkSelection, spec: ContractImport
    ) -> WriterResult:
        await asyncio.sleep(float(spec.options["delay"]))
        return WriterResult(abi_fragments=[ABIEntry(raw_abi=spec.name)])

    writers = _recording_writers([])
    writers[Protocol.DYDX] = _slow_first
    engine = _engine(tmp_path, writers=writers)
    imports = [
        ContractImport(protocol="DYDX", name="slow", options={"delay": 0.05}),
        ContractImport(protocol="DYDX", name="fast", options={"delay": 0}),
    ]

    asyncio.run(engine.dispatch(imports, "0.6.12", Network.MAINNET))

    assert [entry.raw_abi for entry in engine.state.bucket(Protocol.DYDX).abi_fragments] == ["fast", "slow"]


def test_writer_failure_fails_the_batch(tmp_path: Path) -> None:
    async def _boom(
        target_dir: Path, solver_version: str, network: NetworkSelection, spec: ContractImport
    ) -> WriterResult:
        raise RuntimeError("writer exploded")

    writers = _recording_writers([])
    writers[Protocol.DYDX] = _boom
    engine = _engine(tmp_path, writers=writers)
    imports = [ContractImport(protocol="BANCOR", name="ContractRegistry"), ContractImport(protocol="DYDX")]

    with pytest.raises(RuntimeError, match="writer exploded"):
        asyncio.run(engine.dispatch(imports, "0.6.12", Network.MAINNET))


def _inflight_writers(tracker: dict[str, int]) -> dict[Protocol, ProtocolWriter]:
    async def _tracked(
        target_dir: Path, solver_version: str, network: NetworkSelection, spec: ContractImport
    ) -> WriterResult:
        tracker["now"] += 1
        tracker["peak"] = max(tracker["peak"], tracker["now"])
        await asyncio.sleep(0.01)
        tracker["now"] -= 1
        return WriterResult.empty()

    writers = _recording_writers([])
    writers[Protocol.KYBER] = _tracked
    return writers


def test_max_concurrency_bounds_inflight_writers(tmp_path: Path) -> None:
    tracker = {"now": 0, "peak": 0}
    engine = _engine(tmp_path, writers=_inflight_writers(tracker), max_concurrency=2)

    asyncio.run(engine.dispatch([ContractImport(protocol="KYBER")] * 6, "0.6.12", Network.MAINNET))

    assert tracker["peak"] == 2


def test_unbounded_fan_out_runs_whole_batch_at_once(tmp_path: Path) -> None:
    tracker = {"now": 0, "peak": 0}
    engine = _engine(tmp_path, writers=_inflight_writers(tracker))

    asyncio.run(engine.dispatch([ContractImport(protocol="KYBER")] * 6, "0.6.12", Network.MAINNET))

    assert tracker["peak"] == 6


def test_invalid_concurrency_and_incomplete_writer_table_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        _engine(tmp_path, max_concurrency=0)

    writers = _recording_writers([])
    del writers[Protocol.ERROR]
    with pytest.raises(RuntimeError, match="ERROR"):
        _engine(tmp_path, writers=writers)


def test_dispatch_emits_lifecycle_events(tmp_path: Path) -> None:
    bus = EventBus()
    engine = _engine(tmp_path, writers=_recording_writers([]), event_bus=bus)

    asyncio.run(engine.dispatch([ContractImport(protocol="BANCOR", name="ContractRegistry")], "0.6.12", Network.MAINNET))

    assert bus.topics() == ["dispatch.started", "writer.completed", "dispatch.completed"]


def test_markup_in_unknown_protocol_name_does_not_fail_batch(tmp_path: Path) -> None:
    setup_logging("INFO", force=True)
    engine = _engine(tmp_path)
    imports = [ContractImport(protocol="made_up[/x]"), ContractImport(protocol="[bold]kyberish")]

    packs = asyncio.run(engine.dispatch(imports, "0.6.12", Network.MAINNET))

    assert packs == []
    assert engine.event_bus.topics().count("protocol.unsupported") == 2


def test_failure_cancels_sibling_writers(tmp_path: Path) -> None:
    finished: list[str] = []

    async def _slow(
        target_dir: Path, solver_version: str, network: NetworkSelection, spec: ContractImport
    ) -> WriterResult:
        await asyncio.sleep(0.05)
        finished.append(spec.name)
        return WriterResult(abi_fragments=[ABIEntry(raw_abi=spec.name)])

    async def _boom(
        target_dir: Path, solver_version: str, network: NetworkSelection, spec: ContractImport
    ) -> WriterResult:
        raise RuntimeError("writer exploded")

    writers = _recording_writers([])
    writers[Protocol.BANCOR] = _slow
    writers[Protocol.DYDX] = _boom
    engine = _engine(tmp_path, writers=writers)
    imports = [ContractImport(protocol="BANCOR", name="ContractRegistry"), ContractImport(protocol="DYDX")]

    async def _run() -> None:
        with pytest.raises(RuntimeError, match="writer exploded"):
            await engine.dispatch(imports, "0.6.12", Network.MAINNET)
        await asyncio.sleep(0.1)

    asyncio.run(_run())

    assert finished == []
    assert engine.state.bucket(Protocol.BANCOR).is_empty
    assert "dispatch.completed" not in engine.event_bus.topics()


def test_default_writers_come_from_registry_table(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list = []
    monkeypatch.setitem(registry.PROTOCOL_WRITERS, Protocol.KYBER, _recording_writers(calls)[Protocol.KYBER])
    engine = _engine(tmp_path)

    asyncio.run(engine.dispatch([ContractImport(protocol="kyber")], "0.6.12", Network.MAINNET))

    assert engine.writers is None
    assert [call[0] for call in calls] == [Protocol.KYBER]
