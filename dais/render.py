"""Renderers for the generated ``lib/abis.ts`` and ``lib/addresses.ts`` modules.

Both walk the accumulator's ordered buckets, so output is stable for a given
state. The ``ERROR`` bucket and empty buckets are never rendered.
"""

from __future__ import annotations

from dais.accumulator import AccumulatorState
from dais.models import Protocol


def render_abi_registry(state: AccumulatorState) -> str:
    lines: list[str] = []
    for protocol, bucket in state.buckets():
        if protocol is Protocol.ERROR or not bucket.abi_fragments:
            continue
        lines.append(f"export const {protocol.value}_ABI = {{")
        lines.extend(f"  {entry.raw_abi}," for entry in bucket.abi_fragments)
        lines.append("}")
    return "\n".join(lines).strip()


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def render_address_registry(state: AccumulatorState) -> str:
    lines = ["export const Addresses = {"]
    for protocol, bucket in state.buckets():
        if protocol is Protocol.ERROR or bucket.address_count == 0:
            continue
        lines.append(f"  {protocol.value}: {{")
        for network, records in bucket.addresses_by_network:
            if not records:
                continue
            lines.append(f"    {network.value}: {{")
            lines.extend(
                f"      {record.contract_name}: {_quote(record.address)}," for record in records
            )
            lines.append("    },")
        lines.append("  },")
    lines.append("}")
    return "\n".join(lines).strip()
