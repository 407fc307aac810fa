"""Terminal summaries for assembly runs."""

from __future__ import annotations

import json
import os
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dais.accumulator import AccumulatorState
from dais.internal.events import InternalEvent
from dais.models import Network, Protocol

ASCII_BANNER = r"""
     _       _
  __| | __ _(_)___
 / _` |/ _` | / __|
| (_| | (_| | \__ \
 \__,_|\__,_|_|___/
""".strip("\n")


def summary_payload(
    state: AccumulatorState, packs: list[str], unsupported: list[str] | None = None
) -> dict[str, Any]:
    protocols: dict[str, Any] = {}
    for protocol, bucket in state.buckets():
        if protocol is Protocol.ERROR or bucket.is_empty:
            continue
        protocols[protocol.value] = {
            "abi_fragments": len(bucket.abi_fragments),
            "addresses": {
                network.value: len(records) for network, records in bucket.addresses_by_network if records
            },
        }
    return {
        "protocols": protocols,
        "dependency_packs": list(packs),
        "unsupported_protocols": list(unsupported or []),
    }


def print_assembly_summary(
    state: AccumulatorState, packs: list[str], unsupported: list[str] | None = None
) -> None:
    console = Console()
    payload = summary_payload(state, packs, unsupported)

    table = Table(title="Assembled Protocols", show_header=True, header_style="bold cyan")
    table.add_column("Protocol", style="bold")
    table.add_column("ABIs", justify="right")
    for network in Network:
        table.add_column(network.value, justify="right")

    for protocol, row in payload["protocols"].items():
        table.add_row(
            protocol,
            str(row["abi_fragments"]),
            *(str(row["addresses"].get(network.value, 0)) for network in Network),
        )
    console.print(table)

    if packs:
        body = "\n".join(escape(pack) for pack in packs)
        console.print(Panel(body, title="Dependency Packs", border_style="cyan"))
    else:
        console.print("[dim]No dependency packs to install.[/dim]")

    if payload["unsupported_protocols"]:
        names = ", ".join(escape(name) for name in payload["unsupported_protocols"])
        console.print(f"[yellow]Skipped unsupported protocols:[/yellow] {names}")


def print_assembly_summary_json(
    state: AccumulatorState, packs: list[str], unsupported: list[str] | None = None
) -> None:
    print(json.dumps(summary_payload(state, packs, unsupported), ensure_ascii=True))


def print_banner() -> None:
    if os.getenv("DAIS_NO_BANNER", "").strip().lower() in {"1", "true", "yes"}:
        return
    console = Console()
    console.print("[bold cyan]" + ASCII_BANNER + "[/bold cyan]")


def print_internal_events(events: list[InternalEvent]) -> None:
    if not events:
        return

    console = Console()
    table = Table(title="Recent Internal Events", show_header=True, header_style="bold cyan")
    table.add_column("Time")
    table.add_column("Topic")
    table.add_column("Payload", overflow="fold")
    for event in events:
        table.add_row(
            event.ts.isoformat(timespec="seconds"),
            event.topic,
            escape(json.dumps(event.payload, ensure_ascii=True, sort_keys=True, default=str)),
        )
    console.print(table)
