"""Core data types shared by the writers, the dispatcher and the renderers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Literal


def utc_now() -> datetime:
    return datetime.now(UTC)


class Protocol(str, Enum):
    BANCOR = "BANCOR"
    DYDX = "DYDX"
    KYBER = "KYBER"
    ONEINCH = "ONEINCH"
    UNISWAP = "UNISWAP"
    ERROR = "ERROR"


SUPPORTED_PROTOCOLS = tuple(protocol for protocol in Protocol if protocol is not Protocol.ERROR)


class Network(str, Enum):
    MAINNET = "MAINNET"
    KOVAN = "KOVAN"
    ROPSTEN = "ROPSTEN"


ALL_NETWORKS = "all"

NetworkSelection = Network | Literal["all"]


def parse_network(value: str | Network) -> NetworkSelection:
    """Parse a network name case-insensitively, accepting the ``all`` wildcard."""
    if isinstance(value, Network):
        return value
    normalized = str(value).strip()
    if normalized.lower() == ALL_NETWORKS:
        return ALL_NETWORKS
    try:
        return Network(normalized.upper())
    except ValueError:
        raise ValueError(f"Unknown network: {value!r}") from None


def expand_networks(selection: NetworkSelection) -> tuple[Network, ...]:
    if selection == ALL_NETWORKS:
        return tuple(Network)
    return (Network(selection),)


@dataclass(frozen=True, slots=True)
class ContractImport:
    """One declared request to scaffold a contract integration."""

    protocol: str
    name: str = ""
    network: NetworkSelection | None = None
    options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ABIEntry:
    raw_abi: str


@dataclass(frozen=True, slots=True)
class AddressRecord:
    contract_name: str
    address: str
    network: Network


@dataclass(slots=True)
class WriterResult:
    abi_fragments: list[ABIEntry] = field(default_factory=list)
    address_records: list[AddressRecord] = field(default_factory=list)
    dependency_pack: str = ""

    @staticmethod
    def empty() -> WriterResult:
        return WriterResult()
