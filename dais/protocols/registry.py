"""Protocol name resolution and the protocol -> writer table."""

from __future__ import annotations

from dais.models import SUPPORTED_PROTOCOLS, Protocol
from dais.protocols.bancor import write_bancor
from dais.protocols.base import ProtocolWriter
from dais.protocols.dydx import write_dydx
from dais.protocols.noop import write_noop
from dais.protocols.unsupported import write_unsupported

PROTOCOL_WRITERS: dict[Protocol, ProtocolWriter] = {
    Protocol.BANCOR: write_bancor,
    Protocol.DYDX: write_dydx,
    Protocol.KYBER: write_noop,
    Protocol.ONEINCH: write_noop,
    Protocol.UNISWAP: write_noop,
    Protocol.ERROR: write_unsupported,
}

_SUPPORTED_NAMES = {protocol.value: protocol for protocol in SUPPORTED_PROTOCOLS}


def resolve_protocol(name: str) -> Protocol:
    """Map a user-supplied protocol name to a supported protocol, else ``ERROR``."""
    return _SUPPORTED_NAMES.get(str(name).strip().upper(), Protocol.ERROR)


def validate_writers(writers: dict[Protocol, ProtocolWriter]) -> None:
    missing = [protocol.value for protocol in Protocol if protocol not in writers]
    if missing:
        raise RuntimeError(f"No writer registered for: {', '.join(missing)}")


def writer_for(protocol: Protocol) -> ProtocolWriter:
    return PROTOCOL_WRITERS[protocol]


validate_writers(PROTOCOL_WRITERS)
