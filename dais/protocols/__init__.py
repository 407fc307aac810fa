"""Protocol writers that turn contract imports into scaffolding."""

from dais.protocols.base import ProtocolWriter, UnknownContractError
from dais.protocols.registry import PROTOCOL_WRITERS, resolve_protocol, writer_for

__all__ = [
    "PROTOCOL_WRITERS",
    "ProtocolWriter",
    "UnknownContractError",
    "resolve_protocol",
    "writer_for",
]
