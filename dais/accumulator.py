"""Per-run aggregation state for writer results.

Buckets and network sequences are kept as explicit ordered pairs so rendering
never depends on mapping iteration order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dais.models import ABIEntry, AddressRecord, Network, Protocol, WriterResult


def _empty_networks() -> list[tuple[Network, list[AddressRecord]]]:
    return [(network, []) for network in Network]


@dataclass(slots=True)
class ProtocolBucket:
    abi_fragments: list[ABIEntry] = field(default_factory=list)
    addresses_by_network: list[tuple[Network, list[AddressRecord]]] = field(
        default_factory=_empty_networks
    )

    def addresses(self, network: Network) -> list[AddressRecord]:
        for candidate, records in self.addresses_by_network:
            if candidate is network:
                return records
        raise ValueError(f"Address record has no concrete network: {network!r}")

    @property
    def address_count(self) -> int:
        return sum(len(records) for _, records in self.addresses_by_network)

    @property
    def is_empty(self) -> bool:
        return not self.abi_fragments and self.address_count == 0


class AccumulatorState:
    """ABI fragments and address records grouped by protocol for one run."""

    def __init__(self) -> None:
        self._buckets: list[tuple[Protocol, ProtocolBucket]] = []
        self.reset()

    def reset(self) -> None:
        self._buckets = [(protocol, ProtocolBucket()) for protocol in Protocol]

    def bucket(self, protocol: Protocol) -> ProtocolBucket:
        for candidate, bucket in self._buckets:
            if candidate is protocol:
                return bucket
        raise KeyError(protocol)

    def buckets(self) -> list[tuple[Protocol, ProtocolBucket]]:
        return list(self._buckets)

    def fold(self, protocol: Protocol, result: WriterResult) -> str:
        """Append one writer result to ``protocol``'s bucket and return its pack."""
        bucket = self.bucket(protocol)
        # Resolve every target sequence before appending so a bad record
        # leaves the bucket untouched.
        targets = [(bucket.addresses(Network(record.network)), record) for record in result.address_records]
        bucket.abi_fragments.extend(result.abi_fragments)
        for records, record in targets:
            records.append(record)
        return result.dependency_pack
