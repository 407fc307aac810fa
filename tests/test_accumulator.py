from __future__ import annotations

import pytest

from dais.accumulator import AccumulatorState
from dais.models import ABIEntry, AddressRecord, Network, Protocol, WriterResult


def test_fold_appends_in_order_and_returns_pack() -> None:
    state = AccumulatorState()

    pack = state.fold(
        Protocol.BANCOR,
        WriterResult(
            abi_fragments=[ABIEntry(raw_abi="ContractRegistry: []")],
            address_records=[AddressRecord("ContractRegistry", "0x01", Network.MAINNET)],
            dependency_pack="@bancor/contracts-solidity",
        ),
    )
    state.fold(
        Protocol.BANCOR,
        WriterResult(abi_fragments=[ABIEntry(raw_abi="BancorNetwork: []"), ABIEntry(raw_abi="BancorNetwork: []")]),
    )

    bucket = state.bucket(Protocol.BANCOR)
    assert pack == "@bancor/contracts-solidity"
    assert [entry.raw_abi for entry in bucket.abi_fragments] == [
        "ContractRegistry: []",
        "BancorNetwork: []",
        "BancorNetwork: []",
    ]
    assert [record.address for record in bucket.addresses(Network.MAINNET)] == ["0x01"]
    assert bucket.addresses(Network.KOVAN) == []
    assert bucket.address_count == 1


def test_buckets_cover_every_protocol_in_declaration_order() -> None:
    state = AccumulatorState()
    assert [protocol for protocol, _ in state.buckets()] == list(Protocol)
    for _, bucket in state.buckets():
        assert [network for network, _ in bucket.addresses_by_network] == list(Network)
        assert bucket.is_empty


def test_fold_rejects_wildcard_network_without_partial_append() -> None:
    state = AccumulatorState()
    record = AddressRecord("SoloMargin", "0x02", "all")  # type: ignore[arg-type]

    with pytest.raises(ValueError):
        state.fold(
            Protocol.DYDX,
            WriterResult(abi_fragments=[ABIEntry(raw_abi="SoloMargin: []")], address_records=[record]),
        )

    assert state.bucket(Protocol.DYDX).is_empty


def test_reset_clears_all_buckets() -> None:
    state = AccumulatorState()
    state.fold(Protocol.DYDX, WriterResult(abi_fragments=[ABIEntry(raw_abi="SoloMargin: []")]))

    state.reset()

    assert all(bucket.is_empty for _, bucket in state.buckets())
