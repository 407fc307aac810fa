from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path

from dais.fs import write_text_file
from dais.models import (
    ALL_NETWORKS,
    ABIEntry,
    AddressRecord,
    ContractImport,
    NetworkSelection,
    WriterResult,
    expand_networks,
)
from dais.protocols.solidity import ContractTemplate, abi_fragment, render_interface
from dais.utils.logging import debug_event, get_logger

ProtocolWriter = Callable[[Path, str, NetworkSelection, ContractImport], Awaitable[WriterResult]]

logger = get_logger("dais.protocols")


class UnknownContractError(LookupError):
    pass


def find_template(
    catalogue: Mapping[str, ContractTemplate], protocol_name: str, contract_name: str
) -> ContractTemplate:
    wanted = contract_name.strip().lower()
    for name, template in catalogue.items():
        if name.lower() == wanted:
            return template
    known = ", ".join(catalogue) or "none"
    raise UnknownContractError(
        f"{protocol_name} has no contract named {contract_name!r} (known: {known})"
    )


def effective_network(network: NetworkSelection, spec: ContractImport) -> NetworkSelection:
    return spec.network if spec.network is not None else network


async def write_interface(
    target_dir: Path,
    protocol_dir: str,
    solver_version: str,
    network: NetworkSelection,
    template: ContractTemplate,
) -> WriterResult:
    """Write ``template``'s interface and describe it for the registries."""
    out_path = Path(target_dir) / "contracts" / "interfaces" / protocol_dir / f"{template.interface_name}.sol"
    await write_text_file(out_path, render_interface(template, solver_version))

    records: list[AddressRecord] = []
    for net in expand_networks(network):
        address = template.addresses.get(net)
        if address is None:
            if network != ALL_NETWORKS and template.addresses:
                logger.warning("No known %s deployment of %s", net.value, template.name)
            continue
        records.append(AddressRecord(contract_name=template.name, address=address, network=net))

    debug_event(
        logger,
        "writer.interface",
        path=str(out_path),
        contract=template.name,
        addresses=records,
    )
    return WriterResult(
        abi_fragments=[ABIEntry(raw_abi=abi_fragment(template))],
        address_records=records,
        dependency_pack=template.pack,
    )
