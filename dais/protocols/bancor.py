"""Bancor interface writer."""

from __future__ import annotations

from pathlib import Path

from dais.models import ContractImport, Network, NetworkSelection, WriterResult
from dais.protocols.base import effective_network, find_template, write_interface
from dais.protocols.solidity import ContractTemplate, FunctionSpec, Param

PROTOCOL_DIR = "Bancor"
PACK = "@bancor/contracts-solidity"

CONTRACTS: dict[str, ContractTemplate] = {
    "ContractRegistry": ContractTemplate(
        name="ContractRegistry",
        functions=(
            FunctionSpec("addressOf", inputs=(Param("bytes32", "_contractName"),), outputs=(Param("address"),)),
            FunctionSpec("itemCount", outputs=(Param("uint256"),)),
        ),
        addresses={Network.MAINNET: "0x52Ae12ABe5D8BD778BD5397F99cA900624CfADD4"},
        pack=PACK,
    ),
    # Deployed address rotates between releases; resolve it with
    # ContractRegistry.addressOf("BancorNetwork").
    "BancorNetwork": ContractTemplate(
        name="BancorNetwork",
        functions=(
            FunctionSpec(
                "conversionPath",
                inputs=(Param("address", "_sourceToken"), Param("address", "_targetToken")),
                outputs=(Param("address[]"),),
            ),
            FunctionSpec(
                "rateByPath",
                inputs=(Param("address[]", "_path"), Param("uint256", "_amount")),
                outputs=(Param("uint256"),),
            ),
            FunctionSpec(
                "convertByPath",
                inputs=(
                    Param("address[]", "_path"),
                    Param("uint256", "_amount"),
                    Param("uint256", "_minReturn"),
                    Param("address", "_beneficiary"),
                    Param("address", "_affiliateAccount"),
                    Param("uint256", "_affiliateFee"),
                ),
                outputs=(Param("uint256"),),
                mutability="payable",
            ),
        ),
        pack=PACK,
    ),
}


async def write_bancor(
    target_dir: Path,
    solver_version: str,
    network: NetworkSelection,
    spec: ContractImport,
) -> WriterResult:
    template = find_template(CONTRACTS, "BANCOR", spec.name)
    return await write_interface(
        target_dir,
        PROTOCOL_DIR,
        solver_version,
        effective_network(network, spec),
        template,
    )
