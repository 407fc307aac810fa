"""dYdX Solo interface and support library writer."""

from __future__ import annotations

from pathlib import Path

from dais.fs import write_text_file
from dais.models import ContractImport, Network, NetworkSelection, WriterResult
from dais.protocols.base import effective_network, find_template, write_interface
from dais.protocols.solidity import LICENSE_LINE, ContractTemplate, FunctionSpec, Param, pragma_line

PROTOCOL_DIR = "DyDx"
PACK = "@studydefi/money-legos"

CONTRACTS: dict[str, ContractTemplate] = {
    "SoloMargin": ContractTemplate(
        name="SoloMargin",
        functions=(
            FunctionSpec("getNumMarkets", outputs=(Param("uint256"),)),
            FunctionSpec(
                "getMarketTokenAddress",
                inputs=(Param("uint256", "marketId"),),
                outputs=(Param("address"),),
            ),
            FunctionSpec(
                "getMarketIsClosing",
                inputs=(Param("uint256", "marketId"),),
                outputs=(Param("bool"),),
            ),
        ),
        addresses={
            Network.MAINNET: "0x1E0447b19BB6EcFdAe1e4AE1694b0C3659614e4e",
            Network.KOVAN: "0x4EC3570cADaAEE08Ae384779B0f3A45EF85289DE",
        },
        pack=PACK,
    ),
}


def render_account_library(solver_version: str) -> str:
    return "\n".join(
        [
            LICENSE_LINE,
            pragma_line(solver_version),
            "",
            "library Account {",
            "    struct Info {",
            "        address owner;",
            "        uint256 number;",
            "    }",
            "}",
            "",
        ]
    )


async def write_dydx(
    target_dir: Path,
    solver_version: str,
    network: NetworkSelection,
    spec: ContractImport,
) -> WriterResult:
    template = find_template(CONTRACTS, "DYDX", spec.name)
    library_path = Path(target_dir) / "contracts" / "libraries" / PROTOCOL_DIR / "Account.sol"
    await write_text_file(library_path, render_account_library(solver_version))
    return await write_interface(
        target_dir,
        PROTOCOL_DIR,
        solver_version,
        effective_network(network, spec),
        template,
    )
