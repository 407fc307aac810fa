"""Contract templates and their Solidity interface / JSON ABI renditions."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from dais.models import Network

LICENSE_LINE = "// SPDX-License-Identifier: MIT"

_REFERENCE_TYPES = ("bytes", "string")


@dataclass(frozen=True, slots=True)
class Param:
    type: str
    name: str = ""


@dataclass(frozen=True, slots=True)
class FunctionSpec:
    name: str
    inputs: tuple[Param, ...] = ()
    outputs: tuple[Param, ...] = ()
    mutability: str = "view"


@dataclass(frozen=True, slots=True)
class ContractTemplate:
    """A scaffoldable contract: its callable surface and known deployments."""

    name: str
    functions: tuple[FunctionSpec, ...]
    addresses: Mapping[Network, str] = field(default_factory=dict)
    pack: str = ""

    @property
    def interface_name(self) -> str:
        return f"I{self.name}"


def pragma_line(solver_version: str) -> str:
    version = solver_version.strip()
    if version[:1].isdigit():
        version = f"^{version}"
    return f"pragma solidity {version};"


def _is_reference_type(solidity_type: str) -> bool:
    return solidity_type.endswith("]") or solidity_type in _REFERENCE_TYPES


def _render_param(param: Param, location: str) -> str:
    parts = [param.type]
    if _is_reference_type(param.type):
        parts.append(location)
    if param.name:
        parts.append(param.name)
    return " ".join(parts)


def render_function(spec: FunctionSpec) -> str:
    inputs = ", ".join(_render_param(param, "calldata") for param in spec.inputs)
    line = f"function {spec.name}({inputs}) external"
    if spec.mutability != "nonpayable":
        line += f" {spec.mutability}"
    if spec.outputs:
        outputs = ", ".join(_render_param(param, "memory") for param in spec.outputs)
        line += f" returns ({outputs})"
    return line + ";"


def render_interface(template: ContractTemplate, solver_version: str) -> str:
    lines = [
        LICENSE_LINE,
        pragma_line(solver_version),
        "",
        f"interface {template.interface_name} {{",
    ]
    lines.extend(f"    {render_function(spec)}" for spec in template.functions)
    lines.append("}")
    return "\n".join(lines) + "\n"


def abi_json(template: ContractTemplate) -> list[dict[str, Any]]:
    def _params(params: tuple[Param, ...]) -> list[dict[str, str]]:
        return [{"name": param.name, "type": param.type} for param in params]

    return [
        {
            "inputs": _params(spec.inputs),
            "name": spec.name,
            "outputs": _params(spec.outputs),
            "stateMutability": spec.mutability,
            "type": "function",
        }
        for spec in template.functions
    ]


def abi_fragment(template: ContractTemplate) -> str:
    """Registry entry for ``template``: ``<Name>: <compact JSON ABI>``."""
    return f"{template.name}: {json.dumps(abi_json(template), separators=(',', ':'))}"
