from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dais.constants import CONFIG_FILENAME, DEFAULT_LOG_LEVEL, DEFAULT_SOLVER_VERSION
from dais.models import ContractImport, Network, NetworkSelection, parse_network


class ConfigError(RuntimeError):
    pass


class ConfigNotFoundError(ConfigError):
    pass


class ConfigParseError(ConfigError):
    pass


@dataclass(slots=True)
class LoggingConfig:
    level: str = DEFAULT_LOG_LEVEL


@dataclass(slots=True)
class DaisConfig:
    solversion: str = DEFAULT_SOLVER_VERSION
    default_net: NetworkSelection = Network.MAINNET
    contract_imports: list[ContractImport] = field(default_factory=list)
    max_concurrency: int | None = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def default() -> DaisConfig:
        return DaisConfig(
            contract_imports=[
                ContractImport(protocol="BANCOR", name="ContractRegistry"),
                ContractImport(protocol="DYDX", name="SoloMargin"),
            ]
        )


def config_path(project_dir: str | Path) -> Path:
    return Path(project_dir).resolve() / CONFIG_FILENAME


def _parse_import(item: Any, index: int) -> ContractImport:
    if not isinstance(item, dict):
        raise ConfigParseError(f"contractImports[{index}] must be an object")
    protocol = item.get("protocol")
    if not isinstance(protocol, str) or not protocol.strip():
        raise ConfigParseError(f"contractImports[{index}] is missing 'protocol'")
    raw_net = item.get("network", item.get("net"))
    try:
        network = parse_network(raw_net) if raw_net is not None else None
    except ValueError as exc:
        raise ConfigParseError(f"contractImports[{index}]: {exc}") from exc
    options = {key: value for key, value in item.items() if key not in {"protocol", "name", "network", "net"}}
    return ContractImport(
        protocol=protocol,
        name=str(item.get("name", "")),
        network=network,
        options=options,
    )


def parse_config(raw: Any) -> DaisConfig:
    if not isinstance(raw, dict):
        raise ConfigParseError("Config root must be an object")

    imports_raw = raw.get("contractImports", []) or []
    if not isinstance(imports_raw, list):
        raise ConfigParseError("'contractImports' must be a list")

    try:
        default_net = parse_network(raw.get("defaultNet", Network.MAINNET))
    except ValueError as exc:
        raise ConfigParseError(f"defaultNet: {exc}") from exc

    max_concurrency = raw.get("maxConcurrency")
    if max_concurrency is not None:
        if isinstance(max_concurrency, bool) or not isinstance(max_concurrency, int) or max_concurrency < 1:
            raise ConfigParseError("'maxConcurrency' must be a positive integer")

    solversion = raw.get("solversion", DEFAULT_SOLVER_VERSION)
    if not isinstance(solversion, str) or not solversion.strip():
        raise ConfigParseError("'solversion' must be a version string such as \"0.6.12\"")

    return DaisConfig(
        solversion=solversion.strip(),
        default_net=default_net,
        contract_imports=[_parse_import(item, index) for index, item in enumerate(imports_raw)],
        max_concurrency=max_concurrency,
        logging=LoggingConfig(level=str(raw.get("logLevel", DEFAULT_LOG_LEVEL))),
    )


def load_config(project_dir: str | Path) -> DaisConfig:
    path = config_path(project_dir)
    if not path.exists():
        raise ConfigNotFoundError(f"No {CONFIG_FILENAME} found at {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            raw = json.load(fh)
        except json.JSONDecodeError as exc:
            raise ConfigParseError(f"Could not parse {path}: {exc}") from exc

    return parse_config(raw)


def _import_payload(spec: ContractImport) -> dict[str, Any]:
    payload: dict[str, Any] = {"protocol": spec.protocol, "name": spec.name}
    if spec.network is not None:
        payload["network"] = str(getattr(spec.network, "value", spec.network))
    payload.update(spec.options)
    return payload


def dump_default_config(project_dir: str | Path) -> Path:
    cfg = DaisConfig.default()
    payload: dict[str, Any] = {
        "solversion": cfg.solversion,
        "defaultNet": str(getattr(cfg.default_net, "value", cfg.default_net)),
        "contractImports": [_import_payload(spec) for spec in cfg.contract_imports],
    }
    out = config_path(project_dir)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2)
        fh.write("\n")
    return out
