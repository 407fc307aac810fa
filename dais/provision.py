"""Skeleton and per-protocol support directory creation."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

from dais.constants import BASE_DIRS
from dais.fs import make_dir
from dais.models import SUPPORTED_PROTOCOLS, Protocol
from dais.utils.logging import debug_event, get_logger

MakeDirFn = Callable[[Path], Awaitable[None]]

PROTOCOL_DIRS: dict[Protocol, tuple[str, ...]] = {
    Protocol.BANCOR: ("contracts/interfaces/Bancor",),
    Protocol.DYDX: ("contracts/interfaces/DyDx", "contracts/libraries/DyDx"),
    Protocol.KYBER: (),
    Protocol.ONEINCH: (),
    Protocol.UNISWAP: (),
}

logger = get_logger("dais.provision")


async def ensure_base_dirs(root_dir: str | Path, make_dir_fn: MakeDirFn = make_dir) -> None:
    root = Path(root_dir).resolve()
    await asyncio.gather(*(make_dir_fn(root / rel) for rel in BASE_DIRS))
    debug_event(logger, "provision.base_dirs", root=str(root), dirs=list(BASE_DIRS))


class DirectoryProvisioner:
    """Creates each protocol's support directories at most once per run.

    Two dispatches for the same protocol may both pass the flag check before
    either sets it; ``make_dir_fn`` must therefore treat an existing directory
    as success.
    """

    def __init__(self, root_dir: str | Path, make_dir_fn: MakeDirFn = make_dir) -> None:
        self.root_dir = Path(root_dir).resolve()
        self._make_dir = make_dir_fn
        self._made: dict[Protocol, bool] = {}
        self.reset()

    @property
    def flags(self) -> dict[Protocol, bool]:
        return dict(self._made)

    def reset(self, root_dir: str | Path | None = None) -> None:
        if root_dir is not None:
            self.root_dir = Path(root_dir).resolve()
        self._made = {protocol: False for protocol in SUPPORTED_PROTOCOLS}

    async def ensure_base_dirs(self) -> None:
        await ensure_base_dirs(self.root_dir, self._make_dir)

    async def ensure_protocol_dirs(self, protocol: Protocol) -> None:
        if protocol is Protocol.ERROR or self._made[protocol]:
            return
        dirs = PROTOCOL_DIRS[protocol]
        await asyncio.gather(*(self._make_dir(self.root_dir / rel) for rel in dirs))
        self._made[protocol] = True
        debug_event(logger, "provision.protocol_dirs", protocol=protocol.value, dirs=list(dirs))
