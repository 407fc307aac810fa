"""dais smart-contract project scaffolding."""

from dais.assembler import ProjectAssembler
from dais.config import DaisConfig, load_config
from dais.constants import APP_NAME
from dais.project import assemble, assemble_sync, init

__all__ = [
    "APP_NAME",
    "DaisConfig",
    "ProjectAssembler",
    "__version__",
    "assemble",
    "assemble_sync",
    "init",
    "load_config",
]
__version__ = "0.1.0"
