"""
store — JSON-file persistence layer for the script registry.

Public API
──────────
ScriptRecord   — dataclass representing one registry entry
RegistryStore  — load / append / remove_at / overwrite / seed_if_absent
default_seed   — the one-record registry used on first start and on reinit
"""

from run_py_cli.store.models import ScriptRecord
from run_py_cli.store.registry import RegistryStore, default_seed, discover_scripts

__all__ = ["ScriptRecord", "RegistryStore", "default_seed", "discover_scripts"]
