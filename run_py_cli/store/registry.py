"""
RegistryStore — JSON-file persistence for the script registry.

Usage::

    store = RegistryStore("./data/db.json")
    store.seed_if_absent()

    records = store.load()
    store.append(ScriptRecord(id=7, label="nightly", target="backup.py"))

    if not store.remove_at(0):
        print("refused: the registry must keep at least one record")

    store.overwrite(default_seed())   # explicit reinitialise only

The file is the single source of truth: every mutation is a full
read → modify → write, and nothing is cached between calls.  Callers are
expected to be single-threaded.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Union

from run_py_cli.exceptions import StoreIoError, StoreNotFoundError, StoreParseError
from run_py_cli.store.models import DEFAULT_LABEL, DEFAULT_SCRIPT, ScriptRecord

__all__ = ["RegistryStore", "default_seed", "discover_scripts"]

logger = logging.getLogger(__name__)

# Label given to records created from scripts found on disk
_DISCOVERED_LABEL = "found it"


def default_seed() -> list[ScriptRecord]:
    """Return the single-record registry written on first start and on reinit."""
    return [ScriptRecord(id=1, label=DEFAULT_LABEL, target=DEFAULT_SCRIPT)]


def discover_scripts(directory: Union[str, Path]) -> list[ScriptRecord]:
    """
    Build one record per ``*.py`` file directly inside *directory*.

    Results are sorted by filename so repeated scans are stable.

    Raises:
        StoreIoError: the directory cannot be listed.
    """
    try:
        paths = sorted(p for p in Path(directory).iterdir() if p.is_file() and p.suffix == ".py")
    except OSError as exc:
        raise StoreIoError(f"Cannot scan {directory} for scripts: {exc}") from exc
    return [ScriptRecord(id=1, label=_DISCOVERED_LABEL, target=p.name) for p in paths]


class RegistryStore:
    """
    Load / append / remove / overwrite interface for the registry file.

    The parent directory is only created by seed_if_absent(); every other
    operation expects the file to exist already.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def exists(self) -> bool:
        return self._path.is_file()

    # ── Internal helpers ──────────────────────────────────────────────────

    def _write(self, records: Iterable[ScriptRecord]) -> None:
        """Serialise *records* to a sibling temp file, then swap it into place."""
        payload = json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)
        directory = self._path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=str(directory),
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StoreIoError(f"Cannot write registry {self._path}: {exc}") from exc

    # ── Public API ────────────────────────────────────────────────────────

    def load(self) -> list[ScriptRecord]:
        """
        Read the whole registry from disk.

        Raises:
            StoreNotFoundError: the file does not exist.
            StoreIoError:       the file exists but cannot be read.
            StoreParseError:    the content is not a list of script records.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise StoreNotFoundError(f"Registry file not found: {self._path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise StoreIoError(f"Cannot read registry {self._path}: {exc}") from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StoreParseError(f"Registry {self._path} is not valid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise StoreParseError(
                f"Registry {self._path} must hold a JSON list, got {type(data).__name__}"
            )

        records = []
        for pos, item in enumerate(data):
            if not isinstance(item, dict):
                raise StoreParseError(f"Registry entry #{pos} is not an object")
            try:
                records.append(ScriptRecord.from_dict(item))
            except KeyError as exc:
                raise StoreParseError(f"Registry entry #{pos} is missing field {exc}") from exc
            except (TypeError, ValueError) as exc:
                raise StoreParseError(f"Registry entry #{pos} is malformed: {exc}") from exc
        return records

    def append(self, record: ScriptRecord) -> list[ScriptRecord]:
        """
        Add *record* to the end of the registry.

        Returns:
            The registry as written.
        """
        records = self.load()
        records.append(record)
        self._write(records)
        logger.debug("Appended %s (registry size %d)", record, len(records))
        return records

    def remove_at(self, index: int) -> bool:
        """
        Delete the record at *index*.

        The registry is never allowed to become empty: with a single record
        left the call is refused and the file is not touched.

        Returns:
            True if a record was removed, False if the removal was refused.

        Raises:
            IndexError: *index* is outside the registry.
        """
        records = self.load()
        if len(records) <= 1:
            logger.info("Refusing to remove the last registry record")
            return False
        if not 0 <= index < len(records):
            raise IndexError(f"Registry index {index} out of range (size {len(records)})")
        removed = records.pop(index)
        self._write(records)
        logger.debug("Removed %s at index %d", removed, index)
        return True

    def overwrite(self, records: Iterable[ScriptRecord]) -> None:
        """Replace the registry contents with *records*, unconditionally."""
        records = list(records)
        self._write(records)
        logger.info("Registry %s overwritten with %d record(s)", self._path, len(records))

    def seed_if_absent(self) -> bool:
        """
        Create the registry with default_seed() when the file does not exist.

        Returns:
            True if the file was created, False if it was already there.
        """
        if self._path.exists():
            return False
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreIoError(f"Cannot create directory {self._path.parent}: {exc}") from exc
        self._write(default_seed())
        logger.info("Seeded new registry at %s", self._path)
        return True
