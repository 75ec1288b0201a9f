"""JSON document file with transactions.

All collections live in one JSON file so a transaction spanning several
of them (order + holds + cart) is a single atomic file replacement.
Transactions are serialized by a process-wide re-entrant lock; a nested
``transaction()`` joins the outer one and rolls back to its own entry
state if it raises.
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from shophub.domain.exceptions import PersistenceError

COLLECTIONS = ("products", "carts", "orders", "reviews", "holds")

Document = dict[str, dict[str, dict]]


class JsonDocumentStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._working: Document | None = None
        self._depth = 0
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._working = self._read()
                pristine = json.dumps(self._working, sort_keys=True)
                savepoint = None
            else:
                savepoint = copy.deepcopy(self._working)

            self._depth += 1
            try:
                yield self._working  # type: ignore[misc]
            except BaseException:
                if not outermost:
                    self._working = savepoint
                raise
            else:
                if outermost and json.dumps(self._working, sort_keys=True) != pristine:
                    self._write(self._working)  # type: ignore[arg-type]
            finally:
                self._depth -= 1
                if outermost:
                    self._working = None

    # --- File helpers ---------------------------------------------------------

    def _read(self) -> Document:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Could not read {self._file_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise PersistenceError(f"{self._file_path} does not hold a JSON object")
        for name in COLLECTIONS:
            raw.setdefault(name, {})
        return raw

    def _write(self, doc: Document) -> None:
        # write-then-rename so readers never see a half-written file
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=self._file_path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(doc, fh, indent=2, ensure_ascii=False)
                    fh.write("\n")
                os.replace(tmp_name, self._file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Could not write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._write({name: {} for name in COLLECTIONS})
