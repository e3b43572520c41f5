"""
Data store for the catalogue API.

The catalog lives in a single JSON document shaped like
``{"data": [pokemon, ...]}``. It is read in full on every request and
rewritten in full on every mutation; there is no locking, so two
concurrent writers race and the last one wins. Query code only talks
to the ``CatalogStore`` protocol, so the JSON file can later be
replaced by an embedded database without touching ``query.py``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Sequence

from pydantic import ValidationError as PydanticValidationError
from typing_extensions import Protocol

from ..errors import StorageError
from .schemas import Pokemon


logger = logging.getLogger(__name__)

DATA_KEY = "data"


class CatalogStore(Protocol):
    def load(self) -> List[Pokemon]:
        ...

    def append(self, record: Pokemon) -> Pokemon:
        ...

    def replace(self, records: Sequence[Pokemon]) -> None:
        ...


class JsonCatalogStore:
    """``CatalogStore`` backed by a JSON document on disk."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read_document(self) -> Dict[str, Any]:
        """Return the raw document, or an empty one if it cannot be read.

        Missing, empty or malformed files are treated as an empty
        catalog so read paths stay available while the dataset is being
        (re)built.
        """
        try:
            with self.path.open("r", encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            logger.warning("Catalog document %s does not exist", self.path)
            return {DATA_KEY: []}
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Unable to read catalog document %s: %s", self.path, exc)
            return {DATA_KEY: []}

        if not content.strip():
            return {DATA_KEY: []}
        try:
            document = json.loads(content)
        except json.JSONDecodeError as exc:
            logger.warning("Catalog document %s is not valid JSON: %s", self.path, exc)
            return {DATA_KEY: []}
        if not isinstance(document, dict):
            logger.warning("Catalog document %s is not a JSON object", self.path)
            return {DATA_KEY: []}
        if not isinstance(document.get(DATA_KEY), list):
            document[DATA_KEY] = []
        return document

    def _write_document(self, document: Dict[str, Any]) -> None:
        # Write to a sibling temp file first so readers never observe a
        # half-written document.
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            logger.error("Unable to write catalog document %s: %s", self.path, exc)
            raise StorageError() from exc

    @staticmethod
    def _parse_records(entries: List[Any]) -> List[Pokemon]:
        records: List[Pokemon] = []
        for entry in entries:
            try:
                records.append(Pokemon.model_validate(entry))
            except PydanticValidationError as exc:
                logger.warning("Skipping malformed catalog entry %r: %s", entry, exc)
        return records

    def load(self) -> List[Pokemon]:
        return self._parse_records(self._read_document()[DATA_KEY])

    def append(self, record: Pokemon) -> Pokemon:
        document = self._read_document()
        document[DATA_KEY].append(record.model_dump())
        self._write_document(document)
        logger.info("Added pokemon %s (id=%s) to %s", record.name, record.id, self.path)
        return record

    def replace(self, records: Sequence[Pokemon]) -> None:
        # Keep any other top-level keys; only the record list is rebuilt.
        document = self._read_document()
        document[DATA_KEY] = [r.model_dump() for r in records]
        self._write_document(document)
        logger.info("Wrote %d pokemons to %s", len(records), self.path)
