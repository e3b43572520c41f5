# pokedex/ingest.py
"""
Build the catalog document from the raw Pokémon CSV.

Run once, offline, before serving:

    python -m pokedex.ingest --csv pokemon.csv --images images --db db.json

Each CSV row is validated against ``RawPokemonRow``. Rows whose image
(``<images>/<lower-cased name>.png``) is missing are dropped without
consuming an id, so ids stay dense over the accepted rows. The result
replaces whatever the document held before.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NamedTuple, Optional, Sequence

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .catalog.schemas import Pokemon
from .catalog.store import CatalogStore, JsonCatalogStore
from .config import configure_logging, get_settings
from .errors import IngestionError, StorageError


logger = logging.getLogger(__name__)

IMAGE_EXTENSION = ".png"


class RawPokemonRow(BaseModel):
    """One row of ``pokemon.csv``; columns other than these are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(alias="Name", min_length=1)
    type1: str = Field(alias="Type1")
    type2: Optional[str] = Field(default=None, alias="Type2")

    @field_validator("type1")
    @classmethod
    def _primary_type_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Type1 must not be blank")
        return value

    @field_validator("type2", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value


class IngestionResult(NamedTuple):
    records: List[Pokemon]
    discarded: int


# ---------- read + validate the CSV ----------
def read_rows(csv_path: Path) -> List[RawPokemonRow]:
    """Read the raw CSV and validate every row.

    Parameters
    ----------
    csv_path : Path
        Location of ``pokemon.csv``. Every cell is read as a string and
        empty cells stay empty strings rather than becoming NaN.

    Returns
    -------
    List[RawPokemonRow]
        One validated row per CSV line, in file order.

    Raises
    ------
    IngestionError
        If the file cannot be opened or parsed, or any row is malformed.
    """
    try:
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    except FileNotFoundError as exc:
        raise IngestionError(f"CSV file not found: {csv_path}") from exc
    except OSError as exc:
        raise IngestionError(f"Unable to read {csv_path}: {exc}") from exc
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise IngestionError(f"Unable to parse {csv_path}: {exc}") from exc

    rows: List[RawPokemonRow] = []
    # Row numbers are reported 1-based, counting the header as line 1.
    for line_no, raw in enumerate(df.to_dict(orient="records"), start=2):
        try:
            rows.append(RawPokemonRow.model_validate(raw))
        except PydanticValidationError as exc:
            raise IngestionError(f"Malformed row at line {line_no} of {csv_path}: {exc}") from exc
    return rows


# ---------- rows -> catalog records ----------
def image_path_for(name: str, images_dir: Path) -> Path:
    return images_dir / f"{name.lower()}{IMAGE_EXTENSION}"


def transform_rows(rows: Sequence[RawPokemonRow], images_dir: Path) -> IngestionResult:
    """Turn validated rows into catalog records.

    Parameters
    ----------
    rows : Sequence[RawPokemonRow]
        Rows as returned by ``read_rows()``.
    images_dir : Path
        Directory holding ``<lower-cased name>.png`` files. Rows without
        a matching file are discarded and do not consume an id.

    Returns
    -------
    IngestionResult
        The accepted records, numbered from 1 in row order, and the
        number of discarded rows.
    """
    records: List[Pokemon] = []
    discarded = 0
    next_id = 1

    for row in rows:
        image_path = image_path_for(row.name, images_dir)
        if not image_path.is_file():
            logger.debug("No image for %s at %s, skipping", row.name, image_path)
            discarded += 1
            continue

        types = [t.lower() for t in (row.type1, row.type2) if t]
        records.append(
            Pokemon(id=next_id, name=row.name, types=types, url=str(image_path))
        )
        next_id += 1

    return IngestionResult(records=records, discarded=discarded)


# ---------- orchestrate ----------
def build_catalog(csv_path: Path, images_dir: Path, store: CatalogStore) -> IngestionResult:
    """Read, transform and persist the catalog, replacing any previous data."""
    rows = read_rows(csv_path)
    result = transform_rows(rows, images_dir)
    store.replace(result.records)
    logger.info(
        "Catalog rebuilt: %d pokemons kept, %d discarded without image",
        len(result.records),
        result.discarded,
    )
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Build db.json from the Pokémon CSV.")
    parser.add_argument("--csv", type=Path, default=settings.csv_path, help="raw CSV file")
    parser.add_argument("--images", type=Path, default=settings.images_dir, help="image directory")
    parser.add_argument("--db", type=Path, default=settings.db_path, help="catalog document to write")
    args = parser.parse_args(argv)

    configure_logging(settings)
    try:
        build_catalog(args.csv, args.images, JsonCatalogStore(args.db))
    except (IngestionError, StorageError) as exc:
        logger.error("Ingestion failed: %s", exc.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
