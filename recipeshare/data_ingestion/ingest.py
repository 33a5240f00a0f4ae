from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

import pandas as pd

from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)


CANONICAL_COLUMNS: List[str] = [
    "id",
    "title",
    "description",
    "ingredients",
    "instructions",
    "prepTime",
    "cookTime",
    "servings",
    "difficulty",
    "cuisine",
    "tags",
    "author",
    "likes",
    "views",
    "isPublished",
    "createdAt",
]


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and pd.isna(value))


def _unwrap(value: Any) -> Any:
    """Strip document-store export wrappers such as ``{"$oid": ...}`` and ``{"$date": ...}``."""
    if isinstance(value, dict):
        if "$oid" in value:
            return value["$oid"]
        if "$date" in value:
            inner = value["$date"]
            if isinstance(inner, dict) and "$numberLong" in inner:
                return pd.Timestamp(int(inner["$numberLong"]), unit="ms", tz="UTC").isoformat()
            return inner
    return value


def _column(df: pd.DataFrame, name: str, default: Any = None) -> pd.Series:
    if name in df.columns:
        return df[name]
    return pd.Series([default] * len(df), index=df.index, dtype=object)


def _clean_text(value: Any) -> str:
    return "" if _is_missing(value) else str(value).strip()


def _normalize_ingredients(value: Any) -> list[dict[str, str]]:
    if not isinstance(value, list):
        return []
    out: list[dict[str, str]] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        name = _clean_text(item.get("name"))
        if not name:
            continue
        out.append({
            "name": name,
            "amount": _clean_text(item.get("amount")),
            "unit": _clean_text(item.get("unit")),
        })
    return out


def _normalize_tags(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    seen: list[str] = []
    for tag in value:
        t = _clean_text(tag).lower()
        if t and t not in seen:
            seen.append(t)
    return seen


def _normalize_difficulty(value: Any) -> str:
    text = _clean_text(value)
    return text.capitalize() if text else "Easy"


def _to_minutes(series: pd.Series) -> pd.Series:
    return pd.to_numeric(series.apply(_unwrap), errors="coerce").round().astype("Int64")


def normalize_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Map raw recipe documents into the canonical column layout.

    Missing optional fields get their defaults; required numeric fields stay
    null so that model validation rejects the row downstream.
    """
    canonical = pd.DataFrame(index=df.index)

    id_col = "_id" if "_id" in df.columns else "id"
    canonical["id"] = _column(df, id_col).apply(
        lambda v: None if _is_missing(v) else str(_unwrap(v))
    )

    canonical["title"] = _column(df, "title").apply(_clean_text)
    canonical["description"] = _column(df, "description").apply(_clean_text)
    canonical["ingredients"] = _column(df, "ingredients").apply(_normalize_ingredients)
    canonical["instructions"] = _column(df, "instructions").apply(_clean_text)

    canonical["prepTime"] = _to_minutes(_column(df, "prepTime"))
    canonical["cookTime"] = _to_minutes(_column(df, "cookTime"))
    canonical["servings"] = _to_minutes(_column(df, "servings")).fillna(1)

    canonical["difficulty"] = _column(df, "difficulty").apply(_normalize_difficulty)
    canonical["cuisine"] = _column(df, "cuisine").apply(_clean_text)
    canonical["tags"] = _column(df, "tags").apply(_normalize_tags)

    canonical["author"] = _column(df, "author").apply(
        lambda v: None if _is_missing(v) else str(_unwrap(v))
    )
    canonical["likes"] = _column(df, "likes").apply(
        lambda v: [str(_unwrap(x)) for x in v] if isinstance(v, list) else []
    )
    canonical["views"] = (
        pd.to_numeric(_column(df, "views"), errors="coerce").fillna(0).astype(int)
    )
    canonical["isPublished"] = _column(df, "isPublished").apply(
        lambda v: True if _is_missing(v) else bool(v)
    )

    created = pd.to_datetime(
        _column(df, "createdAt").apply(_unwrap), utc=True, errors="coerce", format="ISO8601"
    )
    canonical["createdAt"] = created.apply(lambda ts: None if pd.isna(ts) else ts.isoformat())

    return canonical[CANONICAL_COLUMNS]


def load_recipe_frame(path: Path) -> pd.DataFrame:
    """Read a JSON array of recipe documents and return canonical records."""
    raw = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    return normalize_frame(raw)


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the seed import pipeline.

    Steps:
    - Read the raw recipe export.
    - Map documents into the canonical Recipe layout.
    - Persist cleaned records as JSON for the API to load.
    """
    config.processed_dir.mkdir(parents=True, exist_ok=True)

    canonical = load_recipe_frame(config.raw_path)

    output_path = config.processed_path
    canonical.to_json(output_path, orient="records", indent=2, force_ascii=False)
    logger.info("Wrote %d canonical recipes to %s", len(canonical), output_path)
    return output_path


if __name__ == "__main__":
    path = run_ingestion()
    print(f"Ingestion complete. Processed data saved to: {path}")
