"""
Configuration for the seed import pipeline.
"""

from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class IngestionConfig:
    """
    Where the raw export is read from and where canonical records are written.
    """

    raw_path: Path = _DATA_DIR / "seed" / "recipes.json"
    processed_dir: Path = _DATA_DIR / "processed"
    processed_filename: str = "recipes.json"

    @property
    def processed_path(self) -> Path:
        return self.processed_dir / self.processed_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
