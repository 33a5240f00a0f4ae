from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "seed" / "recipes.json"


@dataclass(frozen=True)
class RecipeConfig:
    data_path: Path = Path(os.getenv("RECIPES_DATA_PATH", str(_SEED_PATH)))
    default_page_size: int = 12
    max_page_size: int = int(os.getenv("RECIPES_MAX_PAGE_SIZE", "100"))
    candidate_limit: int = 10  # recall cap for ingredient suggestions
    suggestion_limit: int = 6


DEFAULT_RECIPE_CONFIG = RecipeConfig()
