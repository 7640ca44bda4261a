from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "recipes.json"


@dataclass(frozen=True)
class CatalogConfig:
    catalog_path: Path = Path(os.getenv("FLAVOR_FINDER_CATALOG", str(_DEFAULT_CATALOG)))
    placeholder_image: str = "/placeholder.svg"
    card_fallback_image: str = "/placeholder.svg?height=400&width=600&query=delicious food"
    hero_fallback_image: str = "/placeholder.svg?height=800&width=1200&query=delicious food"
    cache_ttl: int = 300


DEFAULT_CATALOG_CONFIG = CatalogConfig()
