"""
Catalog store configuration loader (store backend, pagination, recommendations).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class StoreConfig(BaseModel):
    backend: Literal["auto", "memory", "file", "redis"] = "auto"
    redis_url_env: str = "REDIS_URL"
    key_prefix: str = "catalog:"
    data_dir: str = "data/store"


class PaginationConfig(BaseModel):
    default_limit: int = Field(default=20, ge=1, le=1000)


class RecommendationConfig(BaseModel):
    default_limit: int = Field(default=8, ge=1, le=100)
    price_tolerance: float = Field(default=0.3, ge=0.0, le=1.0)


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class CatalogConfig(BaseModel):
    store: StoreConfig = Field(default_factory=StoreConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    recommendations: RecommendationConfig = Field(default_factory=RecommendationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_catalog_config(config_path: Optional[Path] = None) -> CatalogConfig:
    """
    Load and validate the catalog configuration from a YAML file

    Args:
        config_path: Path to config file. Defaults to config/catalog_config.yml

    Returns:
        Validated CatalogConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config" / "catalog_config.yml"

    if not config_path.exists():
        raise FileNotFoundError(f"Catalog config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        cfg = CatalogConfig(**data)
        logger.info("Successfully loaded catalog config from %s", config_path)
        return cfg
    except ValidationError as e:
        logger.error("Catalog config validation failed: %s", e)
        raise
