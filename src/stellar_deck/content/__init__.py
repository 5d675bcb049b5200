"""Card catalog content and validation."""

from .catalog import DEFAULT_TEMPLATES, STARTER_DECK, CardCatalog, build_starter_collection, default_catalog
from .validators import CatalogValidator, TemplateValidator, ValidationError, ValidationResult

__all__ = [
    "CardCatalog",
    "DEFAULT_TEMPLATES",
    "STARTER_DECK",
    "default_catalog",
    "build_starter_collection",
    "CatalogValidator",
    "TemplateValidator",
    "ValidationError",
    "ValidationResult",
]
