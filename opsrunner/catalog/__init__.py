from .schema import Category, DangerLevel, FieldSpec, FieldType, PathRule, ScriptDefinition
from .registry import Catalog, CatalogError, DEFAULT_CATALOG_PATH, get_catalog, load_catalog, parse_catalog

__all__ = [
    "Category", "DangerLevel", "FieldSpec", "FieldType", "PathRule", "ScriptDefinition",
    "Catalog", "CatalogError", "DEFAULT_CATALOG_PATH", "get_catalog", "load_catalog", "parse_catalog",
]
