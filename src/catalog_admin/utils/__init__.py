"""Utility helpers for catalog-admin."""

from catalog_admin.utils.coerce import as_bool, as_datetime, as_float, as_int, as_str, as_str_list
from catalog_admin.utils.keys import generate_asset_key, key_from_url, sanitize_filename

__all__ = [
    "as_bool",
    "as_datetime",
    "as_float",
    "as_int",
    "as_str",
    "as_str_list",
    "generate_asset_key",
    "key_from_url",
    "sanitize_filename",
]
