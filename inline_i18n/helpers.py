"""Helpers for nested translation dictionaries."""

from __future__ import annotations

from inline_i18n.types import Dictionary, DictionaryValue


def get_deep_value(obj: Dictionary | None, key: str) -> DictionaryValue | None:
    """
    Get a value from a nested dictionary using dot notation.

    Args:
        obj: Nested dictionary
        key: Dot-separated key path (``"greeting.hello"``)

    Returns:
        The value found, or None
    """
    current: DictionaryValue | None = obj
    for part in key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def merge_deep(target: Dictionary | None, source: Dictionary) -> Dictionary:
    """
    Merge ``source`` into a copy of ``target``, recursing into nested dictionaries.

    Args:
        target: Base dictionary, left untouched
        source: Dictionary whose values win

    Returns:
        The merged dictionary
    """
    merged: Dictionary = dict(target or {})
    for key, value in source.items():
        existing = merged.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            merged[key] = merge_deep(existing, value)
        else:
            merged[key] = value
    return merged
