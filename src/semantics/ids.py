# src/semantics/ids.py
"""
Helpers for namespaced item / tag identifiers ("namespace:name").
"""

from __future__ import annotations

from typing import Tuple


VANILLA_NAMESPACE = "minecraft"
TAG_PREFIX = "#"
SEPARATOR = ":"


def split_id(identifier: str, default_namespace: str = VANILLA_NAMESPACE) -> Tuple[str, str]:
    """
    Split an identifier at the first ':' into (namespace, name).

    Identifiers without a namespace belong to `default_namespace`.
    """
    if SEPARATOR not in identifier:
        return default_namespace, identifier
    namespace, name = identifier.split(SEPARATOR, 1)
    return namespace, name


def namespace_of(identifier: str, default_namespace: str = VANILLA_NAMESPACE) -> str:
    return split_id(identifier, default_namespace)[0]


def is_tag_reference(value: str) -> bool:
    return value.startswith(TAG_PREFIX)


def strip_tag_prefix(value: str) -> str:
    return value[len(TAG_PREFIX):] if is_tag_reference(value) else value


def file_safe_id(identifier: str) -> str:
    """
    Turn "mod:oak_slab" into "mod__oak_slab" for use as a file name.
    """
    return identifier.replace(SEPARATOR, "__", 1)
