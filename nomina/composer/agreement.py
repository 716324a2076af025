"""Agreement: derive a filter for one block from an earlier block's item.

Keeps composed fragments consistent, e.g. a title agreeing in gender with
the person it is attached to.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..core.models import AgreementConfig, CatalogItem, WhereClause

logger = logging.getLogger(__name__)


def get_nested_value(data: Any, path: str | None) -> Any:
    """Read a dotted path (``"de.gender"``) out of nested dicts."""
    if not data or not path:
        return None
    current = data
    for key in path.split("."):
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return None
    return current


def derive_filter(
    config: AgreementConfig, parts: Mapping[str, CatalogItem]
) -> WhereClause:
    """Build the where clause implied by ``config`` for the current parts.

    A missing source alias logs a warning and yields an empty clause;
    whether that leads to a failure is up to the block's fallback policy.
    """
    source = parts.get(config.ref)
    if source is None:
        logger.warning("Agreement reference '%s' not found in parts", config.ref)
        return WhereClause()

    tags: list[str] = []
    kinds: list[str] | None = None

    for feature in config.features:
        if feature.source == "tags":
            required = set(feature.require_all_of)
            tags.extend(t for t in source.tags if t in required)

        elif feature.source == "gram":
            value = get_nested_value(source.gram, feature.path)
            if value is not None and feature.map_to_tags:
                mapped = feature.map_to_tags.get(str(value))
                if mapped:
                    tags.append(mapped)

        elif feature.source == "kinds":
            wanted = set(feature.any_of)
            matched = [k for k in dict.fromkeys(source.kinds) if k in wanted]
            if matched:
                kinds = matched

    return WhereClause(tags=tags or None, kinds=kinds)
