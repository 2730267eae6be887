"""Deterministic node identifiers and content hashes."""

from __future__ import annotations

import json
import zlib
from typing import Final
from uuid import NAMESPACE_URL, uuid5

from cockpitgraph.domain.model.enums import ANY_LOCALE

TYPE_PREFIX: Final[str] = "Cockpit"
NODE_NAMESPACE: Final = uuid5(NAMESPACE_URL, "https://getcockpit.com/cockpitgraph/node")


def natural_key(record_id: str, locale: str = ANY_LOCALE) -> str:
    """Return ``record_id`` qualified by ``locale`` unless the locale is the wildcard."""

    if locale == ANY_LOCALE:
        return record_id
    return f"{record_id}_{locale}"


def node_id(type_name: str, record_id: str, locale: str = ANY_LOCALE) -> str:
    """Stable identifier for the node of ``type_name`` with the given natural key.

    Equal inputs give equal ids in every run, so a collection link can point at
    a record's node without that node having been created yet.
    """

    key = natural_key(record_id, locale)
    return str(uuid5(NODE_NAMESPACE, f"{TYPE_PREFIX}__{type_name}__{key}"))


def canonical_json(value: object) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def content_hash(value: object) -> str:
    """CRC-32 of the canonical JSON form, as 8 hex digits.

    Not collision resistant. Used only to collapse structurally equal layout
    blocks within one run.
    """

    return f"{zlib.crc32(canonical_json(value).encode('utf-8')):08x}"
