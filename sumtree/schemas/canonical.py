"""
Module 01 - Schemas & Canonicalization
File: canonical.py

Purpose: Deterministic JSON for wire models.

Two proofs for the same leaf of identically built trees serialize to
byte-identical JSON: keys sorted, no whitespace, unset fields dropped.
"""

import json
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def dumps_canonical(obj: BaseModel | dict[str, Any]) -> str:
    """
    Serialize a wire model (or its dumped dict) to canonical JSON.

    Raises:
        CanonicalizationException: If the data holds non-finite floats or
            values JSON cannot represent.

    Example:
        >>> dumps_canonical({"b": 2, "a": 1})
        '{"a":1,"b":2}'
    """
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json", exclude_none=True)

    try:
        return json.dumps(
            obj,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e
