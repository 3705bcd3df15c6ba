"""Identifier normalization.

Collaborators return references either as bare ids (``"42"``, ``42``) or as
embedded documents (``{"_id": "42", "fullName": ...}``). They are resolved
once at the data-access boundary so engine code only compares plain strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Ref:
    id: str


@dataclass(frozen=True)
class Embedded:
    id: str
    fields: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)


Reference = Union[Ref, Embedded]

_ID_KEYS = ("id", "_id")


def to_ref(value: Any) -> Reference:
    if isinstance(value, (Ref, Embedded)):
        return value
    if isinstance(value, Mapping):
        for key in _ID_KEYS:
            raw = value.get(key)
            if raw is not None and str(raw).strip():
                extra = {k: v for k, v in value.items() if k not in _ID_KEYS}
                return Embedded(id=str(raw).strip(), fields=extra)
        raise ValidationError("Embedded reference has no id")
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"Invalid identifier {value!r}")
    text = str(value).strip()
    if not text:
        raise ValidationError("Identifier is empty")
    return Ref(id=text)


def resolve_id(value: Any) -> str:
    """Return the plain string id for a bare or embedded reference."""
    return to_ref(value).id
