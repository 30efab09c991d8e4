"""Copy-on-write updates of a :class:`DocumentRecord`.

Two update shapes exist:

* :func:`merge_record` replaces whole top-level values.
* :func:`set_field` replaces one string leaf addressed by a key path.

Neither raises for a bad key, path or index. They return an
:class:`UpdateResult` whose ``changed`` flag is ``False`` and whose ``record``
is the very object that was passed in.
"""

from __future__ import annotations

import logging
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, TypeAdapter

from .record import DocumentRecord, SkillLevel, coerce_skill_level

logger = logging.getLogger(__name__)

PathKey = Union[str, int]
FieldPath = Tuple[PathKey, ...]


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of an update: the resulting record and whether it is new."""

    record: DocumentRecord
    changed: bool
    reason: Optional[str] = None
    keys: Tuple[str, ...] = ()

    @classmethod
    def unchanged(cls, record: DocumentRecord, reason: str) -> "UpdateResult":
        return cls(record=record, changed=False, reason=reason)


# ---------------------------------------------------------------------------
# Path construction
# ---------------------------------------------------------------------------


def contact_path(key: str) -> FieldPath:
    return ("contactInfo", key)


def summary_path() -> FieldPath:
    return ("summary",)


def entry_path(section: str, index: int, key: str) -> FieldPath:
    return (section, index, key)


def item_path(section: str, index: int, list_key: str, item_index: int) -> FieldPath:
    return (section, index, list_key, item_index)


def heading_path(section: str) -> FieldPath:
    return ("headings", section)


def parse_path(dotted: str) -> FieldPath:
    """``"experiences.0.company"`` -> ``("experiences", 0, "company")``."""
    keys: list[PathKey] = []
    for part in dotted.strip().split("."):
        if not part:
            continue
        keys.append(int(part) if part.isdigit() else part)
    return tuple(keys)


def format_path(path: Sequence[PathKey]) -> str:
    return ".".join(str(key) for key in path)


# ---------------------------------------------------------------------------
# Shape check
# ---------------------------------------------------------------------------


def _unwrap_optional(annotation: Any) -> Any:
    if typing.get_origin(annotation) is Union:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def is_text_path(path: Sequence[PathKey]) -> bool:
    """Whether *path* addresses a string leaf in the record's declared shape.

    Only types are inspected, not current values, so a path can be valid here
    and still miss at runtime when an optional branch is absent.
    """
    if not path:
        return False
    annotation: Any = DocumentRecord
    for position, key in enumerate(path):
        annotation = _unwrap_optional(annotation)
        last = position == len(path) - 1
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            if not isinstance(key, str):
                return False
            name = annotation.resolve_key(key)  # type: ignore[attr-defined]
            if name is None:
                extra_allowed = annotation.model_config.get("extra") == "allow"
                return extra_allowed and last
            annotation = annotation.model_fields[name].annotation
        elif typing.get_origin(annotation) is tuple:
            if _as_index(key) is None:
                return False
            annotation = typing.get_args(annotation)[0]
        else:
            return False
    annotation = _unwrap_optional(annotation)
    return isinstance(annotation, type) and issubclass(annotation, str)


# ---------------------------------------------------------------------------
# set_field
# ---------------------------------------------------------------------------


class _Miss(Exception):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def _as_index(key: PathKey) -> Optional[int]:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and key.isdigit():
        return int(key)
    return None


def _child(node: Any, key: PathKey) -> Tuple[PathKey, Any]:
    if isinstance(node, BaseModel):
        if not isinstance(key, str):
            raise _Miss("absent")
        name = node.resolve_key(key)  # type: ignore[attr-defined]
        if name is None:
            extra = node.__pydantic_extra__ or {}
            if key in extra:
                return key, extra[key]
            raise _Miss("absent")
        child = getattr(node, name)
        if child is None:
            raise _Miss("absent")
        return name, child
    if isinstance(node, tuple):
        index = _as_index(key)
        if index is None or not 0 <= index < len(node):
            raise _Miss("absent")
        return index, node[index]
    raise _Miss("not-nested")


def get_value(record: DocumentRecord, path: Sequence[PathKey]) -> Any:
    """Value at *path*, or ``None`` when any key along it is missing."""
    node: Any = record
    try:
        for key in path:
            _, node = _child(node, key)
    except _Miss:
        return None
    return node


def _replace(node: Any, slot: PathKey, new_child: Any) -> Any:
    if isinstance(node, tuple):
        assert isinstance(slot, int)
        return node[:slot] + (new_child,) + node[slot + 1 :]
    return node.model_copy(update={slot: new_child})


def _assign(node: Any, keys: FieldPath, value: str) -> Any:
    slot, child = _child(node, keys[0])
    if len(keys) == 1:
        if not isinstance(child, str):
            raise _Miss("not-a-string")
        new_child: Any = coerce_skill_level(value) if isinstance(child, SkillLevel) else value
    else:
        if not isinstance(child, (BaseModel, tuple)):
            raise _Miss("not-nested")
        new_child = _assign(child, keys[1:], value)
    return _replace(node, slot, new_child)


def set_field(record: DocumentRecord, path: Sequence[PathKey], value: str) -> UpdateResult:
    """Replace the string leaf at *path* with *value*.

    Unchanged when any intermediate key is absent or not a nested object, or
    when the current leaf is not a string. Skill levels are coerced.
    """
    keys = tuple(path)
    if not keys:
        return UpdateResult.unchanged(record, "empty-path")
    if not isinstance(value, str):
        return UpdateResult.unchanged(record, "not-a-string")
    try:
        updated = _assign(record, keys, value)
    except _Miss as miss:
        logger.debug("set_field %s ignored: %s", format_path(keys), miss.reason)
        return UpdateResult.unchanged(record, miss.reason)
    top = DocumentRecord.resolve_key(str(keys[0])) or str(keys[0])
    return UpdateResult(record=updated, changed=True, keys=(top,))


# ---------------------------------------------------------------------------
# merge
# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def _field_adapter(name: str) -> TypeAdapter:
    return TypeAdapter(DocumentRecord.model_fields[name].annotation)


def validate_top_level(key: str, value: Any) -> Any:
    """Validate *value* as the type of top-level *key* (wire or attribute name).

    Raises ``KeyError`` for an unknown key and ``pydantic.ValidationError``
    for a value of the wrong shape.
    """
    name = DocumentRecord.resolve_key(key)
    if name is None:
        raise KeyError(key)
    return _field_adapter(name).validate_python(value)


def merge_record(record: DocumentRecord, partial: Mapping[str, Any]) -> UpdateResult:
    """Shallow-merge *partial* into *record* at the top level.

    Each key present fully replaces the prior value; all other top-level
    values are carried over by reference. An unknown key leaves the record
    untouched.
    """
    if not partial:
        return UpdateResult.unchanged(record, "empty-update")
    update: dict[str, Any] = {}
    for key, value in partial.items():
        name = DocumentRecord.resolve_key(key)
        if name is None:
            logger.debug("merge ignored: unknown key %r", key)
            return UpdateResult.unchanged(record, "unknown-key")
        update[name] = _field_adapter(name).validate_python(value)
    return UpdateResult(record=record.model_copy(update=update), changed=True, keys=tuple(update))
