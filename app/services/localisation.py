"""
app/services/localisation.py — Translation overlay for response objects
=======================================================================

Patches the default-language form of a response object with translated
field values at read time.

Which fields are translatable:
  A field is overlaid only if its stored name is in TRANSLATABLE_FIELDS, it
  holds text, and the object actually has it. For pydantic models the stored
  name is the camelCase alias (``fieldOfStudy``); the per-record-type
  accessor table OVERLAY_ACCESSORS maps it to the attribute
  (``field_of_study``). Plain dicts are read by key.

Fallback rules:
  - default language      → the very same object, no lookup at all
  - no id on the object   → unchanged, no lookup
  - field has no overlay  → original value kept (per field, not all-or-nothing)
  - empty current value   → never replaced
  - lookup/shape failure  → unchanged, error captured on the OverlayResult

The input object is never mutated; a patched copy is returned.
One lookup per object, never one per field.
"""

import logging
import types
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Iterable, Optional, Union, get_args, get_origin

from pydantic import BaseModel

from app import schemas

logger = logging.getLogger(__name__)

TRANSLATABLE_FIELDS = (
    "title", "description", "name", "position", "company",
    "location", "category", "institution", "degree", "fieldOfStudy",
)

# (record_type, record_id, language) -> {field_name: value}
Lookup = Callable[[str, int, str], dict]


@dataclass(frozen=True)
class FieldAccessor:
    key:  str   # field_name in the translations table
    attr: str   # attribute on the model

    def get(self, obj: BaseModel) -> Any:
        return getattr(obj, self.attr)


@dataclass
class OverlayResult:
    value:   Any
    applied: tuple[str, ...] = ()
    error:   Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_text(annotation) -> bool:
    if annotation is str:
        return True
    if get_origin(annotation) in (Union, types.UnionType):
        args = get_args(annotation)
        return str in args and all(a in (str, type(None)) for a in args)
    return False


@lru_cache(maxsize=None)
def accessors_for_model(model_cls: type[BaseModel]) -> tuple[FieldAccessor, ...]:
    """Translatable text fields of a model class, by their stored field name."""
    accessors = []
    for attr, info in model_cls.model_fields.items():
        key = info.alias or attr
        if key in TRANSLATABLE_FIELDS and _is_text(info.annotation):
            accessors.append(FieldAccessor(key=key, attr=attr))
    return tuple(accessors)


OVERLAY_ACCESSORS: dict[str, tuple[FieldAccessor, ...]] = {}
_OVERLAY_MODELS: dict[str, type[BaseModel]] = {}


def register_overlay_type(record_type: str, model_cls: type[BaseModel]) -> tuple[FieldAccessor, ...]:
    accessors = accessors_for_model(model_cls)
    OVERLAY_ACCESSORS[record_type] = accessors
    _OVERLAY_MODELS[record_type] = model_cls
    return accessors


register_overlay_type("About", schemas.About)
register_overlay_type("Project", schemas.Project)
register_overlay_type("Skill", schemas.Skill)
register_overlay_type("Experience", schemas.Experience)
register_overlay_type("Education", schemas.Education)
register_overlay_type("Language", schemas.Language)
register_overlay_type("Interest", schemas.Interest)


def _record_id(obj) -> Any:
    if isinstance(obj, dict):
        return obj.get("id")
    return getattr(obj, "id", None)


def _model_accessors(obj: BaseModel, record_type: str) -> tuple[FieldAccessor, ...]:
    registered = _OVERLAY_MODELS.get(record_type)
    if registered is not None and isinstance(obj, registered):
        return OVERLAY_ACCESSORS[record_type]
    return accessors_for_model(type(obj))


def _patch_model(obj: BaseModel, accessors: tuple[FieldAccessor, ...],
                 overlay: dict[str, str]) -> tuple[BaseModel, tuple[str, ...]]:
    updates = {}
    for acc in accessors:
        current = acc.get(obj)
        if isinstance(current, str) and current and acc.key in overlay:
            updates[acc.attr] = overlay[acc.key]
    if not updates:
        return obj, ()
    applied = tuple(acc.key for acc in accessors if acc.attr in updates)
    return obj.model_copy(update=updates), applied


def _patch_dict(obj: dict, overlay: dict[str, str]) -> tuple[dict, tuple[str, ...]]:
    updates = {
        key: overlay[key]
        for key in TRANSLATABLE_FIELDS
        if isinstance(obj.get(key), str) and obj[key] and key in overlay
    }
    if not updates:
        return obj, ()
    return {**obj, **updates}, tuple(updates)


class OverlayApplier:
    """
    Applies stored translations to response objects.

    `lookup` is the bulk read, typically ``db.translations.get_all_fields``
    bound to a connection.
    """

    def __init__(self, lookup: Lookup, default_language: str):
        self.lookup = lookup
        self.default_language = default_language.lower()

    def is_default(self, language: Optional[str]) -> bool:
        return not language or language.lower() == self.default_language

    def apply(self, obj, record_type: str, language: str) -> OverlayResult:
        if obj is None or self.is_default(language):
            return OverlayResult(obj)

        try:
            record_id = _record_id(obj)
            if record_id is None or isinstance(record_id, bool) or not isinstance(record_id, int):
                return OverlayResult(obj)

            accessors = ()
            if isinstance(obj, BaseModel):
                accessors = _model_accessors(obj, record_type)
                if not accessors:
                    return OverlayResult(obj)
            elif not isinstance(obj, dict):
                raise TypeError(f"cannot overlay fields on {type(obj).__name__}")

            overlay = self.lookup(record_type, record_id, language)
            if not overlay:
                return OverlayResult(obj)

            if isinstance(obj, BaseModel):
                patched, applied = _patch_model(obj, accessors, overlay)
            else:
                patched, applied = _patch_dict(obj, overlay)
            return OverlayResult(patched, applied)
        except Exception as e:
            return OverlayResult(obj, error=e)

    def apply_many(self, objs: Iterable, record_type: str, language: str) -> list[OverlayResult]:
        if self.is_default(language):
            return [OverlayResult(o) for o in objs]
        return [self.apply(o, record_type, language) for o in objs]

    def localise(self, obj, record_type: str, language: str):
        """Patched object, or the original when anything went wrong (logged)."""
        result = self.apply(obj, record_type, language)
        _log_failure(result, record_type, language)
        return result.value

    def localise_many(self, objs: Iterable, record_type: str, language: str) -> list:
        results = self.apply_many(objs, record_type, language)
        for result in results:
            _log_failure(result, record_type, language)
        return [r.value for r in results]


def _log_failure(result: OverlayResult, record_type: str, language: str):
    if result.error is not None:
        logger.warning(
            f"Translation overlay skipped for a {record_type} [{language}]: {result.error!r}"
        )
