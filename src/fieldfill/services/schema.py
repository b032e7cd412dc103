"""Record introspection: field descriptors and per-instance slots.

A record is a dataclass or a pydantic model. Annotations can be attached
three ways::

    @dataclass
    class Server:
        host: str = field(default="", metadata={"default": "localhost"})
        port: int = tagged("8080", default=0)
        mode: Annotated[str, Tags(default="envs|MODE|dev,debug|prod,info")] = ""

    class Client(BaseModel):
        timeout: timedelta = Field(timedelta(0), json_schema_extra={"default": "30s"})

Schemas are derived once per record type (and caller namespace) and cached;
values are always read live through :class:`FieldSlot`.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import logging
import sys
import typing
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from fieldfill.domain.kinds import TypeInfo, classify, is_record_type

logger = logging.getLogger(__name__)

DEFAULT_TAG = "default"


class Tags(Mapping[str, str]):
    """``Annotated`` marker carrying annotation strings by tag key."""

    def __init__(self, **tags: str) -> None:
        self._tags = dict(tags)

    def __getitem__(self, key: str) -> str:
        return self._tags[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._tags.items())
        return f"Tags({inner})"


def tagged(value: str, *, key: str = DEFAULT_TAG, **field_kwargs: Any) -> Any:
    """Dataclass ``field()`` carrying *value* under *key* in its metadata.

    Without ``default``/``default_factory`` the field defaults to ``None``,
    which is the zero value of every kind.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[key] = value
    if "default" not in field_kwargs and "default_factory" not in field_kwargs:
        field_kwargs["default"] = None
    return dataclasses.field(metadata=metadata, **field_kwargs)


@dataclass(frozen=True)
class FieldDescriptor:
    """One declared field: its name, annotations by tag key, and type."""
    name: str
    info: TypeInfo
    tags: Mapping[str, str]
    # Name a string type hint failed on; the field is then classified opaque.
    unresolved: str | None = None
    # Field of a frozen record: read and descended into, never written.
    read_only: bool = False

    def annotation(self, tag: str) -> str:
        return self.tags.get(tag, "")


@dataclass(frozen=True)
class RecordSchema:
    record_type: type
    fields: tuple[FieldDescriptor, ...]


@dataclass(frozen=True)
class FieldSlot:
    """Read/write accessor for one field of one record instance."""

    record: Any
    descriptor: FieldDescriptor

    def get(self) -> Any:
        return getattr(self.record, self.descriptor.name)

    def set(self, value: Any) -> None:
        setattr(self.record, self.descriptor.name, value)


def _string_items(source: Mapping[Any, Any] | None) -> dict[str, str]:
    if not source:
        return {}
    return {k: v for k, v in source.items() if isinstance(k, str) and isinstance(v, str)}


def _annotated_tags(hint: Any) -> dict[str, str]:
    tags: dict[str, str] = {}
    if typing.get_origin(hint) is typing.Annotated:
        for extra in hint.__metadata__:
            if isinstance(extra, Tags):
                tags.update(extra)
    return tags


def _owner_globals(record_type: type, name: str) -> dict[str, Any]:
    """Globals of the module whose class declared field *name*."""
    for base in record_type.__mro__:
        if name in inspect.get_annotations(base):
            module = sys.modules.get(base.__module__)
            return vars(module) if module is not None else {}
    return {}


def _resolve_field(
    record_type: type, f: dataclasses.Field[Any], localns: dict[str, Any]
) -> tuple[Any, str | None]:
    """Evaluate one string hint; return ``(hint, unresolved_name)``."""
    if not isinstance(f.type, str):
        return f.type, None
    try:
        return eval(f.type, _owner_globals(record_type, f.name), localns), None  # noqa: S307
    except (NameError, AttributeError) as exc:
        return f.type, getattr(exc, "name", None) or f.type


def _describe_dataclass(
    record_type: type, namespace: Mapping[str, Any]
) -> tuple[FieldDescriptor, ...]:
    localns = {record_type.__name__: record_type, **namespace}
    hints: dict[str, Any] | None
    try:
        hints = typing.get_type_hints(record_type, localns=localns, include_extras=True)
    except (NameError, AttributeError):
        logger.debug("Resolving %s hints field by field", record_type.__qualname__, exc_info=True)
        hints = None

    read_only = record_type.__dataclass_params__.frozen  # type: ignore[attr-defined]
    descriptors = []
    for f in dataclasses.fields(record_type):
        if hints is not None:
            hint, unresolved = hints.get(f.name, f.type), None
        else:
            hint, unresolved = _resolve_field(record_type, f, localns)
        tags = _string_items(f.metadata)
        tags.update(_annotated_tags(hint))
        descriptors.append(
            FieldDescriptor(
                name=f.name,
                info=classify(hint),
                tags=MappingProxyType(tags),
                unresolved=unresolved,
                read_only=read_only,
            )
        )
    return tuple(descriptors)


def _describe_model(record_type: type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    model_frozen = bool(record_type.model_config.get("frozen"))
    descriptors = []
    for name, info in record_type.model_fields.items():
        extra = info.json_schema_extra
        tags = _string_items(extra if isinstance(extra, Mapping) else None)
        for item in info.metadata:
            if isinstance(item, Tags):
                tags.update(item)
        descriptors.append(
            FieldDescriptor(
                name=name,
                info=classify(info.annotation),
                tags=MappingProxyType(tags),
                read_only=model_frozen or bool(info.frozen),
            )
        )
    return tuple(descriptors)


@functools.cache
def _describe(record_type: type, names: tuple[tuple[str, Any], ...]) -> RecordSchema:
    if not is_record_type(record_type):
        msg = f"{record_type!r} is not a dataclass or pydantic model"
        raise TypeError(msg)
    if issubclass(record_type, BaseModel):
        fields = _describe_model(record_type)
    else:
        fields = _describe_dataclass(record_type, dict(names))
    return RecordSchema(record_type=record_type, fields=fields)


def describe(record_type: type, namespace: Mapping[str, Any] | None = None) -> RecordSchema:
    """Build (once per type and namespace) the field descriptors of a record type.

    Dataclass string hints are evaluated in the declaring module, with the
    record's own name and *namespace* as locals. A hint that still does not
    resolve only affects its own field (see ``FieldDescriptor.unresolved``).
    Pydantic models resolve their hints themselves.

    Raises:
        TypeError: If *record_type* is neither a dataclass nor a pydantic model.
    """
    names = tuple(sorted((namespace or {}).items()))
    try:
        hash(names)
    except TypeError:
        return _describe.__wrapped__(record_type, names)
    return _describe(record_type, names)


def slots(record: Any, namespace: Mapping[str, Any] | None = None) -> list[FieldSlot]:
    """One slot per declared field of *record*, in declaration order."""
    schema = describe(type(record), namespace)
    return [FieldSlot(record=record, descriptor=d) for d in schema.fields]
