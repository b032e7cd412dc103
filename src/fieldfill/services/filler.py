"""Filler: the field walker and its immutable configuration.

Usage::

    @dataclass
    class Settings:
        debug: bool = tagged("false", default=False)
        timeout: timedelta = tagged("1m30s", default=timedelta(0))
        env: str = tagged("envs|APP_ENV|dev,development|prod,production", default="")

    settings = Settings()
    apply_defaults(settings)

INVARIANT: a scalar field is written only while it holds the zero value of
its type. A caller-set value equal to the zero value is overwritten too.
Nested records and lists of records are always descended into, whether or
not the enclosing field carries an annotation.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import KW_ONLY, dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from fieldfill.domain.errors import FillError, LiteralError
from fieldfill.domain.kinds import TypeInfo, ValueKind, classify, is_record, is_zero
from fieldfill.domain.selectors import IMPLICIT_KEY
from fieldfill.infrastructure.overlay import layered_lookup
from fieldfill.services.result import FieldOutcome, FillReport, OutcomeStatus
from fieldfill.services.schema import DEFAULT_TAG, FieldDescriptor, slots
from fieldfill.services.strategies import (
    KIND_STRATEGIES,
    TYPE_STRATEGIES,
    Coercion,
    Strategy,
)

if TYPE_CHECKING:
    from fieldfill.config.settings import FieldfillSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Filler:
    """Immutable default-filling configuration plus the walker.

    Attributes:
        tag: Annotation key read from each field.
        strict: Raise :class:`FillError` after a pass that had failures.
        implicit_env_key: Selector key used when a selector names none.
        lookup: Key lookup for selectors; overlay then ``os.environ`` by default.
        clock: Source of "now" for offset placeholders.
        kind_strategies: Extra or replacement strategies by kind.
        type_strategies: Extra or replacement strategies by exact type;
            these win over kind strategies.
        namespace: Names used to resolve string type hints of dataclasses
            that are not importable from their module (local classes,
            ``TYPE_CHECKING``-only imports).
    """

    tag: str = DEFAULT_TAG
    _: KW_ONLY
    strict: bool = False
    implicit_env_key: str = IMPLICIT_KEY
    lookup: Callable[[str], str] = field(default_factory=layered_lookup, repr=False)
    clock: Callable[[], datetime] = field(default=datetime.now, repr=False)
    kind_strategies: Mapping[ValueKind, Strategy] = field(default_factory=dict, repr=False)
    type_strategies: Mapping[Any, Strategy] = field(default_factory=dict, repr=False)
    namespace: Mapping[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        merged_kinds = MappingProxyType({**KIND_STRATEGIES, **self.kind_strategies})
        merged_types = MappingProxyType({**TYPE_STRATEGIES, **self.type_strategies})
        object.__setattr__(self, "kind_strategies", merged_kinds)
        object.__setattr__(self, "type_strategies", merged_types)

    @classmethod
    def from_settings(cls, settings: FieldfillSettings, **kwargs: Any) -> Filler:
        return cls(
            settings.tag,
            strict=settings.strict,
            implicit_env_key=settings.implicit_env_key,
            **kwargs,
        )

    def strategy_for(self, info: TypeInfo) -> Strategy | None:
        """Exact-type override first, then the kind strategy."""
        override = self._type_override(info)
        if override is not None:
            return override
        return self.kind_strategies.get(info.kind)

    def _type_override(self, info: TypeInfo) -> Strategy | None:
        try:
            return self.type_strategies.get(info.exact)
        except TypeError:  # unhashable hint
            return None

    # --- public operations ---

    def resolve(self, annotation: str, hint: Any = str) -> Any:
        """Coerce one annotation string as if it defaulted a field of type *hint*.

        Raises:
            LiteralError: If the annotation does not parse.
            TypeError: If no strategy handles *hint*.
        """
        info = classify(hint)
        strategy = self.strategy_for(info)
        if strategy is None:
            msg = f"no default strategy for {hint!r}"
            raise TypeError(msg)
        return strategy(Coercion(filler=self, info=info, annotation=annotation))

    def fill(self, record: Any) -> FillReport:
        """Default every eligible field of *record* in place.

        Raises:
            TypeError: If *record* is not a dataclass or pydantic model instance.
            FillError: In strict mode, after the full pass, if any field failed.
        """
        if not is_record(record):
            msg = f"expected a dataclass or pydantic model instance, got {type(record)!r}"
            raise TypeError(msg)
        outcomes: list[FieldOutcome] = []
        self._walk(record, "", outcomes)
        report = FillReport(record=type(record).__qualname__, outcomes=outcomes)
        if self.strict and not report.ok:
            raise FillError(report)
        return report

    # --- walker ---

    def _walk(self, record: Any, prefix: str, outcomes: list[FieldOutcome]) -> None:
        for slot in slots(record, self.namespace):
            descriptor = slot.descriptor
            info = descriptor.info
            path = f"{prefix}{descriptor.name}"
            current = slot.get()

            if descriptor.unresolved is not None:
                error = f"unresolved type hint {descriptor.unresolved!r}"
                outcomes.append(_outcome(path, info, OutcomeStatus.ERROR, error=error))
                continue

            if self._type_override(info) is None:
                if info.kind is ValueKind.RECORD:
                    if is_record(current):
                        self._walk(current, f"{path}.", outcomes)
                    continue
                if info.is_record_sequence:
                    for index, item in enumerate(current or ()):
                        if is_record(item):
                            self._walk(item, f"{path}[{index}].", outcomes)
                    continue

            annotation = descriptor.annotation(self.tag)
            if annotation == "":
                continue
            if descriptor.read_only or not is_zero(info, current):
                outcomes.append(_outcome(path, info, OutcomeStatus.SKIPPED))
                continue
            outcomes.append(self._apply(slot.set, descriptor, path, annotation))

    def _apply(
        self,
        write: Callable[[Any], None],
        descriptor: FieldDescriptor,
        path: str,
        annotation: str,
    ) -> FieldOutcome:
        info = descriptor.info
        strategy = self.strategy_for(info)
        if strategy is None:
            return _outcome(path, info, OutcomeStatus.ERROR, error=f"no strategy for {info.kind}")
        try:
            value = strategy(Coercion(filler=self, info=info, annotation=annotation))
        except LiteralError as exc:
            logger.debug("Default for %s not applied: %s", path, exc)
            return _outcome(path, info, OutcomeStatus.ERROR, error=str(exc))
        write(value)
        return _outcome(path, info, OutcomeStatus.DEFAULTED, value=repr(value))


def _outcome(
    path: str,
    info: TypeInfo,
    status: OutcomeStatus,
    *,
    value: str | None = None,
    error: str | None = None,
) -> FieldOutcome:
    return FieldOutcome(path=path, kind=str(info.kind), status=status, value=value, error=error)


# --- process-wide fillers ---

_default_fillers: dict[str, Filler] = {}
_default_lock = threading.Lock()


def get_default_filler(tag: str | None = None) -> Filler:
    """Shared filler for *tag*, built once from :class:`FieldfillSettings`.

    Fillers are memoized per tag key, so asking for a different key never
    returns a filler configured for another one.
    """
    from fieldfill.config.settings import FieldfillSettings

    key = tag or DEFAULT_TAG
    filler = _default_fillers.get(key)
    if filler is not None:
        return filler
    with _default_lock:
        filler = _default_fillers.get(key)
        if filler is None:
            filler = Filler.from_settings(FieldfillSettings(tag=key))
            _default_fillers[key] = filler
            logger.debug("Built default filler for tag %r", key)
        return filler


def reset_default_fillers() -> None:
    """Forget memoized fillers (settings changes take effect on next use)."""
    with _default_lock:
        _default_fillers.clear()


def apply_defaults(record: Any, tag: str | None = None, *, filler: Filler | None = None) -> None:
    """Fill *record* in place using *filler*, or the shared filler for *tag*."""
    (filler or get_default_filler(tag)).fill(record)
