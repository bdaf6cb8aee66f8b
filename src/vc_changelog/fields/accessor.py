"""
Dotted field-path resolution and value comparison.

Configuration refers to record fields by name (``"scope"``,
``"author.date"``, ``"hash.short"``). Each path is compiled once into an
accessor function; the :class:`AccessorTable` keeps the compiled
accessors for every path named in the configuration so that filtering
and sorting never parse a path string per record.

Resolution walks dataclass attributes and mappings. A record exposing an
``extra`` mapping (values bound from capture groups that the record does
not declare) is searched as a fallback, so ``"ticket"`` resolves to
``commit.extra["ticket"]`` when ``Commit`` has no ``ticket`` attribute.
"""

from __future__ import annotations

import logging
import operator
from dataclasses import fields, is_dataclass
from datetime import datetime
from numbers import Real
from typing import Any, Callable, Dict, Iterable, Mapping, Tuple


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


Accessor = Callable[[Any], Tuple[Any, bool]]

_MISSING = object()

_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
    "==": operator.eq,
    "!=": operator.ne,
}


class TypeMismatchError(Exception):
    """Raised when two values cannot be compared with each other."""

    pass


def _getter(cls: type, name: str) -> Callable[[Any], Any]:
    """Build the lookup of field ``name`` for instances of ``cls``."""
    if issubclass(cls, Mapping):
        return lambda obj: obj.get(name, _MISSING)
    if is_dataclass(cls):
        if name in {f.name for f in fields(cls)}:
            return operator.attrgetter(name)

        def from_extra(obj: Any) -> Any:
            extra = getattr(obj, "extra", None)
            if isinstance(extra, Mapping):
                return extra.get(name, _MISSING)
            return _MISSING

        return from_extra
    return lambda obj: _MISSING


def compile_path(path: str) -> Accessor:
    """Compile a dotted ``path`` into an accessor function.

    The returned function takes a record and returns ``(value, True)``
    when every segment resolves, or ``(None, False)`` when a segment is
    absent, an intermediate value is ``None``, or a value along the way is
    not a record or mapping. Matching is case-sensitive. The lookup for
    each segment is built once per record type and reused.
    """
    segments = tuple(path.split("."))
    getters: Tuple[Dict[type, Callable[[Any], Any]], ...] = tuple({} for _ in segments)

    def access(record: Any) -> Tuple[Any, bool]:
        current = record
        for segment, cache in zip(segments, getters):
            cls = type(current)
            getter = cache.get(cls)
            if getter is None:
                getter = cache[cls] = _getter(cls, segment)
            current = getter(current)
            if current is _MISSING:
                return None, False
        return current, True

    return access


def resolve(record: Any, path: str) -> Tuple[Any, bool]:
    """Resolve ``path`` against ``record`` without caching the accessor."""
    return compile_path(path)(record)


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "unsupported"
    if isinstance(value, str):
        return "str"
    if isinstance(value, Real):
        return "number"
    if isinstance(value, datetime):
        return "datetime"
    return "unsupported"


def compare(a: Any, op: str, b: Any) -> bool:
    """Compare ``a`` and ``b`` with the relational operator ``op``.

    Strings compare lexicographically, numbers numerically and datetimes
    chronologically. Both values must be of the same kind.

    Raises
    ------
    TypeMismatchError
        If the kinds differ, are unsupported, or ``op`` is unknown.
    """
    kind_a, kind_b = _kind(a), _kind(b)
    if kind_a == "unsupported" or kind_a != kind_b:
        raise TypeMismatchError(
            f"cannot compare {type(a).__name__} with {type(b).__name__}"
        )
    func = _OPERATORS.get(op)
    if func is None:
        raise TypeMismatchError(f"unsupported operator {op!r}")
    try:
        return func(a, b)
    except TypeError as exc:
        # naive and aware datetimes
        raise TypeMismatchError(str(exc)) from exc


class AccessorTable:
    """Compiled accessors keyed by their configured path string."""

    def __init__(self) -> None:
        self._accessors: Dict[str, Accessor] = {}

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> "AccessorTable":
        table = cls()
        for path in paths:
            table.add(path)
        return table

    def add(self, path: str) -> Accessor:
        accessor = self._accessors.get(path)
        if accessor is None:
            accessor = compile_path(path)
            self._accessors[path] = accessor
            logger.debug("Compiled field accessor for path %r", path)
        return accessor

    def __contains__(self, path: object) -> bool:
        return path in self._accessors

    def get(self, record: Any, path: str) -> Tuple[Any, bool]:
        """Resolve ``path`` on ``record``, compiling it on first use."""
        return self.add(path)(record)

    def less(self, a: Any, b: Any, path: str) -> bool:
        """Return True if ``a`` sorts strictly before ``b`` on ``path``.

        Resolution failures and type mismatches on either side count as
        "not less".
        """
        left, ok = self.get(a, path)
        if not ok:
            return False
        right, ok = self.get(b, path)
        if not ok:
            return False
        try:
            return compare(left, "<", right)
        except TypeMismatchError:
            return False
