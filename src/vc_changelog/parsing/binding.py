"""
Binding of regular-expression capture groups to record fields.

Header, merge and revert patterns are configured together with an
ordered list of field names; capture group ``i`` is assigned to the
``i``-th name. A :class:`FieldBinding` resolves each name to a setter
once, when the parser is built, and then applies the setters to every
match.
"""

from __future__ import annotations

import re
from dataclasses import fields
from typing import Any, Callable, List, Sequence, Tuple, Type


Setter = Callable[[Any, str], None]


def _attribute_setter(name: str) -> Setter:
    def set_attribute(record: Any, value: str) -> None:
        setattr(record, name, value)

    return set_attribute


def _extra_setter(name: str) -> Setter:
    def set_extra(record: Any, value: str) -> None:
        record.extra[name] = value

    return set_extra


class FieldBinding:
    """Ordered capture-group-to-field assignment for one record type.

    Parameters
    ----------
    record_type : type
        Dataclass whose instances receive the captured values. Names that
        are declared ``str`` fields of the dataclass are set as attributes;
        any other name is stored in the record's ``extra`` mapping.
    names : Sequence[str]
        Field names in capture group order.
    """

    def __init__(self, record_type: Type[Any], names: Sequence[str]) -> None:
        declared = {f.name for f in fields(record_type) if f.type in ("str", str)}
        self.record_type = record_type
        self.names: Tuple[str, ...] = tuple(names)
        self._setters: List[Setter] = [
            _attribute_setter(name) if name in declared else _extra_setter(name)
            for name in self.names
        ]

    def apply(self, record: Any, match: re.Match) -> Any:
        """Assign the groups of ``match`` to ``record`` and return it.

        Unmatched optional groups are bound as empty strings. Names beyond
        the number of groups in the pattern are left untouched.
        """
        for setter, value in zip(self._setters, match.groups()):
            setter(record, value or "")
        return record
