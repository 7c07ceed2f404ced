"""Documentation records for markers, and the ways of sorting and grouping them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class DetailedHelp:
    """A one-line summary and optional further details."""

    summary: str = ""
    details: str = ""


@dataclass
class Argument:
    """The type of a marker argument.

    ``type`` is one of string, bool, int, slice, any, raw or invalid; a slice
    carries the type of its items in ``item_type``.
    """

    type: str = ""
    optional: bool = False
    item_type: Optional["Argument"] = None

    def type_string(self) -> str:
        """Spell the argument type roughly as the matching Go type."""
        if self.type == "slice":
            if self.item_type is None:
                raise ValueError("slice argument has no item type")
            return "[]" + self.item_type.type_string()
        return self.type


@dataclass
class FieldHelp:
    """Documentation for one field of a marker."""

    name: str = ""
    argument: Argument = field(default_factory=Argument)
    help: DetailedHelp = field(default_factory=DetailedHelp)

    @property
    def optional(self) -> bool:
        return self.argument.optional

    @property
    def summary(self) -> str:
        return self.help.summary

    @property
    def details(self) -> str:
        return self.help.details

    def type_string(self) -> str:
        """Spell the field's argument type."""
        return self.argument.type_string()


@dataclass
class MarkerDoc:
    """Documentation for a marker: its name, target, help and fields.

    ``deprecated_in_favor_of`` is None for current markers; otherwise the
    marker is deprecated, and a non-empty value names its replacement.
    """

    name: str = ""
    target: str = ""
    help: DetailedHelp = field(default_factory=DetailedHelp)
    category: str = ""
    deprecated_in_favor_of: Optional[str] = None
    fields: list[FieldHelp] = field(default_factory=list)

    @property
    def summary(self) -> str:
        return self.help.summary

    @property
    def details(self) -> str:
        return self.help.details

    def empty(self) -> bool:
        """Tell whether the marker takes no arguments."""
        return not self.fields

    def anonymous_field(self) -> bool:
        """Tell whether the marker takes a single unnamed value."""
        return len(self.fields) == 1 and self.fields[0].name == ""


@dataclass
class CategoryDoc:
    """The documentation of all markers in one category."""

    category: str = ""
    markers: list[MarkerDoc] = field(default_factory=list)


class SortByCategory:
    """Sorts markers by name and groups them by their help category."""

    def less(self, i: str, j: str) -> bool:
        """Tell whether marker ``i`` sorts before marker ``j``."""
        return i < j

    def group(self, name: str, category: Optional[str]) -> str:
        """Return the group of a marker: its category, or "" without help."""
        return "" if category is None else category


def _gen_and_rule(name: str) -> tuple[str, str]:
    parts = name.split(":")
    if len(parts) == 1:
        return parts[0], ""
    if len(parts) == 2:
        # a default output rule
        return "", parts[1]
    if len(parts) == 3:
        return parts[1], parts[2]
    return "", ""


class OptionsSort:
    """Sorts and groups command-line options by the generator they belong to."""

    def less(self, i: str, j: str) -> bool:
        """Tell whether option ``i`` sorts before option ``j``."""
        i_gen, i_rule = _gen_and_rule(i)
        j_gen, j_rule = _gen_and_rule(j)
        if i_gen != j_gen:
            return i_gen > j_gen
        return i_rule < j_rule

    def group(self, name: str, category: Optional[str]) -> str:
        """Return the group of an option, judged by its name alone."""
        parts = name.split(":")
        if len(parts) == 1:
            return "generic" if parts[0] == "paths" else "generators"
        if len(parts) == 2:
            return "output rules (optionally as output:<generator>:...)"
        return ""