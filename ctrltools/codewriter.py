"""Helpers for emitting Go source: lines and blocks, imports, and type names."""

from __future__ import annotations

import json
import unicodedata
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from .errors import non_vendor_path
from .gotypes import Basic, GoPackage, GoType, Map, Named, Pointer, Slice, type_string

_VENDOR = "/vendor/"


class CodeWriter:
    """Accumulates lines of Go code."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def line(self, text: str) -> None:
        """Write one line."""
        self._parts.append(text + "\n")

    @contextmanager
    def block(self, header: str) -> Iterator["CodeWriter"]:
        """Write ``header {``, the body written inside the ``with``, then ``}``."""
        self.line(header + " {")
        yield self
        self.line("}")

    def if_else(
        self,
        setup: str,
        if_block: Callable[[], None],
        else_block: Callable[[], None],
    ) -> None:
        """Write an if/else statement whose bodies come from the two callables."""
        self.line(f"if {setup} {{")
        if_block()
        self.line("} else {")
        else_block()
        self.line("}")

    def getvalue(self) -> str:
        """Return everything written so far."""
        return "".join(self._parts)


def _split_path(path: str) -> tuple[str, str]:
    """Split after the final slash; the directory keeps its trailing slash."""
    index = path.rfind("/")
    return path[: index + 1], path[index + 1 :]


def _is_digit(char: str) -> bool:
    return unicodedata.category(char) == "Nd"


def _identifier_char(char: str) -> str:
    if char.isalpha() or _is_digit(char) or char == "_":
        return char
    return "_"


@dataclass
class ImportsList:
    """Tracks needed imports and gives each a unique alias."""

    pkg: GoPackage
    by_path: dict[str, str] = field(default_factory=dict)
    by_alias: dict[str, str] = field(default_factory=dict)

    def need_import(self, import_path: str) -> str:
        """Mark a package as imported and return the alias to reference it by."""
        index = import_path.rfind(_VENDOR)
        if index != -1:
            import_path = import_path[index + len(_VENDOR) :]

        if import_path in self.by_path:
            return self.by_path[import_path]

        rest_path, next_word = _split_path(import_path)
        alias = ""
        other_path, exists = "", True
        while exists and other_path != import_path:
            if not rest_path:
                alias += "x"
            next_word = next_word.lstrip("".join(c for c in next_word if _is_digit(c)))
            next_word = "".join(_identifier_char(c) for c in next_word)
            alias = next_word + alias
            if rest_path:
                rest_path, next_word = _split_path(rest_path[:-1])
            exists = alias in self.by_alias
            other_path = self.by_alias.get(alias, "")

        self.by_path[import_path] = alias
        self.by_alias[alias] = import_path
        return alias

    def import_specs(self) -> list[str]:
        """Return each import spec, with the alias only where it differs from the name."""
        specs = []
        for import_path, alias in self.by_path.items():
            quoted = json.dumps(import_path, ensure_ascii=False)
            imported = self.pkg.imports.get(import_path)
            if imported is not None and imported.name == alias:
                specs.append(quoted)
            else:
                specs.append(f"{alias} {quoted}")
        return specs


@dataclass
class NamingInfo:
    """How to spell a type (or an overriding name) in generated code."""

    type_info: Optional[GoType] = None
    name_override: str = ""

    def syntax(self, base_pkg: GoPackage, imports: ImportsList) -> str:
        """Spell the type, registering any import it needs."""
        if self.name_override:
            return self.name_override

        type_info = self.type_info
        if isinstance(type_info, Named):
            other_pkg = type_info.package
            if other_pkg is None or other_pkg is base_pkg:
                return type_info.name
            alias = imports.need_import(non_vendor_path(other_pkg.path))
            return f"{alias}.{type_info.name}"
        if isinstance(type_info, Basic):
            return type_string(type_info)
        if isinstance(type_info, Pointer):
            return "*" + NamingInfo(type_info.elem).syntax(base_pkg, imports)
        if isinstance(type_info, Slice):
            return "[]" + NamingInfo(type_info.elem).syntax(base_pkg, imports)
        if isinstance(type_info, Map):
            key = NamingInfo(type_info.key).syntax(base_pkg, imports)
            elem = NamingInfo(type_info.elem).syntax(base_pkg, imports)
            return f"map[{key}]{elem}"
        spelled = type_string(type_info) if type_info is not None else "<nil>"
        base_pkg.add_error(ValueError(f"name requested for invalid type: {spelled}"))
        return spelled