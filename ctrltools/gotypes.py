"""A small model of Go's type system, enough to plan deep-copy code."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union

from .errors import ErrList


class BasicKind(enum.Enum):
    """Kinds of predeclared Go types, valued by their spelling."""

    INVALID = "invalid type"
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINTPTR = "uintptr"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    STRING = "string"
    UNSAFE_POINTER = "unsafe.Pointer"


@dataclass(frozen=True)
class Basic:
    """A predeclared type. ``name`` spells aliases such as ``byte``."""

    kind: BasicKind
    name: Optional[str] = field(default=None, compare=False)

    def __str__(self) -> str:
        return type_string(self)


@dataclass(frozen=True)
class Pointer:
    """A pointer type ``*elem``."""

    elem: "GoType"

    def __str__(self) -> str:
        return type_string(self)


@dataclass(frozen=True)
class Slice:
    """A slice type ``[]elem``."""

    elem: "GoType"

    def __str__(self) -> str:
        return type_string(self)


@dataclass(frozen=True)
class Map:
    """A map type ``map[key]elem``."""

    key: "GoType"
    elem: "GoType"

    def __str__(self) -> str:
        return type_string(self)


@dataclass(frozen=True)
class Field:
    """A struct field; ``pos`` locates it for error reporting."""

    name: str
    type: "GoType"
    embedded: bool = False
    pos: int = 0


@dataclass(frozen=True)
class Struct:
    """A struct type with its fields in declaration order."""

    fields: tuple[Field, ...] = ()

    def __str__(self) -> str:
        return type_string(self)


@dataclass(frozen=True)
class Signature:
    """A method signature: receiver type, parameter types and result types."""

    recv: Optional["GoType"] = None
    params: tuple["GoType", ...] = ()
    results: tuple["GoType", ...] = ()

    def __str__(self) -> str:
        return type_string(self)


@dataclass(frozen=True)
class Method:
    """A method declared on a named type."""

    name: str
    signature: Signature


@dataclass(eq=False)
class GoPackage:
    """A Go package: its path, name, imports (by path) and collected errors."""

    path: str
    name: str
    imports: dict[str, "GoPackage"] = field(default_factory=dict)
    errors: list[Exception] = field(default_factory=list)

    def add_error(self, err: Exception) -> None:
        """Record an error, unrolling error lists into their members."""
        if isinstance(err, ErrList):
            for sub in err:
                self.add_error(sub)
            return
        self.errors.append(err)


class Named:
    """A declared type. Compared by identity, as Go compares named types."""

    def __init__(
        self,
        name: str,
        package: Optional[GoPackage] = None,
        definition: Optional["GoType"] = None,
    ) -> None:
        self.name = name
        self.package = package
        self.definition = definition
        self.methods: list[Method] = []

    def add_method(self, method: Method) -> Method:
        """Declare a method on this type."""
        if any(existing.name == method.name for existing in self.methods):
            raise ValueError(f"method {self.name}.{method.name} already declared")
        self.methods.append(method)
        return method

    def underlying(self) -> "GoType":
        """Return the unnamed type this type is ultimately defined as."""
        seen: set[int] = set()
        current: Optional[GoType] = self
        while isinstance(current, Named):
            if id(current) in seen:
                return Basic(BasicKind.INVALID)
            seen.add(id(current))
            current = current.definition
        if current is None:
            return Basic(BasicKind.INVALID)
        return current

    def __repr__(self) -> str:
        return f"Named({type_string(self)!r})"

    def __str__(self) -> str:
        return type_string(self)


GoType = Union[Basic, Named, Pointer, Slice, Map, Struct, Signature]


def lookup_method(type_info: GoType, name: str) -> Optional[Method]:
    """Find a method declared directly on a type or on the type a pointer names."""
    if isinstance(type_info, Pointer) and isinstance(type_info.elem, Named):
        type_info = type_info.elem
    if isinstance(type_info, Named):
        return next((m for m in type_info.methods if m.name == name), None)
    return None


def eventual_underlying_type(type_info: GoType) -> GoType:
    """Follow named types down to the final unnamed type."""
    if isinstance(type_info, Named):
        return type_info.underlying()
    return type_info


def type_string(type_info: GoType) -> str:
    """Spell a type the way Go's type printer does, with full package paths."""
    if isinstance(type_info, Basic):
        return type_info.name or type_info.kind.value
    if isinstance(type_info, Named):
        if type_info.package is None:
            return type_info.name
        return f"{type_info.package.path}.{type_info.name}"
    if isinstance(type_info, Pointer):
        return "*" + type_string(type_info.elem)
    if isinstance(type_info, Slice):
        return "[]" + type_string(type_info.elem)
    if isinstance(type_info, Map):
        return f"map[{type_string(type_info.key)}]{type_string(type_info.elem)}"
    if isinstance(type_info, Struct):
        parts = [
            type_string(f.type) if f.embedded else f"{f.name} {type_string(f.type)}"
            for f in type_info.fields
        ]
        return "struct{" + "; ".join(parts) + "}"
    if isinstance(type_info, Signature):
        params = ", ".join(type_string(p) for p in type_info.params)
        results = [type_string(r) for r in type_info.results]
        if not results:
            tail = ""
        elif len(results) == 1:
            tail = " " + results[0]
        else:
            tail = " (" + ", ".join(results) + ")"
        return f"func({params}){tail}"
    raise TypeError(f"not a Go type: {type_info!r}")