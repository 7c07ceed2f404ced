"""Rules deciding how values of a Go type are deep-copied."""

from __future__ import annotations

from typing import Optional

from .gotypes import (
    Basic,
    BasicKind,
    GoPackage,
    GoType,
    Map,
    Method,
    Named,
    Pointer,
    Slice,
    Struct,
    lookup_method,
)

_UNCOPYABLE_KINDS = (BasicKind.INVALID, BasicKind.UNSAFE_POINTER)


def _is_exported(name: str) -> bool:
    return name[:1].isupper()


def use_ptr_receiver(type_info: GoType) -> bool:
    """Tell whether generated methods need a pointer receiver.

    Types that already pass by reference (pointers, maps, slices) do not.
    """
    if isinstance(type_info, (Pointer, Map, Slice)):
        return False
    if isinstance(type_info, Named):
        return use_ptr_receiver(type_info.underlying())
    return True


def result_will_be_pointer(
    type_info: GoType, has_deep_copy: bool, deep_copy_on_ptr: bool
) -> bool:
    """Tell whether copying a value of this type yields a pointer."""
    if has_deep_copy:
        return deep_copy_on_ptr
    if isinstance(type_info, Pointer):
        return result_will_be_pointer(type_info.elem, False, False)
    if isinstance(type_info, (Map, Slice)):
        return False
    if isinstance(type_info, Named):
        return result_will_be_pointer(type_info.underlying(), False, False)
    return True


def should_be_copied(pkg: GoPackage, name: str, type_info: GoType) -> bool:
    """Tell whether deep-copy methods should be generated for a declared type.

    The type must be exported and either have a partial manual implementation,
    be defined as a non-basic type, or be a struct.
    """
    if not _is_exported(name):
        return False

    if isinstance(type_info, Basic) and type_info.kind is BasicKind.INVALID:
        pkg.add_error(ValueError(f"unknown type: {name}"))
        return False

    # a declared pointer type is treated as the pointer itself
    if isinstance(type_info, Named) and isinstance(type_info.underlying(), Pointer):
        type_info = type_info.underlying()

    last_type = type_info
    if isinstance(type_info, Named):
        if has_any_deep_copy_method(pkg, type_info):
            return True
        underlying = type_info.underlying()
        if has_any_deep_copy_method(pkg, underlying):
            return True
        if not isinstance(underlying, Basic):
            return True
        last_type = underlying

    return isinstance(last_type, Struct)


def _direct_method(type_info: GoType, name: str) -> Optional[Method]:
    method = lookup_method(type_info, name)
    if method is None or method.signature.recv is None:
        return None
    return method


def has_deep_copy_method(pkg: GoPackage, type_info: GoType) -> tuple[bool, bool]:
    """Return whether a usable manual DeepCopy exists, and whether its receiver is a pointer."""
    method = _direct_method(type_info, "DeepCopy")
    if method is None:
        return False, False

    sig = method.signature
    if sig.params or len(sig.results) != 1:
        return False, False

    recv = sig.recv
    result = sig.results[0]
    if isinstance(recv, Pointer):
        if not isinstance(result, Pointer):
            return False, False
        if recv.elem != result.elem:
            return False, False
        return True, True
    if result != recv:
        return False, False
    return True, False


def has_deep_copy_into_method(pkg: GoPackage, type_info: GoType) -> bool:
    """Tell whether a usable manual DeepCopyInto exists."""
    method = _direct_method(type_info, "DeepCopyInto")
    if method is None:
        return False

    sig = method.signature
    if len(sig.params) != 1:
        return False
    param = sig.params[0]
    if not isinstance(param, Pointer):
        return False
    if sig.results:
        return False

    recv = sig.recv
    if isinstance(recv, Pointer):
        return param.elem == recv.elem
    return recv == param.elem


def has_any_deep_copy_method(pkg: GoPackage, type_info: GoType) -> bool:
    """Tell whether either DeepCopy or DeepCopyInto is written by hand."""
    has_deep_copy, _ = has_deep_copy_method(pkg, type_info)
    return has_deep_copy or has_deep_copy_into_method(pkg, type_info)


def fine_to_shallow_copy(type_info: GoType) -> bool:
    """Tell whether a shallow copy of the type is already a deep copy."""
    if isinstance(type_info, Basic):
        return type_info.kind not in _UNCOPYABLE_KINDS
    if isinstance(type_info, Named):
        return fine_to_shallow_copy(type_info.underlying())
    if isinstance(type_info, Struct):
        return all(fine_to_shallow_copy(f.type) for f in type_info.fields)
    return False


def passes_by_reference(type_info: GoType) -> bool:
    """Tell whether values of the type are references (slice, map or pointer)."""
    return isinstance(type_info, (Slice, Map, Pointer))