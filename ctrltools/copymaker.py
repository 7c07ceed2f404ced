"""Emits DeepCopy, DeepCopyInto and DeepCopyObject methods for Go types."""

from __future__ import annotations

from dataclasses import dataclass, field

from .codewriter import CodeWriter, ImportsList, NamingInfo
from .copyrules import (
    fine_to_shallow_copy,
    has_any_deep_copy_method,
    has_deep_copy_into_method,
    has_deep_copy_method,
    passes_by_reference,
    result_will_be_pointer,
    use_ptr_receiver,
)
from .errors import err_from_node
from .gotypes import (
    Basic,
    BasicKind,
    GoPackage,
    GoType,
    Map,
    Named,
    Pointer,
    Slice,
    Struct,
    eventual_underlying_type,
    type_string,
)

_UNCOPYABLE_KINDS = (BasicKind.INVALID, BasicKind.UNSAFE_POINTER)

_RUNTIME_PATH = "k8s.io/apimachinery/pkg/runtime"

_PTR_DEEP_COPY = """
// DeepCopy is an autogenerated deepcopy function, copying the receiver, creating a new {name}.
func (in *{name}) DeepCopy() *{name} {{
\tif in == nil {{ return nil }}
\tout := new({name})
\tin.DeepCopyInto(out)
\treturn out
}}
"""

_BARE_DEEP_COPY = """
// DeepCopy is an autogenerated deepcopy function, copying the receiver, creating a new {name}.
func (in {name}) DeepCopy() {name} {{
\tif in == nil {{ return nil }}
\tout := new({name})
\tin.DeepCopyInto(out)
\treturn *out
}}
"""

_PTR_DEEP_COPY_OBJ = """
// DeepCopyObject is an autogenerated deepcopy function, copying the receiver, creating a new runtime.Object.
func (in *{name}) DeepCopyObject() {runtime}.Object {{
\tif c := in.DeepCopy(); c != nil {{
\t\treturn c
\t}}
\treturn nil
}}
"""

_BARE_DEEP_COPY_OBJ = """
// DeepCopyObject is an autogenerated deepcopy function, copying the receiver, creating a new runtime.Object.
func (in {name}) DeepCopyObject() {runtime}.Object {{
\treturn in.DeepCopy()
}}
"""


@dataclass
class CopyMethodMaker:
    """Writes deep-copy methods for types of one package into a CodeWriter."""

    pkg: GoPackage
    imports: ImportsList
    writer: CodeWriter = field(default_factory=CodeWriter)

    def _name(self, type_info: GoType) -> str:
        return NamingInfo(type_info).syntax(self.pkg, self.imports)

    def generate_methods_for(self, name: str, type_info: GoType, gen_object: bool) -> None:
        """Write the methods for a declared type that are not written by hand.

        ``gen_object`` asks for a DeepCopyObject method as well.
        """
        w = self.writer
        if isinstance(type_info, Basic) and type_info.kind is BasicKind.INVALID:
            self.pkg.add_error(ValueError(f"unknown type: {name}"))

        ptr_receiver = use_ptr_receiver(type_info)
        has_manual_into = has_deep_copy_into_method(self.pkg, type_info)
        has_manual_copy, copy_on_ptr = has_deep_copy_method(self.pkg, type_info)

        if not has_manual_into:
            w.line(
                "// DeepCopyInto is an autogenerated deepcopy function, copying the "
                "receiver, writing into out. in must be non-nil."
            )
            if ptr_receiver:
                w.line(f"func (in *{name}) DeepCopyInto(out *{name}) {{")
            else:
                w.line(f"func (in {name}) DeepCopyInto(out *{name}) {{")
                # an extra block lets `in` be redefined as a pointer
                w.line("{in := &in")

            if has_manual_copy:
                if copy_on_ptr:
                    w.line("clone := in.DeepCopy()")
                    w.line("*out = *clone")
                else:
                    w.line("*out = in.DeepCopy()")
            else:
                self._gen_deep_copy_into_block(NamingInfo(name_override=name), type_info)

            if not ptr_receiver:
                w.line("}")
            w.line("}")

        if not has_manual_copy:
            template = _PTR_DEEP_COPY if ptr_receiver else _BARE_DEEP_COPY
            w.line(template.format(name=name))
            if gen_object:
                runtime_alias = self.imports.need_import(_RUNTIME_PATH)
                template = _PTR_DEEP_COPY_OBJ if ptr_receiver else _BARE_DEEP_COPY_OBJ
                w.line(template.format(name=name, runtime=runtime_alias))

    def _gen_deep_copy_into_block(self, actual_name: NamingInfo, type_info: GoType) -> None:
        last = eventual_underlying_type(type_info)

        if not isinstance(last, Pointer) and has_any_deep_copy_method(self.pkg, type_info):
            self.writer.line("*out = in.DeepCopy()")
            return

        if isinstance(last, Basic):
            if last.kind in _UNCOPYABLE_KINDS:
                self.pkg.add_error(ValueError(f"invalid type: {type_string(last)}"))
                return
            has_method, _ = has_deep_copy_method(self.pkg, type_info)
            if has_method:
                self.writer.line("*out = in.DeepCopy()")
            self.writer.line("*out = *in")
        elif isinstance(last, Map):
            self._gen_map_deep_copy(actual_name, last)
        elif isinstance(last, Slice):
            self._gen_slice_deep_copy(actual_name, last)
        elif isinstance(last, Struct):
            self._gen_struct_deep_copy(last)
        elif isinstance(last, Pointer):
            self._gen_pointer_deep_copy(last)
        elif isinstance(last, Named):
            self.pkg.add_error(
                ValueError(
                    f"interface type {type_string(last)} encountered directly, invalid condition"
                )
            )
        else:
            self.pkg.add_error(ValueError(f"invalid type: {type_string(last)}"))

    def _gen_map_deep_copy(self, actual_name: NamingInfo, map_type: Map) -> None:
        if not fine_to_shallow_copy(map_type.key):
            self.pkg.add_error(
                ValueError(f"invalid map key type: {type_string(map_type.key)}")
            )
            return

        self.writer.line(
            f"*out = make({actual_name.syntax(self.pkg, self.imports)}, len(*in))"
        )
        with self.writer.block("for key, val := range *in"):
            self._map_value_copy(map_type.elem)

    def _map_value_copy(self, elem: GoType) -> None:
        w = self.writer
        has_copy, copy_on_ptr = has_deep_copy_method(self.pkg, elem)
        has_into = has_deep_copy_into_method(self.pkg, elem)

        if has_copy or has_into:
            field_is_ptr = isinstance(elem, Pointer)
            in_is_ptr = result_will_be_pointer(elem, has_copy, copy_on_ptr)
            if has_copy:
                in_is_ptr = copy_on_ptr
            if in_is_ptr == field_is_ptr:
                w.line("(*out)[key] = val.DeepCopy()")
            elif field_is_ptr:
                w.line("{")
                w.line("x := val.DeepCopy()")
                w.line("(*out)[key] = &x")
                w.line("}")
            else:
                w.line("(*out)[key] = *val.DeepCopy()")
            return

        if fine_to_shallow_copy(elem):
            w.line("(*out)[key] = val")
            return

        underlying_elem = eventual_underlying_type(elem)
        if passes_by_reference(underlying_elem):
            w.line(f"var outVal {self._name(underlying_elem)}")

            def copy_value() -> None:
                w.line("inVal := (*in)[key]")
                w.line("in, out := &inVal, &outVal")
                self._gen_deep_copy_into_block(NamingInfo(elem), elem)

            w.if_else("val == nil", lambda: w.line("(*out)[key] = nil"), copy_value)
            w.line("(*out)[key] = outVal")
            return

        if isinstance(underlying_elem, Struct):
            w.line("(*out)[key] = *val.DeepCopy()")
        else:
            self.pkg.add_error(
                ValueError(f"invalid map value type: {type_string(underlying_elem)}")
            )

    def _gen_slice_deep_copy(self, actual_name: NamingInfo, slice_type: Slice) -> None:
        w = self.writer
        elem = slice_type.elem
        underlying_elem = eventual_underlying_type(elem)

        w.line(f"*out = make({actual_name.syntax(self.pkg, self.imports)}, len(*in))")

        if has_any_deep_copy_method(self.pkg, elem):
            with w.block("for i := range *in"):
                w.line("(*in)[i].DeepCopyInto(&(*out)[i])")
        elif fine_to_shallow_copy(underlying_elem):
            w.line("copy(*out, *in)")
        else:
            with w.block("for i := range *in"):
                if passes_by_reference(underlying_elem):
                    with w.block("if (*in)[i] != nil"):
                        w.line("in, out := &(*in)[i], &(*out)[i]")
                        self._gen_deep_copy_into_block(NamingInfo(elem), elem)
                elif isinstance(underlying_elem, Struct):
                    w.line("(*in)[i].DeepCopyInto(&(*out)[i])")
                else:
                    self.pkg.add_error(
                        ValueError(
                            f"invalid slice element type: {type_string(underlying_elem)}"
                        )
                    )

    def _gen_struct_deep_copy(self, struct_type: Struct) -> None:
        w = self.writer
        w.line("*out = *in")

        for fld in struct_type.fields:
            name = fld.name
            has_copy, copy_on_ptr = has_deep_copy_method(self.pkg, fld.type)
            has_into = has_deep_copy_into_method(self.pkg, fld.type)
            if has_copy or has_into:
                field_is_ptr = isinstance(fld.type, Pointer)
                in_is_ptr = result_will_be_pointer(fld.type, has_copy, copy_on_ptr)
                if field_is_ptr:
                    with w.block(f"if in.{name} != nil"):
                        w.line(f"in, out := &in.{name}, &out.{name}")
                        self._gen_deep_copy_into_block(NamingInfo(fld.type), fld.type)
                elif in_is_ptr == field_is_ptr:
                    w.line(f"out.{name} = in.{name}.DeepCopy()")
                else:
                    w.line(f"in.{name}.DeepCopyInto(&out.{name})")
                continue

            underlying_field = eventual_underlying_type(fld.type)
            if passes_by_reference(underlying_field):
                with w.block(f"if in.{name} != nil"):
                    w.line(f"in, out := &in.{name}, &out.{name}")
                    self._gen_deep_copy_into_block(NamingInfo(fld.type), fld.type)
                continue

            if isinstance(underlying_field, Basic):
                if underlying_field.kind in _UNCOPYABLE_KINDS:
                    self.pkg.add_error(
                        err_from_node(
                            ValueError(
                                f"invalid field type: {type_string(underlying_field)}"
                            ),
                            fld,
                        )
                    )
                    return
            elif isinstance(underlying_field, Struct):
                if fine_to_shallow_copy(fld.type):
                    w.line(f"out.{name} = in.{name}")
                else:
                    w.line(f"in.{name}.DeepCopyInto(&out.{name})")
            else:
                self.pkg.add_error(
                    err_from_node(
                        ValueError(f"invalid field type: {type_string(underlying_field)}"),
                        fld,
                    )
                )
                return

    def _gen_pointer_deep_copy(self, pointer_type: Pointer) -> None:
        w = self.writer
        elem = pointer_type.elem
        underlying_elem = eventual_underlying_type(elem)

        has_copy, copy_on_ptr = has_deep_copy_method(self.pkg, elem)
        has_into = has_deep_copy_into_method(self.pkg, elem)
        if has_copy or has_into:
            out_needs_ptr = result_will_be_pointer(elem, has_copy, copy_on_ptr)
            if has_copy:
                out_needs_ptr = copy_on_ptr
            if out_needs_ptr:
                w.line("*out = (*in).DeepCopy()")
            else:
                w.line("x := (*in).DeepCopy()")
                w.line("*out = &x")
            return

        if fine_to_shallow_copy(underlying_elem):
            w.line(f"*out = new({self._name(elem)})")
            w.line("**out = **in")
            return

        if passes_by_reference(underlying_elem):
            w.line(f"*out = new({self._name(underlying_elem)})")
            with w.block("if **in != nil"):
                w.line("in, out := *in, *out")
                self._gen_deep_copy_into_block(
                    NamingInfo(underlying_elem), eventual_underlying_type(underlying_elem)
                )
            return

        if isinstance(underlying_elem, Struct):
            w.line(f"*out = new({self._name(elem)})")
            w.line("(*in).DeepCopyInto(*out)")
        else:
            self.pkg.add_error(
                ValueError(f"invalid pointer element type: {type_string(underlying_elem)}")
            )