import pytest

from ctrltools.copyrules import (
    fine_to_shallow_copy,
    has_any_deep_copy_method,
    has_deep_copy_into_method,
    has_deep_copy_method,
    passes_by_reference,
    result_will_be_pointer,
    should_be_copied,
    use_ptr_receiver,
)
from ctrltools.gotypes import (
    Basic,
    BasicKind,
    Field,
    GoPackage,
    Map,
    Method,
    Named,
    Pointer,
    Signature,
    Slice,
    Struct,
)

STRING = Basic(BasicKind.STRING)
INT = Basic(BasicKind.INT)


@pytest.fixture
def pkg():
    return GoPackage("testdata.kubebuilder.io/cronjob", "cronjob")


def _struct(pkg, name):
    return Named(name, pkg, Struct())


def _deep_copy(named, recv, results, params=()):
    named.add_method(Method("DeepCopy", Signature(recv=recv, params=params, results=results)))
    return named


def _deep_copy_into(named, recv, params, results=()):
    named.add_method(
        Method("DeepCopyInto", Signature(recv=recv, params=params, results=results))
    )
    return named


# manual DeepCopy cases


def test_deep_copy_pointer_receiver(pkg):
    t = _struct(pkg, "DeepCopyPtr")
    _deep_copy(t, Pointer(t), (Pointer(t),))
    assert has_deep_copy_method(pkg, t) == (True, True)


def test_deep_copy_non_pointer_receiver(pkg):
    t = _struct(pkg, "DeepCopyNonPtr")
    _deep_copy(t, t, (t,))
    assert has_deep_copy_method(pkg, t) == (True, False)


def test_deep_copy_found_through_pointer(pkg):
    t = _struct(pkg, "DeepCopyPtr")
    _deep_copy(t, Pointer(t), (Pointer(t),))
    assert has_deep_copy_method(pkg, Pointer(t)) == (True, True)


def test_deep_copy_with_params_ignored(pkg):
    t = _struct(pkg, "BadDeepCopyHasParams")
    _deep_copy(t, Pointer(t), (Pointer(t),), params=(STRING,))
    assert has_deep_copy_method(pkg, t) == (False, False)


def test_deep_copy_without_return_ignored(pkg):
    t = _struct(pkg, "BadDeepCopyNoReturn")
    _deep_copy(t, Pointer(t), ())
    assert has_deep_copy_method(pkg, t) == (False, False)


def test_deep_copy_pointer_to_other_type_ignored(pkg):
    other = _struct(pkg, "BadDeepCopyNoReturn")
    t = _struct(pkg, "BadDeepCopyPtrVal")
    _deep_copy(t, Pointer(t), (Pointer(other),))
    assert has_deep_copy_method(pkg, t) == (False, False)


def test_deep_copy_value_of_other_type_ignored(pkg):
    other = _struct(pkg, "BadDeepCopyNoReturn")
    t = _struct(pkg, "BadDeepCopyNonPtrVal")
    _deep_copy(t, t, (other,))
    assert has_deep_copy_method(pkg, t) == (False, False)


def test_deep_copy_pointer_mismatch_ignored(pkg):
    t = _struct(pkg, "BadDeepCopyPtrMismatch")
    _deep_copy(t, t, (Pointer(t),))
    assert has_deep_copy_method(pkg, t) == (False, False)


def test_no_methods_on_unnamed_types(pkg):
    assert has_deep_copy_method(pkg, Slice(STRING)) == (False, False)
    assert has_deep_copy_into_method(pkg, Map(STRING, STRING)) is False


# manual DeepCopyInto cases


def test_deep_copy_into_pointer_receiver(pkg):
    t = _struct(pkg, "DeepCopyIntoPtr")
    _deep_copy_into(t, Pointer(t), (Pointer(t),))
    assert has_deep_copy_into_method(pkg, t) is True


def test_deep_copy_into_non_pointer_receiver(pkg):
    t = _struct(pkg, "DeepCopyIntoNonPtr")
    _deep_copy_into(t, t, (Pointer(t),))
    assert has_deep_copy_into_method(pkg, t) is True


def test_deep_copy_into_reference_receiver(pkg):
    t = Named("DeepCopyIntoRef", pkg, Map(STRING, STRING))
    _deep_copy_into(t, t, (Pointer(t),))
    assert has_deep_copy_into_method(pkg, t) is True
    assert has_any_deep_copy_method(pkg, t) is True


def test_deep_copy_into_no_params_ignored(pkg):
    t = _struct(pkg, "BadDeepCopyIntoNoParams")
    _deep_copy_into(t, t, ())
    assert has_deep_copy_into_method(pkg, t) is False


def test_deep_copy_into_non_pointer_param_ignored(pkg):
    t = _struct(pkg, "BadDeepCopyIntoNonPtrParam")
    _deep_copy_into(t, t, (t,))
    assert has_deep_copy_into_method(pkg, t) is False


def test_deep_copy_into_with_result_ignored(pkg):
    t = _struct(pkg, "BadDeepCopyIntoHasResult")
    error_type = Named("error")
    _deep_copy_into(t, t, (Pointer(t),), results=(error_type,))
    assert has_deep_copy_into_method(pkg, t) is False
    assert has_any_deep_copy_method(pkg, t) is False


def test_any_deep_copy_from_deep_copy_alone(pkg):
    t = _struct(pkg, "DeepCopyNonPtr")
    _deep_copy(t, t, (t,))
    assert has_any_deep_copy_method(pkg, t) is True


# receivers and results


def test_use_ptr_receiver(pkg):
    assert use_ptr_receiver(_struct(pkg, "Foo")) is True
    assert use_ptr_receiver(Named("Map", pkg, Map(STRING, INT))) is False
    assert use_ptr_receiver(Named("Slice", pkg, Slice(INT))) is False
    assert use_ptr_receiver(Pointer(INT)) is False
    assert use_ptr_receiver(Named("Builtin", pkg, INT)) is True


def test_result_will_be_pointer(pkg):
    assert result_will_be_pointer(INT, True, False) is False
    assert result_will_be_pointer(Slice(INT), True, True) is True
    assert result_will_be_pointer(Pointer(INT), False, False) is True
    assert result_will_be_pointer(Pointer(Slice(STRING)), False, False) is False
    assert result_will_be_pointer(Named("Map", pkg, Map(STRING, INT)), False, False) is False
    assert result_will_be_pointer(_struct(pkg, "Foo"), False, False) is True


# should_be_copied


def test_unexported_not_copied(pkg):
    assert should_be_copied(pkg, "foo", _struct(pkg, "foo")) is False


def test_struct_copied(pkg):
    assert should_be_copied(pkg, "Foo", _struct(pkg, "Foo")) is True


def test_alias_to_basic_not_copied(pkg):
    t = Named("TotallyAString", pkg, STRING)
    assert should_be_copied(pkg, "TotallyAString", t) is False


def test_alias_to_slice_copied(pkg):
    some = Named("SomeStruct", pkg, Struct((Field("Foo", STRING),)))
    t = Named("SliceOfPointers", pkg, Slice(Pointer(some)))
    assert should_be_copied(pkg, "SliceOfPointers", t) is True


def test_alias_to_map_copied(pkg):
    t = Named("MapOfStrings", pkg, Map(STRING, STRING))
    assert should_be_copied(pkg, "MapOfStrings", t) is True


def test_basic_with_manual_deep_copy_copied(pkg):
    t = Named("Builtin", pkg, INT)
    _deep_copy(t, t, (t,))
    assert should_be_copied(pkg, "Builtin", t) is True


def test_alias_to_pointer_treated_as_pointer(pkg):
    t = Named("Pointer", pkg, Pointer(INT))
    assert should_be_copied(pkg, "Pointer", t) is False


def test_invalid_type_reports_error(pkg):
    assert should_be_copied(pkg, "Broken", Basic(BasicKind.INVALID)) is False
    assert len(pkg.errors) == 1
    assert "Broken" in str(pkg.errors[0])


# shallow copies and references


def test_fine_to_shallow_copy_basics():
    assert fine_to_shallow_copy(INT) is True
    assert fine_to_shallow_copy(STRING) is True
    assert fine_to_shallow_copy(Basic(BasicKind.UNSAFE_POINTER)) is False
    assert fine_to_shallow_copy(Basic(BasicKind.INVALID)) is False


def test_fine_to_shallow_copy_structs(pkg):
    primitives = Struct((Field("BoolField", Basic(BasicKind.BOOL)), Field("IntField", INT)))
    assert fine_to_shallow_copy(primitives) is True
    assert fine_to_shallow_copy(Named("Struct_Primitives", pkg, primitives)) is True
    pointers = Struct((Field("IntPtrField", Pointer(INT)),))
    assert fine_to_shallow_copy(pointers) is False
    assert fine_to_shallow_copy(Struct()) is True


def test_fine_to_shallow_copy_references():
    assert fine_to_shallow_copy(Slice(INT)) is False
    assert fine_to_shallow_copy(Map(STRING, INT)) is False
    assert fine_to_shallow_copy(Pointer(INT)) is False


def test_passes_by_reference(pkg):
    assert passes_by_reference(Slice(INT)) is True
    assert passes_by_reference(Map(STRING, INT)) is True
    assert passes_by_reference(Pointer(INT)) is True
    assert passes_by_reference(INT) is False
    assert passes_by_reference(Struct()) is False
    assert passes_by_reference(Named("Slice", pkg, Slice(INT))) is False