# ctrltools

Generate `DeepCopy`, `DeepCopyInto` and `DeepCopyObject` methods for Go API
types, and format marker help for the terminal.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Describing types

The package does not read Go source. You describe the types yourself with
the model in `ctrltools.gotypes`:

- `Basic` (with a `BasicKind`), `Pointer`, `Slice`, `Map` and `Struct` (a
  tuple of `Field`s) are the unnamed types.
- `Named` is a declared type. It belongs to a `GoPackage` and has a
  definition. Named types are compared by identity. Hand-written methods are
  declared with `Named.add_method(Method(name, Signature(recv, params, results)))`.
- `GoPackage` holds a path, a name, its imports by path and a list of errors.

`lookup_method`, `eventual_underlying_type` and `type_string` work on these
types.

## Generating deepcopy code

```python
from ctrltools.gotypes import Basic, BasicKind, Field, GoPackage, Named, Struct
from ctrltools.deepcopygen import ObjectGenCtx, TypeInfo

pkg = GoPackage(path="example.com/api/v1", name="v1")
foo = Named("Foo", pkg, Struct((Field("X", Basic(BasicKind.INT)),)))

ctx = ObjectGenCtx(header_text="")
source = ctx.generate_for_package(
    pkg,
    {"kubebuilder:object:generate": [True]},
    [TypeInfo(name="Foo", type_info=foo, markers={"kubebuilder:object:root": [True]})],
)
print(source)
```

Markers are given as a mapping from a marker name to the list of values it
was given. Only the first value counts, except for the
`k8s:deepcopy-gen:interfaces` marker, where every value is checked.

`generate_for_package` returns the text of the whole file. It returns `None`
when no type needs methods. The text is not run through a Go formatter.
Problems it finds are recorded with `GoPackage.add_error` and do not stop
the run. After the call, check `pkg.errors`.

A type gets methods when generation is switched on for it:

- The package marker `kubebuilder:object:generate` turns generation on or
  off for the whole package. The older `k8s:deepcopy-gen` marker turns it on
  when its first comma-separated value is `package`.
- On a type, `kubebuilder:object:generate` overrides the package setting.
  So does `k8s:deepcopy-gen`, which turns generation on only when its value
  is `true`.
- A type that wants `DeepCopyObject` is also included.

A type that is switched on still needs methods, which `should_be_copied`
decides. The type must be exported, and it must meet one of these
conditions:

- it is a struct,
- it is defined as a non-basic type, or
- it has a hand-written `DeepCopy` or `DeepCopyInto`.

Methods that are already written by hand are not generated again.

`DeepCopyObject` is generated for types marked `kubebuilder:object:root`.
It is also generated for types whose `k8s:deepcopy-gen:interfaces` marker
names `k8s.io/apimachinery/pkg/runtime.Object`.

Three helpers build the text around the methods:

- `prepare_header(text, year)` replaces ` YEAR` in the header with the year.
- `write_header` writes the build tag, the header, the package clause and
  the import block.
- `write_methods` joins the methods, ordered by type name.

Lower-level pieces can also be used directly:

- `ctrltools.copymaker.CopyMethodMaker` writes the methods for a single type.
- `ctrltools.copyrules` holds the rules for how each type is copied.
- `ctrltools.codewriter` has three classes:
  - `CodeWriter` collects lines and blocks.
  - `ImportsList` gives each import a unique alias.
  - `NamingInfo` spells a type the way it appears in generated code.
- `ctrltools.errors` has these pieces:
  - `PositionedError` attaches a position to an error.
  - `ErrList` groups several errors into one.
  - `err_from_node` and `maybe_err_list` build those errors.
  - `non_vendor_path` strips a vendor prefix from a package path.

## Marker help

`ctrltools.markerdoc` holds plain help records for markers: `MarkerDoc`,
`FieldHelp`, `Argument`, `DetailedHelp` and `CategoryDoc`. It also provides
two ways to sort and group marker names:

- `SortByCategory` sorts by name and groups by help category.
- `OptionsSort` sorts and groups by generator and output rule.

`ctrltools.markerhelp` turns the records into spans for the terminal:

```python
from ctrltools.markerdoc import DetailedHelp, MarkerDoc
from ctrltools.markerhelp import markers_summary
from ctrltools.spans import render

doc = MarkerDoc(
    name="kubebuilder:object:root",
    target="type",
    help=DetailedHelp(summary="enables object interface implementation generation"),
)
print(render(markers_summary("object", [doc])))
```

`markers_details`, `marker_syntax_help` and `field_syntax_help` give the
longer forms.

Spans in `ctrltools.spans` measure their visible width without counting ANSI
escape codes, which keeps table columns lined up when the text is styled.
The spans include `Text`, `Table`, `SpanWriter`, `indented`, `line`,
`newlines`, `from_writer` and `Decoration`. A `Decoration` writes escape
codes only when the output is a terminal and neither `NO_COLOR` nor
`TERM=dumb` is set. Pass `enabled=` to a `Decoration` to decide this
yourself. Column widths come from `ctrltools.table.TableCalculator`.

## What it does not do

- There is no command-line tool.
- The package does not load or parse Go packages.
- It does not type-check Go code.
- It does not read marker comments from source files.
- It does not write generated files to disk.

You supply the type model and the marker values, and you write the returned
text to a file yourself.