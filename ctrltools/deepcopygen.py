"""Generation of a whole deep-copy source file for one Go package."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence

from .codewriter import CodeWriter, ImportsList
from .copymaker import CopyMethodMaker
from .copyrules import should_be_copied
from .gotypes import GoPackage, GoType

RUNTIME_OBJECT_PATH = "k8s.io/apimachinery/pkg/runtime.Object"

ENABLE_MARKER = "kubebuilder:object:generate"
IS_OBJECT_MARKER = "kubebuilder:object:root"
LEGACY_ENABLE_MARKER = "k8s:deepcopy-gen"
LEGACY_IS_OBJECT_MARKER = "k8s:deepcopy-gen:interfaces"

MarkerValues = Mapping[str, Sequence[Any]]


def _first(markers: MarkerValues, name: str) -> Optional[Any]:
    values = markers.get(name)
    if not values:
        return None
    return values[0]


@dataclass
class TypeInfo:
    """A declared type of a package, with the markers attached to it.

    ``markers`` maps a marker name to the values it was given, in order.
    """

    name: str
    type_info: GoType
    markers: dict[str, list[Any]] = field(default_factory=dict)


def enabled_on_package(package_markers: MarkerValues) -> bool:
    """Tell whether generation is switched on for every type of the package."""
    enabled = _first(package_markers, ENABLE_MARKER)
    if enabled is not None:
        return bool(enabled)
    legacy = _first(package_markers, LEGACY_ENABLE_MARKER)
    if legacy is not None:
        return str(legacy).split(",")[0] == "package"
    return False


def enabled_on_type(all_types: bool, info: TypeInfo) -> bool:
    """Tell whether generation applies to a type, given the package default."""
    enabled = _first(info.markers, ENABLE_MARKER)
    if enabled is not None:
        return bool(enabled)
    legacy = _first(info.markers, LEGACY_ENABLE_MARKER)
    if legacy is not None:
        return str(legacy) == "true"
    return all_types or gen_object_interface(info)


def gen_object_interface(info: TypeInfo) -> bool:
    """Tell whether a DeepCopyObject method is wanted for the type."""
    enabled = _first(info.markers, IS_OBJECT_MARKER)
    if enabled is not None:
        return bool(enabled)
    return any(
        value == RUNTIME_OBJECT_PATH
        for value in info.markers.get(LEGACY_IS_OBJECT_MARKER, ())
    )


def prepare_header(header_text: str, year: str) -> str:
    """Substitute the year for every `` YEAR`` in a header text."""
    return header_text.replace(" YEAR", " " + year)


def write_header(package_name: str, import_specs: Iterable[str], header_text: str) -> str:
    """Return the build tag, header, package clause and import block."""
    imports = "\n".join(import_specs)
    return (
        "//go:build !ignore_autogenerated\n"
        "\n"
        f"{header_text}\n"
        "\n"
        "// Code generated by controller-gen. DO NOT EDIT.\n"
        "\n"
        f"package {package_name}\n"
        "\n"
        "import (\n"
        f"{imports}\n"
        ")\n"
        "\n"
    )


def write_methods(by_type: Mapping[str, str]) -> str:
    """Join the methods of each type, ordered by type name."""
    return "".join(by_type[name] for name in sorted(by_type))


def _spec_path(spec: str) -> str:
    return spec[spec.index('"'):]


@dataclass
class ObjectGenCtx:
    """Generates deep-copy code for packages, with a common header text."""

    header_text: str = ""

    def generate_for_package(
        self,
        pkg: GoPackage,
        package_markers: MarkerValues,
        types: Iterable[TypeInfo],
    ) -> Optional[str]:
        """Return the generated source for the package, or None if nothing is wanted.

        The source is not run through a formatter.  Problems found are
        recorded in ``pkg.errors``.
        """
        all_types = enabled_on_package(package_markers)

        imports = ImportsList(pkg)
        # reserve the package's own name so no import takes it as an alias
        imports.by_alias[pkg.name] = ""

        by_type: dict[str, str] = {}
        for info in types:
            if not enabled_on_type(all_types, info):
                continue
            if not should_be_copied(pkg, info.name, info.type_info):
                continue
            maker = CopyMethodMaker(pkg, imports, CodeWriter())
            maker.generate_methods_for(info.name, info.type_info, gen_object_interface(info))
            output = maker.writer.getvalue()
            if output:
                by_type[info.name] = output

        if not by_type:
            return None

        specs = sorted(imports.import_specs(), key=_spec_path)
        return write_header(pkg.name, specs, self.header_text) + write_methods(by_type)