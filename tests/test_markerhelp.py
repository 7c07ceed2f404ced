from ctrltools.markerdoc import Argument, DetailedHelp, FieldHelp, MarkerDoc
from ctrltools.markerhelp import (
    field_syntax_help,
    marker_syntax_help,
    markers_details,
    markers_summary,
)
from ctrltools.spans import render


def _field(name, type_="string", optional=False, summary="", details=""):
    return FieldHelp(
        name=name,
        argument=Argument(type=type_, optional=optional),
        help=DetailedHelp(summary, details),
    )


def test_field_syntax_required():
    assert render(field_syntax_help(_field("foo"))) == "foo=<string>"


def test_field_syntax_optional():
    assert render(field_syntax_help(_field("foo", optional=True))) == "[foo=<string>]"


def test_field_syntax_slice():
    fld = FieldHelp(
        name="items",
        argument=Argument(type="slice", item_type=Argument(type="int")),
    )
    assert render(field_syntax_help(fld)) == "items=<[]int>"


def test_field_syntax_visual_length_matches_text():
    span = field_syntax_help(_field("foo", optional=True))
    assert span.visual_length() == len(render(span))


def test_marker_syntax_empty():
    assert render(marker_syntax_help(MarkerDoc(name="kubebuilder:object:root"))) == (
        "+kubebuilder:object:root"
    )


def test_marker_syntax_anonymous():
    marker = MarkerDoc(name="object", fields=[_field("", "bool")])
    assert render(marker_syntax_help(marker)) == "+object=<bool>"


def test_marker_syntax_length_invariant():
    marker = MarkerDoc(name="m", fields=[_field("x"), _field("y", "bool")])
    span = marker_syntax_help(marker)
    assert span.visual_length() == len(render(span))


def test_summary_layout():
    markers = [
        MarkerDoc(name="a", target="package", help=DetailedHelp("first")),
        MarkerDoc(
            name="longer",
            target="type",
            help=DetailedHelp("second"),
            fields=[_field("x", "int")],
        ),
    ]
    text = render(markers_summary("Group", markers))
    assert text.startswith("\nGroup\n\n")
    rows = [r for r in text.split("\n") if r.startswith("+")]
    assert len(rows) == 2
    assert rows[0].startswith("+a")
    assert rows[1].startswith("+longer:x=<int>")
    # targets and summaries line up in columns
    assert rows[0].index("package") == rows[1].index("type")
    assert rows[0].index("first") == rows[1].index("second")


def test_summary_deprecated():
    marker = MarkerDoc(
        name="old",
        target="type",
        help=DetailedHelp("does things"),
        deprecated_in_favor_of="new",
    )
    text = render(markers_summary("G", [marker]))
    assert "(use new) does things" in text


def test_summary_deprecated_without_replacement():
    marker = MarkerDoc(
        name="old", target="type", help=DetailedHelp("does things"),
        deprecated_in_favor_of="",
    )
    text = render(markers_summary("G", [marker]))
    assert "(use" not in text
    assert "does things" in text


def test_details_anonymous_field():
    marker = MarkerDoc(
        name="object",
        target="package",
        help=DetailedHelp("does things", "more"),
        fields=[_field("", "bool")],
    )
    text = render(markers_details(True, "G", [marker]))
    assert "\n+object package" in text
    assert "\n\t=<bool>  does things" in text
    assert "\n\t\tmore" in text


def test_details_full_named_fields():
    marker = MarkerDoc(
        name="crd",
        target="package",
        help=DetailedHelp("makes crds", "lots of detail"),
        fields=[_field("a", "int", summary="the a"), _field("b", optional=True, summary="the b")],
    )
    text = render(markers_details(True, "G", [marker]))
    assert "\n\tmakes crds" in text
    assert "\n\tlots of detail" in text
    assert "\n\ta=<int>\n\t\tthe a" in text
    assert "\n\t[b=<string>]\n\t\tthe b" in text


def test_details_short_form_hides_details():
    marker = MarkerDoc(
        name="crd",
        target="package",
        help=DetailedHelp("makes crds", "lots of detail"),
        fields=[_field("a", "int", summary="the a"), _field("bb", summary="the b")],
    )
    text = render(markers_details(False, "G", [marker]))
    assert "lots of detail" not in text
    rows = [r for r in text.split("\n") if r.startswith("\t") and "=<" in r]
    assert len(rows) == 2
    assert rows[0].index("the a") == rows[1].index("the b")


def test_details_empty_marker():
    marker = MarkerDoc(name="root", target="type", help=DetailedHelp("is root"))
    text = render(markers_details(False, "Heading", [marker]))
    assert text.startswith("\nHeading\n\n")
    assert "\n+root type\n\tis root\n" in text