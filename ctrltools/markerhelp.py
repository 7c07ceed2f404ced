"""Terminal help for markers: summary tables and detailed descriptions."""

from __future__ import annotations

from typing import Iterable, TextIO

from .markerdoc import FieldHelp, MarkerDoc
from .spans import (
    Attribute,
    Decoration,
    Span,
    SpanWriter,
    Table,
    Text,
    from_writer,
    indented,
    line,
    newlines,
)
from .table import TableCalculator

_HEADING = Decoration(Attribute.BOLD, Attribute.UNDERLINE)
_MARKER_NAME = Decoration(Attribute.BOLD)
_FIELD_SUMMARY = Decoration(Attribute.FG_GREEN, Attribute.ITALIC)
_MARKER_TARGET = Decoration(Attribute.FAINT)
_FIELD_DETAIL = Decoration(Attribute.ITALIC, Attribute.FG_GREEN)
_DEPRECATED = Decoration(Attribute.CROSSED_OUT)


def _summary(marker: MarkerDoc) -> SpanWriter:
    summary = SpanWriter()
    if marker.deprecated_in_favor_of:
        summary.print(_MARKER_NAME.containing(Text("(use ")))
        summary.print(_MARKER_NAME.containing(Text(marker.deprecated_in_favor_of)))
        summary.print(_MARKER_NAME.containing(Text(") ")))
    summary.print(Text(marker.summary))
    return summary


def markers_summary(group_name: str, markers: Iterable[MarkerDoc]) -> Span:
    """Return a condensed table of help for the given markers."""
    out = SpanWriter()
    out.print(Text("\n"))
    out.print(_HEADING.containing(Text(group_name)))
    out.print(Text("\n\n"))

    table = Table(TableCalculator(padding=2))
    for marker in markers:
        table.start_row()
        table.column(marker_syntax_help(marker))
        table.column(_MARKER_TARGET.containing(Text(marker.target)))
        table.column(_summary(marker))
        table.end_row()
    out.print(table)

    out.print(Text("\n"))
    return out


def markers_details(
    full_detail: bool, group_name: str, markers: Iterable[MarkerDoc]
) -> Span:
    """Return detailed help for the given markers, including field help."""
    out = SpanWriter()
    out.print(line(_HEADING.containing(Text(group_name))))
    out.print(newlines(2))

    for marker in markers:
        out.print(line(_marker_name(marker)))
        out.print(Text(" "))
        out.print(_MARKER_TARGET.containing(Text(marker.target)))

        summary = _summary(marker)

        if not marker.anonymous_field():
            out.print(indented(1, line(summary)))
            if marker.details and full_detail:
                out.print(indented(1, line(Text(marker.details))))

        if marker.anonymous_field():
            out.print(
                indented(1, line(_FIELD_DETAIL.containing(field_syntax_help(marker.fields[0]))))
            )
            out.print(Text("  "))
            out.print(summary)
            if marker.details and full_detail:
                out.print(indented(2, line(Text(marker.details))))
            out.print(newlines(1))
        elif not marker.empty():
            out.print(newlines(1))
            if full_detail:
                for arg in marker.fields:
                    out.print(
                        indented(1, line(_FIELD_DETAIL.containing(field_syntax_help(arg))))
                    )
                    out.print(indented(2, line(Text(arg.summary))))
                    if arg.details:
                        out.print(indented(2, line(Text(arg.details))))
                        out.print(newlines(1))
                out.print(newlines(1))
            else:
                table = Table(TableCalculator(padding=2))
                for arg in marker.fields:
                    table.start_row()
                    table.column(_FIELD_DETAIL.containing(field_syntax_help(arg)))
                    table.column(Text(arg.summary))
                    table.end_row()
                out.print(indented(1, table))
        else:
            out.print(newlines(1))

    return out


def field_syntax_help(arg: FieldHelp) -> Span:
    """Return the syntax help for one marker field."""
    return _field_syntax_help(arg, "")


def _field_syntax_help(arg: FieldHelp, sep: str) -> Span:
    text = f"{sep}{arg.name}=<{arg.type_string()}>"
    if arg.optional:
        text = f"[{text}]"

    def run(out: TextIO) -> None:
        out.write(text)

    return from_writer(run)


def _marker_name(marker: MarkerDoc) -> Span:
    style = _DEPRECATED if marker.deprecated_in_favor_of is not None else _MARKER_NAME
    return style.containing(Text("+" + marker.name))


def marker_syntax_help(definition: MarkerDoc) -> Span:
    """Return the syntax help for a whole marker."""
    out = SpanWriter()
    out.print(_marker_name(definition))
    if definition.empty():
        return out

    sep = "" if definition.anonymous_field() else ":"
    style = _DEPRECATED if definition.deprecated_in_favor_of is not None else _FIELD_SUMMARY
    for arg in definition.fields:
        out.print(style.containing(_field_syntax_help(arg, sep)))
        sep = ","
    return out