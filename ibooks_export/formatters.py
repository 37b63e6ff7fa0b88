"""
Renderers for exported annotations.

Each renderer writes the whole run's annotations to a text stream; none of
them touch anything else.
"""
import json
from typing import Dict, Iterable, List, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ibooks_export.models import Annotation, OutputFormat

TABLE_WIDTH = 120
BOOK_COLUMN_WIDTH = 30
TIME_COLUMN_WIDTH = 25
TEXT_COLUMN_WIDTH = 50


def group_by_book(annotations: Iterable[Annotation]) -> Dict[str, List[Annotation]]:
    """
    Groups the annotations by book title, keeping their original order within each book
    """
    annotations_by_book = {}
    for annotation in annotations:
        annotations_by_book.setdefault(annotation.book_title, []).append(annotation)
    return annotations_by_book


def report_in_logseq_format(annotations: Iterable[Annotation], out: TextIO):
    for book, book_annotations in group_by_book(annotations).items():
        out.write(f"- [[{book}]]\n")
        for annotation in book_annotations:
            text = annotation.selected_text if annotation.selected_text is not None else "-"
            if annotation.note is not None:
                out.write(f"\t\t- {annotation.note}\n")
                out.write(f"\t\t\t- > {text}\n")
            else:
                out.write(f"\t\t- > {text}\n")


def report_in_json_format(annotations: Iterable[Annotation], out: TextIO):
    json.dump([annotation.to_json_dict() for annotation in annotations], out, ensure_ascii=False)
    out.write("\n")


def report_in_table_format(annotations: Iterable[Annotation], out: TextIO):
    table = Table(show_lines=True)
    table.add_column("Book", style="cyan", max_width=BOOK_COLUMN_WIDTH, overflow="fold")
    table.add_column("Time", style="yellow", max_width=TIME_COLUMN_WIDTH, no_wrap=True)
    table.add_column("Text", max_width=TEXT_COLUMN_WIDTH, overflow="fold")
    for annotation in annotations:
        # annotations without text have nothing to show in a table
        if annotation.selected_text is None:
            continue
        table.add_row(Text(annotation.book_title), annotation.annotation_time.isoformat(),
                      Text(annotation.selected_text))
    Console(file=out, width=TABLE_WIDTH).print(table)


RENDERERS = {
    OutputFormat.OUTLINE: report_in_logseq_format,
    OutputFormat.JSON: report_in_json_format,
    OutputFormat.TABLE: report_in_table_format,
}


def render(annotations: List[Annotation], output_format: OutputFormat, out: TextIO):
    RENDERERS[output_format](annotations, out)
