"""
CSV export of content plans.

The copy column is always quoted. Every other column is quoted only when it
contains a delimiter, a quote or a line break. Rows are joined with "\n" and
the text has no trailing newline.
"""
from typing import Iterable, Optional

from src.specs.common.datetime_utils import format_date
from src.specs.models.domain import ContentDocument, ProjectDocument

CSV_HEADERS = [
    "Publish Date",
    "Content Type",
    "Copy",
    "Status",
    "Link to Asset",
    "Link to Published Post",
]

_NEEDS_QUOTES = (",", '"', "\n", "\r")


def quote_field(value: Optional[str], force: bool = False) -> str:
    text = value or ""
    if force or any(ch in text for ch in _NEEDS_QUOTES):
        return '"' + text.replace('"', '""') + '"'
    return text


def content_row(content: ContentDocument) -> str:
    return ",".join(
        [
            quote_field(format_date(content.publishDate)),
            quote_field(content.contentType.value),
            quote_field(content.copyText, force=True),
            quote_field(content.status.value),
            quote_field(content.linkToAsset),
            quote_field(content.linkToPublishedPost),
        ]
    )


def export_csv(contents: Iterable[ContentDocument]) -> str:
    """Header plus one row per item, in the order given."""
    lines = [",".join(quote_field(h) for h in CSV_HEADERS)]
    lines.extend(content_row(content) for content in contents)
    return "\n".join(lines)


def export_filename(project: ProjectDocument) -> str:
    return f"{project.name}-content-plan.csv"
