"""Batch converter from a directory of Markdown files to standalone HTML pages."""

from __future__ import annotations

import argparse
import html
import shutil
import sys
from pathlib import Path

from markdown_it import MarkdownIt

INDENT_STEP = 4

_HEAD_TEMPLATE = (
    '    <meta charset="UTF-8">\n'
    '    <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
    "    <title>{title}</title>"
)
_DOCUMENT_TEMPLATE = (
    "<!DOCTYPE html>\n"
    '<html lang="en">\n'
    "<head>\n{head}\n</head>\n"
    "<body>\n{body}</body>\n"
    "</html>"
)


class ConversionError(Exception):
    """Raised when a Markdown file cannot be read, rendered or written."""


def create_renderer() -> MarkdownIt:
    """Markdown renderer: CommonMark with tables and strikethrough, raw HTML kept."""
    return MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])


def markdown_paths(source_dir: Path) -> list[Path]:
    """List ``.md`` files directly inside ``source_dir``, creating it if missing."""
    if not source_dir.exists():
        source_dir.mkdir(parents=True)
    return sorted(
        path for path in source_dir.iterdir() if path.is_file() and path.suffix == ".md"
    )


def indent_html(rendered: str, base_indent: int = INDENT_STEP) -> str:
    """Re-indent rendered HTML line by line.

    This looks only at tag-like substrings on each line. A line starting with
    a closing tag dedents itself; a line with an opening tag and no closing
    tag indents the lines after it. Multi-line elements and void tags without
    a trailing ``/>`` are not handled.

    Only ``\\n`` and ``\\r\\n`` end a line; other Unicode line separators stay
    inside the line they appear in.
    """
    pieces = rendered.split("\n")
    if pieces[-1] == "":
        pieces.pop()

    lines: list[str] = []
    width = base_indent
    for line in pieces:
        trimmed = line.strip()
        if not trimmed:
            lines.append("")
            continue

        if trimmed.startswith("</"):
            width = max(width - INDENT_STEP, 0)

        lines.append(" " * width + trimmed)

        if (
            "<" in trimmed
            and "</" not in trimmed
            and not trimmed.endswith("/>")
            and "</div>" not in trimmed
        ):
            width += INDENT_STEP

    return "".join(f"{line}\n" for line in lines)


def render_document(title: str, body_html: str, base_indent: int = INDENT_STEP) -> str:
    """Wrap rendered body HTML in the page skeleton."""
    head = _HEAD_TEMPLATE.format(title=html.escape(title))
    return _DOCUMENT_TEMPLATE.format(head=head, body=indent_html(body_html, base_indent))


def convert_file(
    markdown_path: Path,
    renderer: MarkdownIt,
    output_dir: Path | None = None,
    base_indent: int = INDENT_STEP,
) -> Path:
    """Convert one Markdown file and return the written HTML path.

    Without ``output_dir`` the HTML file is written next to the source.
    """
    try:
        source = markdown_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConversionError(f"Cannot read {markdown_path}: {exc}") from exc

    document = render_document(markdown_path.stem, renderer.render(source), base_indent)

    if output_dir is None:
        html_path = markdown_path.with_suffix(".html")
    else:
        html_path = output_dir / f"{markdown_path.stem}.html"

    try:
        html_path.parent.mkdir(parents=True, exist_ok=True)
        html_path.write_text(document, encoding="utf-8")
    except OSError as exc:
        raise ConversionError(f"Cannot write {html_path}: {exc}") from exc

    print(f"Converted: {markdown_path}")
    return html_path


def reset_output_dir(output_dir: Path) -> None:
    """Remove ``output_dir`` and everything in it, then recreate it empty."""
    try:
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)
    except OSError as exc:
        raise ConversionError(f"Cannot prepare output directory {output_dir}: {exc}") from exc


def convert_directory(
    source_dir: Path,
    output_dir: Path,
    extra_files: list[Path] | None = None,
    base_indent: int = INDENT_STEP,
) -> list[Path]:
    """Convert every Markdown file in ``source_dir`` plus ``extra_files``.

    The output directory is cleared first. Returns the written HTML paths.
    """
    reset_output_dir(output_dir)
    try:
        sources = markdown_paths(source_dir)
    except OSError as exc:
        raise ConversionError(f"Cannot list {source_dir}: {exc}") from exc
    sources.extend(extra_files or [])

    renderer = create_renderer()
    return [convert_file(path, renderer, output_dir, base_indent) for path in sources]


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Convert a directory of Markdown files to indented HTML pages",
    )
    parser.add_argument(
        "--source", type=Path, default=Path("markdown"), help="Markdown source directory"
    )
    parser.add_argument("--output", type=Path, default=Path("html"), help="HTML output directory")
    parser.add_argument(
        "--include",
        type=Path,
        action="append",
        default=[],
        help="Extra Markdown file to convert (repeatable)",
    )
    parser.add_argument(
        "--indent", type=int, default=INDENT_STEP, help="Base indentation of the body content"
    )
    args = parser.parse_args()

    if args.indent < 0:
        print("Error: --indent must be >= 0")
        sys.exit(1)

    try:
        written = convert_directory(args.source, args.output, args.include, args.indent)
    except ConversionError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    if not written:
        print(f"No markdown files found in {args.source}")
        return
    print(f"Successfully converted {len(written)} markdown file(s) to HTML!")


if __name__ == "__main__":
    main()
