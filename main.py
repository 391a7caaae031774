import sys
import os
import logging
import argparse
from pathlib import Path

from rendering.markdown_renderer import render_markdown


# --- Configuration ---
APP_NAME = "QuizMark Preview"
ORG_NAME = "InterviewFire"
DEFAULT_ENCODING = 'utf-8'
WINDOW_SIZE = (720, 900)

# Same palette as the quiz app's answer screen
COLORS = {
    "background": "#1e1e1e",
    "foreground": "#d4d4d4",
    "text": "#333333",
    "gutter": "#858585",
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Preview quiz answer markdown as styled text")
    parser.add_argument("file", nargs="?", help="Markdown file to render (reads stdin when omitted)")
    parser.add_argument("--dump", action="store_true", help="Print the rendered text and runs instead of opening a window")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def read_markdown(path):
    if path is None:
        return sys.stdin.read()
    return Path(path).read_text(encoding=DEFAULT_ENCODING)


def dump_document(markdown, stream=None):
    """Write the rendered text followed by one line per run"""
    stream = stream or sys.stdout
    document = render_markdown(markdown)
    stream.write(document.text + "\n")
    stream.write("-" * 40 + "\n")
    for run in document.runs:
        attrs = ", ".join(sorted(run.attributes))
        color = f" {run.color}" if run.color else ""
        stream.write(f"{run.start:>6} {run.end:>6}  [{attrs}]{color}  {document.slice_text(run)!r}\n")


def show_window(markdown):
    from PyQt6.QtWidgets import QApplication
    from rendering.qt_view import MarkdownAnswerViewer

    app = QApplication(sys.argv)
    app.setOrganizationName(ORG_NAME)
    app.setApplicationName(APP_NAME)

    viewer = MarkdownAnswerViewer(COLORS)
    viewer.setWindowTitle(APP_NAME)
    viewer.resize(*WINDOW_SIZE)
    viewer.set_markdown_text(markdown)
    viewer.show()

    return app.exec()


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    if args.file is not None and not os.path.isfile(args.file):
        logging.error(f"File not found: '{args.file}'")
        return 1

    try:
        markdown = read_markdown(args.file)
    except (OSError, UnicodeDecodeError) as e:
        logging.exception(f"Could not read markdown: {e}")
        return 1
    logging.info(f"Rendering {len(markdown)} characters")

    if args.dump:
        dump_document(markdown)
        return 0
    return show_window(markdown)


if __name__ == '__main__':
    sys.exit(main())
