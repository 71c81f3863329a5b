import argparse
import logging
import signal
import threading
from pathlib import Path

from .cultures import IsoLocaleRegistry, LocaleSet
from .errors import LocalizeError, NotFoundError
from .output import INDEX_HTML, RenderOptions, render_site


def setup_logging(verbose=False, log_file=None):
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="render-localized-html",
        description="Render one HTML page into a directory tree of localized copies")
    parser.add_argument('-w', '--workspace', required=True,
                        help="Root directory the other paths are relative to")
    parser.add_argument('-i', '--input', '-d', '--directory', dest='input', default='.',
                        help=f"Directory holding the source {INDEX_HTML}")
    parser.add_argument('-t', '--translation', default='translation.json',
                        help="Translation table JSON file")
    parser.add_argument('-o', '--output', default='localized',
                        help="Output directory for the localized tree")
    parser.add_argument('--keep-output', action='store_true',
                        help="Reuse the output directory instead of recreating it")
    parser.add_argument('--no-default-subdirectory', action='store_true',
                        help="Write the default culture only at the output root")
    parser.add_argument('--locale', action='append', default=[], metavar='TAG',
                        help="Restrict known locales to TAG (repeatable)")
    parser.add_argument('--log-file', help="Also write the log to this file")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Log replacements and rendered documents")
    return parser


def resolve_paths(args):
    """Check every input exists before anything is written."""
    workspace = Path(args.workspace)
    if not workspace.is_dir():
        raise NotFoundError(workspace, "directory")
    translation = workspace / args.translation
    if not translation.is_file():
        raise NotFoundError(translation)
    input_dir = workspace / args.input
    if not input_dir.is_dir():
        raise NotFoundError(input_dir, "directory")
    input_html = input_dir / INDEX_HTML
    if not input_html.is_file():
        raise NotFoundError(input_html)
    return input_html, translation, workspace / args.output


def install_cancel_handler(cancel):
    def handle_interrupt(signum, frame):
        logging.warning("Interrupt received, stopping after the current culture")
        cancel.set()

    # signal handlers can only be installed from the main thread
    if threading.current_thread() is not threading.main_thread():
        return None
    return signal.signal(signal.SIGINT, handle_interrupt)


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    options = RenderOptions(
        clean_output=not args.keep_output,
        mirror_default_culture=not args.no_default_subdirectory,
    )
    cancel = threading.Event()
    previous_handler = install_cancel_handler(cancel)
    try:
        known_locales = IsoLocaleRegistry()
        if args.locale:
            known_locales = LocaleSet.from_registry(args.locale, known_locales)
        input_html, translation, output = resolve_paths(args)
        reports = render_site(input_html, translation, output, options,
                              known_locales, cancel)
    except LocalizeError as e:
        logging.error("%s", e)
        return 1
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGINT, previous_handler)

    logging.info("Done! %d documents written to %s", len(reports), output)
    return 0
