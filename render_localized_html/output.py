import copy
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup

from .cultures import CultureResolution, IsoLocaleRegistry, resolve_cultures
from .errors import BuildCancelled, BuildError, NotFoundError
from .substitution import SubstitutionReport, localize_document
from .translations import TranslationTable, load_translation_table

INDEX_HTML = "index.html"
SEPARATOR = "----------"


@dataclass(frozen=True)
class RenderOptions:
    """Parse and serialize settings for one run."""

    parser: str = "html.parser"
    formatter: str = "minimal"
    encoding: str = "utf-8"
    index_filename: str = INDEX_HTML
    clean_output: bool = True
    mirror_default_culture: bool = True


def load_source_document(path, options: RenderOptions) -> BeautifulSoup:
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(path)
    return BeautifulSoup(path.read_text(encoding=options.encoding), options.parser)


def clone_document(soup: BeautifulSoup) -> BeautifulSoup:
    return copy.copy(soup)


def prepare_output_root(output_root, options: RenderOptions) -> Path:
    output_root = Path(output_root)
    try:
        if options.clean_output and output_root.exists():
            logging.info("Removing existing output %s", output_root)
            shutil.rmtree(output_root)
        output_root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logging.error("Failed to prepare output directory %s: %s", output_root, e)
        raise BuildError(output_root, e) from e
    return output_root


def write_document(soup: BeautifulSoup, output_dir: Path,
                   options: RenderOptions) -> Path:
    output_path = output_dir / options.index_filename
    html = soup.decode(eventual_encoding=options.encoding, formatter=options.formatter)
    logging.debug("%s\n%s\n%s", SEPARATOR, html, SEPARATOR)
    try:
        output_dir.mkdir(exist_ok=True)
        output_path.write_text(html, encoding=options.encoding)
    except OSError as e:
        logging.error("Failed to write %s: %s", output_path, e)
        raise BuildError(output_path, e) from e
    logging.info("✅ Generated %s", output_path)
    return output_path


def render_culture(source: BeautifulSoup, culture_tag: str, table: TranslationTable,
                   output_dir: Path, options: RenderOptions) -> SubstitutionReport:
    soup = clone_document(source)
    report = localize_document(soup, culture_tag, table)
    write_document(soup, output_dir, options)
    return report


def build_output_tree(source: BeautifulSoup, table: TranslationTable,
                      resolution: CultureResolution, output_root,
                      options: Optional[RenderOptions] = None,
                      cancel=None) -> List[SubstitutionReport]:
    """Write the default culture at ``output_root`` and one subdirectory per culture.

    ``cancel`` is an optional ``threading.Event``; it is checked before each
    culture and stops the build with ``BuildCancelled``.
    """
    options = options or RenderOptions()

    def check_cancelled():
        if cancel is not None and cancel.is_set():
            raise BuildCancelled("Build cancelled")

    check_cancelled()
    output_root = prepare_output_root(output_root, options)
    reports = [render_culture(
        source, resolution.default.tag, table, output_root, options)]

    for culture in resolution.cultures:
        if culture.tag == resolution.default.tag and not options.mirror_default_culture:
            continue
        check_cancelled()
        reports.append(render_culture(
            source, culture.tag, table, output_root / culture.tag, options))

    missing = sum(report.missing for report in reports)
    logging.info(
        "Rendered %d documents (%d ids without matching nodes)", len(reports), missing)
    return reports


def render_site(input_html, translation_json, output_root,
                options: Optional[RenderOptions] = None, known_locales=None,
                cancel=None) -> List[SubstitutionReport]:
    """Load, resolve and render; nothing is written until every input is valid."""
    options = options or RenderOptions()
    if known_locales is None:
        known_locales = IsoLocaleRegistry()

    table = load_translation_table(translation_json)
    source = load_source_document(input_html, options)
    resolution = resolve_cultures(table, known_locales)
    logging.info(
        "Default culture %s, localizing into [%s]",
        resolution.default.tag, ",".join(resolution.tags))

    return build_output_tree(source, table, resolution, output_root, options, cancel)
