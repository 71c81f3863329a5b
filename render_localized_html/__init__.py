from .cultures import (
    CultureResolution,
    IsoLocaleRegistry,
    LocaleDescriptor,
    LocaleSet,
    ResolvedCulture,
    resolve_cultures,
)
from .errors import (
    BuildCancelled,
    BuildError,
    LocalizeError,
    NotFoundError,
    ParseError,
    ResolutionError,
)
from .output import RenderOptions, build_output_tree, render_site
from .substitution import SubstitutionReport, localize_document
from .translations import TranslationTable, load_translation_table, parse_translation_table

__version__ = "1.0.0"
