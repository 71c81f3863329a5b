import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping

from .errors import NotFoundError, ParseError

# Accepted spellings for each top-level field, compared case-insensitively.
DEFAULT_CULTURE_FIELDS = ("defaultCulture", "defaultLanguage")
ENTRIES_FIELDS = ("ids", "entries")


@dataclass(frozen=True)
class TranslationTable:
    """Parsed translation data: element id -> culture tag -> translated text."""

    default_culture: str
    entries: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    def __post_init__(self):
        frozen = {
            element_id: MappingProxyType(dict(texts))
            for element_id, texts in self.entries.items()
        }
        object.__setattr__(self, "entries", MappingProxyType(frozen))

    def culture_tags(self) -> List[str]:
        tags = []
        for texts in self.entries.values():
            for tag in texts:
                if tag not in tags:
                    tags.append(tag)
        return tags

    def translations_for(self, culture_tag: str) -> Dict[str, str]:
        """Return ``{element_id: text}`` for one culture.

        Culture keys are compared case-insensitively; when an entry holds
        several spellings of the same tag the exact-case one is used, then
        the first in file order.
        """
        wanted = culture_tag.lower()
        result = {}
        for element_id, texts in self.entries.items():
            if culture_tag in texts:
                result[element_id] = texts[culture_tag]
                continue
            for tag, text in texts.items():
                if tag.lower() == wanted:
                    result[element_id] = text
                    break
        return result

    def to_json(self) -> str:
        return json.dumps(
            {
                "defaultCulture": self.default_culture,
                "ids": {k: dict(v) for k, v in self.entries.items()},
            },
            indent=2,
            ensure_ascii=False,
        )


def _pick_field(data, names):
    wanted = {name.lower() for name in names}
    found = [key for key in data if key.lower() in wanted]
    if not found:
        raise ParseError(f"Missing required field '{names[0]}'")
    if len(found) > 1:
        raise ParseError(f"Ambiguous fields {found} in translation table")
    return data[found[0]]


def parse_translation_table(text: str) -> TranslationTable:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Malformed translation JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError("Translation table must be a JSON object")

    default_culture = _pick_field(data, DEFAULT_CULTURE_FIELDS)
    if not isinstance(default_culture, str) or not default_culture.strip():
        raise ParseError("'defaultCulture' must be a non-empty string")

    ids = _pick_field(data, ENTRIES_FIELDS)
    if not isinstance(ids, dict):
        raise ParseError("'ids' must map element ids to translations")

    entries = {}
    for element_id, texts in ids.items():
        if not isinstance(texts, dict):
            raise ParseError(f"Translations for id '{element_id}' must be an object")
        for tag, value in texts.items():
            if not isinstance(value, str):
                raise ParseError(
                    f"Translation for id '{element_id}' in '{tag}' must be a string")
        entries[element_id] = texts

    return TranslationTable(default_culture=default_culture.strip(), entries=entries)


def load_translation_table(path) -> TranslationTable:
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(path)
    # utf-8-sig tolerates the BOM some editors write
    table = parse_translation_table(path.read_text(encoding="utf-8-sig"))
    logging.info(
        "Loaded %d ids from %s (default culture %s)",
        len(table.entries), path, table.default_culture)
    logging.debug("translation: %s", table.to_json())
    return table
