import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import pycountry

from .errors import ResolutionError
from .translations import TranslationTable


@dataclass(frozen=True)
class LocaleDescriptor:
    name: str
    language: str = ""
    script: Optional[str] = None
    territory: Optional[str] = None


@dataclass(frozen=True)
class ResolvedCulture:
    tag: str
    matched_from: str
    locale: LocaleDescriptor


@dataclass(frozen=True)
class CultureResolution:
    cultures: Tuple[ResolvedCulture, ...]
    default: ResolvedCulture

    @property
    def tags(self) -> List[str]:
        return [culture.tag for culture in self.cultures]


class IsoLocaleRegistry:
    """Known locales built from the ISO tables shipped with pycountry.

    A locale is ``language[-Script][-REGION]``: an ISO 639-1 language (or
    ISO 639-3 when the language has no two-letter code), an optional ISO
    15924 script and an optional ISO 3166-1 alpha-2 country.
    """

    def match(self, raw_tag: str) -> List[LocaleDescriptor]:
        parts = raw_tag.split("-")
        if not 1 <= len(parts) <= 3:
            return []

        language = self._language(parts[0])
        if language is None:
            return []
        code = getattr(language, "alpha_2", None) or language.alpha_3

        script = territory = None
        rest = parts[1:]
        if rest and len(rest[0]) == 4:
            script = pycountry.scripts.get(alpha_4=rest[0])
            if script is None:
                return []
            rest = rest[1:]
        if rest:
            if len(rest) > 1 or len(rest[0]) != 2:
                return []
            territory = pycountry.countries.get(alpha_2=rest[0])
            if territory is None:
                return []

        name = "-".join(
            part for part in (
                code.lower(),
                script.alpha_4.title() if script else None,
                territory.alpha_2.upper() if territory else None,
            ) if part)
        return [LocaleDescriptor(
            name=name,
            language=language.name,
            script=script.name if script else None,
            territory=territory.name if territory else None,
        )]

    @staticmethod
    def _language(code):
        if len(code) == 2:
            return pycountry.languages.get(alpha_2=code)
        if len(code) == 3:
            language = pycountry.languages.get(alpha_3=code)
            # three-letter spelling is only canonical without a two-letter code
            if language is not None and getattr(language, "alpha_2", None):
                return None
            return language
        return None


class LocaleSet:
    """An explicit, finite set of known locales."""

    def __init__(self, locales: Iterable):
        self.locales = []
        seen = set()
        for locale in locales:
            if not isinstance(locale, LocaleDescriptor):
                locale = LocaleDescriptor(name=locale)
            if locale.name not in seen:
                seen.add(locale.name)
                self.locales.append(locale)

    @classmethod
    def from_registry(cls, names, registry=None):
        registry = registry or IsoLocaleRegistry()
        locales = []
        for name in names:
            matches = registry.match(name)
            if not matches:
                raise ResolutionError(f"Unknown locale: {name}")
            locales.extend(matches)
        return cls(locales)

    def match(self, raw_tag: str) -> List[LocaleDescriptor]:
        wanted = raw_tag.lower()
        return [locale for locale in self.locales if locale.name.lower() == wanted]

    def __len__(self):
        return len(self.locales)


def resolve_cultures(table: TranslationTable, known_locales) -> CultureResolution:
    raw_tags = table.culture_tags()
    logging.info("cultureStrings: [%s]", ",".join(raw_tags))

    cultures = {}
    for raw_tag in raw_tags:
        matches = known_locales.match(raw_tag)
        if not matches:
            logging.warning("Dropping unknown culture tag '%s'", raw_tag)
            continue
        for locale in matches:
            if locale.name not in cultures:
                cultures[locale.name] = ResolvedCulture(locale.name, raw_tag, locale)
    logging.info("cultures: [%s]", ",".join(cultures))

    matches = known_locales.match(table.default_culture)
    if not matches:
        raise ResolutionError(f"default culture not found: {table.default_culture}")
    if len(matches) > 1:
        raise ResolutionError(
            f"default culture {table.default_culture} is ambiguous: "
            f"{[locale.name for locale in matches]}")

    locale = matches[0]
    default = cultures.get(locale.name) or ResolvedCulture(
        locale.name, table.default_culture, locale)
    return CultureResolution(cultures=tuple(cultures.values()), default=default)
