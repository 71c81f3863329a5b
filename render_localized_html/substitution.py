import logging
from dataclasses import dataclass, field
from typing import List

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString

from .translations import TranslationTable


@dataclass
class SubstitutionReport:
    culture: str
    processed: int = 0
    replaced_nodes: int = 0
    missing_ids: List[str] = field(default_factory=list)

    @property
    def missing(self) -> int:
        return len(self.missing_ids)


def text_nodes_for_id(soup: BeautifulSoup, element_id: str) -> List[NavigableString]:
    """Direct text children of every element carrying ``id=element_id``.

    Comments, CDATA sections, doctypes and processing instructions are not
    text content and are skipped.
    """
    nodes = []
    for tag in soup.find_all(attrs={"id": element_id}):
        nodes.extend(
            child for child in tag.contents
            if isinstance(child, NavigableString)
            and not isinstance(child, PreformattedString)
        )
    return nodes


def localize_document(soup: BeautifulSoup, culture_tag: str,
                      table: TranslationTable) -> SubstitutionReport:
    """Replace the text of every translated id in ``soup``, in place."""
    report = SubstitutionReport(culture=culture_tag)
    for element_id, translation in table.translations_for(culture_tag).items():
        report.processed += 1
        nodes = text_nodes_for_id(soup, element_id)
        if not nodes:
            logging.warning("No nodes found with id: '%s'", element_id)
            report.missing_ids.append(element_id)
            continue

        for node in nodes:
            logging.debug(
                "Replacing %s: <%s id='%s'/> => %s",
                culture_tag, node.parent.name, element_id, translation)
            # same string subclass (Script, Stylesheet) as the node it replaces
            node.replace_with(type(node)(translation))
            report.replaced_nodes += 1
    return report
