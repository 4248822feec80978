# SPDX XML: recognized so .xml files are not errors, but no records are extracted yet.

from __future__ import annotations

import logging

from sbomdash.context import SbomContext
from sbomdash.findings.models import ParsedDocument
from sbomdash.parsers.base import SbomParser

logger = logging.getLogger(__name__)


class SpdxXmlParser(SbomParser):
    """
    Placeholder parser for SPDX XML documents.

    Always returns an empty ParsedDocument (no created timestamp, zero
    components, zero records), whatever the input.
    """

    id = "spdx-xml"
    name = "SPDX XML"
    extensions = frozenset({".xml"})

    def parse(self, context: SbomContext) -> ParsedDocument:
        logger.debug("SPDX XML parsing is not implemented; %s yields no records", context.path)
        return ParsedDocument(created=None, components=0, vulnerabilities=0, items=[])
