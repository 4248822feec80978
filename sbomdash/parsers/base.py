# Parser interface (abstract base class): the contract every SBOM format parser implements.
# Concrete parsers (cyclonedx, spdx_xml) subclass SbomParser and implement parse().

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, FrozenSet

from sbomdash.findings.models import ParsedDocument

if TYPE_CHECKING:
    from sbomdash.context import SbomContext


class SbomParser(ABC):
    """
    Abstract base class for SBOM format parsers.

    Subclasses must define:
    - id: str: unique parser identifier (e.g. "cyclonedx")
    - name: str: human-readable name
    - extensions: frozenset of lower-cased file suffixes the parser claims
    - parse(context) -> ParsedDocument

    The pipeline calls parse() once per file.
    """

    id: str
    name: str
    extensions: FrozenSet[str] = frozenset()

    def accepts(self, suffix: str) -> bool:
        return suffix.lower() in self.extensions

    @abstractmethod
    def parse(self, context: "SbomContext") -> ParsedDocument:
        """
        Extract normalized vulnerability records from one file.

        Args:
            context: The loaded file (path, decoded document, dataset id).

        Returns:
            ParsedDocument with the document's creation time, component count,
            record count and records. Documents without vulnerabilities give
            an empty item list, not an error.
        """
        ...
