# Per-file SBOM context: path, detected format, decoded document and dataset id.
# Unreadable or malformed files raise SbomLoadError from create_context();
# load_contexts() turns those into diagnostics and keeps going.

import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple

from sbomdash.dataset_id import resolve_dataset_id
from sbomdash.errors import SbomLoadError
from sbomdash.findings.models import Diagnostic
from sbomdash.parser import get_format, read_document

logger = logging.getLogger(__name__)


class SbomContext:
    """
    Per-file state handed to a format parser.

    Parsers use context.document (dict/list for JSON and YAML, raw text for XML),
    context.dataset_id for the records they emit, and context.path for messages.
    """

    def __init__(
        self,
        path: Path,
        document: Any,
        dataset_id: str,
        *,
        fmt: str = "",
    ) -> None:
        self.path = path
        self.document = document
        self.dataset_id = dataset_id
        self.fmt = fmt or get_format(path)

    @property
    def text(self) -> Optional[str]:
        """Raw text for formats that are not decoded (XML)."""
        return self.document if isinstance(self.document, str) else None


def create_context(path: Path, root: Optional[Path] = None) -> SbomContext:
    """
    Read an SBOM file and wrap it in an SbomContext.

    Raises:
        SbomLoadError: when the file cannot be read or decoded.
    """
    dataset_id = resolve_dataset_id(path, root=root)
    document = read_document(path)
    logger.info("Processing file: %s -> dataset: %s", path, dataset_id)
    return SbomContext(path=path, document=document, dataset_id=dataset_id)


def load_contexts(
    paths: List[Path],
    root: Optional[Path] = None,
) -> Tuple[List[SbomContext], List[Diagnostic]]:
    """
    Load several SBOM files, skipping the ones that fail.

    Returns:
        (contexts, diagnostics): contexts in input order, and one diagnostic
        per file that could not be loaded.
    """
    contexts: List[SbomContext] = []
    diagnostics: List[Diagnostic] = []
    for path in paths:
        try:
            contexts.append(create_context(path, root=root))
        except SbomLoadError as e:
            logger.warning("Failed to parse %s: %s", path, e)
            diagnostics.append(Diagnostic(path=path, message=str(e)))
    return contexts, diagnostics
