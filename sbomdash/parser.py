# Decode SBOM file text into Python data by file extension.

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from sbomdash.errors import SbomLoadError

logger = logging.getLogger(__name__)

JSON_EXTENSIONS = frozenset({".json"})
YAML_EXTENSIONS = frozenset({".yaml", ".yml"})
XML_EXTENSIONS = frozenset({".xml"})
SUPPORTED_EXTENSIONS = JSON_EXTENSIONS | YAML_EXTENSIONS | XML_EXTENSIONS


def get_format(path: Path) -> str:
    """Return "json", "yaml" or "xml" for a supported path, else ""."""
    suffix = path.suffix.lower()
    if suffix in JSON_EXTENSIONS:
        return "json"
    if suffix in YAML_EXTENSIONS:
        return "yaml"
    if suffix in XML_EXTENSIONS:
        return "xml"
    return ""


def decode_text(text: str, fmt: str, path: Path) -> Any:
    """
    Decode SBOM text of the given format.

    JSON and YAML are decoded into dicts/lists; XML is returned unchanged for
    the XML parser to handle.

    Raises:
        SbomLoadError: on a syntax error, excessive nesting or an unknown format.
    """
    if fmt == "json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise SbomLoadError(f"Invalid JSON in {path}: {e}", path=path) from e
        except RecursionError as e:
            raise SbomLoadError(f"JSON nested too deeply in {path}", path=path) from e
    if fmt == "yaml":
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SbomLoadError(f"Invalid YAML in {path}: {e}", path=path) from e
        except RecursionError as e:
            raise SbomLoadError(f"YAML nested too deeply in {path}", path=path) from e
    if fmt == "xml":
        return text
    raise SbomLoadError(f"Unsupported SBOM format for {path}", path=path)


def read_document(path: Path) -> Any:
    """
    Read and decode an SBOM file.

    Raises:
        SbomLoadError: if the file cannot be read, is not UTF-8, or does not decode.
    """
    fmt = get_format(path)
    if not fmt:
        raise SbomLoadError(f"Unsupported SBOM file extension: {path}", path=path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise SbomLoadError(f"Failed to read {path}: {e}", path=path) from e
    document = decode_text(text, fmt, path)
    logger.debug("Decoded %s as %s", path, fmt)
    return document
