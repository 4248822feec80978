from __future__ import annotations

"""
Run configuration and the parser registry.

The defaults mirror the GitHub Action inputs (sbom-files, output-dir, title,
theme); main.py overrides them from CLI options or INPUT_* environment
variables. Parsers are registered here, so adding a format means adding one
entry to get_default_parsers().
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Set

from sbomdash.parsers.base import SbomParser
from sbomdash.parsers.cyclonedx import CycloneDXParser
from sbomdash.parsers.spdx_xml import SpdxXmlParser
from sbomdash.traversal import DEFAULT_IGNORE_DIRS

DEFAULT_SBOM_FILES = "**/*.json"
DEFAULT_OUTPUT_DIR = Path("sbom-ui")
DEFAULT_TITLE = "SBOM Explorer"
DEFAULT_THEME = "dark"
THEMES = ("dark", "light")

OUTPUT_JSON_NAME = "parse-sboms.json"
OUTPUT_HTML_NAME = "index.html"


def get_default_parsers() -> List[SbomParser]:
    """Return one instance of every implemented parser, in lookup order."""
    return [
        CycloneDXParser(),
        SpdxXmlParser(),
    ]


@dataclass
class Config:
    """
    Pipeline configuration.

    sbom_files is a comma-separated list of glob patterns relative to root.
    """

    sbom_files: str = DEFAULT_SBOM_FILES
    output_dir: Optional[Path] = DEFAULT_OUTPUT_DIR
    title: str = DEFAULT_TITLE
    theme: str = DEFAULT_THEME
    root: Path = field(default_factory=Path.cwd)
    ignore_dirs: Set[str] = field(default_factory=lambda: set(DEFAULT_IGNORE_DIRS))
    parsers: Sequence[SbomParser] = field(default_factory=get_default_parsers)

    @property
    def output_path(self) -> Path:
        """Output directory, resolved against root when relative."""
        if self.output_dir is None:
            raise ValueError("output_dir is not set")
        if self.output_dir.is_absolute():
            return self.output_dir
        return self.root / self.output_dir


def get_default_config() -> Config:
    return Config()


def get_enabled_parsers(config: Config | None = None) -> Sequence[SbomParser]:
    """Return the parsers from the given config (or the default config)."""
    if config is None:
        config = get_default_config()
    return config.parsers


def get_parser_for(path: Path, config: Config | None = None) -> Optional[SbomParser]:
    """Return the first enabled parser that claims the file's extension, or None."""
    suffix = path.suffix.lower()
    for parser in get_enabled_parsers(config):
        if parser.accepts(suffix):
            return parser
    return None
