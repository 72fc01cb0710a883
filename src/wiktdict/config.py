"""Build configuration."""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_TITLE = 'Dictionary'
DEFAULT_AUTHOR = 'Anonymous'
DEFAULT_OUTPUT_DIR = Path('output')

# Entries per content document
PAGE_SIZE = 1000


@dataclass(frozen=True)
class BuildConfig:
    definitions_path: Path
    title: str = DEFAULT_TITLE
    author: str = DEFAULT_AUTHOR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    page_size: int = PAGE_SIZE

    def __post_init__(self):
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got: {self.page_size}")
