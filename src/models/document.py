"""
Conversion job model

One Conversion describes a single document flowing through the CLI
pipeline: where it comes from, where its control-code stream goes, and
what each stage has produced for it so far.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Conversion:
    """
    A single markdown document to convert

    Attributes:
        label: Human-readable name used in logs and reports
        sourcePath: Markdown file to read, or None for a literal --message
        outputPath: Destination file, or None when writing to stdout
        text: Markdown source (filled in by sources_read)
        payload: Control-code stream (filled in by markdown_transpile)

    Example:
        Conversion(
            label="notes/todo.md",
            sourcePath=Path("in/notes/todo.md"),
            outputPath=Path("out/notes/todo.prn"),
        )
    """
    label: str
    sourcePath: Optional[Path] = None
    outputPath: Optional[Path] = None
    text: Optional[str] = None
    payload: Optional[bytes] = None
