"""
Program state model, render state and pipeline helper

Defines ProgramState dataclass for the functional CLI pipeline, the
RenderState toggles owned by a single conversion, and the pipeline()
helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field

from .document import Conversion


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class RenderState:
    """
    Formatting environments currently open in the output stream

    Five independent flags, not a nesting stack: no flag implies or excludes
    another. A flag is True only between the emission of its open code and
    the emission of its close code. A fresh RenderState belongs to exactly
    one conversion.
    """
    bold: bool = False
    italic: bool = False
    underline: bool = False
    topHeaderOpen: bool = False
    lowerHeaderOpen: bool = False


@dataclass
class ProgramState:
    """
    Central state container for the conversion pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity and the CLI options
        - env_check: codes profile resolved, conversions planned, envOK
        - sources_read: Conversion.text filled in
        - markdown_transpile: Conversion.payload filled in
        - output_write: bytesWritten
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing markdown sources
        outputdir: Directory receiving the control-code streams
        verbosity: Logging verbosity level (1-3)
        inputFile: Single markdown file to convert (relative to inputdir)
        message: Literal markdown text to convert instead of files
        pattern: Glob used to find sources when no inputFile/message is given
        outputSuffix: Suffix replacing the extension of each converted file
        outputFile: Output filename for --message conversions
        profile: Device profile name
        stdout: Write the streams to standard output instead of files
        envOK: Environment validation passed
        codes: Control codes of the selected device profile
        conversions: One entry per document to convert
        bytesWritten: Total bytes handed to the output sink
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: Optional[str] = field(default=None)
    message: Optional[str] = field(default=None)
    pattern: Optional[str] = field(default=None)
    outputSuffix: Optional[str] = field(default=None)
    outputFile: str = field(default="message.prn")
    profile: Optional[str] = field(default=None)
    stdout: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    codes: Optional[Any] = field(default=None)  # ControlCodes at runtime
    conversions: List[Conversion] = field(default_factory=list)
    bytesWritten: int = field(default=0)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, message, profile, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for conversion output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Namespace may carry plugin-framework extras; keep only our fields
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            sources_read,
            markdown_transpile,
            output_write,
            results_report,
        )

    This is equivalent to:
        results_report(output_write(markdown_transpile(sources_read(env_check(initial_state)))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
