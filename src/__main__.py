#!/usr/bin/env python3
"""
escmark - Markdown to printer control codes

Converts markdown notes into the byte streams printers and terminals use
for bold, italic, underline and double-size headers.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Supported markup:
    - **bold**, *italic*, __underline__ (toggles, may span lines)
    - # Top header / ## Lower header (closed at the end of the line)
    - Single newlines join lines, blank lines break paragraphs
    - Links, list items and ``` fenced blocks pass through verbatim
    - {#id} tags are dropped

Usage:
    escmark inputdir/ outputdir/ [--inputFile notes.md | --message TEXT]

    Every markdown file under inputdir/ (or just --inputFile) is written to
    outputdir/ with its extension replaced by the output suffix (.prn).

Examples:
    # Convert a whole directory of notes
    escmark notes/ spool/

    # One file, previewed in a terminal
    escmark notes/ spool/ --inputFile todo.md --profile ansi --stdout

    # A literal string straight to the printer device
    escmark . . --message "# Hello **world**" --stdout > /dev/usb/lp0
"""

import sys
from dataclasses import replace
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Renderer, Profile, ProfileError, LexicalError, __version__, LOG, state_connectToLogger
from .models import Conversion, ProgramState, pipeline


DISPLAY_TITLE = r"""
                                      _
   ___  ___  ___ _ __ ___   __ _ _ __| | __
  / _ \/ __|/ __| '_ ` _ \ / _` | '__| |/ /
 |  __/\__ \ (__| | | | | | (_| | |  |   <
  \___||___/\___|_| |_| |_|\__,_|_|  |_|\_\

  Markdown to printer control codes
"""

# Define CLI arguments
parser = ArgumentParser(
    description="escmark - convert markdown to printer/terminal control codes",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", default=None, type=str, help="Single markdown file to convert (relative to inputdir)"
)

parser.add_argument(
    "-m", "--message", default=None, type=str, help="Literal markdown text to convert instead of files"
)

parser.add_argument(
    "--pattern",
    default=None,
    type=str,
    help=f"Glob selecting sources for batch conversion (default: {appsettings.input_pattern})",
)

parser.add_argument(
    "--outputSuffix",
    default=None,
    type=str,
    help=f"Suffix replacing the source extension (default: {appsettings.output_suffix})",
)

parser.add_argument(
    "--outputFile", default="message.prn", type=str, help="Output filename for --message"
)

parser.add_argument(
    "--profile",
    default=None,
    type=str,
    help=f"Device profile (default: {appsettings.default_profile})",
)

parser.add_argument(
    "--stdout", action="store_true", help="Write control codes to standard output instead of files"
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def conversions_plan(state: ProgramState) -> list[Conversion]:
    """
    Decide which documents to convert and where each result goes.

    Returns:
        One Conversion per document, without text or payload

    Exits:
        1 if the requested input file is missing or the glob matches nothing
        1 if the output suffix is not a valid file suffix
    """
    suffix = state.outputSuffix or appsettings.output_suffix

    def output_for(relative: Path) -> Path | None:
        if state.stdout:
            return None
        try:
            return state.outputdir / relative.with_suffix(suffix)
        except ValueError:
            print(f"Error: Invalid output suffix '{suffix}' (expected e.g. '.prn')", file=sys.stderr)
            sys.exit(1)

    if state.message is not None:
        output = None if state.stdout else state.outputdir / state.outputFile
        return [Conversion(label="<message>", outputPath=output)]

    if state.inputFile:
        source = state.inputdir / state.inputFile
        if not source.is_file():
            print(f"Error: Input file not found: {source}", file=sys.stderr)
            sys.exit(1)
        return [Conversion(label=state.inputFile, sourcePath=source, outputPath=output_for(Path(state.inputFile)))]

    pattern = state.pattern or appsettings.input_pattern
    sources = sorted(p for p in state.inputdir.glob(pattern) if p.is_file())
    if not sources:
        print(f"Error: No sources matching '{pattern}' in {state.inputdir}", file=sys.stderr)
        sys.exit(1)

    conversions = []
    for source in sources:
        relative = source.relative_to(state.inputdir)
        conversions.append(Conversion(label=str(relative), sourcePath=source, outputPath=output_for(relative)))
    return conversions


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment, load the device profile and plan conversions.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - codes: ControlCodes of the selected profile
            - conversions: planned documents
            - envOK: True if environment is valid

    Exits:
        1 if inputdir, input file or profile is not found, or if --message and --inputFile
        are both given
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.message is not None and state.inputFile:
        print("Error: --message and --inputFile are mutually exclusive", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if state.message is None and not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    profile_name = state.profile or appsettings.default_profile
    try:
        profile = Profile(profile_name)
    except ProfileError as e:
        print(f"Error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.codes = profile.codes_get()
    LOG(f"Device profile: {profile.name} ({profile.config_path})", level=2)

    state.conversions = conversions_plan(state)
    LOG(f"Planned {len(state.conversions)} conversion(s)", level=2)

    if not state.stdout:
        state.outputdir.mkdir(parents=True, exist_ok=True)
        LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def sources_read(inputstate: ProgramState) -> ProgramState:
    """
    Read every planned markdown source into memory.

    Returns:
        ProgramState with Conversion.text set on every conversion

    Exits:
        1 if a file cannot be read or decoded
    """

    state = inputstate.copy()

    LOG("Reading sources...", level=1)

    conversions = []
    for conversion in state.conversions:
        if conversion.sourcePath is None:
            text = state.message or ""
        else:
            try:
                text = conversion.sourcePath.read_text(encoding=appsettings.input_encoding)
            except (OSError, UnicodeDecodeError) as e:
                print(f"Error reading input file {conversion.sourcePath}: {e}", file=sys.stderr)
                sys.exit(1)
        LOG(f"Read {len(text)} characters from {conversion.label}", level=2)
        conversions.append(replace(conversion, text=text))

    state.conversions = conversions
    return state


def markdown_transpile(inputstate: ProgramState) -> ProgramState:
    """
    Convert every source to its control-code stream.

    Returns:
        ProgramState with Conversion.payload set on every conversion

    Exits:
        1 on a lexical error in strict mode
    """

    state = inputstate.copy()

    LOG("Converting markdown to control codes...", level=1)

    renderer = Renderer(codes=state.codes)
    conversions = []
    for conversion in state.conversions:
        try:
            payload = renderer.render(conversion.text or "")
        except LexicalError as e:
            print(f"Lexical error in {conversion.label}: {e}", file=sys.stderr)
            sys.exit(1)
        LOG(f"{conversion.label}: {len(payload)} bytes", level=2)
        conversions.append(replace(conversion, payload=payload))

    state.conversions = conversions
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Hand each control-code stream to its sink (file or standard output).

    Returns:
        ProgramState with added field:
            - bytesWritten: total bytes written

    Exits:
        1 if a destination cannot be written
    """

    state = inputstate.copy()

    LOG("Writing output...", level=1)

    written = 0
    for conversion in state.conversions:
        payload = conversion.payload or b""
        try:
            if conversion.outputPath is None:
                sys.stdout.buffer.write(payload)
                sys.stdout.buffer.flush()
            else:
                conversion.outputPath.parent.mkdir(parents=True, exist_ok=True)
                conversion.outputPath.write_bytes(payload)
                LOG(f"Wrote {conversion.outputPath}", level=2)
        except OSError as e:
            destination = conversion.outputPath or "standard output"
            print(f"Error writing {destination}: {e}", file=sys.stderr)
            sys.exit(1)
        written += len(payload)

    state.bytesWritten = written
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Summarize the run for the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()

    LOG("✓ Conversion complete", level=1)
    LOG(f"  Documents: {len(state.conversions)}", level=1)
    LOG(f"  Bytes: {state.bytesWritten}", level=1)
    if not state.stdout:
        LOG(f"  Output: {state.outputdir}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="escmark - Markdown to printer control codes",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - convert markdown sources to control-code streams.

    Orchestrates the full pipeline:
        1. env_check: Validate paths, load profile, plan conversions
        2. sources_read: Read markdown into memory
        3. markdown_transpile: Render control codes
        4. output_write: Write files or standard output
        5. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, sources_read, markdown_transpile, output_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
