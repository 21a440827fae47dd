#!/usr/bin/env python3
"""
quickmark - Small, order-dependent markdown dialect to HTML

Renders every markdown source found under an input directory into a
standalone HTML page under an output directory.

As with other ChRIS "plugin" style apps, the CLI is a thin pipeline of
ProgramState -> ProgramState stages wrapped by @chris_plugin.

Dialect:
    - '#', '##', '###' headings (level 1 followed by a rule)
    - **bold**, *italic*, __bold__, _italic_, ~~strike~~
    - Two trailing spaces or a trailing backslash force a line break
    - Letter-initial line runs become paragraphs
    - [caption](target) links and ![caption](target) images
    - \\*, \\_, \\~ for literal markers

Usage:
    quickmark inputdir/ outputdir/

Examples:
    # Render every .md file below the current directory
    quickmark . output/

    # Only notes/, into output/site/, with the source listed under each page
    quickmark . output/ --pattern 'notes/*.md' --outputSubdir site --withSource

    # Verbose output
    quickmark . output/ -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Renderer, __version__, LOG, state_connectToLogger
from .lib.lexer import source_highlight
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
              _      _                        _
   __ _ _   _(_) ___| | ___ __ ___   __ _ _ __| | __
  / _` | | | | |/ __| |/ / '_ ` _ \ / _` | '__| |/ /
 | (_| | |_| | | (__|   <| | | | | | (_| | |  |   <
  \__, |\__,_|_|\___|_|\_\_| |_| |_|\__,_|_|  |_|\_\
     |_|
  Restricted markdown to HTML
"""

# Define CLI arguments
parser = ArgumentParser(
    description="quickmark - restricted markdown dialect to HTML renderer",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--pattern",
    default=appsettings.source_pattern,
    type=str,
    help="Glob (relative to inputdir) selecting markdown sources",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the rendered pages",
)

parser.add_argument(
    "--withSource",
    default=False,
    action="store_true",
    help="Append the highlighted markdown source to each rendered page",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def htmlDocument_build(title: str, body: str, source: str = "") -> str:
    """
    Wrap a rendered fragment in a minimal standalone HTML document

    Args:
        title: Page title
        body: Rendered HTML fragment
        source: Optional highlighted source block appended after the body

    Returns:
        Complete HTML document
    """
    listing = f"\n<hr>\n<section class=\"source\">\n{source}</section>" if source else ""
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title}</title>
</head>
<body>
<main>
{body}
</main>{listing}
</body>
</html>
"""


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve the output directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - htmlOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the input directory does not exist
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if state.outputdir is None:
        print("Error: No output directory given", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.htmlOutputdir = state.outputdir / state.outputSubdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def sources_find(inputstate: ProgramState) -> ProgramState:
    """
    Collect markdown sources matching the pattern below inputdir.

    Args:
        inputstate: Program state with inputdir and pattern set

    Returns:
        ProgramState with added field:
            - sourceFiles: Sorted list of matching files

    Exits:
        1 if no source matches
    """

    state = inputstate.copy()
    pattern = state.pattern or appsettings.source_pattern

    LOG(f"Searching {state.inputdir} for '{pattern}'...", level=1)
    state.sourceFiles = sorted(p for p in state.inputdir.glob(pattern) if p.is_file())

    if not state.sourceFiles:
        print(f"Error: No files matching '{pattern}' in {state.inputdir}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Found {len(state.sourceFiles)} source files", level=2)
    return state


def html_render(inputstate: ProgramState) -> ProgramState:
    """
    Render every source file to a standalone HTML page.

    Output pages mirror the source layout below htmlOutputdir.

    Args:
        inputstate: Program state with sourceFiles populated

    Returns:
        ProgramState with added field:
            - renderResult: Dict containing:
                - status: bool (rendering success)
                - output_files: List[str] (paths of written pages)
                - document_count: int (number of rendered documents)

    Exits:
        1 if a source cannot be read or a page cannot be written
    """

    state = inputstate.copy()

    LOG("Rendering sources to HTML...", level=1)
    renderer = Renderer(appsettings)
    output_files = []

    for source_file in state.sourceFiles:
        relative = source_file.relative_to(state.inputdir)
        target = state.htmlOutputdir / relative.parent / appsettings.outputName_make(relative)
        try:
            raw = source_file.read_text(encoding="utf-8")
            LOG(f"Read {len(raw)} characters from {relative}", level=2)
            body = renderer.render(raw)
            listing = source_highlight(raw) if state.withSource else ""
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(
                htmlDocument_build(source_file.stem, body, listing), encoding="utf-8"
            )
        except OSError as e:
            print(f"Error rendering {source_file}: {e}", file=sys.stderr)
            sys.exit(1)
        LOG(f"Wrote {target}", level=2)
        output_files.append(str(target))

    state.renderResult = {
        "status": True,
        "output_files": output_files,
        "document_count": len(output_files),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display rendering results to user.

    Args:
        inputstate: Program state with renderResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Rendering successful!", level=1)
    LOG(f"  Documents: {state.renderResult['document_count']}", level=1)
    LOG(f"  Output: {state.htmlOutputdir}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="quickmark - restricted markdown to HTML",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render markdown sources in inputdir to HTML in outputdir.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. sources_find: Collect markdown files
        3. html_render: Render each file to a page
        4. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing markdown sources
        outputdir: Directory where rendered pages will be written
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, sources_find, html_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
