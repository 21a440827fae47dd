"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional CLI pipeline and the
pipeline() helper for composing transformation stages. The same helper
threads document text through the rendering stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")
T = TypeVar("T")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as rendering progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, pattern, outputSubdir, withSource
        - env_check: htmlOutputdir, envOK
        - sources_find: sourceFiles
        - html_render: renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing markdown sources
        outputdir: Base output directory for rendered files
        verbosity: Logging verbosity level (1-3)
        pattern: Glob selecting sources relative to inputdir
        outputSubdir: Subdirectory within outputdir for output
        withSource: Append highlighted markdown source to each page
        envOK: Environment validation passed
        htmlOutputdir: Final output directory (outputdir + outputSubdir)
        sourceFiles: Markdown files selected for rendering
        renderResult: Render results (output_files, document_count, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    pattern: str = field(default="")
    outputSubdir: str = field(default=".")
    withSource: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    htmlOutputdir: Path = field(default=Path("/"))
    sourceFiles: List[Path] = field(default_factory=list)
    renderResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (pattern, outputSubdir, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rendered output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Only keep options that are ProgramState fields
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(initial_state: T, *stages: Callable[[T], T]) -> T:
    """
    Execute a functional pipeline of transformations.

    Each stage is a function (T) -> T that receives the output of the
    previous stage and returns a new value. The CLI threads a ProgramState
    through it; the renderer threads document text.

    Args:
        initial_state: Starting value
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final value after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            sources_find,
            html_render,
            results_report
        )

    This is equivalent to:
        results_report(html_render(sources_find(env_check(initial_state))))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
