"""
Renderer for the quickmark dialect

Threads raw markdown through the ordered stage list and returns HTML.

The renderer is a pure function of its input: it keeps no state between
calls, performs no I/O and never raises for string input. Malformed or
unbalanced markers are simply left unmatched and pass through as text.

Example:
    >>> renderer = Renderer()
    >>> renderer.render("Some **bold** and *italic* text")
    '<p>Some <b>bold</b> and <i>italic</i> text</p>'
"""

from typing import Callable, Optional, Sequence, Tuple

from ..config import AppSettings
from ..models.rules import Stage
from ..models.state import pipeline
from .log import LOG
from .stages import stages_build


class Renderer:
    """
    Markdown-to-HTML renderer

    Owns an immutable, ordered tuple of stages. Each stage consumes the full
    output of the previous one.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        stages: Optional[Sequence[Stage]] = None,
    ) -> None:
        """
        Initialize renderer

        Args:
            settings: Settings used to build the default stages
            stages: Explicit stage list, overriding the default pipeline
        """
        self._stages: Tuple[Stage, ...] = (
            tuple(stages) if stages is not None else stages_build(settings)
        )

    @property
    def stages(self) -> Tuple[Stage, ...]:
        """Stages in the order they are applied"""
        return self._stages

    def stage_get(self, name: str) -> Stage:
        """
        Look up a stage by name

        Raises:
            KeyError: If the renderer has no such stage
        """
        for stage in self._stages:
            if stage.name == name:
                return stage
        raise KeyError(f"No stage named '{name}'")

    def stage_traced(self, stage: Stage) -> Callable[[str], str]:
        """Wrap a stage so that each application is logged at debug verbosity"""

        def run(text: str) -> str:
            result = stage.apply(text)
            LOG(f"Stage {stage.name}: {len(text)} -> {len(result)} chars", level=3)
            return result

        return run

    def render(self, raw: str) -> str:
        """
        Render markdown text to HTML

        Args:
            raw: Raw markdown text

        Returns:
            HTML produced by running every stage in order
        """
        LOG(f"Rendering {len(raw)} characters", level=2)
        return pipeline(raw, *(self.stage_traced(stage) for stage in self._stages))


def render(raw: str) -> str:
    """
    Render markdown with a renderer built from the application settings

    Args:
        raw: Raw markdown text

    Returns:
        Rendered HTML
    """
    return Renderer().render(raw)
