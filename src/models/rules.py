"""
Rule and stage models for the rendering pipeline

A Rule is one match-and-replace operation; a Stage is a named, ordered
group of rules applied exactly once per render.
"""

import re
from dataclasses import dataclass
from typing import Callable, Tuple, Union

from .state import pipeline


Template = Union[str, Callable[[re.Match], str]]


@dataclass(frozen=True)
class Rule:
    """
    A single pattern-and-replacement rewrite

    Attributes:
        name: Short identifier (e.g., "bold", "h1")
        pattern: Compiled regular expression locating the markup
        template: Replacement, either a re.sub template string that may
                  reference captured groups (\\g<1>) or a callable building
                  the replacement from the match

    Example:
        Rule("bold", re.compile(r"\\*\\*(.+?)\\*\\*"), r"<b>\\g<1></b>")
    """
    name: str
    pattern: "re.Pattern[str]"
    template: Template

    def apply(self, text: str) -> str:
        """Replace every non-overlapping match of this rule in text"""
        return self.pattern.sub(self.template, text)


@dataclass(frozen=True)
class Stage:
    """
    Named, ordered list of rules

    Rules run in declared order: a later rule sees the output of the
    earlier ones.

    Attributes:
        name: Stage identifier (e.g., "heading", "emphasis")
        rules: Rules applied in order
    """
    name: str
    rules: Tuple[Rule, ...]

    def apply(self, text: str) -> str:
        """Run every rule of the stage over text"""
        return pipeline(text, *(rule.apply for rule in self.rules))

    def rule_get(self, name: str) -> Rule:
        """
        Look up a rule of this stage by name

        Raises:
            KeyError: If no rule carries that name
        """
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise KeyError(f"Stage '{self.name}' has no rule '{name}'")
