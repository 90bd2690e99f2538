"""Rule registry used by the line-oriented block parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Sequence

from ..types import Block, SourcePosition

__all__ = [
    "ParserContext",
    "RuleResult",
    "RuleMatcher",
    "ParserRule",
    "RuleRegistry",
    "registry",
    "register_rule",
]

RuleResult = Block | list[Block] | None


@dataclass
class ParserContext:
    """Cursor over the body lines that rules may advance to consume lines."""

    lines: Sequence[str]
    index: int = 0
    offsets: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.offsets:
            offset = 0
            for line in self.lines:
                self.offsets.append(offset)
                offset += len(line) + 1

    @property
    def current(self) -> str:
        return self.lines[self.index]

    def has_next(self) -> bool:
        return self.index + 1 < len(self.lines)

    def peek(self, distance: int = 1) -> str | None:
        target = self.index + distance
        if 0 <= target < len(self.lines):
            return self.lines[target]
        return None

    def advance(self) -> str:
        if not self.has_next():
            raise IndexError("No more lines to consume")
        self.index += 1
        return self.lines[self.index]

    def position(self, first_line: int, last_line: int | None = None) -> SourcePosition:
        last = first_line if last_line is None else last_line
        return SourcePosition(
            line=first_line,
            start=self.offsets[first_line],
            end=self.offsets[last] + len(self.lines[last]),
        )


RuleMatcher = Callable[[str, ParserContext], RuleResult]


@dataclass(frozen=True)
class ParserRule:
    """A named recognition rule: returns blocks when the line is claimed."""

    name: str
    matcher: RuleMatcher

    def __call__(self, line: str, context: ParserContext) -> RuleResult:
        return self.matcher(line, context)


class RuleRegistry:
    """Ordered collection of parser rules evaluated first-match-wins."""

    def __init__(self, rules: Iterable[ParserRule] = ()) -> None:
        self._rules: list[ParserRule] = []
        for rule in rules:
            self.register(rule)

    def register(self, rule: ParserRule, *, before: str | None = None) -> None:
        if rule.name in self.names():
            raise ValueError(f"Rule '{rule.name}' is already registered")
        if before is None:
            self._rules.append(rule)
            return
        names = self.names()
        if before not in names:
            raise KeyError(f"Rule '{before}' is not registered")
        self._rules.insert(names.index(before), rule)

    def unregister(self, name: str) -> ParserRule:
        for position, rule in enumerate(self._rules):
            if rule.name == name:
                return self._rules.pop(position)
        raise KeyError(f"Rule '{name}' is not registered")

    def names(self) -> list[str]:
        return [rule.name for rule in self._rules]

    def copy(self) -> "RuleRegistry":
        return RuleRegistry(self._rules)

    def __iter__(self) -> Iterator[ParserRule]:
        return iter(list(self._rules))

    def __len__(self) -> int:
        return len(self._rules)

    def apply(self, line: str, context: ParserContext) -> tuple[ParserRule, list[Block]] | None:
        """Run rules in order; the first one returning blocks wins."""
        for rule in self._rules:
            result = rule(line, context)
            if result is None:
                continue
            blocks = result if isinstance(result, list) else [result]
            return rule, blocks
        return None


registry = RuleRegistry()


def register_rule(name: str, *, target: RuleRegistry | None = None):
    def decorator(func: RuleMatcher) -> RuleMatcher:
        (target if target is not None else registry).register(ParserRule(name, func))
        return func

    return decorator
