"""Markdown block parsing."""

from .ast import parse_markdown_ast
from .registry import ParserContext, ParserRule, RuleRegistry, register_rule, registry
from .tokenizer import BlockParser, ParserState, parse, parse_blocks

__all__ = [
    "BlockParser",
    "ParserContext",
    "ParserRule",
    "ParserState",
    "RuleRegistry",
    "parse",
    "parse_blocks",
    "parse_markdown_ast",
    "register_rule",
    "registry",
]
