from __future__ import annotations

import pytest

from mdbook2docx.parser import ParserContext, ParserRule, RuleRegistry, parse_blocks, register_rule, registry
from mdbook2docx.types import Block, BlockType


def test_default_rule_order():
    assert registry.names() == [
        "image",
        "toc",
        "horizontal_rule",
        "chat",
        "callout",
        "heading",
        "list_item",
    ]


def test_duplicate_rule_names_are_rejected():
    rules = RuleRegistry()
    rules.register(ParserRule("a", lambda line, ctx: None))
    with pytest.raises(ValueError):
        rules.register(ParserRule("a", lambda line, ctx: None))


def test_register_before_unknown_rule_raises():
    with pytest.raises(KeyError):
        RuleRegistry().register(ParserRule("a", lambda line, ctx: None), before="missing")


def test_unregister_removes_rule():
    rules = registry.copy()
    removed = rules.unregister("heading")
    assert removed.name == "heading"
    assert "heading" not in rules.names()
    assert "heading" in registry.names()
    assert [block.type for block in parse_blocks("# Not a heading", rules)] == [BlockType.PARAGRAPH]
    with pytest.raises(KeyError):
        rules.unregister("heading")


def test_first_matching_rule_wins():
    rules = RuleRegistry()
    rules.register(ParserRule("first", lambda line, ctx: Block(BlockType.PARAGRAPH, "first")))
    rules.register(ParserRule("second", lambda line, ctx: Block(BlockType.PARAGRAPH, "second")))
    matched = rules.apply("anything", ParserContext(["anything"]))
    assert matched is not None
    rule, blocks = matched
    assert rule.name == "first"
    assert [block.content for block in blocks] == ["first"]


def test_register_rule_decorator_with_custom_registry():
    rules = registry.copy()

    @register_rule("admonition", target=rules)
    def admonition(line, ctx):
        if line.startswith("!!! "):
            return Block(BlockType.CALLOUT_NOTE, line[4:])
        return None

    assert rules.names()[-1] == "admonition"
    assert "admonition" not in registry.names()
    blocks = parse_blocks("!!! Heads up", rules)
    assert blocks[0].type is BlockType.CALLOUT_NOTE
    assert blocks[0].content == "Heads up"


def test_rule_can_consume_following_lines():
    rules = RuleRegistry()

    def pair(line, ctx):
        if line != "start":
            return None
        ctx.advance()
        return [Block(BlockType.PARAGRAPH, "a"), Block(BlockType.PARAGRAPH, "b")]

    rules.register(ParserRule("pair", pair))
    blocks = parse_blocks("start\nswallowed\nrest", rules)
    assert [block.content for block in blocks] == ["a", "b", "rest"]
    assert blocks[0].source_position == blocks[1].source_position
    assert blocks[0].source_position.line == 0


def test_parser_context_cursor():
    ctx = ParserContext(["a", "bb", "ccc"])
    assert ctx.current == "a"
    assert ctx.peek() == "bb"
    assert ctx.peek(5) is None
    assert ctx.advance() == "bb"
    assert ctx.position(0, 2).end == len("a\nbb\nccc")
    ctx.advance()
    with pytest.raises(IndexError):
        ctx.advance()
