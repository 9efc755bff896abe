"""Tokenizer for BVH text.

The rules live in ``bvh.lark`` next to this module and are compiled once at
import time. Tokenizing turns text into a forest of :class:`Span` records,
one per matched rule, with keyword punctuation dropped; the tree builder in
``loader`` only ever looks at span kinds and their text.

Spans are built by an inline transformer while the LALR parser reduces, so
no intermediate lark tree exists. MOTION values arrive as a single
``frame_values`` span whose text is the whitespace-separated block.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Tuple

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from .errors import BvhSyntaxError

_GRAMMAR_PATH = Path(__file__).with_name("bvh.lark")


@dataclass(frozen=True)
class Span:
    kind: str
    text: str
    line: int
    column: int
    children: Tuple["Span", ...] = ()


def _leaf(kind: str):
    def callback(self, children: List[Token]) -> Span:
        tok = children[0]
        return Span(kind=kind, text=str(tok), line=tok.line, column=tok.column)
    return callback


def _node(kind: str):
    def callback(self, children: List[Span]) -> Span:
        # composite spans take the position of their first child
        line, column = (children[0].line, children[0].column) if children else (0, 0)
        return Span(kind=kind, text="", line=line, column=column, children=tuple(children))
    return callback


class _SpanBuilder(Transformer):
    integer = _leaf("integer")
    float = _leaf("float")
    identifier = _leaf("identifier")
    channel = _leaf("channel")

    bvh = _node("bvh")
    hierarchy = _node("hierarchy")
    root_joint = _node("root_joint")
    joint = _node("joint")
    joint_body = _node("joint_body")
    offset = _node("offset")
    channels = _node("channels")
    end_site = _node("end_site")
    motion = _node("motion")

    def frames(self, children: list) -> Span:
        spans = [
            Span(kind="frame_values", text=str(c), line=c.line, column=c.column) if isinstance(c, Token) else c
            for c in children
        ]
        return _node("frames")(self, spans)


_PARSER = Lark(
    _GRAMMAR_PATH.read_text(encoding="utf-8"),
    start="bvh",
    parser="lalr",
    transformer=_SpanBuilder(),
)


def tokenize(text: str) -> Span:
    """Tokenize a whole BVH document and return the span rooted at ``bvh``.

    Raises BvhSyntaxError when the text does not match the grammar, or when a
    CHANNELS line declares a different count than the names it lists.
    """
    try:
        root = _PARSER.parse(text)
    except UnexpectedInput as e:
        raise _syntax_error(e, text) from e

    _check_channel_counts(root)
    return root


def _syntax_error(e: UnexpectedInput, text: str) -> BvhSyntaxError:
    if isinstance(e, UnexpectedCharacters):
        message = f"Unexpected character {e.char!r}"
    elif isinstance(e, UnexpectedToken):
        if e.token.type == "$END":
            message = "Unexpected end of input"
        else:
            expected = ", ".join(sorted(e.expected))
            message = f"Unexpected token {e.token.value!r}, expected one of: {expected}"
    else:
        message = "Unexpected end of input"

    line = e.line if e.line is not None and e.line > 0 else None
    column = e.column if e.column is not None and e.column > 0 else None
    context = None
    if e.pos_in_stream is not None and e.pos_in_stream >= 0:
        context = e.get_context(text)
    return BvhSyntaxError(message, line=line, column=column, context=context)


def _iter_channels(span: Span) -> Iterator[Span]:
    # the motion section holds no channel lists
    if span.kind == "motion":
        return
    if span.kind == "channels":
        yield span
        return
    for child in span.children:
        yield from _iter_channels(child)


def _check_channel_counts(root: Span) -> None:
    for node in _iter_channels(root):
        declared_span = next(c for c in node.children if c.kind == "integer")
        declared = int(declared_span.text)
        listed = sum(1 for c in node.children if c.kind == "channel")
        if declared != listed:
            raise BvhSyntaxError(
                f"CHANNELS declares {declared} channel(s) but lists {listed}",
                line=node.line,
                column=node.column,
            )
