"""Parse ShExC compact syntax into the ShEx AST.

Hand-written parser for the common subset of ShExC: PREFIX/BASE directives,
start, shape declarations (``<iri>`` or ``prefix:local`` labels) with an
optional node kind, EXTRA and CLOSED, and a flat ``;``-separated list of
triple constraints carrying datatypes, node kinds, value sets, shape
references and cardinalities.
"""
from __future__ import annotations

import re
from typing import Optional, Union
from urllib.parse import urljoin

from rdflib.namespace import RDF

from shex2linkml.schema.common import IRI, UNBOUNDED, Cardinality, IriStem, Literal, NodeKind, Prefix
from shex2linkml.schema.shex import (
    EachOf,
    NodeConstraint,
    Shape,
    ShapeRef,
    ShExSchema,
    TripleConstraint,
    TripleExpr,
)

NODE_KIND_KEYWORDS = {
    "IRI": NodeKind.IRI,
    "LITERAL": NodeKind.LITERAL,
    "BNODE": NodeKind.BLANK_NODE,
    "NONLITERAL": NodeKind.NON_LITERAL,
}

_PNAME_RE = re.compile(r"([A-Za-z_][\w-]*)?:((?:[\w-]|\.(?=[\w-]))*)")
_KEYWORD_RE = re.compile(r"[A-Za-z][A-Za-z_]*")


class ShExParseError(Exception):
    pass


class ShExCTokenizer:
    """Cursor over ShExC text that knows about prefixes and the base IRI."""

    def __init__(self, text: str, base: Optional[str] = None):
        self.text = text
        self.pos = 0
        self.base = base
        self.prefixes: dict[str, str] = {}

    def _skip_ws_and_comments(self):
        while self.pos < len(self.text):
            if self.text[self.pos] in ' \t\n\r':
                self.pos += 1
            elif self.text[self.pos] == '#':
                while self.pos < len(self.text) and self.text[self.pos] != '\n':
                    self.pos += 1
            else:
                break

    def _error(self, message: str) -> ShExParseError:
        context = self.text[max(0, self.pos - 20):self.pos + 30]
        return ShExParseError(f"{message} at pos {self.pos}, got: ...{context}...")

    @property
    def remaining(self) -> str:
        return self.text[self.pos:]

    def peek(self) -> Optional[str]:
        self._skip_ws_and_comments()
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def at_end(self) -> bool:
        return self.peek() is None

    def expect(self, s: str):
        self._skip_ws_and_comments()
        if not self.remaining.startswith(s):
            raise self._error(f"Expected {s!r}")
        self.pos += len(s)

    def try_consume(self, s: str) -> bool:
        self._skip_ws_and_comments()
        if self.remaining.startswith(s):
            self.pos += len(s)
            return True
        return False

    def peek_keyword(self) -> Optional[str]:
        """Return the bare word at the cursor without consuming it."""
        self._skip_ws_and_comments()
        m = _KEYWORD_RE.match(self.remaining)
        if m is None:
            return None
        # prefix:local is a name, not a keyword
        if self.text[self.pos + m.end():self.pos + m.end() + 1] == ':':
            return None
        return m.group(0)

    def consume_keyword(self, kw: str):
        if self.peek_keyword() != kw:
            raise self._error(f"Expected keyword {kw!r}")
        self.pos += len(kw)

    def resolve(self, iri: str) -> str:
        if self.base and not re.match(r"[A-Za-z][\w+.-]*:", iri):
            return urljoin(self.base, iri)
        return iri

    def read_iri_ref(self) -> str:
        """Read an <...> IRI reference, resolved against the base."""
        self._skip_ws_and_comments()
        if self.peek() != '<':
            raise self._error("Expected '<'")
        end = self.text.find('>', self.pos)
        if end < 0:
            raise self._error("Unterminated IRI reference")
        iri = self.text[self.pos + 1:end]
        self.pos = end + 1
        return self.resolve(iri)

    def read_prefixed_name(self) -> str:
        """Read prefix:local and expand it to a full IRI."""
        self._skip_ws_and_comments()
        m = _PNAME_RE.match(self.remaining)
        if not m:
            raise self._error("Expected prefixed name")
        prefix = m.group(1) or ''
        if prefix not in self.prefixes:
            raise ShExParseError(f"Unknown prefix {prefix!r}")
        self.pos += m.end()
        return self.prefixes[prefix] + (m.group(2) or '')

    def read_iri(self) -> str:
        """Read either <IRI> or prefix:local."""
        if self.peek() == '<':
            return self.read_iri_ref()
        return self.read_prefixed_name()

    def at_iri(self) -> bool:
        return self.peek() == '<' or bool(_PNAME_RE.match(self.remaining))


def _read_int(tok: ShExCTokenizer) -> Optional[int]:
    tok._skip_ws_and_comments()
    m = re.match(r'\d+', tok.remaining)
    if m is None:
        return None
    tok.pos += m.end()
    return int(m.group(0))


def _parse_cardinality(tok: ShExCTokenizer) -> Cardinality:
    """Parse optional cardinality: ?, *, +, {m}, {m,}, {m,n}, {m,*}."""
    c = tok.peek()
    if c == '?':
        tok.pos += 1
        return Cardinality(min=0, max=1)
    if c == '*':
        tok.pos += 1
        return Cardinality(min=0, max=UNBOUNDED)
    if c == '+':
        tok.pos += 1
        return Cardinality(min=1, max=UNBOUNDED)
    if c == '{':
        tok.pos += 1
        mn = _read_int(tok)
        if mn is None:
            raise tok._error("Expected number in cardinality")
        if tok.try_consume(','):
            mx = _read_int(tok)
            if mx is None:
                tok.try_consume('*')
                mx = UNBOUNDED
        else:
            mx = mn
        tok.expect('}')
        return Cardinality(min=mn, max=mx)
    return Cardinality()


def _parse_literal(tok: ShExCTokenizer) -> Literal:
    """Parse "string"^^datatype or "string"@lang."""
    tok._skip_ws_and_comments()
    quote = tok.text[tok.pos]
    tok.pos += 1
    start = tok.pos
    while tok.pos < len(tok.text) and tok.text[tok.pos] != quote:
        if tok.text[tok.pos] == '\\':
            tok.pos += 1
        tok.pos += 1
    value = tok.text[start:tok.pos]
    tok.pos += 1

    if tok.remaining.startswith('^^'):
        tok.pos += 2
        return Literal(value=value, datatype=IRI(tok.read_iri()))
    if tok.remaining.startswith('@'):
        m = re.match(r'@([a-zA-Z]+(?:-[a-zA-Z0-9]+)*)', tok.remaining)
        if m:
            tok.pos += m.end()
            return Literal(value=value, language=m.group(1))
    return Literal(value=value)


def _parse_value_set(tok: ShExCTokenizer) -> list[Union[IRI, Literal, IriStem]]:
    """Parse [ v1 v2 ... ] including IRI stems (<iri>~)."""
    tok.expect('[')
    values: list[Union[IRI, Literal, IriStem]] = []
    while not tok.try_consume(']'):
        if tok.peek() in ('"', "'"):
            values.append(_parse_literal(tok))
            continue
        iri = tok.read_iri()
        if tok.remaining.startswith('~'):
            tok.pos += 1
            values.append(IriStem(stem=iri))
        else:
            values.append(IRI(iri))
    return values


def _parse_constraint(tok: ShExCTokenizer) -> Union[NodeConstraint, ShapeRef]:
    """Parse the value expression after a predicate."""
    c = tok.peek()
    if c == '@':
        tok.pos += 1
        return ShapeRef(name=IRI(tok.read_iri()))
    if c == '[':
        return NodeConstraint(values=_parse_value_set(tok))
    if c == '.':
        tok.pos += 1
        return NodeConstraint()

    kw = tok.peek_keyword()
    if kw in NODE_KIND_KEYWORDS:
        tok.consume_keyword(kw)
        return NodeConstraint(node_kind=NODE_KIND_KEYWORDS[kw])

    return NodeConstraint(datatype=IRI(tok.read_iri()))


def _parse_predicate(tok: ShExCTokenizer) -> str:
    if tok.peek_keyword() == 'a':
        tok.pos += 1
        return str(RDF.type)
    return tok.read_iri()


def _parse_triple_constraint(tok: ShExCTokenizer) -> TripleConstraint:
    predicate = _parse_predicate(tok)

    constraint = None
    if tok.peek() not in (';', '}', '?', '*', '+', '{', None):
        constraint = _parse_constraint(tok)

    return TripleConstraint(
        predicate=IRI(predicate),
        constraint=constraint,
        cardinality=_parse_cardinality(tok),
    )


def _parse_shape(tok: ShExCTokenizer) -> Shape:
    """Parse ``label [nodeKind] [EXTRA p...] [CLOSED] { tc ; tc ; ... }``."""
    shape = Shape(name=IRI(tok.read_iri()))

    while True:
        kw = tok.peek_keyword()
        if kw in NODE_KIND_KEYWORDS:
            tok.consume_keyword(kw)
        elif kw == 'CLOSED':
            tok.consume_keyword(kw)
            shape.closed = True
        elif kw == 'EXTRA':
            tok.consume_keyword(kw)
            while tok.at_iri() and tok.peek_keyword() not in ('CLOSED', 'EXTRA'):
                shape.extra.append(IRI(tok.read_iri()))
        else:
            break

    tok.expect('{')
    constraints: list[TripleConstraint] = []
    while not tok.try_consume('}'):
        constraints.append(_parse_triple_constraint(tok))
        tok.try_consume(';')

    expression: Optional[TripleExpr] = None
    if len(constraints) == 1:
        expression = constraints[0]
    elif constraints:
        expression = EachOf(expressions=constraints)
    shape.expression = expression
    return shape


def parse_shex(source: str, base: Optional[str] = None) -> ShExSchema:
    """Parse a ShExC string or file path into a ShExSchema.

    Args:
        source: File path or ShExC text.
        base: Base IRI used to resolve relative IRI references. A ``BASE``
            directive in the text overrides it.

    Returns:
        ShExSchema with parsed shapes, prefixes, base and start.
    """
    # open() raises ValueError for text with an embedded NUL
    try:
        f = open(source, 'r', encoding='utf-8')
    except (OSError, ValueError):
        text = source
    else:
        with f:
            text = f.read()

    tok = ShExCTokenizer(text, base=base)
    schema = ShExSchema(base=base)

    while not tok.at_end():
        kw = tok.peek_keyword()

        if kw in ('PREFIX', 'prefix'):
            tok.pos += len(kw)
            tok._skip_ws_and_comments()
            m = re.match(r'([A-Za-z_][\w.-]*)?:', tok.remaining)
            if not m:
                raise tok._error("Expected prefix name")
            tok.pos += m.end()
            name = m.group(1) or ''
            iri = tok.read_iri_ref()
            tok.prefixes[name] = iri
            schema.prefixes.append(Prefix(name=name, iri=iri))
            continue

        if kw in ('BASE', 'base'):
            tok.pos += len(kw)
            tok.base = tok.read_iri_ref()
            schema.base = tok.base
            continue

        if kw == 'start':
            tok.pos += len(kw)
            tok.expect('=')
            tok.expect('@')
            schema.start = IRI(tok.read_iri())
            continue

        if tok.at_iri():
            schema.shapes.append(_parse_shape(tok))
            continue

        raise tok._error("Unexpected token")

    return schema


def parse_shex_file(filepath: str, base: Optional[str] = None) -> ShExSchema:
    """Parse a ShEx file from a file path."""
    return parse_shex(filepath, base=base)
