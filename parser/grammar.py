# parser/grammar.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# LALR(1) grammar and parser for behaviour specifications using SLY

"""Behaviour specification grammar implemented with the SLY parser generator.

This module defines the grammar rules and parsing logic for behaviour files.
The parser constructs surface syntax trees from the token streams provided
by the lexer, handling operator precedence and associativity.

Grammar Features:
- One ``behaviour method(args, output) = formula;`` definition per behaviour
- Quantifiers and if-then-else that extend as far right as possible
- Boolean connectives, comparisons and component access
- ``received(method).at(time).with(args...)`` call patterns

Operator Precedence (lowest to highest):
- exists / forall / if-then-else
- '=>': right-associative
- '|': left-associative
- '&': left-associative
- '!': right-associative
- '<' '>' '<=' '>=' '==' '!=': non-associative
- '[...]': postfix
"""

from sly import Parser
from .lexer import SpecLexer
from .ast_nodes import (
    Expr,
    Name,
    Literal,
    Not,
    And,
    Or,
    Implies,
    Compare,
    Subscript,
    Quantifier,
    Conditional,
    Received,
    BehaviourDef,
    SpecFile,
)
from .exceptions import ParseError
from utils.logger import get_logger


class SpecParser(Parser):
    """SLY-based LALR(1) parser for behaviour specifications.

    Attributes:
        tokens: Token types from SpecLexer
        precedence: Operator precedence and associativity rules
    """

    tokens = SpecLexer.tokens

    precedence = (
        ("right", "EXISTS", "FORALL", "ELSE"),
        ("right", "IMPLIES"),
        ("left", "OR"),
        ("left", "AND"),
        ("right", "NOT"),
        ("nonassoc", "LT", "GT", "LE", "GE", "EQ", "NE"),
        ("left", "LBRACKET"),
    )

    @_("behaviours")
    def spec(self, p) -> SpecFile:
        """Start rule: a file is a sequence of behaviour definitions."""
        return SpecFile(tuple(p.behaviours))

    @_("behaviours behaviour")
    def behaviours(self, p):
        return p.behaviours + [p.behaviour]

    @_("behaviour")
    def behaviours(self, p):
        return [p.behaviour]

    @_("BEHAVIOUR ID LPAREN ID COMMA ID RPAREN ASSIGN expr SEMI")
    def behaviour(self, p) -> BehaviourDef:
        """Behaviour definition binding the argument tuple and the result."""
        return BehaviourDef(p.ID0, p.ID1, p.ID2, p.expr, p.lineno)

    # Binders
    @_("EXISTS ID COLON expr %prec EXISTS")
    def expr(self, p) -> Expr:
        return Quantifier("exists", p.ID, p.expr)

    @_("FORALL ID COLON expr %prec FORALL")
    def expr(self, p) -> Expr:
        return Quantifier("forall", p.ID, p.expr)

    @_("IF expr THEN expr ELSE expr %prec ELSE")
    def expr(self, p) -> Expr:
        return Conditional(p.expr0, p.expr1, p.expr2)

    # Connectives
    @_("expr IMPLIES expr")
    def expr(self, p) -> Expr:
        return Implies(p.expr0, p.expr1)

    @_("expr OR expr")
    def expr(self, p) -> Expr:
        return Or(p.expr0, p.expr1)

    @_("expr AND expr")
    def expr(self, p) -> Expr:
        return And(p.expr0, p.expr1)

    @_("NOT expr")
    def expr(self, p) -> Expr:
        return Not(p.expr)

    @_(
        "expr LT expr",
        "expr GT expr",
        "expr LE expr",
        "expr GE expr",
        "expr EQ expr",
        "expr NE expr",
    )
    def expr(self, p) -> Expr:
        """Comparison; the operator text is kept on the node."""
        return Compare(p[1], p.expr0, p.expr1)

    @_("expr LBRACKET expr RBRACKET")
    def expr(self, p) -> Expr:
        """Component access on a tuple or mapping."""
        return Subscript(p.expr0, p.expr1)

    @_("LPAREN expr RPAREN")
    def expr(self, p) -> Expr:
        """Parenthesized expression for grouping."""
        return p.expr

    @_("received")
    def expr(self, p) -> Expr:
        return p.received

    @_("ID")
    def expr(self, p) -> Expr:
        return Name(p.ID)

    @_("literal")
    def expr(self, p) -> Expr:
        return p.literal

    # Call patterns
    @_("RECEIVED LPAREN ID RPAREN")
    def received(self, p) -> Received:
        return Received(p.ID)

    @_("received DOT AT LPAREN expr RPAREN")
    def received(self, p) -> Received:
        return Received(p.received.method, p.expr, p.received.args)

    @_("received DOT WITH LPAREN exprlist RPAREN")
    def received(self, p) -> Received:
        return Received(p.received.method, p.received.time, tuple(p.exprlist))

    @_("received DOT WITH LPAREN RPAREN")
    def received(self, p) -> Received:
        return Received(p.received.method, p.received.time, ())

    @_("exprlist COMMA expr")
    def exprlist(self, p):
        return p.exprlist + [p.expr]

    @_("expr")
    def exprlist(self, p):
        return [p.expr]

    # Literal grammar rules
    @_("NUMBER", "STRING")
    def literal(self, p) -> Literal:
        return Literal(p[0])

    @_("TRUE")
    def literal(self, p) -> Literal:
        """Boolean constant true."""
        return Literal(True)

    @_("FALSE")
    def literal(self, p) -> Literal:
        """Boolean constant false."""
        return Literal(False)

    @_("NIL")
    def literal(self, p) -> Literal:
        return Literal(None)

    def parse(self, text: str) -> SpecFile:
        """Parse behaviour specification text into a surface AST.

        Tokenizes the input text and constructs the tree of behaviour
        definitions. Handles empty input and provides meaningful error
        messages for syntax errors.

        Args:
            text: Specification source to parse

        Returns:
            SpecFile holding the behaviour definitions in source order

        Raises:
            ParseError: If the input is empty or contains syntax errors
        """
        logger = get_logger()
        logger.debug(f"Parsing specification ({len(text)} characters)")

        try:
            tokens = list(SpecLexer().tokenize(text))
            if not tokens:
                raise ParseError("Input specification is empty.")

            ast_result = super().parse(iter(tokens))

            if ast_result is None:
                raise ParseError("Failed to parse specification (syntax error).")

            logger.debug(f"Successfully parsed {len(ast_result.behaviours)} behaviour(s)")
            return ast_result

        except ParseError:
            logger.debug("Parse error encountered")
            raise
        except Exception as e:
            logger.debug(f"Unexpected parsing error: {e}")
            raise ParseError(f"Parse failed: {e}")

    def error(self, token):
        """Handle syntax errors during parsing.

        Called automatically by SLY when encountering tokens that don't
        match any grammar rule.

        Args:
            token: Problematic token or None for EOF errors

        Raises:
            ParseError: Always raises with detailed error information
        """
        if token:
            error_msg = (
                f"Syntax error near '{token.value}' "
                f"(type: {token.type}) at line {token.lineno}, position {token.index}"
            )
        else:
            error_msg = "Syntax error: Unexpected end of specification"

        raise ParseError(error_msg)
