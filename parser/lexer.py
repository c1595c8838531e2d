# parser/lexer.py
# This file is part of SpecObject - A Behavioural Runtime Verification
#
# Lexical analyzer for behaviour specification tokenization using SLY

"""Lexical analyzer for behaviour specification files.

This module implements tokenization of behaviour specifications, breaking
input text into tokens for parser consumption. The lexer handles operator
recognition, keyword distinction, literal values and comments while providing
meaningful error messages for invalid characters.

Supported Tokens:
- Operators: ! & | => < > <= >= == != = [ ] ( ) . , : ;
- Keywords: behaviour, exists, forall, if, then, else, received, at, with,
  true, false, nil
- Literals: integers, quoted strings
- Identifiers: method names and variable names
- Comments: '#' to end of line
"""

from sly import Lexer
from utils.logger import get_logger


class SpecLexer(Lexer):
    """SLY-based lexer for behaviour specification tokenization.

    Transforms specification text into token sequences for parsing.
    Distinguishes between reserved keywords and user-defined identifiers.
    Multi-character operators are listed before their one-character prefixes
    so that SLY tries them first.
    """

    tokens = {
        "BEHAVIOUR",
        "EXISTS",
        "FORALL",
        "IF",
        "THEN",
        "ELSE",
        "RECEIVED",
        "AT",
        "WITH",
        "TRUE",
        "FALSE",
        "NIL",
        "ID",
        "NUMBER",
        "STRING",
        "IMPLIES",
        "LE",
        "GE",
        "EQ",
        "NE",
        "LT",
        "GT",
        "ASSIGN",
        "NOT",
        "AND",
        "OR",
        "LPAREN",
        "RPAREN",
        "LBRACKET",
        "RBRACKET",
        "DOT",
        "COMMA",
        "COLON",
        "SEMI",
    }

    ignore = " \t\r"
    ignore_comment = r"\#.*"

    # Multi-character operators first
    IMPLIES = r"=>"
    LE = r"<="
    GE = r">="
    EQ = r"=="
    NE = r"!="
    LT = r"<"
    GT = r">"
    ASSIGN = r"="
    NOT = r"!"
    AND = r"&"
    OR = r"\|"
    LPAREN = r"\("
    RPAREN = r"\)"
    LBRACKET = r"\["
    RBRACKET = r"\]"
    DOT = r"\."
    COMMA = r","
    COLON = r":"
    SEMI = r";"

    @_(r"-?\d+")
    def NUMBER(self, t):
        t.value = int(t.value)
        return t

    @_(r"'[^'\n]*'", r'"[^"\n]*"')
    def STRING(self, t):
        t.value = t.value[1:-1]
        return t

    ID = r"[a-zA-Z_][a-zA-Z0-9_]*"

    # Keyword mapping: reassign token types for reserved words
    ID["behaviour"] = "BEHAVIOUR"
    ID["exists"] = "EXISTS"
    ID["forall"] = "FORALL"
    ID["if"] = "IF"
    ID["then"] = "THEN"
    ID["else"] = "ELSE"
    ID["received"] = "RECEIVED"
    ID["at"] = "AT"
    ID["with"] = "WITH"
    ID["true"] = "TRUE"
    ID["false"] = "FALSE"
    ID["nil"] = "NIL"

    @_(r"\n+")
    def ignore_newline(self, t):
        self.lineno += len(t.value)

    def error(self, t):
        """Handle illegal characters during tokenization.

        Called automatically when encountering characters that don't match
        any defined token patterns. Advances past the problematic character
        and raises an informative error.

        Args:
            t: SLY token object containing error context

        Raises:
            ValueError: Always raised with character and position information
        """
        logger = get_logger()

        illegal_char = t.value[0]
        error_pos = self.index

        logger.debug(f"Illegal character '{illegal_char}' at line {self.lineno}, position {error_pos}")

        # Skip the illegal character
        self.index += 1

        raise ValueError(
            f"Illegal character '{illegal_char}' encountered at line {self.lineno}, position {error_pos}"
        )
