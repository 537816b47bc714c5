"""Scanner for the Lox language.

The scanner turns raw source text into the flat token list the parser
consumes. Lexing is delegated to a Lark basic lexer configured with one
named terminal per token kind; Lark takes care of longest-match
ordering, line counting and promoting identifiers to keywords. This
module converts Lark's tokens into `Token` records and reports characters
the lexer cannot match, resuming after each one so a single run surfaces
every bad character.
"""

from __future__ import annotations

from typing import List, Optional

from lark import Lark, UnexpectedCharacters

from .reporter import ErrorReporter
from .tokens import Token, TokenType


LOX_TOKENS = r"""
    start: _token*

    _token: LEFT_PAREN | RIGHT_PAREN | LEFT_BRACE | RIGHT_BRACE
          | COMMA | DOT | MINUS | PLUS | SEMICOLON | SLASH | STAR
          | BANG | BANG_EQUAL | EQUAL | EQUAL_EQUAL
          | GREATER | GREATER_EQUAL | LESS | LESS_EQUAL
          | IDENTIFIER | STRING | NUMBER
          | AND | CLASS | ELSE | FALSE | FUN | FOR | IF | NIL
          | OR | PRINT | RETURN | SUPER | THIS | TRUE | VAR | WHILE

    LEFT_PAREN: "("
    RIGHT_PAREN: ")"
    LEFT_BRACE: "{"
    RIGHT_BRACE: "}"
    COMMA: ","
    DOT: "."
    MINUS: "-"
    PLUS: "+"
    SEMICOLON: ";"
    SLASH: "/"
    STAR: "*"

    BANG: "!"
    BANG_EQUAL: "!="
    EQUAL: "="
    EQUAL_EQUAL: "=="
    GREATER: ">"
    GREATER_EQUAL: ">="
    LESS: "<"
    LESS_EQUAL: "<="

    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/
    STRING: /"[^"]*"/
    NUMBER: /[0-9]+(\.[0-9]+)?/

    // Keywords: Lark matches IDENTIFIER and retypes these exact spellings
    AND: "and"
    CLASS: "class"
    ELSE: "else"
    FALSE: "false"
    FUN: "fun"
    FOR: "for"
    IF: "if"
    NIL: "nil"
    OR: "or"
    PRINT: "print"
    RETURN: "return"
    SUPER: "super"
    THIS: "this"
    TRUE: "true"
    VAR: "var"
    WHILE: "while"

    COMMENT: /\/\/[^\n]*/
    %ignore COMMENT
    %import common.WS
    %ignore WS
"""


LOX_LEXER = Lark(
    LOX_TOKENS,
    parser='lalr',
    lexer='basic',
)


def literal_value(token_type: TokenType, lexeme: str):
    if token_type == TokenType.NUMBER:
        return float(lexeme)
    if token_type == TokenType.STRING:
        return lexeme[1:-1]
    return None


def scan_tokens(source: str, reporter: Optional[ErrorReporter] = None) -> List[Token]:
    """Convert source text into a list of tokens terminated by EOF.

    Lexical errors are reported to `reporter` (which sets its `had_error`
    flag); the returned list still holds every token that could be read.
    """
    if reporter is None:
        reporter = ErrorReporter()
    tokens: List[Token] = []
    offset = 0
    line_offset = 0
    while offset < len(source):
        try:
            for tok in LOX_LEXER.lex(source[offset:]):
                token_type = TokenType[tok.type]
                lexeme = str(tok)
                tokens.append(Token(token_type, lexeme, literal_value(token_type, lexeme), tok.line + line_offset))
            break
        except UnexpectedCharacters as e:
            line = e.line + line_offset
            bad = source[offset + e.pos_in_stream]
            if bad == '"':
                # An opening quote the STRING terminal could not close
                reporter.error(line, 'Unterminated string.')
                break
            reporter.error(line, f"Unexpected character '{bad}'.")
            offset += e.pos_in_stream + 1
            line_offset = line - 1
    tokens.append(Token(TokenType.EOF, '', None, source.count('\n') + 1))
    return tokens
