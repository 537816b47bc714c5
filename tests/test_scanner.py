from lox.reporter import ErrorReporter
from lox.scanner import scan_tokens
from lox.tokens import TokenType


def kinds(tokens):
    return [t.type for t in tokens]


def test_operators_prefer_two_character_forms():
    tokens = scan_tokens('! != = == < <= > >= / *')
    assert kinds(tokens) == [
        TokenType.BANG, TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EQUAL_EQUAL,
        TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.GREATER_EQUAL,
        TokenType.SLASH, TokenType.STAR, TokenType.EOF,
    ]


def test_keywords_and_identifiers():
    tokens = scan_tokens('var variable fun funny nil orchid or')
    assert kinds(tokens) == [
        TokenType.VAR, TokenType.IDENTIFIER, TokenType.FUN, TokenType.IDENTIFIER,
        TokenType.NIL, TokenType.IDENTIFIER, TokenType.OR, TokenType.EOF,
    ]
    assert tokens[1].lexeme == 'variable'


def test_literals_carry_values():
    tokens = scan_tokens('12 3.5 "hi there"')
    assert tokens[0].type == TokenType.NUMBER
    assert tokens[0].literal == 12.0
    assert tokens[1].literal == 3.5
    assert tokens[2].type == TokenType.STRING
    assert tokens[2].lexeme == '"hi there"'
    assert tokens[2].literal == 'hi there'


def test_comments_are_skipped_and_lines_counted():
    source = 'print 1; // a comment\n\nprint "two\nlines";\n'
    tokens = scan_tokens(source)
    assert [t.line for t in tokens if t.type == TokenType.PRINT] == [1, 3]
    assert TokenType.SLASH not in kinds(tokens)
    assert tokens[-1].type == TokenType.EOF
    assert tokens[-1].line == 5


def test_unexpected_character_is_reported_and_scanning_continues(capsys):
    reporter = ErrorReporter()
    tokens = scan_tokens('var a = 1;\nvar b @ 2;', reporter)
    assert reporter.had_error
    assert capsys.readouterr().err == "[line 2] Error: Unexpected character '@'.\n"
    assert kinds(tokens) == [
        TokenType.VAR, TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.NUMBER, TokenType.SEMICOLON,
        TokenType.VAR, TokenType.IDENTIFIER, TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF,
    ]
    assert tokens[-2].line == 2


def test_unterminated_string(capsys):
    reporter = ErrorReporter()
    tokens = scan_tokens('print "oops;', reporter)
    assert reporter.had_error
    assert 'Unterminated string.' in capsys.readouterr().err
    assert kinds(tokens) == [TokenType.PRINT, TokenType.EOF]
