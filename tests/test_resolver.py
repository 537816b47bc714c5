from lox.ast import Assign, Variable
from lox.interpreter import Interpreter
from lox.parser import parse_program
from lox.resolver import Resolver


def resolve(source):
    interp = Interpreter()
    statements = parse_program(source, interp.reporter)
    assert not interp.reporter.had_error
    Resolver(interp).resolve(statements)
    return interp, statements


def distances(interp, name):
    """Distances recorded for every resolved reference to `name`, in source order."""
    found = [
        (expr.name.line, dist) for expr, dist in interp.locals.items()
        if isinstance(expr, (Variable, Assign)) and expr.name.lexeme == name
    ]
    return [dist for _, dist in sorted(found)]


def test_globals_are_left_unresolved():
    interp, _ = resolve('var a = 1;\nprint a;\nfun f() { return a; }')
    assert interp.locals == {}
    assert not interp.reporter.had_error


def test_shadowing_local_wins_in_nested_blocks():
    source = (
        'var a = "global";\n'
        '{\n'
        '  var a = "local";\n'
        '  print a;\n'
        '  {\n'
        '    print a;\n'
        '    a = "changed";\n'
        '  }\n'
        '}\n'
        'print a;\n'
    )
    interp, _ = resolve(source)
    # line 4 reads at distance 0, lines 6 and 7 at distance 1; line 10 is global
    assert distances(interp, 'a') == [0, 1, 1]


def test_function_parameters_and_closure_distances():
    source = (
        'fun outer(x) {\n'
        '  fun inner(y) {\n'
        '    return x + y;\n'
        '  }\n'
        '  return inner;\n'
        '}\n'
    )
    interp, _ = resolve(source)
    assert distances(interp, 'x') == [1]
    assert distances(interp, 'y') == [0]
    assert distances(interp, 'inner') == [0]


def test_function_can_refer_to_itself():
    interp, _ = resolve('{ fun loop(n) { if (n > 0) loop(n - 1); } }')
    assert distances(interp, 'loop') == [1]


def test_anonymous_function_gets_its_own_scope():
    interp, _ = resolve('{ var k = 2; var f = fun (n) { return n * k; }; }')
    assert distances(interp, 'n') == [0]
    assert distances(interp, 'k') == [1]


def test_own_initializer_at_top_level_is_an_error(capsys):
    interp, statements = resolve('var a = a;')
    assert interp.reporter.had_error
    assert capsys.readouterr().err == "[line 1] Error at 'a': Cannot use variable name in its own initializer.\n"


def test_own_initializer_in_block_is_an_error(capsys):
    interp, _ = resolve('{ var b = b + 1; }')
    assert interp.reporter.had_error
    assert 'Cannot use variable name in its own initializer.' in capsys.readouterr().err


def test_own_initializer_may_read_an_enclosing_binding():
    interp, statements = resolve('{ var a = 1; { var a = a + 1; print a; } }')
    assert not interp.reporter.had_error
    inner_var, inner_print = statements[0].statements[1].statements
    # the initializer reads the outer block's `a`, the print reads the inner one
    assert interp.locals[inner_var.initializer.left] == 1
    assert interp.locals[inner_print.expression] == 0


def test_redeclaring_a_global_from_itself_is_allowed():
    interp, _ = resolve('var a = 1; var a = a + 1;')
    assert not interp.reporter.had_error


def test_existing_globals_count_as_initialized():
    interp = Interpreter()
    interp.globals.define('seeded', 1.0)
    statements = parse_program('var seeded = seeded;', interp.reporter)
    Resolver(interp).resolve(statements)
    assert not interp.reporter.had_error


def test_recursive_anonymous_function_in_block():
    interp, _ = resolve('{ var f = fun (n) { if (n > 0) f(n - 1); }; }')
    assert not interp.reporter.had_error
    assert distances(interp, 'f') == [1]


def test_return_at_top_level_is_an_error(capsys):
    interp, _ = resolve('return 1;')
    assert interp.reporter.had_error
    assert capsys.readouterr().err == "[line 1] Error at 'return': Can't return from top-level code.\n"
