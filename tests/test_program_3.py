from pathlib import Path

from lox.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_for_loop(capsys):
    with open(EXAMPLES / 'program_3.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    run_program(source)
    out = capsys.readouterr().out
    assert out == '0\n1\n2\n'
