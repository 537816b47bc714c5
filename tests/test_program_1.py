from pathlib import Path

from lox.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1_block_shadowing(capsys):
    with open(EXAMPLES / 'program_1.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = run_program(source)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['2', '1']
    assert not interp.reporter.had_error
