from pathlib import Path

from lox.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_counter(capsys):
    with open(EXAMPLES / 'program_2.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    run_program(source)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['1', '2']
