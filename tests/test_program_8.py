from pathlib import Path

from lox.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_shared_closure(capsys):
    with open(EXAMPLES / 'program_8.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    run_program(source)
    out_lines = capsys.readouterr().out.strip().split('\n')
    # deposit and withdraw mutate the same captured balance; a second
    # account gets a frame of its own
    assert out_lines == ['150', '120', '120', '2', '120']
