from pathlib import Path
from flateval.__main__ import main

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_sum_loop(capsys):
    main(['--dump', str(EXAMPLES / 'sum_loop.json')])
    out = capsys.readouterr().out.strip().splitlines()
    # 1 + 2 + 3 + 4 + 5, accumulated into the body's first variable
    assert out == ['15', 'i = 5', 'sum = 15']
