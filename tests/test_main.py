import sys
import os
import io
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import irvpoll.__main__
from irvpoll.ballot import BallotError

DATA_DIR = os.path.join(os.path.dirname(__file__), 'io', 'data')

THREE_WAY = json.dumps({
    'title': 'Colors',
    'options': [
        {'id': 'r', 'text': 'Red'},
        {'id': 'g', 'text': 'Green'},
        {'id': 'b', 'text': 'Blue'},
    ],
    'ballots': [
        {'id': i, 'rankings': [
            {'optionId': opt, 'rank': rank + 1}
            for rank, opt in enumerate(order)
        ]}
        for i, order in enumerate(['rg', 'rb', 'gb', 'b', 'bg', 'bg'])
    ],
})


def test_table(capsys):
    irvpoll.__main__.main(io.StringIO(THREE_WAY), quiet=True)
    out = capsys.readouterr().out
    assert 'Results of Colors' in out
    assert 'Received 6 ballots for 3 options' in out
    assert 'Round 1' in out
    assert 'Round 2' in out
    assert 'eliminated' in out
    assert 'majority' in out
    assert out.rstrip().endswith('Winner: Blue with 4 votes')


def test_json(capsys):
    irvpoll.__main__.main(io.StringIO(THREE_WAY), as_json=True, quiet=True)
    output = json.loads(capsys.readouterr().out)
    assert output['totalBallots'] == 6
    assert output['winner'] == {'id': 'b', 'text': 'Blue', 'finalVoteCount': 4}
    assert output['rounds'][0] == {
        'roundNumber': 1,
        'tallies': {'Red': 2, 'Green': 1, 'Blue': 3},
        'eliminated': ['Green'],
    }
    assert output['eliminated'] == ['Green']


def test_no_options(capsys):
    with pytest.warns(UserWarning):
        irvpoll.__main__.main(io.StringIO('{"ballots": []}'), quiet=True)
    assert 'No winner' in capsys.readouterr().out


def test_validate():
    text = json.dumps({
        'options': [{'id': 1, 'text': 'A'}, {'id': 2, 'text': 'B'}],
        'ballots': [
            {'id': 'ok', 'rankings': [{'optionId': 1, 'rank': 1}]},
            {'id': 'bad', 'rankings': [{'optionId': 3, 'rank': 1}]},
        ],
    })
    irvpoll.__main__.main(io.StringIO(text), quiet=True)
    with pytest.raises(BallotError, match="'bad'"):
        irvpoll.__main__.main(io.StringIO(text), validate=True, quiet=True)


def test_args():
    path = os.path.join(DATA_DIR, 'lunch.json')
    args = irvpoll.__main__.argparser.parse_args(['-i', path, '-j', '-q'])
    try:
        assert args.as_json
        assert args.quiet
        assert not args.validate
    finally:
        args.input_file.close()
