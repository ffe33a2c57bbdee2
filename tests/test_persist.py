import sys
import os
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import irvpoll.persist
import irvpoll.evaluate.runoff
from irvpoll.ballot import Ballot, Ranking
from irvpoll.option import Option

OPTIONS = [Option('p', 'Pizza'), Option('s', 'Sushi'), Option('t', 'Tacos')]
BALLOTS = [
    Ballot.from_order(1, ['p', 's']),
    Ballot.from_order(2, ['s', 'p']),
    Ballot.from_order(3, ['t', 's'], voter_id='carol'),
]


def test_option_to_dict():
    assert irvpoll.persist.to_dict(Option(5, 'Pizza')) == {
        'class': 'irvpoll.option.Option',
        'id': 5,
        'text': 'Pizza',
    }


def test_ballot_to_dict():
    assert BALLOTS[2].to_dict() == {
        'class': 'irvpoll.ballot.Ballot',
        'id': 3,
        'rankings': [
            {'class': 'irvpoll.ballot.Ranking', 'option_id': 't', 'rank': 1},
            {'class': 'irvpoll.ballot.Ranking', 'option_id': 's', 'rank': 2},
        ],
        'voter_id': 'carol',
    }


def test_evaluator_to_dict():
    assert irvpoll.evaluate.runoff.InstantRunoff().to_dict() == {
        'class': 'irvpoll.evaluate.runoff.InstantRunoff',
    }


def test_evaluator_from_dict():
    irv = irvpoll.persist.from_dict(
        {'class': 'irvpoll.evaluate.runoff.InstantRunoff'}
    )
    assert isinstance(irv, irvpoll.evaluate.runoff.InstantRunoff)


@pytest.mark.parametrize('obj', [
    OPTIONS[0],
    BALLOTS[2],
    irvpoll.evaluate.runoff.compute_winner(OPTIONS, BALLOTS),
])
def test_json_roundtrip(obj):
    objdict = irvpoll.persist.to_dict(obj)
    assert irvpoll.persist.from_dict(json.loads(json.dumps(objdict))) == obj


def test_non_string_keys():
    value = irvpoll.persist.serialize_value({1: 'a', 2: 'b'})
    assert value == {'type': 'dict', 'keys': [1, 2], 'values': ['a', 'b']}
    assert irvpoll.persist.deserialize_value(value) == {1: 'a', 2: 'b'}


@pytest.mark.parametrize('value', [
    'irvpoll.option.Option',
    {'id': 1},
    {'class': 'os.system'},
    {'class': '.option.Option'},
])
def test_from_dict_invalid(value):
    with pytest.raises(ValueError):
        irvpoll.persist.from_dict(value)


def test_serialize_invalid():
    with pytest.raises(ValueError):
        irvpoll.persist.serialize_value(object())
