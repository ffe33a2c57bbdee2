import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from irvpoll.option import Option
from irvpoll.result import Result, Round, Winner


def test_round_json_elimination():
    round_ = Round(1, {'A': 3, 'B': 2, 'C': 1}, eliminated_texts=['C'])
    assert round_.to_json_dict() == {
        'roundNumber': 1,
        'tallies': {'A': 3, 'B': 2, 'C': 1},
        'eliminated': ['C'],
    }


def test_round_json_winner():
    round_ = Round(2, {'A': 4, 'B': 1}, winner_text='A', final_vote_count=4)
    assert round_.to_json_dict() == {
        'roundNumber': 2,
        'tallies': {'A': 4, 'B': 1},
        'winner': 'A',
        'finalVoteCount': 4,
    }


def test_round_tallies_read_only():
    tallies = {'A': 1}
    round_ = Round(1, tallies)
    tallies['B'] = 2
    assert round_.tallies == {'A': 1}
    with pytest.raises(TypeError):
        round_.tallies['A'] = 5


def test_round_total():
    assert Round(1, {'A': 3, 'B': 2}).total_votes == 5


def test_result_json():
    result = Result(
        Winner.of(Option(7, 'A'), 3),
        [
            Round(1, {'A': 3, 'B': 2, 'C': 1}, eliminated_texts=['C']),
            Round(2, {'A': 3, 'B': 3}, eliminated_texts=['B']),
        ],
        ['C', 'B'],
    )
    assert result.to_json_dict() == {
        'winner': {'id': 7, 'text': 'A', 'finalVoteCount': 3},
        'rounds': [
            {
                'roundNumber': 1,
                'tallies': {'A': 3, 'B': 2, 'C': 1},
                'eliminated': ['C'],
            },
            {
                'roundNumber': 2,
                'tallies': {'A': 3, 'B': 3},
                'eliminated': ['B'],
            },
        ],
        'eliminated': ['C', 'B'],
    }


def test_empty_result_json():
    assert Result().to_json_dict() == {
        'winner': None,
        'rounds': [],
        'eliminated': [],
    }
