import sys
import os
import datetime

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import irvpoll.poll
from irvpoll.ballot import Ballot, Ranking, BallotError
from irvpoll.option import Option
from irvpoll.poll import Poll, PollError, PollClosedError, PollOpenError

OPTIONS = [Option(1, 'Pizza'), Option(2, 'Sushi'), Option(3, 'Tacos')]


def lunch_poll(**kwargs):
    return Poll('lunch', 'Lunch', OPTIONS, **kwargs)


def test_create():
    poll = Poll.create('Lunch', ['Pizza', 'Sushi'], description='Friday')
    assert poll.title == 'Lunch'
    assert poll.description == 'Friday'
    assert [option.text for option in poll.options] == ['Pizza', 'Sushi']
    assert len({option.id for option in poll.options}) == 2
    assert poll.is_open
    assert poll.total_ballots == 0


@pytest.mark.parametrize('title, options', [
    ('', OPTIONS),
    ('Lunch', OPTIONS[:1]),
    ('Lunch', []),
    ('Lunch', [Option(1, 'Pizza'), Option(1, 'Sushi')]),
])
def test_invalid_setup(title, options):
    with pytest.raises(PollError):
        Poll('p', title, options)


def test_vote_and_results():
    poll = lunch_poll()
    for order in ([1, 2], [1, 3], [2, 1], [3, 2], [2]):
        poll.vote(order)
    assert poll.total_ballots == 5
    poll.close()
    results = poll.results()
    assert results['totalBallots'] == 5
    assert results['rounds'][0] == {
        'roundNumber': 1,
        'tallies': {'Pizza': 2, 'Sushi': 2, 'Tacos': 1},
        'eliminated': ['Tacos'],
    }
    assert results['rounds'][1] == {
        'roundNumber': 2,
        'tallies': {'Pizza': 2, 'Sushi': 3},
        'winner': 'Sushi',
        'finalVoteCount': 3,
    }
    assert results['winner'] == {'id': 2, 'text': 'Sushi', 'finalVoteCount': 3}
    assert results['eliminated'] == ['Tacos']


def test_vote_voter_id():
    poll = lunch_poll()
    ballot = poll.vote([3], voter_id='alice')
    assert poll.ballots == (ballot, )
    assert ballot.voter_id == 'alice'


def test_cast_invalid():
    poll = lunch_poll()
    with pytest.raises(BallotError):
        poll.cast(Ballot('b', [Ranking(9, 1)]))
    with pytest.raises(BallotError):
        poll.vote([])
    assert poll.total_ballots == 0


def test_cast_closed():
    poll = lunch_poll()
    poll.close()
    poll.close()
    with pytest.raises(PollClosedError):
        poll.vote([1])


def test_closed_at():
    poll = lunch_poll()
    assert poll.closed_at is None
    poll.close()
    closed_at = poll.closed_at
    assert closed_at.tzinfo is datetime.timezone.utc
    poll.close()
    assert poll.closed_at == closed_at


def test_closed_at_given():
    when = datetime.datetime(2024, 5, 1, 12, tzinfo=datetime.timezone.utc)
    assert lunch_poll(is_open=False, closed_at=when).closed_at == when
    assert lunch_poll(is_open=False).closed_at is not None
    assert lunch_poll(closed_at=when).closed_at is None


def test_results_open():
    poll = lunch_poll()
    poll.vote([1])
    with pytest.raises(PollOpenError, match='still open'):
        poll.results()


def test_initial_ballots_validated():
    with pytest.raises(BallotError):
        lunch_poll(ballots=[Ballot('b', [Ranking(1, 1), Ranking(2, 1)])])


def test_closed_with_ballots():
    poll = lunch_poll(
        ballots=[Ballot.from_order(i, [1]) for i in range(3)],
        is_open=False,
    )
    result = poll.evaluate()
    assert result.winner.text == 'Pizza'
    assert result.winner.final_vote_count == 3


def test_ballots_read_only():
    poll = lunch_poll()
    poll.vote([1])
    assert isinstance(poll.ballots, tuple)


def test_repr():
    assert repr(lunch_poll()) == "<Poll('Lunch',3 options,open)>"
