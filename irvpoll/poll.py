'''Ranked-choice polls.

A :class:`Poll` is an in-memory snapshot of a poll: its options, the ballots
cast so far and whether it still accepts votes. Ballots are validated when
cast; results can only be requested after the poll has been closed.
Storing polls, generating links to them and authenticating their creators
is left to the application.
'''

import datetime
import uuid
from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence

import irvpoll.evaluate.runoff
from irvpoll.ballot import Ballot, BallotValidator
from irvpoll.option import Option, OptionId
from irvpoll.result import Result


MIN_OPTIONS = 2


class PollError(Exception):
    '''A poll is set up or used in a way it does not permit.'''
    pass


class PollClosedError(PollError):
    '''A ballot was cast in a poll that no longer accepts votes.'''
    def __init__(self, poll_id: Hashable):
        self.poll_id = poll_id
        super().__init__(f'poll {poll_id!r} is closed')


class PollOpenError(PollError):
    '''Results were requested from a poll that is still open.'''
    def __init__(self, poll_id: Hashable):
        self.poll_id = poll_id
        super().__init__(
            f'poll {poll_id!r} is still open, results available after closing'
        )


class Poll:
    '''A ranked-choice poll.

    :param id: Identifier of the poll.
    :param title: Title of the poll. Must not be empty.
    :param options: Options to rank, in display order. The display order also
        decides complete ties in the tally in favor of earlier options.
        At least two options with unique identifiers are required.
    :param description: Optional longer description of the poll.
    :param ballots: Ballots already cast in the poll. They are validated just
        like newly cast ones.
    :param is_open: Whether the poll accepts ballots.
    :param closed_at: When the poll was closed, for polls created closed.
        Closed polls with no time given are stamped with the current time.
    :raises PollError: If the title is empty, fewer than two options are
        given or their identifiers are not unique.
    :raises irvpoll.ballot.BallotError: If any of the ballots is invalid.
    '''
    def __init__(self,
                 id: Hashable,
                 title: str,
                 options: Sequence[Option],
                 description: Optional[str] = None,
                 ballots: Iterable[Ballot] = (),
                 is_open: bool = True,
                 closed_at: Optional[datetime.datetime] = None,
                 ):
        if not title:
            raise PollError('poll title is required')
        if len(options) < MIN_OPTIONS:
            raise PollError(f'at least {MIN_OPTIONS} options are required')
        option_ids = [option.id for option in options]
        if len(set(option_ids)) != len(option_ids):
            raise PollError('option identifiers must be unique')
        self.id = id
        self.title = title
        self.description = description
        self.options = tuple(options)
        self.validator = BallotValidator(self.options)
        self._ballots: List[Ballot] = []
        for ballot in ballots:
            self.validator.validate(ballot)
            self._ballots.append(ballot)
        self.is_open = is_open
        self.closed_at = None if is_open else (closed_at or _now())

    @classmethod
    def create(cls,
               title: str,
               option_texts: Iterable[str],
               description: Optional[str] = None,
               ) -> 'Poll':
        '''Create a new open poll, generating identifiers for it.

        :param title: Title of the poll.
        :param option_texts: Texts of the options, in display order.
        :param description: Optional longer description of the poll.
        '''
        return cls(
            _new_id(),
            title,
            [Option(_new_id(), text) for text in option_texts],
            description=description,
        )

    def __repr__(self) -> str:
        state = 'open' if self.is_open else 'closed'
        return f'<Poll({self.title!r},{len(self.options)} options,{state})>'

    @property
    def ballots(self) -> Sequence[Ballot]:
        return tuple(self._ballots)

    @property
    def total_ballots(self) -> int:
        return len(self._ballots)

    def cast(self, ballot: Ballot) -> None:
        '''Cast a ballot in the poll.

        :param ballot: The ballot to cast.
        :raises PollClosedError: If the poll is closed.
        :raises irvpoll.ballot.BallotError: If the ballot is invalid.
        '''
        if not self.is_open:
            raise PollClosedError(self.id)
        self.validator.validate(ballot)
        self._ballots.append(ballot)

    def vote(self,
             option_ids: Sequence[OptionId],
             voter_id: Optional[str] = None,
             ) -> Ballot:
        '''Cast a ballot ranking the given options in the given order.

        :param option_ids: Identifiers of the options, most preferred first.
        :param voter_id: Identifier of the voter, if not anonymous.
        :returns: The ballot that was cast.
        '''
        ballot = Ballot.from_order(_new_id(), option_ids, voter_id=voter_id)
        self.cast(ballot)
        return ballot

    def close(self) -> None:
        '''Stop accepting ballots and record the closing time.

        Closing a closed poll does nothing; the first closing time is kept.
        '''
        if self.is_open:
            self.is_open = False
            self.closed_at = _now()

    def evaluate(self) -> Result:
        '''Tally the ballots by instant-runoff voting.

        :raises PollOpenError: If the poll is still open.
        '''
        if self.is_open:
            raise PollOpenError(self.id)
        return irvpoll.evaluate.runoff.compute_winner(
            self.options, self.ballots
        )

    def results(self) -> Dict[str, Any]:
        '''Return the tally results with the number of ballots cast.

        The output is the JSON-ready form of the result
        (see :meth:`irvpoll.result.Result.to_json_dict`) with an added
        ``totalBallots`` key.

        :raises PollOpenError: If the poll is still open.
        '''
        out = self.evaluate().to_json_dict()
        out['totalBallots'] = self.total_ballots
        return out


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)
