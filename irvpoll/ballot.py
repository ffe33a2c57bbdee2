'''Ranked ballots and ballot validators.

A ballot ranks any subset of the poll's options. Each ranking pairs an option
identifier with a positive integer rank; lower ranks are preferred. Ranks
need not start at 1 nor be contiguous, only their relative order matters.
A ballot without any rankings is legal for the tally engine and simply casts
no vote.

The tally engine does not check ballots at all. Ballots coming from voters
should be checked at the point where they are accepted, using
:class:`BallotValidator`. If a ballot is invalid, it raises a subclass of
:class:`BallotError`.
'''

import abc
import dataclasses
from typing import Any, Collection, Hashable, Optional, Tuple

from irvpoll.option import Option, OptionId
from irvpoll.persist import simple_serialization


class BallotError(Exception, metaclass=abc.ABCMeta):
    '''A ballot is invalid given the poll it was cast in.'''
    pass


class EmptyBallotError(BallotError):
    '''A ballot does not rank any option.'''
    def __init__(self):
        super().__init__('rankings are required')


class RankValueError(BallotError):
    '''A rank is not a positive integer.

    :param rank: The invalid rank value.
    :param option_id: Identifier of the option the rank was given to.
    '''
    def __init__(self, rank: Any, option_id: Optional[OptionId] = None):
        self.rank = rank
        self.option_id = option_id
        message = f'invalid rank: {rank!r}'
        if option_id is not None:
            message += f' for option {option_id!r}'
        super().__init__(message + ', must be a positive integer')


class DuplicateRankError(BallotError):
    '''Two or more options share the same rank.'''
    def __init__(self, rank: int):
        self.rank = rank
        super().__init__(f'all ranks must be unique, {rank} used repeatedly')


class DuplicateOptionError(BallotError):
    '''An option is ranked more than once.'''
    def __init__(self, option_id: OptionId):
        self.option_id = option_id
        super().__init__(f'option {option_id!r} ranked more than once')


class UnknownOptionError(BallotError):
    '''A ranking refers to an option that is not part of the poll.'''
    def __init__(self, option_id: OptionId):
        self.option_id = option_id
        super().__init__(f'invalid poll option ID: {option_id!r}')


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Ranking:
    '''A rank given to a single option on a ballot.

    :param option_id: Identifier of the ranked option.
    :param rank: Position of the option in the voter's preference order.
        Lower is better.
    '''
    option_id: OptionId
    rank: int


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Ballot:
    '''A single voter's ranked ballot.

    :param id: Identifier of the ballot.
    :param rankings: Rankings of options, in any order. Stored as a tuple
        so that the ballot cannot be altered after it was cast.
    :param voter_id: Identifier of the voter, if known. Not used for
        the tally.
    '''
    id: Hashable
    rankings: Tuple[Ranking, ...] = ()
    voter_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'rankings', tuple(self.rankings))

    @classmethod
    def from_order(cls,
                   id: Hashable,
                   option_ids: Collection[OptionId],
                   voter_id: Optional[str] = None,
                   ) -> 'Ballot':
        '''Create a ballot ranking the given options in the given order.

        The first option is ranked 1, the second 2, etc.
        '''
        return cls(
            id,
            tuple(
                Ranking(option_id, rank)
                for rank, option_id in enumerate(option_ids, start=1)
            ),
            voter_id=voter_id,
        )


class BallotValidator:
    '''Validate a ranked ballot against the options of its poll.

    :param options: Options of the poll the ballots are cast in.
    :param allow_empty: Whether to accept ballots with no rankings.
    '''
    def __init__(self,
                 options: Collection[Option],
                 allow_empty: bool = False,
                 ):
        self.option_ids = frozenset(option.id for option in options)
        self.allow_empty = allow_empty

    def validate(self, ballot: Ballot) -> None:
        '''Check if the ballot is valid.

        :param ballot: Ballot to be checked.
        :raises EmptyBallotError: If the ballot ranks nothing and empty
            ballots are not allowed.
        :raises RankValueError: If any rank is not a positive integer.
        :raises DuplicateRankError: If any rank is used more than once.
        :raises DuplicateOptionError: If any option is ranked more than once.
        :raises UnknownOptionError: If any ranked option is not a poll option.
        '''
        if not ballot.rankings and not self.allow_empty:
            raise EmptyBallotError()
        used_ranks = set()
        used_options = set()
        for ranking in ballot.rankings:
            rank = ranking.rank
            if isinstance(rank, bool) or not isinstance(rank, int) or rank < 1:
                raise RankValueError(rank, ranking.option_id)
            if rank in used_ranks:
                raise DuplicateRankError(rank)
            used_ranks.add(rank)
            if ranking.option_id not in self.option_ids:
                raise UnknownOptionError(ranking.option_id)
            if ranking.option_id in used_options:
                raise DuplicateOptionError(ranking.option_id)
            used_options.add(ranking.option_id)
