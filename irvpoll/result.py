'''Results of instant-runoff tallies.

A tally produces a :class:`Result`: the winner (if any) and the sequence of
:class:`Round` records tracing how the winner was reached. All of the records
are immutable. Their ``to_json_dict()`` methods render the camel-cased
structure that poll front-ends consume.
'''

import dataclasses
import types
from typing import Any, Dict, Mapping, Optional, Tuple

from irvpoll.option import Option, OptionId
from irvpoll.persist import simple_serialization


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Round:
    '''A single round (count) of the instant-runoff tally.

    :param number: 1-based number of the round.
    :param tallies: Votes counted for every option active in the round,
        keyed by option text, in the order of the active options.
    :param winner_text: Text of the option that gained a majority in this
        round, if any.
    :param final_vote_count: Votes of the majority winner in this round.
    :param eliminated_texts: Texts of the options eliminated in this round.
    '''
    number: int
    tallies: Mapping[str, int]
    winner_text: Optional[str] = None
    final_vote_count: Optional[int] = None
    eliminated_texts: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(
            self, 'tallies', types.MappingProxyType(dict(self.tallies))
        )
        object.__setattr__(
            self, 'eliminated_texts', tuple(self.eliminated_texts)
        )

    @property
    def total_votes(self) -> int:
        return sum(self.tallies.values())

    def to_json_dict(self) -> Dict[str, Any]:
        out = {
            'roundNumber': self.number,
            'tallies': dict(self.tallies),
        }
        if self.winner_text is not None:
            out['winner'] = self.winner_text
            out['finalVoteCount'] = self.final_vote_count
        if self.eliminated_texts:
            out['eliminated'] = list(self.eliminated_texts)
        return out


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Winner:
    '''The winning option and the votes it held when it won.'''
    id: OptionId
    text: str
    final_vote_count: int

    @classmethod
    def of(cls, option: Option, final_vote_count: int) -> 'Winner':
        return cls(option.id, option.text, final_vote_count)

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'text': self.text,
            'finalVoteCount': self.final_vote_count,
        }


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Result:
    '''Outcome of an instant-runoff tally.

    :param winner: The winning option, or None if there is none (no options
        to choose from).
    :param rounds: Rounds of the tally, in order. Empty if the winner was
        determined without counting (a single option or none at all).
    :param eliminated: Texts of all eliminated options in order of
        elimination.
    '''
    winner: Optional[Winner] = None
    rounds: Tuple[Round, ...] = ()
    eliminated: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'rounds', tuple(self.rounds))
        object.__setattr__(self, 'eliminated', tuple(self.eliminated))

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            'winner': (
                self.winner.to_json_dict() if self.winner is not None
                else None
            ),
            'rounds': [round_.to_json_dict() for round_ in self.rounds],
            'eliminated': list(self.eliminated),
        }
