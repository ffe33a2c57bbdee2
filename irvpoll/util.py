'''Various utility functions for other modules of irvpoll.

There should normally be no need to use these functions directly.
'''

import operator
from typing import Any, Collection, Dict, Iterable, List, Optional, Tuple

from irvpoll.ballot import Ballot
from irvpoll.option import OptionId


def preference_order(ballot: Ballot) -> Tuple[OptionId, ...]:
    '''Return the option identifiers of the ballot, most preferred first.'''
    return tuple(
        ranking.option_id for ranking in sorted(
            ballot.rankings, key=operator.attrgetter('rank')
        )
    )


def first_active(preferences: Iterable[OptionId],
                 active_ids: Collection[OptionId],
                 ) -> Optional[OptionId]:
    '''Return the most preferred option that is still active.

    The scan stops at the first match. Returns None if the ballot is
    exhausted, i.e. none of its options is active anymore.
    '''
    return next(
        (option_id for option_id in preferences if option_id in active_ids),
        None
    )


def top_choice_count(option_id: OptionId,
                     all_preferences: Iterable[Tuple[OptionId, ...]],
                     ) -> int:
    '''Count the ballots whose most preferred option is the given one.'''
    return sum(
        1 for preferences in all_preferences
        if preferences and preferences[0] == option_id
    )


def flatten(sequences: Iterable[Iterable[Any]]) -> List[Any]:
    return [item for seq in sequences for item in seq]


def text_keyed(options: Iterable[Any],
               counts: Dict[OptionId, int],
               ) -> Dict[str, int]:
    '''Rekey a mapping of option identifiers by option text.

    The output follows the order of the options.
    '''
    return {option.text: counts.get(option.id, 0) for option in options}
