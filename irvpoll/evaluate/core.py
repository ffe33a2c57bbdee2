'''Building blocks of a single instant-runoff round.

These are pure functions over the tallies of one round: they never modify
their arguments and return fresh lists.
'''

from typing import Dict, List, Optional, Sequence, Tuple

from irvpoll.option import Option, OptionId


def majority_winner(tallies: Dict[OptionId, int]) -> Optional[OptionId]:
    '''Return the option with a strict majority of the tallied votes.

    A strict majority means more than half of all votes tallied in the round;
    an even split between two options therefore has no winner. At most one
    option can hold a strict majority.

    :param tallies: Votes per option.
    :returns: Identifier of the majority option, or None.
    '''
    total = sum(tallies.values())
    for option_id, n_votes in tallies.items():
        if n_votes * 2 > total:
            return option_id
    return None


def lowest_tallied(active: Sequence[Option],
                   tallies: Dict[OptionId, int],
                   ) -> List[Option]:
    '''Return all active options tied at the lowest number of votes.

    Options missing from the tallies count as having zero votes. The output
    follows the order of the active options.
    '''
    if not active:
        return []
    min_votes = min(tallies.get(option.id, 0) for option in active)
    return [
        option for option in active
        if tallies.get(option.id, 0) == min_votes
    ]


def partition_lowest(active: Sequence[Option],
                     tallies: Dict[OptionId, int],
                     ) -> Tuple[List[Option], List[Option]]:
    '''Split the active options into retained and eliminated ones.

    All options tied at the lowest number of votes are eliminated together.
    If that would eliminate every active option (all of them are tied), the
    first option in the active order is retained and all others eliminated.

    :param active: Options active in the round, in their canonical order.
    :param tallies: Votes per option in the round.
    :returns: A 2-tuple of retained and eliminated options, both in the
        order of the active options.
    '''
    lowest = lowest_tallied(active, tallies)
    if len(lowest) == len(active) and len(active) > 1:
        return [active[0]], list(active[1:])
    lowest_ids = {option.id for option in lowest}
    retained = [option for option in active if option.id not in lowest_ids]
    return retained, lowest
