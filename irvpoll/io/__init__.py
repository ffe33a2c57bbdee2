"""Input/output of polls in file formats such as JSON snapshots.

This subpackage is structured into modules by file format. Its root namespace
contains some general-purpose functions to transform ballot definitions
into the standard of irvpoll.
"""

from typing import Dict, Optional, Tuple

from irvpoll.ballot import Ranking, RankValueError
from irvpoll.option import OptionId


def rankings_from_mapping(ranks: Dict[OptionId, Optional[int]]
                          ) -> Tuple[Ranking, ...]:
    '''Transform a mapping of options to their ranks into rankings.

    This is the form in which ranks typically come from a voting form where
    every option has a rank field. Options left unranked (None) are skipped.

    :param ranks: A dictionary mapping option identifiers to their numeric
        ranks. Lower numbers mean better ranks.
    :returns: Rankings ordered from the best rank to the worst.
    :raises RankValueError: If any rank is neither None nor an integer.
    '''
    filled = []
    for option_id, rank in ranks.items():
        if rank is None:
            continue
        elif isinstance(rank, bool) or not isinstance(rank, int):
            raise RankValueError(rank, option_id)
        filled.append((option_id, rank))
    return tuple(
        Ranking(option_id, rank)
        for option_id, rank in sorted(filled, key=lambda item: item[1])
    )
