'''Instant-runoff voting (IRV) tally.

The tally eliminates the options with the fewest votes round by round and
transfers each ballot to its most preferred option still in play, until one
option holds a strict majority of the votes counted in a round or only one
option remains.

Use :func:`compute_winner` for a one-off tally or an :class:`InstantRunoff`
evaluator object where an evaluator is expected.
'''

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import irvpoll.util
import irvpoll.evaluate.core
from irvpoll.ballot import Ballot
from irvpoll.option import Option, OptionId
from irvpoll.persist import simple_serialization
from irvpoll.result import Result, Round, Winner

logger = logging.getLogger(__name__)


@simple_serialization
class InstantRunoff:
    '''Select a single winner by instant-runoff voting.

    First, the first preferences of all ballots are counted. If an option
    has more than half of the counted votes, it wins. Otherwise, all options
    tied at the lowest count are eliminated and every ballot is counted
    again for its most preferred option that is still active. Ballots whose
    ranked options have all been eliminated (exhausted ballots) are not
    counted anymore, so the majority is always taken from the votes
    counted in the current round.

    If all remaining options are tied, the first of them (in the order in
    which the options were given) is kept and all others are eliminated.
    This makes the tally deterministic but it is an arbitrary choice that
    favors options listed earlier.

    The evaluator does not validate the ballots. Rankings of options that are
    not among the given options are never counted. Use
    :class:`irvpoll.ballot.BallotValidator` to reject such ballots up front.
    The evaluator keeps no state between calls, so a single instance can be
    shared freely.
    '''
    def evaluate(self,
                 options: Sequence[Option],
                 ballots: Sequence[Ballot],
                 ) -> Result:
        '''Determine the winner of the poll.

        :param options: Options of the poll. Their order decides ties in which
            all remaining options have the same number of votes.
        :param ballots: Ranked ballots cast in the poll.
        :returns: The winner and the round-by-round tally.
        '''
        active = list(options)
        if not active:
            logger.info('no options to choose from, no winner')
            return Result()
        all_preferences = [
            irvpoll.util.preference_order(ballot) for ballot in ballots
        ]
        if len(active) == 1:
            only = active[0]
            n_votes = irvpoll.util.top_choice_count(only.id, all_preferences)
            logger.info('%s is the only option, wins with %d votes',
                        only.text, n_votes)
            return Result(Winner.of(only, n_votes))
        rounds = []
        while len(active) > 1:
            number = len(rounds) + 1
            logger.info('proceeding to round %d', number)
            tallies = self.tally(active, all_preferences)
            round_, retained = self.next_round(number, active, tallies)
            rounds.append(round_)
            if round_.winner_text is not None:
                return self._result(
                    Winner.of(retained[0], round_.final_vote_count), rounds
                )
            active = retained
        if not active:
            logger.info('all options eliminated, no winner')
            return self._result(None, rounds)
        last = active[0]
        if rounds:
            n_votes = rounds[-1].tallies.get(last.text, 0)
        else:
            n_votes = irvpoll.util.top_choice_count(last.id, all_preferences)
        logger.info('%s is the last option remaining, wins with %d votes',
                    last.text, n_votes)
        return self._result(Winner.of(last, n_votes), rounds)

    def tally(self,
              active: Sequence[Option],
              all_preferences: Sequence[Tuple[OptionId, ...]],
              ) -> Dict[OptionId, int]:
        '''Count each ballot for its most preferred active option.

        :param active: Options still in play.
        :param all_preferences: Option identifiers of every ballot, most
            preferred first.
        :returns: Votes per active option, in the order of the active
            options, including options with no votes.
        '''
        tallies = {option.id: 0 for option in active}
        for preferences in all_preferences:
            choice = irvpoll.util.first_active(preferences, tallies)
            if choice is not None:
                tallies[choice] += 1
        return tallies

    def next_round(self,
                   number: int,
                   active: Sequence[Option],
                   tallies: Dict[OptionId, int],
                   ) -> Tuple[Round, List[Option]]:
        '''Decide the outcome of a single round from its tallies.

        :param number: Number of the round.
        :param active: Options in play in this round, in canonical order.
        :param tallies: Votes per active option.
        :returns: A 2-tuple with the round record and the options that stay
            in play. If the round has a majority winner, only the winner
            stays in play.
        '''
        text_tallies = irvpoll.util.text_keyed(active, tallies)
        logger.info('round %d tallies: %s', number, text_tallies)
        winner_id = irvpoll.evaluate.core.majority_winner(tallies)
        if winner_id is not None:
            winner = next(option for option in active if option.id == winner_id)
            logger.info('%s wins round %d by majority', winner.text, number)
            return Round(
                number,
                text_tallies,
                winner_text=winner.text,
                final_vote_count=tallies[winner_id],
            ), [winner]
        retained, eliminated = irvpoll.evaluate.core.partition_lowest(
            active, tallies
        )
        if len(set(tallies.values())) == 1:
            logger.debug('all options tied at %d votes, keeping %s',
                         next(iter(tallies.values())), retained[0].text)
        eliminated_texts = tuple(option.text for option in eliminated)
        logger.info('eliminating %s', list(eliminated_texts))
        return Round(
            number, text_tallies, eliminated_texts=eliminated_texts
        ), retained

    def _result(self,
                winner: Optional[Winner],
                rounds: List[Round],
                ) -> Result:
        return Result(
            winner,
            tuple(rounds),
            tuple(irvpoll.util.flatten(r.eliminated_texts for r in rounds)),
        )


def compute_winner(options: Sequence[Option],
                   ballots: Sequence[Ballot],
                   ) -> Result:
    '''Determine the winner of a poll by instant-runoff voting.

    A shorthand for ``InstantRunoff().evaluate(options, ballots)``.
    '''
    return InstantRunoff().evaluate(options, ballots)
