"""irvpoll - ranked-choice polls decided by instant-runoff voting.

A poll offers a number of options; voters rank any subset of them on their
ballots. Once the poll is closed, the winner is determined by instant-runoff
voting (IRV): the options with the fewest votes are eliminated round by round
and their ballots transferred to the next preference still in play, until one
option holds a majority of the votes counted in a round.

The parts of the library:

-   The ``option`` and ``ballot`` modules define the data the tally works
    with. The ``ballot`` module also contains a validator that should be used
    to check ballots when they are cast.
-   The ``evaluate`` subpackage performs the tally itself. Its result, defined
    in the ``result`` module, records the winner and every round of the count.
-   The ``poll`` module wraps options and ballots into a poll that can be
    voted in, closed and evaluated.
-   The ``io`` subpackage reads and writes poll snapshots as JSON and the
    package can be run as a command-line tool to tally such snapshots.
"""

from irvpoll.option import Option    # noqa
from irvpoll.ballot import Ballot, Ranking    # noqa
from irvpoll.result import Result, Round, Winner    # noqa
from irvpoll.evaluate.runoff import compute_winner    # noqa
