'''Evaluate the results of ranked-choice polls.

The :mod:`runoff` module holds the instant-runoff tally; :mod:`core` holds
the pure building blocks of a single round (majority check, elimination of
the lowest-tallied options).

None of the evaluators validate ballot correctness; use
:class:`irvpoll.ballot.BallotValidator` for that before evaluating.
'''

from irvpoll.evaluate.runoff import InstantRunoff, compute_winner    # noqa
