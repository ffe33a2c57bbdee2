"""A commandline tool to tally ranked-choice polls by instant-runoff voting.

Reads a JSON poll snapshot (options and ranked ballots) and shows the tally
round by round along with the winner.
"""

import argparse
import io
import json
import logging
import sys
import warnings
from typing import Any, Dict

import irvpoll.io.snapshot
from irvpoll.ballot import BallotError, BallotValidator
from irvpoll.evaluate.runoff import InstantRunoff
from irvpoll.io.core import ParseError, PollSnapshot
from irvpoll.result import Result, Round

argparser = argparse.ArgumentParser(
    prog='irvpoll',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load the poll snapshot from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load the poll snapshot from standard input',
)
argparser.add_argument(
    '-j', '--json',
    action='store_true',
    dest='as_json',
    help='output the results as JSON instead of a table',
)
argparser.add_argument(
    '--validate',
    action='store_true',
    help=(
        'check all ballots before the tally and stop at the first invalid'
        ' one (by default, rankings of unknown options are ignored)'
    ),
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all evaluator log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any evaluator log messages',
)


def main(input_file: io.TextIOBase,
         use_stdin: bool = False,
         as_json: bool = False,
         validate: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    snapshot = irvpoll.io.snapshot.load(input_file)
    if not snapshot.options:
        warnings.warn('poll has no options, no winner can be determined')
    if validate:
        validate_ballots(snapshot)
    result = InstantRunoff().evaluate(snapshot.options, snapshot.ballots)
    if as_json:
        print(json.dumps(json_output(result, snapshot), indent=2,
                         ensure_ascii=False))
    else:
        show_result(result, snapshot)


def validate_ballots(snapshot: PollSnapshot) -> None:
    """Check all ballots of the snapshot, raising at the first invalid one."""
    validator = BallotValidator(snapshot.options)
    for ballot in snapshot.ballots:
        try:
            validator.validate(ballot)
        except BallotError as err:
            raise BallotError(f'ballot {ballot.id!r}: {err}') from err


def json_output(result: Result, snapshot: PollSnapshot) -> Dict[str, Any]:
    out = result.to_json_dict()
    out['totalBallots'] = snapshot.total_ballots
    return out


def show_round(round_: Round) -> None:
    print(f'Round {round_.number}')
    n_just_chars = max(len(text) for text in round_.tallies)
    for text, n_votes in round_.tallies.items():
        if text == round_.winner_text:
            note = 'majority'
        elif text in round_.eliminated_texts:
            note = 'eliminated'
        else:
            note = ''
        print('   ', text.ljust(n_just_chars), ' ', str(n_votes).rjust(6),
              ' ', note)


def show_result(result: Result, snapshot: PollSnapshot) -> None:
    """Show the full tally results round by round."""
    print()
    if snapshot.title:
        print(f'Results of {snapshot.title}')
    print(f'Received {snapshot.total_ballots} ballots'
          f' for {len(snapshot.options)} options')
    print()
    for round_ in result.rounds:
        show_round(round_)
        print()
    if result.winner is None:
        print('No winner')
    else:
        print(f'Winner: {result.winner.text}'
              f' with {result.winner.final_vote_count} votes')


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        try:
            main(**vars(args))
        except (ParseError, BallotError) as err:
            argparser.exit(1, f'error: {err}\n')
