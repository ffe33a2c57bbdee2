'''JSON poll snapshots.

A snapshot holds everything needed to tally a closed poll::

    {
        "title": "Lunch",
        "options": [{"id": 1, "text": "Pizza"}, {"id": 2, "text": "Sushi"}],
        "ballots": [
            {"id": 1, "rankings": [{"optionId": 2, "rank": 1},
                                   {"optionId": 1, "rank": 2}]},
            {"id": 2, "rankings": {"1": 1}}
        ]
    }

The title is optional. Option texts may also be given under ``optionText``
and ranked option identifiers under ``pollOptionId``, as exported by
poll web applications. Ballot rankings may be a list of ranking objects or
a mapping of option identifiers to ranks, where null marks an unranked
option; JSON mapping keys are always strings so that form should only be
used with string identifiers. Identifiers must be strings or integers. Ballot
identifiers default to the position of the ballot in the list.
'''

import json
from typing import Any, Dict, List, Optional, Sequence

import irvpoll.io
import irvpoll.io.core
from irvpoll.ballot import Ballot, Ranking, RankValueError
from irvpoll.io.core import PollSnapshot
from irvpoll.option import Option


class SnapshotParseError(irvpoll.io.core.ParseError):
    pass


def parse(text: str) -> PollSnapshot:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        raise SnapshotParseError(f'invalid JSON: {err}') from err
    if not isinstance(data, dict):
        raise SnapshotParseError('snapshot must be a JSON object')
    title = data.get('title')
    options = [
        _parse_option(item) for item in _get_list(data, 'options', 'snapshot')
    ]
    ballots = [
        _parse_ballot(item, i)
        for i, item in enumerate(_get_list(data, 'ballots', 'snapshot'))
    ]
    return PollSnapshot(options, ballots, title)


load, loads = irvpoll.io.core.loaders(parse)


def render(options: Sequence[Option],
           ballots: Sequence[Ballot],
           title: Optional[str] = None,
           indent: Optional[int] = 2,
           ) -> str:
    data = {}
    if title is not None:
        data['title'] = title
    data['options'] = [
        {'id': option.id, 'text': option.text} for option in options
    ]
    data['ballots'] = [_render_ballot(ballot) for ballot in ballots]
    return json.dumps(data, indent=indent, ensure_ascii=False)


dump, dumps = irvpoll.io.core.dumpers(render)


def _render_ballot(ballot: Ballot) -> Dict[str, Any]:
    out = {
        'id': ballot.id,
        'rankings': [
            {'optionId': ranking.option_id, 'rank': ranking.rank}
            for ranking in ballot.rankings
        ],
    }
    if ballot.voter_id is not None:
        out['voterId'] = ballot.voter_id
    return out


def _get_list(data: Dict[str, Any], key: str, where: str) -> List[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise SnapshotParseError(f'{where} {key} must be a list')
    return value


def _get_first(data: Dict[str, Any], keys: Sequence[str], where: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    raise SnapshotParseError(f'{where} is missing {" or ".join(keys)}')


def _check_id(value: Any, where: str) -> Any:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise SnapshotParseError(
            f'{where} id must be a string or an integer, got {value!r}'
        )
    return value


def _parse_option(data: Any) -> Option:
    if not isinstance(data, dict):
        raise SnapshotParseError(f'option must be an object, got {data!r}')
    return Option(
        _check_id(_get_first(data, ['id'], 'option'), 'option'),
        str(_get_first(data, ['text', 'optionText'], 'option')),
    )


def _parse_ballot(data: Any, index: int) -> Ballot:
    if not isinstance(data, dict):
        raise SnapshotParseError(f'ballot must be an object, got {data!r}')
    raw_rankings = data.get('rankings', [])
    if isinstance(raw_rankings, dict):
        try:
            rankings = irvpoll.io.rankings_from_mapping(raw_rankings)
        except RankValueError as err:
            raise SnapshotParseError(str(err)) from err
    elif isinstance(raw_rankings, list):
        rankings = tuple(_parse_ranking(item) for item in raw_rankings)
    else:
        raise SnapshotParseError(
            f'ballot rankings must be a list or an object, got {raw_rankings!r}'
        )
    return Ballot(data.get('id', index), rankings, data.get('voterId'))


def _parse_ranking(data: Any) -> Ranking:
    if not isinstance(data, dict):
        raise SnapshotParseError(f'ranking must be an object, got {data!r}')
    rank = _get_first(data, ['rank'], 'ranking')
    if isinstance(rank, bool) or not isinstance(rank, int):
        raise SnapshotParseError(f'rank must be an integer, got {rank!r}')
    return Ranking(
        _check_id(
            _get_first(data, ['optionId', 'pollOptionId'], 'ranking'),
            'ranked option',
        ),
        rank,
    )
