'''Poll options, the things voters rank.

An option is identified by an opaque, hashable identifier (a database key,
a UUID string, a plain integer...) and shown to voters by its text. The
tally engine keys all of its internal counts by the identifier; the text
is only used when presenting the round-by-round results.
'''

import dataclasses
from typing import Hashable

from irvpoll.persist import simple_serialization


OptionId = Hashable


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Option:
    '''A single option of a ranked-choice poll.

    :param id: Identifier of the option, unique within its poll.
    :param text: Text of the option as displayed to voters.
    '''
    id: OptionId
    text: str

    def __str__(self) -> str:
        return self.text
