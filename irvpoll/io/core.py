"""Shared functionality for poll file I/O. Internal."""

from __future__ import annotations

import dataclasses
from typing import Callable, List, Optional, TextIO, Tuple

from irvpoll.ballot import Ballot
from irvpoll.option import Option


class ParseError(Exception):
    """An input that is invalid according to the given format was detected."""
    pass


@dataclasses.dataclass
class PollSnapshot:
    """A container for data returnable from a poll file."""
    options: List[Option]
    ballots: List[Ballot]
    title: Optional[str] = None

    @property
    def total_ballots(self) -> int:
        return len(self.ballots)


def loaders(text_loader: Callable[..., PollSnapshot]
            ) -> Tuple[Callable[..., PollSnapshot],
                       Callable[..., PollSnapshot]]:
    """Create load() and loads() functions from a text parsing function."""

    def load(file: TextIO, **kwargs) -> PollSnapshot:
        return text_loader(file.read(), **kwargs)

    def loads(text: str, **kwargs) -> PollSnapshot:
        return text_loader(text, **kwargs)

    return load, loads


def dumpers(text_dumper: Callable[..., str]
            ) -> Tuple[Callable[..., None], Callable[..., str]]:
    """Create dump() and dumps() functions from a text rendering function."""

    def dump(file: TextIO, *args, **kwargs) -> None:
        text = text_dumper(*args, **kwargs)
        if not text.endswith('\n'):
            text += '\n'
        file.write(text)

    def dumps(*args, **kwargs) -> str:
        return text_dumper(*args, **kwargs)

    return dump, dumps
