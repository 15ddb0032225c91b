import re
from typing import NamedTuple


# Digits followed by exactly one unit character, e.g. 256K
SIZE_TOKEN = re.compile(r'(\d+)(\D)')


class ParseError(ValueError):
    pass


class Request(NamedTuple):
    size: int

    def __str__(self) -> str:
        return f'Request {self.size}K'


class Release(NamedTuple):
    id: str

    def __str__(self) -> str:
        return f'Release {self.id}'


Command = Request | Release


def parse_command(line: str) -> Command:
    """
    Parses one input line, `Request <size><unit>` or `Release <id>`.
    Raises ParseError on anything else.
    """

    tokens = line.split()
    if len(tokens) != 2:
        raise ParseError(f'Invalid command found in input: {line!r}')

    verb, arg = tokens

    if verb == 'Request':
        match = SIZE_TOKEN.fullmatch(arg)
        if match is None:
            raise ParseError(f'Invalid request size in input: {line!r}')
        return Request(int(match.group(1)))

    if verb == 'Release':
        return Release(arg)

    raise ParseError(f'Invalid command found in input: {line!r}')

