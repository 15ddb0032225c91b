import argparse
import logging
import sys
from typing import Iterable, TextIO

from command import Command, ParseError, Request, parse_command
from memory import MEM_SIZE, Memory


logger = logging.getLogger(__name__)


class RequestError(Exception):

    def __init__(self, command: Command) -> None:
        super().__init__('Could not satisfy request!')
        self.command = command


class AllocationFailure(RequestError):
    pass


class ReleaseFailure(RequestError):
    pass


def read_commands(path: str) -> list[Command]:
    # The whole file is parsed before anything runs
    with open(path) as file:
        return [parse_command(line) for line in file if line.strip()]


def run(commands: Iterable[Command], memory: Memory | None = None, out: TextIO | None = None) -> Memory:
    """
    Applies the commands in order, printing the pool before the first one
    and after each. Raises a RequestError at the first command the pool
    cannot satisfy.
    """

    if memory is None:
        memory = Memory(MEM_SIZE)
    if out is None:
        out = sys.stdout

    print(memory, file=out)

    for command in commands:

        print(command, file=out)

        if not memory.process_command(command):
            if isinstance(command, Request):
                raise AllocationFailure(command)
            raise ReleaseFailure(command)

        print(memory, file=out)

    return memory


def main(argv: list[str] | None = None) -> int:

    parser = argparse.ArgumentParser(description='Run allocation commands against a buddy allocated memory pool.')
    parser.add_argument('input', nargs='?', default='input.txt', help='file with one Request/Release command per line')
    parser.add_argument('-v', '--verbose', action='store_true', help='log splits and merges')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - [%(name)s] - %(levelname)s - %(message)s',
    )

    try:
        commands = read_commands(args.input)
    except (OSError, ParseError) as e:
        logger.error('Could not read commands from %s: %s', args.input, e)
        return 1

    try:
        run(commands)
    except RequestError as e:
        logger.error('%s: %s', e.command, e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())

