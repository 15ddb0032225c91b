import logging
from itertools import count
from typing import Iterator

from command import Command, Release, Request


MEM_SIZE = 1024
MIN_REQUEST_SIZE = 64

logger = logging.getLogger(__name__)


def identifiers() -> Iterator[str]:
    """
    Yields A, B, ..., Z, AA, AB, ..., ZZ, AAA, ... forever.
    """

    for n in count(1):

        label = ''
        while n:
            n, rem = divmod(n - 1, 26)
            label = chr(ord('A') + rem) + label

        yield label


class Block:

    def __init__(self, size: int, occupant: str | None = None) -> None:
        self.size = size
        # None marks a free block
        self.occupant = occupant


    @property
    def is_free(self) -> bool:
        return self.occupant is None


    def cell(self) -> str:
        label = ' ' if self.is_free else self.occupant
        return f'| {label}   {f"{self.size}K":>5} '


    def __repr__(self) -> str:
        return f'Block({self.size}, {self.occupant!r})'


class Memory:
    """
    Buddy allocation over a fixed pool, kept as an ordered list of blocks
    whose sizes always add up to the pool size.
    """

    def __init__(self, size: int = MEM_SIZE) -> None:

        if size < MIN_REQUEST_SIZE or size & (size - 1):
            raise ValueError(f'pool size must be a power of two >= {MIN_REQUEST_SIZE}, got {size}')

        self.size = size
        self._blocks = [Block(size)]
        self._ids = identifiers()


    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)


    def __len__(self) -> int:
        return len(self._blocks)


    def left_of(self, index: int) -> Block | None:
        if index > 0:
            return self._blocks[index - 1]
        return None


    def right_of(self, index: int) -> Block | None:
        if index + 1 < len(self._blocks):
            return self._blocks[index + 1]
        return None


    def find(self, occupant: str) -> int | None:
        for index, block in enumerate(self._blocks):
            if block.occupant == occupant:
                return index
        return None


    def process_command(self, command: Command) -> bool:

        if isinstance(command, Request):
            return self.request(command.size)

        if isinstance(command, Release):
            return self.release(command.id)

        raise TypeError(f'not a command: {command!r}')


    def request(self, size: int) -> bool:
        """
        Allocates the smallest free block that fits, splitting it towards the
        left until another split would be too small. Returns False, leaving
        the pool untouched, when nothing fits.
        """

        if size < MIN_REQUEST_SIZE:
            logger.debug('Request %d below minimum of %d', size, MIN_REQUEST_SIZE)
            return False

        index = self._best_fit(size)
        if index is None:
            logger.debug('No free block can hold %d', size)
            return False

        block = self._blocks[index]
        while block.size // 2 >= size:
            self._split(index)

        block.occupant = next(self._ids)
        logger.debug('Allocated %s (%d) at block %d', block.occupant, block.size, index)
        return True


    def release(self, occupant: str) -> bool:
        """
        Frees the block holding `occupant` and merges it with free neighbours
        of equal size, right first, until no merge applies.
        """

        index = self.find(occupant)
        if index is None:
            logger.debug('No block holds %s', occupant)
            return False

        self._blocks[index].occupant = None

        while True:

            block = self._blocks[index]

            if self._mergeable(block, self.right_of(index)):
                block.size *= 2
                del self._blocks[index + 1]
                logger.debug('Merged block %d with its right neighbour into %d', index, block.size)
                continue

            left = self.left_of(index)
            if self._mergeable(block, left):
                left.size *= 2
                del self._blocks[index]
                index -= 1
                logger.debug('Merged block %d with its left neighbour into %d', index, left.size)
                continue

            break

        return True


    def render(self) -> str:
        row = ''.join(block.cell() for block in self._blocks) + ' |'
        border = '-' * len(row)
        return f'{border}\n{row}\n{border}\n'


    def __str__(self) -> str:
        return self.render()


    def _best_fit(self, size: int) -> int | None:

        best = None
        for index, block in enumerate(self._blocks):

            if not block.is_free or block.size < size:
                continue

            # Strictly smaller keeps the leftmost on ties
            if best is None or block.size < self._blocks[best].size:
                best = index

        return best


    def _split(self, index: int) -> None:
        block = self._blocks[index]
        block.size //= 2
        self._blocks.insert(index + 1, Block(block.size))


    @staticmethod
    def _mergeable(block: Block, other: Block | None) -> bool:
        return other is not None and block.is_free and other.is_free and block.size == other.size

