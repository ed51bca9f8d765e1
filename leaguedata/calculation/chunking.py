import math
from typing import List, Sequence, Tuple, TypeVar, Union

from leaguedata.models.enums import ChunkPolicy

T = TypeVar("T")


def chunk(
    items: Sequence[T],
    max_per_chunk: int,
    policy: Union[ChunkPolicy, str] = ChunkPolicy.BALANCED,
) -> List[List[T]]:
    """Splits ``items`` into ordered display chunks.

    Both policies keep every item exactly once, in order, and return a
    single chunk when ``len(items) <= max_per_chunk``.

    BALANCED: the fewest chunks of at most ``max_per_chunk`` items, all of
    ``ceil(n / num_chunks)`` items except the last, which takes the
    remainder (19 items, max 9 -> 7, 7, 5).

    HEAD_HEAVY: exactly two chunks, the first holding ``ceil(n / 2)`` items.
    The halves are not capped at ``max_per_chunk``, which only decides
    whether to split at all.
    """
    if max_per_chunk < 1:
        raise ValueError(f"max_per_chunk must be at least 1, got {max_per_chunk}")

    items = list(items)
    total = len(items)
    if total <= max_per_chunk:
        return [items]

    policy = ChunkPolicy(policy)
    if policy is ChunkPolicy.HEAD_HEAVY:
        half = math.ceil(total / 2)
        return [items[:half], items[half:]]

    num_chunks = math.ceil(total / max_per_chunk)
    chunk_size = math.ceil(total / num_chunks)
    chunks: List[List[T]] = []
    start = 0
    for index in range(num_chunks):
        end = total if index == num_chunks - 1 else start + chunk_size
        piece = items[start:end]
        if piece:
            chunks.append(piece)
        start = end
    return chunks


def ranked_chunks(
    items: Sequence[T],
    max_per_chunk: int,
    policy: Union[ChunkPolicy, str] = ChunkPolicy.BALANCED,
) -> List[Tuple[int, List[T]]]:
    """Chunks paired with the 1-based overall rank of their first item."""
    pages: List[Tuple[int, List[T]]] = []
    placed = 0
    for piece in chunk(items, max_per_chunk, policy):
        pages.append((placed + 1, piece))
        placed += len(piece)
    return pages
