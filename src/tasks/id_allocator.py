import re
import secrets
import time
from abc import ABC, abstractmethod
from typing import Iterable

SEQUENTIAL_ID_PATTERN = re.compile(r"^[0-9]{1,3}$")
MAX_SEQUENTIAL_ID = 999
BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def current_millis() -> int:
    return time.time_ns() // 1_000_000


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


class TaskIdAllocator(ABC):
    # Whether next_id needs the ids currently in the store
    needs_existing_ids: bool = True

    @abstractmethod
    def next_id(self, existing_ids: Iterable[str]) -> str:
        pass

    def fallback_id(self, now_millis: int | None = None) -> str:
        """Id used when the existing ids cannot be read: the last three
        digits of the millisecond timestamp."""
        millis = current_millis() if now_millis is None else now_millis
        return str(millis)[-3:].zfill(3)


class SequentialTaskIdAllocator(TaskIdAllocator):
    """Zero-padded 3-digit counter, wrapping from 999 back to 001."""

    def next_id(self, existing_ids: Iterable[str]) -> str:
        numeric_ids = [
            int(task_id.strip())
            for task_id in existing_ids
            if task_id and SEQUENTIAL_ID_PATTERN.match(task_id.strip())
        ]

        if not numeric_ids:
            return "001"

        max_id = max(numeric_ids)
        next_id = 1 if max_id >= MAX_SEQUENTIAL_ID else max_id + 1
        return str(next_id).zfill(3)


class RandomTaskIdAllocator(TaskIdAllocator):
    """Base-36 millisecond timestamp followed by a random base-36 suffix.

    There is no collision detection, and these ids must not share a store
    with sequential ones.
    """

    needs_existing_ids = False

    def __init__(self, suffix_length: int = 6):
        self.suffix_length = suffix_length

    def next_id(self, existing_ids: Iterable[str] = ()) -> str:
        suffix = "".join(
            secrets.choice(BASE36_ALPHABET) for _ in range(self.suffix_length)
        )
        return f"{to_base36(current_millis())}{suffix}"


def get_id_allocator(strategy: str) -> TaskIdAllocator:
    if strategy == "sequential":
        return SequentialTaskIdAllocator()
    elif strategy == "random":
        return RandomTaskIdAllocator()
    else:
        raise ValueError(f"Unsupported task id strategy: {strategy}")
