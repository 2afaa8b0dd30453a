"""Runtime variable storage"""

from typing import FrozenSet, List

from ..exceptions import InternalError

Words = FrozenSet[str]

NO_WORDS: Words = frozenset()


class State:
    """Flat table of variable slots, indexed by the slot numbers in the AST"""

    def __init__(self, num_slots: int = 0):
        self._values: List[Words] = [NO_WORDS] * num_slots

    def __len__(self):
        return len(self._values)

    def _check(self, slot: int):
        if not 0 <= slot < len(self._values):
            raise InternalError(f"Slot {slot} out of range (have {len(self._values)})")

    def get(self, slot: int) -> Words:
        self._check(slot)
        return self._values[slot]

    def set(self, slot: int, words: Words) -> Words:
        self._check(slot)
        self._values[slot] = frozenset(words)
        return self._values[slot]
