from dataclasses import dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class FieldCandidate:
    """A hypothesis for one field's value, with its score and where it was found."""
    value: str
    score: int
    line_index: int
    column_index: int = 0
    repaired: bool = False

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        """Score descending, then earliest line, then earliest column."""
        return (-self.score, self.line_index, self.column_index)


def rank_candidates(candidates: Iterable[FieldCandidate]) -> List[FieldCandidate]:
    return sorted(candidates, key=lambda c: c.sort_key)
