from dataclasses import dataclass


@dataclass(frozen=True)
class ScoreRecord:
    id: str
    points: int
