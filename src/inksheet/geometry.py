from dataclasses import dataclass


@dataclass(frozen=True)
class Bounds:
    """축 정렬 사각형 (mins ~ maxs)."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def loosened(self, amount: float) -> "Bounds":
        """모든 방향으로 amount만큼 넓힌 사각형 반환."""
        return Bounds(
            self.min_x - amount,
            self.min_y - amount,
            self.max_x + amount,
            self.max_y + amount,
        )
