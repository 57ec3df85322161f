"""Line segments and the pairwise intersection test used by mosaic shapes."""

from dataclasses import dataclass
from typing import Optional

from . import utility
from .vector import Vector


@dataclass(frozen=True, eq=False)
class Segment:
    """Line segment between two points; direction does not matter for equality."""

    start: Vector
    end: Vector

    @classmethod
    def from_tuples(cls, start, end) -> "Segment":
        return cls(Vector.from_tuple(start), Vector.from_tuple(end))

    def squared_length(self) -> float:
        return self.start.squared_distance_to(self.end)

    def length(self) -> float:
        return self.start.distance_to(self.end)

    def intersect(self, segment: "Segment") -> Optional[Vector]:
        """
        Find the point where two segments cross.

        Only strict interior crossings count: touching at an endpoint of this
        segment is not an intersection, so already known key points are not
        added again. Parallel and collinear segments never intersect.

        Args:
            segment: Other segment

        Returns:
            Intersection point or None
        """
        self_vector = self.end - self.start
        segment_vector = segment.end - segment.start
        denominator = self_vector.cross(segment_vector)
        if utility.approx_eq(denominator, 0.0):
            return None
        start_vector = self.start - segment.start
        factor = segment_vector.cross(start_vector) / denominator
        if 0.0 < factor < 1.0:
            return self.start + self_vector * factor
        return None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return (self.start == other.start and self.end == other.end) or (
            self.start == other.end and self.end == other.start
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Segment({self.start!r}, {self.end!r})"

    def __str__(self) -> str:
        return f"[{self.start} - {self.end}]"
