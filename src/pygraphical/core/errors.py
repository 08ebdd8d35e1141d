"""
errors.py

Exceptions raised by pygraphical. Failures of external collaborators
(Shapely, NetworkX or a caller supplied visibility graph builder) are not
wrapped and reach the caller unchanged.
"""


class GraphicalError(Exception):
    """
    Base class for all errors raised by pygraphical itself.
    """


class InvalidArgumentError(GraphicalError, ValueError):
    """
    Missing input, too few segments, or malformed points.
    """


class DegenerateSegmentError(InvalidArgumentError):
    """
    A segment whose endpoints are the same vertex within tolerance.
    """

    def __init__(self, segment_index: int, tolerance: float) -> None:
        super().__init__(
            f"Segment {segment_index} is degenerate: its endpoints coincide within {tolerance}")
        self.segment_index: int = segment_index
        self.tolerance: float = tolerance


class InvalidGeometryError(GraphicalError, ValueError):
    """
    Coordinates that are not finite, or point sets with no meaningful geometry.
    """


class GeometryAmbiguityError(GraphicalError, RuntimeError):
    """
    Segment references that cannot be told apart by identity.
    """
