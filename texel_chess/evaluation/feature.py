from typing import NamedTuple


class Feature(NamedTuple):
    """One sparse term of the linear evaluation: `coefficient * weights[index]`."""

    index: int
    coefficient: float
