"""Configuration classes for roadnet components."""

from dataclasses import dataclass


@dataclass
class RoadnetConfig:
    """Tunable limits and conventions shared by the algorithms."""

    # Largest node count accepted by the bitmask tour solvers (2**N * N table)
    max_tour_nodes: int = 16

    # Coordinate units per distance unit (coordinates are tenths of a km)
    distance_scale: float = 10.0

    # Decimal places kept for geometric distances and route lengths
    distance_ndigits: int = 1

    # Raise on edges that reference unknown node ids instead of dropping them
    strict_edges: bool = False

    def validate(self) -> None:
        """Raise ValueError if any setting is out of its meaningful range."""
        if self.max_tour_nodes < 1:
            raise ValueError(
                f"max_tour_nodes must be >= 1, got {self.max_tour_nodes}"
            )
        if self.distance_scale <= 0:
            raise ValueError(
                f"distance_scale must be positive, got {self.distance_scale}"
            )
        if self.distance_ndigits < 0:
            raise ValueError(
                f"distance_ndigits must be >= 0, got {self.distance_ndigits}"
            )


# Global configuration instance
CONFIG = RoadnetConfig()
