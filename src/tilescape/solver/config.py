"""Tilescape solver configuration."""

from dotenv import find_dotenv
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tilescape.tiles import EMPTY, INVALID

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class SolverConfig(BaseSettings):
    """Configuration settings for the tilescape solver."""

    subgrid_size: int = 4
    """Side length of the square subgrids the landscape is partitioned into. Default: 4."""

    full_block_threshold: int = 13
    """Minimum count of a single value for a subgrid to take a FULL_BLOCK. Default: 13."""

    outer_boundary_threshold: int = 6
    """Minimum count of a single value for a subgrid to take an OUTER_BOUNDARY. Default: 6."""

    el_threshold: int = 3
    """A value present fewer than this many times selects an EL_SHAPE. Default: 3."""

    min_value: int = 0
    """Smallest cell value of the value domain. Default: 0."""

    max_value: int = 4
    """Largest cell value of the value domain. Default: 4."""

    strict_domain: bool = True
    """Whether values outside the domain raise an error during frequency analysis.

    If False, the frequency mapping is widened to include them. Default: True.
    """

    full_block_marker: int | None = None
    """Value stamped over a subgrid by FULL_BLOCK.

    Must differ from the empty (0) and invalid (-1) cell values. If None (default),
    `max_value + 1`, the first value above the domain.
    """

    detach_subgrids: bool = False
    """Whether subgrids are extracted as copies, so placements never reach the landscape.

    Default is False (subgrids are views and placements persist).
    """

    consume_supply: bool = True
    """Whether each placement decrements the tile supply.

    When enabled, the propagation sweep retires exhausted shapes once it settles and
    reports success if that leaves no supply. When disabled, the supply is read-only for the whole
    solve. Default: True.
    """

    show_subgrids: bool = True
    """Whether to print each updated subgrid to the diagnostic stream. Default: True."""

    log_dir: str = "logs"
    """Directory for per-landscape log files written by `run`."""

    model_config = SettingsConfigDict(
        env_prefix="TILESCAPE_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )

    @model_validator(mode="after")
    def _check_ranges(self) -> "SolverConfig":
        if self.subgrid_size <= 0:
            raise ValueError("subgrid_size must be positive.")
        if self.min_value > self.max_value:
            raise ValueError("min_value must not exceed max_value.")
        if self.marker in (EMPTY, INVALID):
            raise ValueError("full_block_marker must not be the empty or invalid cell value.")
        return self

    @property
    def marker(self) -> int:
        """The value stamped by FULL_BLOCK."""
        if self.full_block_marker is None:
            return self.max_value + 1
        return self.full_block_marker


config = SolverConfig()
