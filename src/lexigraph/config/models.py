from typing import Annotated, Any, Self

import pydantic

from lexigraph.types import ColoringHeuristic

class LexiconConfig(pydantic.BaseModel):
    """Default policies for newly created Lexicons."""

    accept_duplicates: bool = True
    accept_null_values: bool = True
    synchronized_access: bool = False
    initial_capacity: Annotated[int, pydantic.Field(ge=0)] = 0


class LimitsConfig(pydantic.BaseModel):
    """Iteration caps for loops that could otherwise spin on inconsistent graphs."""

    padding: Annotated[int, pydantic.Field(ge=0)] = 100
    default_loop_limit: Annotated[int, pydantic.Field(gt=0)] = 1000


class ColoringConfig(pydantic.BaseModel):
    """Coloring heuristic defaults."""

    default_heuristic: ColoringHeuristic = ColoringHeuristic.DSATUR
    random_seed: int | None = None

    @pydantic.field_validator("default_heuristic", mode="before")
    @classmethod
    def normalize_heuristic(cls, v: Any) -> Any:
        """Accept heuristic names in any case and with dashes."""
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v


class LexigraphConfig(pydantic.BaseModel):
    """Complete lexigraph configuration schema."""

    lexicon: LexiconConfig = pydantic.Field(default_factory=LexiconConfig)
    limits: LimitsConfig = pydantic.Field(default_factory=LimitsConfig)
    coloring: ColoringConfig = pydantic.Field(default_factory=ColoringConfig)

    @classmethod
    def get_default(cls) -> Self:
        """Get default configuration."""
        return cls()

