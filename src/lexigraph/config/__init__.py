from lexigraph.config.io import (
    clear_config_cache,
    get_coloring_config,
    get_default_loop_limit,
    get_lexicon_defaults,
    get_loop_padding,
    get_merged_config,
)
from lexigraph.config.models import (
    ColoringConfig,
    LexiconConfig,
    LexigraphConfig,
    LimitsConfig,
)

__all__ = [
    "ColoringConfig",
    "LexiconConfig",
    "LexigraphConfig",
    "LimitsConfig",
    "clear_config_cache",
    "get_coloring_config",
    "get_default_loop_limit",
    "get_lexicon_defaults",
    "get_loop_padding",
    "get_merged_config",
]
