"""Application configuration driven by environment variables.

All settings have sensible defaults for local development.
Export the variables below (or put them in your process environment) to
override them.
"""

import os

# ---------------------------------------------------------------------------
# Movie catalogue query
# ---------------------------------------------------------------------------

# ISO 3166-1 region sent alongside a watch-provider filter.
WATCH_REGION: str = os.getenv("MOVIEMATCH_WATCH_REGION", "US")

# Results per page when the in-memory catalogue emulates a discover query.
CATALOGUE_PAGE_SIZE: int = int(os.getenv("MOVIEMATCH_CATALOGUE_PAGE_SIZE", "20"))

# Base URL for poster images; the size segment and poster path are appended.
TMDB_IMAGE_BASE: str = os.getenv("TMDB_IMAGE_BASE", "https://image.tmdb.org/t/p")

# ---------------------------------------------------------------------------
# Matching round
# ---------------------------------------------------------------------------

# Below this many unseen candidates the broadened fallback query runs.
MIN_CANDIDATES: int = int(os.getenv("MOVIEMATCH_MIN_CANDIDATES", "3"))

# Top-N selection bounds applied to the ranked list.
MIN_SELECTION: int = int(os.getenv("MOVIEMATCH_MIN_SELECTION", "3"))
MAX_SELECTION: int = int(os.getenv("MOVIEMATCH_MAX_SELECTION", "10"))
