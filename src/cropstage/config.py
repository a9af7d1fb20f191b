"""Default configuration values for cropstage."""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Crop box constraints
# ---------------------------------------------------------------------------

# Smallest width/height a crop box may be dragged to, in stage units.
MIN_SIZE: Final[float] = 16.0

# The crop box never comes closer than this to any stage edge, so the
# handles drawn 4 units outside the box stay on the stage.
STAGE_MARGIN: Final[float] = 4.0

# Length of the longer side of a freshly initialised crop box.
DEFAULT_CROP_BOX_SIZE: Final[float] = 200.0

# ---------------------------------------------------------------------------
# Image layer
# ---------------------------------------------------------------------------

# Wheel zoom never shrinks the displayed image below this on either axis.
MIN_IMAGE_SIZE: Final[float] = 16.0

# A freshly loaded image is fitted into the stage minus this padding.
VIEWPORT_PADDING: Final[float] = 8.0

# ---------------------------------------------------------------------------
# Handle hit areas (stage units)
# ---------------------------------------------------------------------------

# Corner handles are square, drawn ``HANDLE_OFFSET`` outside the box corner.
CORNER_HANDLE_SIZE: Final[float] = 12.0
HANDLE_OFFSET: Final[float] = 4.0

# Edge handles are strips of this thickness, inset from the corners.
EDGE_HANDLE_THICKNESS: Final[float] = 9.0
EDGE_HANDLE_INSET: Final[float] = 8.0

# The move region is the box shrunk by this amount on every side.
MOVE_REGION_INSET: Final[float] = 4.0

# ---------------------------------------------------------------------------
# Options file
# ---------------------------------------------------------------------------

OPTIONS_SCHEMA_ID: Final[str] = "cropstage/options@1"
OPTIONS_FILE_NAME: Final[str] = "cropstage.json"
OPTIONS_DIR_NAME: Final[str] = "cropstage"

# Names the options file directly, bypassing the per-user config directory.
OPTIONS_PATH_ENV: Final[str] = "CROPSTAGE_OPTIONS"
