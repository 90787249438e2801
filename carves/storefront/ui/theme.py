"""
Yala Carves Theme - warm wood palette.

Primary brown for bars and product cards, parchment background, white text
on brown surfaces.
"""

# =============================================================================
# PRIMARY COLORS
# =============================================================================
PRIMARY_BROWN = "#684C2F"      # App bar, navigation, product cards
BACKGROUND_PARCHMENT = "#F0EAE1"
ACCENT_LIGHT_GRAY = "#D3D3D3"  # Avatar placeholder

# =============================================================================
# TEXT COLORS
# =============================================================================
TEXT_ON_PRIMARY = "#FFFFFF"
TEXT_GREETING = PRIMARY_BROWN
TEXT_EMPTY_STATE = PRIMARY_BROWN
TEXT_ERROR = "#B3261E"

# =============================================================================
# LOG LEVEL COLORS
# =============================================================================
LOG_INFO = PRIMARY_BROWN
LOG_SUCCESS = "#3E7B3A"
LOG_WARNING = "#B8860B"
LOG_ERROR = TEXT_ERROR

# =============================================================================
# SIZES
# =============================================================================
AVATAR_SIZE = 48
CARD_PADDING = 16
SCREEN_PADDING = 12


def get_log_color(level: str) -> str:
    """Color for a log feed entry by level."""
    return {
        "info": LOG_INFO,
        "success": LOG_SUCCESS,
        "warning": LOG_WARNING,
        "error": LOG_ERROR,
    }.get(level, LOG_INFO)
