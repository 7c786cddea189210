"""
SciCal Configuration Settings
"""
import os

# Application Settings
APP_NAME = "SciCal Scientific Calculator"
VERSION = "1.0.0"

# Display Settings
WINDOW_WIDTH = 420
WINDOW_HEIGHT = 600
DISPLAY_FONT = ("Consolas", 30, "bold")   # LCD/segmented-style font
HISTORY_FONT = ("Consolas", 12)
BUTTON_FONT = ("Segoe UI", 12)

# Display font steps: (max text length, point size)
DISPLAY_FONT_STEPS = [
    (10, 30),
    (15, 24),
    (20, 19),
    (25, 16),
    (30, 13),
]
DISPLAY_FONT_MIN = 11

# ── Neumorphic Palettes ────────────────────────────────────────────────────────

# LIGHT palette  – soft sage-green background
NEU_LIGHT = {
    "bg":           "#DDE6ED",   # base surface
    "bg_dark":      "#C8D4DF",   # slightly darker variant (inset feel)
    "shadow_dark":  "#B2BFC8",
    "shadow_lite":  "#FFFFFF",
    "display_bg":   "#C8D4DF",
    "display_fg":   "#1A2332",   # high-contrast dark text (LCD dark on light)
    "history_fg":   "#6E8090",
    "btn_bg":       "#DDE6ED",
    "btn_fg":       "#2B3A4A",
    "operator_fg":  "#1E7A56",
    "function_fg":  "#2C5F8A",
    "equals_bg":    "#2E8B57",
    "equals_fg":    "#FFFFFF",
    "danger":       "#B03A2E",
}

# DARK palette  – deep slate with green accents
NEU_DARK = {
    "bg":           "#1E2530",
    "bg_dark":      "#161C26",
    "shadow_dark":  "#10161E",
    "shadow_lite":  "#283040",
    "display_bg":   "#161C26",
    "display_fg":   "#9ADDB0",   # soft green glow – LCD green-on-dark
    "history_fg":   "#4E6070",
    "btn_bg":       "#1E2530",
    "btn_fg":       "#BDD0E0",
    "operator_fg":  "#4DB888",
    "function_fg":  "#5E8FC8",
    "equals_bg":    "#2D8A58",
    "equals_fg":    "#FFFFFF",
    "danger":       "#E55A4E",
}


def get_theme(dark: bool) -> dict:
    """Return the active neumorphic colour palette."""
    return NEU_DARK if dark else NEU_LIGHT


def display_font_size(text: str) -> int:
    """Shrink the readout font as the expression grows."""
    length = len(text)
    for max_length, size in DISPLAY_FONT_STEPS:
        if length <= max_length:
            return size
    return DISPLAY_FONT_MIN


# Calculator Settings
OPERATORS = ("+", "-", "*", "/")
DIGITS = "0123456789"
MAX_RESULT_LENGTH = 10     # longest integer shown without rounding
RESULT_PRECISION = 10      # fractional digits kept when rounding
FACTORIAL_LIMIT = 1000000
ERROR_TEXT = "Error"

# Scientific functions offered on the keypad: (function name, label)
FUNCTION_BUTTONS = [
    ("sin", "sin"), ("cos", "cos"), ("tan", "tan"), ("log", "log"), ("ln", "ln"),
    ("sqrt", "√"), ("pow", "x²"), ("factorial", "n!"), ("pi", "π"), ("e", "e"),
    ("percent", "%"), ("inverse", "1/x"), ("abs", "|x|"), ("negate", "±"), ("exp", "exp"),
]

# GUI preferences (theme only, no calculation data)
SETTINGS_FILE = os.path.join(os.path.dirname(__file__), "settings.json")

# History Settings
MAX_HISTORY_ITEMS = 100

# Web Portal settings
WEB_HOST = '0.0.0.0'
WEB_PORT = 8888
