"""
Royal Calculator Configuration Settings
"""
import os

# Application Settings
APP_NAME = "Royal Calculator"
VERSION = "1.0.0"

# Display clamp: results must fit a fixed-width display line
DISPLAY_MAX_CHARS = 14
LARGE_MAGNITUDE = 1e12
SMALL_MAGNITUDE = 1e-9
EXTREME_PRECISION = 10    # significant digits outside [1e-9, 1e12)
OVERFLOW_PRECISION = 12   # significant digits when the natural form is too wide

# Window Settings
WINDOW_WIDTH = 360
WINDOW_HEIGHT = 520
HISTORY_FONT = ("Segoe UI", 12)
DISPLAY_FONT = ("Consolas", 28, "bold")
BUTTON_FONT = ("Segoe UI", 16)
LABEL_FONT = ("Segoe UI", 11)

# ── Palettes ───────────────────────────────────────────────────────────────

ROYAL_LIGHT = {
    "bg":           "#EEF0F6",
    "bg_dark":      "#DCE0EB",
    "shadow_dark":  "#BFC5D4",
    "display_bg":   "#DCE0EB",
    "display_fg":   "#1B1F3B",
    "history_fg":   "#6A7090",
    "btn_bg":       "#EEF0F6",
    "btn_fg":       "#1B1F3B",
    "operator_fg":  "#5B3FA8",   # royal purple accent
    "equals_bg":    "#5B3FA8",
    "equals_fg":    "#FFFFFF",
    "danger":       "#B03A2E",
    "text":         "#1B1F3B",
    "subtext":      "#6A7090",
}

ROYAL_DARK = {
    "bg":           "#15172A",
    "bg_dark":      "#0F1120",
    "shadow_dark":  "#0A0C18",
    "display_bg":   "#0F1120",
    "display_fg":   "#F2D675",   # gold on navy
    "history_fg":   "#8088B0",
    "btn_bg":       "#1D2038",
    "btn_fg":       "#D8DCF0",
    "operator_fg":  "#F2D675",
    "equals_bg":    "#B8962E",
    "equals_fg":    "#15172A",
    "danger":       "#E55A4E",
    "text":         "#D8DCF0",
    "subtext":      "#8088B0",
}


def get_theme(dark: bool) -> dict:
    """Return the active colour palette."""
    return ROYAL_DARK if dark else ROYAL_LIGHT


# Keypad layout, row by row: (label, action, param)
KEYPAD = [
    [("C", "clear", None), ("⌫", "backspace", None), ("%", "percent", None), ("÷", "operator", "÷")],
    [("7", "digit", "7"), ("8", "digit", "8"), ("9", "digit", "9"), ("×", "operator", "×")],
    [("4", "digit", "4"), ("5", "digit", "5"), ("6", "digit", "6"), ("-", "operator", "-")],
    [("1", "digit", "1"), ("2", "digit", "2"), ("3", "digit", "3"), ("+", "operator", "+")],
    [("0", "digit", "0"), (".", "digit", "."), ("=", "equals", None)],
]

# Keyboard support: key name (Tk keysym or character) -> (action, param)
KEY_BINDINGS = {str(d): ("digit", str(d)) for d in range(10)}
KEY_BINDINGS.update({
    ".": ("digit", "."),
    "period": ("digit", "."),
    "+": ("operator", "+"),
    "plus": ("operator", "+"),
    "-": ("operator", "-"),
    "minus": ("operator", "-"),
    "*": ("operator", "×"),
    "asterisk": ("operator", "×"),
    "/": ("operator", "÷"),
    "slash": ("operator", "÷"),
    "%": ("percent", None),
    "percent": ("percent", None),
    "=": ("equals", None),
    "equal": ("equals", None),
    "Enter": ("equals", None),
    "Return": ("equals", None),
    "KP_Enter": ("equals", None),
    "BackSpace": ("backspace", None),
    "Backspace": ("backspace", None),
    "Escape": ("clear", None),
})

# Database Settings
DB_PATH = os.path.join(os.path.dirname(__file__), "royalcalc.db")

# History Settings
MAX_HISTORY_ITEMS = 100

# Web settings
WEB_HOST = '0.0.0.0'
WEB_PORT = 8888
MAX_SESSIONS = 256
