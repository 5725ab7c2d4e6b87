"""Theme definitions for the TUI.

Hides the color palette. To add a theme, define it here and register it
in the app.
"""

from textual.theme import Theme

# Warm palette built around the orange used in exported report headers
VENTAS_DARK = Theme(
    name="ventas-dark",
    primary="#ff8a65",
    secondary="#90caf9",
    accent="#ffd54f",
    foreground="#eceff1",
    background="#121212",
    success="#81c784",
    warning="#ffb74d",
    error="#e57373",
    surface="#1e1e1e",
    panel="#181818",
    dark=True,
    variables={
        "block-cursor-foreground": "#121212",
        "block-cursor-background": "#ff8a65",
        "block-cursor-text-style": "bold",
        "input-cursor-background": "#eceff1",
        "input-cursor-foreground": "#121212",
        "input-selection-background": "#ff8a65 30%",
        "border": "#424242",
        "border-blurred": "#303030",
        "scrollbar": "#303030",
        "scrollbar-hover": "#424242",
        "scrollbar-active": "#ff8a65",
        "scrollbar-background": "#181818",
        "footer-foreground": "#b0bec5",
        "footer-background": "#121212",
        "footer-key-foreground": "#ffd54f",
        "footer-key-background": "#303030",
        "text-muted": "#78909c",
        "text-disabled": "#424242",
    },
)
