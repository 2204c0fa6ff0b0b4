"""QSS stylesheet and phase colors for NØDE timer."""

from __future__ import annotations

from ..timer.engine import Phase

PHASE_COLORS: dict[Phase, str] = {
    Phase.WORK: "#D4FF00",   # node volt
    Phase.REST: "#F2F2F2",
}
COMPLETE_COLOR = "#A6E3A1"

PALETTE: dict[str, str] = {
    "bg":           "#0B0B0F",
    "panel":        "#15151C",
    "border":       "#2A2A36",
    "accent":       "#D4FF00",
    "text":         "#F2F2F2",
    "text_muted":   "#8A8A99",
}


def build_stylesheet(palette: dict[str, str] = PALETTE) -> str:
    p = palette
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QFrame#card {{
        background-color: {p['panel']};
        border: 1px solid {p['border']};
        border-radius: 8px;
    }}

    QLabel#timeLabel {{
        font-family: "Menlo", "DejaVu Sans Mono", monospace;
        font-size: 64px;
        font-weight: 700;
    }}

    QLabel#roundLabel, QLabel#mutedLabel {{
        color: {p['text_muted']};
        font-size: 13px;
    }}

    QLabel#phaseLabel {{
        font-size: 20px;
        font-weight: 600;
    }}

    QPushButton {{
        background-color: {p['panel']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 6px;
        padding: 8px 24px;
        font-weight: 700;
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
    }}

    QTabBar::tab {{
        padding: 8px 18px;
        color: {p['text_muted']};
    }}

    QTabBar::tab:selected {{
        color: {p['accent']};
        border-bottom: 2px solid {p['accent']};
    }}
    """
