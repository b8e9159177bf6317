"""
Viewer styles - dark palette, dimensions and display formatting.
"""

COLORS = {
    # Backgrounds
    "bg_base": "#0d0d0d",
    "bg_surface": "#1a1a1a",
    "bg_elevated": "#222222",
    "bg_hover": "#2a2a2a",
    "bg_active": "#303030",
    # Text hierarchy
    "text_primary": "#f5f5f5",
    "text_secondary": "#b3b3b3",
    "text_muted": "#737373",
    # Accents
    "accent_primary": "#3b82f6",  # Blue 500
    "accent_primary_muted": "rgba(59, 130, 246, 0.15)",
    "warning": "#f59e0b",
    "error": "#ef4444",
    # Timeline bars
    "bar_closed": "#3b82f6",
    "bar_open": "#f59e0b",  # Started, never ended
    "bar_clamped": "#a855f7",  # Widened to stay visible
    "bar_track": "#1f1f1f",
    # Borders
    "border_subtle": "rgba(255, 255, 255, 0.08)",
    "border_default": "rgba(255, 255, 255, 0.12)",
}

UI = {
    "window_min_width": 640,
    "window_min_height": 400,
    "window_default_width": 1200,
    "window_default_height": 800,
    "name_column_width": 360,
    "duration_column_width": 90,
    "row_height": 22,
    "bar_padding": 4,
    "bar_radius": 2,
}


def format_duration_ms(elapsed_ms: int) -> str:
    """Format duration in milliseconds for display.

    Args:
        elapsed_ms: Duration in milliseconds

    Returns:
        Human-readable duration string (e.g., '2m 30s', '5s', '250ms')
    """
    if elapsed_ms >= 60000:
        return f"{elapsed_ms // 60000}m {(elapsed_ms % 60000) // 1000}s"
    elif elapsed_ms >= 1000:
        return f"{elapsed_ms / 1000:.1f}s"
    return f"{elapsed_ms}ms"


def get_stylesheet() -> str:
    return f"""
        QMainWindow, QTableView {{
            background-color: {COLORS["bg_base"]};
            color: {COLORS["text_primary"]};
        }}
        QTableView {{
            gridline-color: {COLORS["border_subtle"]};
            selection-background-color: {COLORS["accent_primary_muted"]};
            border: none;
        }}
        QHeaderView::section {{
            background-color: {COLORS["bg_surface"]};
            color: {COLORS["text_secondary"]};
            border: none;
            border-bottom: 1px solid {COLORS["border_default"]};
            padding: 4px 8px;
        }}
        QStatusBar {{
            background-color: {COLORS["bg_surface"]};
            color: {COLORS["text_muted"]};
        }}
    """
