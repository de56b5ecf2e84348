"""Dark theme configuration for the web console."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    bg_primary: str = "#0d1117"
    bg_secondary: str = "#161b22"
    bg_card: str = "#1c2128"
    border: str = "#30363d"
    text_primary: str = "#e6edf3"
    text_secondary: str = "#8b949e"
    text_muted: str = "#6e7681"
    cyan: str = "#39c5cf"
    blue: str = "#58a6ff"
    green: str = "#3fb950"
    red: str = "#f85149"
    yellow: str = "#d29922"
    purple: str = "#bc8cff"


COLORS = Palette()

GLOBAL_CSS = f"""
body {{
    background-color: {COLORS.bg_primary} !important;
    color: {COLORS.text_primary} !important;
    font-family: 'JetBrains Mono', 'Fira Code', monospace !important;
}}
.q-card {{
    background-color: {COLORS.bg_card} !important;
    border: 1px solid {COLORS.border} !important;
}}
.q-header {{
    background-color: {COLORS.bg_secondary} !important;
    border-bottom: 1px solid {COLORS.border} !important;
}}
.q-btn {{
    text-transform: none !important;
}}
.console-log {{
    background-color: {COLORS.bg_primary} !important;
    color: {COLORS.text_secondary} !important;
    font-size: 12px;
}}
"""
