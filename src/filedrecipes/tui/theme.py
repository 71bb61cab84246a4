from __future__ import annotations

APP_CSS = """
Screen {
    padding: 0 1;
}

#body {
    height: 1fr;
}

#recipe-list {
    width: 32;
    height: 1fr;
    border: round $surface;
}

#recipe-detail {
    width: 1fr;
    height: 1fr;
    padding: 0 1;
    border: round $surface;
    overflow-y: auto;
}

#status {
    height: auto;
    color: $text-muted;
}

.layout-compact #body {
    layout: vertical;
}

.layout-compact #recipe-list {
    width: 1fr;
    height: 12;
}
"""
