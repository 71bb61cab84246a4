from __future__ import annotations

AUTO_WIDE_MIN_WIDTH = 90

VALID_LAYOUTS = {"auto", "compact", "wide"}
LAYOUT_CLASSES = ("layout-compact", "layout-wide")


def normalize_layout_mode(mode: object) -> str:
    text = str(mode or "").strip().lower()
    if text in VALID_LAYOUTS:
        return text
    return "auto"


def resolve_layout_mode(width: int, requested_mode: object) -> str:
    mode = normalize_layout_mode(requested_mode)
    if mode != "auto":
        return mode
    if width >= AUTO_WIDE_MIN_WIDTH:
        return "wide"
    return "compact"


def status_line(path: object, count: int, modified: bool) -> str:
    state = "unsaved changes" if modified else "saved"
    noun = "recipe" if count == 1 else "recipes"
    return f"{path} | {count} {noun} | {state}"
