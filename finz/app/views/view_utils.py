from __future__ import annotations

import logging
from typing import Any, Callable, Optional

log = logging.getLogger(__name__)


def safe_call(
    fn: Optional[Callable[..., Any]],
    *args: Any,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> None:
    if fn is None:
        return
    try:
        fn(*args)
    except Exception as exc:
        if on_error:
            on_error(exc)
        else:
            log.exception("Callback failed: %s", exc)


def center_over_parent(window, parent) -> str:
    """Geometry string placing ``window`` centered over ``parent``."""
    window.update_idletasks()
    width = window.winfo_reqwidth()
    height = window.winfo_reqheight()
    try:
        px, py = parent.winfo_rootx(), parent.winfo_rooty()
        pw, ph = parent.winfo_width(), parent.winfo_height()
    except Exception:
        return f"{width}x{height}"
    x = px + max(0, (pw - width) // 2)
    y = py + max(0, (ph - height) // 2)
    return f"{width}x{height}+{x}+{y}"


__all__ = ["center_over_parent", "safe_call"]
