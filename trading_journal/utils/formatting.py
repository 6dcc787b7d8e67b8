"""Display helpers for R values."""


def format_r(r: float) -> str:
    """Signed R string, e.g. +1.50R / -0.25R."""
    if r == 0:
        r = 0.0
    return f"{'+' if r >= 0 else ''}{r:.2f}R"
