"""Channel color assignment: first-seen order over a cyclic palette."""

from collections.abc import Iterable, Sequence

DEFAULT_PALETTE = (
    "#D95B5B",  # red
    "#778D8D",  # teal grey
    "#F58A5C",  # orange
    "#8FBC8F",  # sea green
    "#6A8EAE",  # muted blue
    "#C1B5A1",  # tan
)
FALLBACK_COLOR = "#3B82F6"


def assign_colors(
    labels: Iterable[str],
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> dict[str, str]:
    """Map each distinct label to a palette entry.

    The n-th distinct label (in input order) gets ``palette[n % len(palette)]``.
    Repeated labels keep their first color. Input order matters: the same
    labels in a different order give a different mapping.
    """
    if not palette:
        raise ValueError("palette must contain at least one color")

    colors: dict[str, str] = {}
    for label in labels:
        if label in colors:
            continue
        colors[label] = palette[len(colors) % len(palette)]
    return colors
