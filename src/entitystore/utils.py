"""Utility functions for entitystore."""

_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def humanize_size(size: int) -> str:
    """Render a byte count for display: ``11 B``, ``1.5 MB``.

    Whole bytes are shown without decimals; larger units get one.
    """
    value = float(size)
    unit = _UNITS[0]
    for unit in _UNITS:
        if value < 1024 or unit == _UNITS[-1]:
            break
        value /= 1024
    if unit == "B":
        return f"{int(value)} B"
    return f"{value:.1f} {unit}"
