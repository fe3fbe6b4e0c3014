UNITS = ('B', 'KB', 'MB', 'GB', 'TB', 'PB')
STEP = 1024


def format_bytes(size: int) -> str:
    """Make a human readable string from a byte count. I.e. `1536` -> `1.5 KB`.

    Negative sizes are treated as 0.
    """
    value = float(max(size, 0))
    index = 0
    while value >= STEP and index < len(UNITS) - 1:
        value /= STEP
        index += 1

    text = f'{value:.1f}'
    if text.endswith('.0'):
        text = text[:-2]
    return f'{text} {UNITS[index]}'
