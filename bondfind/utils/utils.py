"""
General helpers shared across bondfind.
"""

from typing import Union


def string2index_1based(stridx: str) -> Union[int, slice]:
    """
    Convert string index to appropriate type using 1-based indexing.

    Positive indices are shifted down by one; negative indices count
    from the end and are returned unchanged. Slices keep Python's
    half-open convention, so "1:5" selects the first four items.

    Args:
        stridx (str): String index (e.g., '1', '-1', '1:5', '1:5:2', ':').

    Returns:
        Union[int, slice]: Converted index in 0-based form.

    Raises:
        ValueError: If the index is 0 or has an invalid format.
    """

    def adjust_to_0based(index):
        """Adjust a 1-based index to 0-based. Handles None gracefully."""
        # raise error if index is 0, since requires 1-based indexing
        if index == 0:
            raise ValueError("Index cannot be 0 in 1-based indexing.")
        if index is None or index < 0:
            return index
        return index - 1

    stridx = str(stridx).strip()
    if ":" not in stridx:
        try:
            return adjust_to_0based(int(stridx))
        except ValueError as e:
            raise ValueError(f"Invalid index: {stridx!r}") from e

    # Handle slice input (e.g., "1:5" or "1:5:2")
    parts = stridx.split(":")
    if len(parts) > 3:
        raise ValueError(f"Invalid slice input: {stridx!r}")
    try:
        i = [None if s == "" else int(s) for s in parts]
    except ValueError as e:
        raise ValueError(f"Invalid slice input: {stridx!r}") from e
    start = adjust_to_0based(i[0])
    stop = adjust_to_0based(i[1])
    step = i[2] if len(i) > 2 else None
    return slice(start, stop, step)
