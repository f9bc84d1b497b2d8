# git_graph_colors.py

# Six entries; names collide onto the same color freely.
BRANCH_PALETTE = (
    "#00d4ff",  # cyan
    "#22c55e",  # green
    "#fbbf24",  # amber
    "#f43f5e",  # rose
    "#a855f7",  # purple
    "#ec4899",  # pink
)
NEUTRAL_COLOR = "#64748b"  # slate, for commits without a label


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def name_hash(name: str) -> int:
    """
    Polynomial string hash (multiplier 31) over UTF-16 code units, wrapped to a
    signed 32-bit integer after every step so the result is identical on every
    platform and run.

    This is stable but not bit-identical to the common JavaScript loop
    `hash = c + ((hash << 5) - hash)`, which wraps only inside the shift; the two
    agree on short names and drift apart on long ones.
    """
    data = name.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = _to_int32(unit + (h << 5) - h)
    return h


class BranchColorizer:
    def __init__(self, palette: tuple[str, ...] | list[str] = BRANCH_PALETTE):
        if not palette:
            raise ValueError("BranchColorizer needs at least one palette color")
        self.palette = tuple(palette)

    def color_index(self, name: str) -> int:
        return abs(name_hash(name)) % len(self.palette)

    def color_of(self, name: str) -> str:
        """Same name, same color. Different names may share one."""
        return self.palette[self.color_index(name)]
