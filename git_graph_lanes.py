# git_graph_lanes.py

import logging


class LaneAllocator:
    """
    Pool of integer lane indices used while laying out one commit window.

    A lane is either free, active (owned by the commit chain currently drawn in it)
    or active and reserved for a commit that has not been reached yet. Reservations
    are what let a commit continue its child's lane instead of opening a new one.
    """

    def __init__(self):
        self._active: set[int] = set()
        self._reserved_for: dict[str, int] = {}  # sha -> lane pinned for it
        self._reserved_by_lane: dict[int, str] = {}

    @property
    def active_lanes(self) -> tuple[int, ...]:
        return tuple(sorted(self._active))

    @property
    def active_count(self) -> int:
        return len(self._active)

    def allocate(self) -> int:
        """Returns the lowest lane that is not active and marks it active."""
        lane = 0
        while lane in self._active:
            lane += 1
        self._active.add(lane)
        return lane

    def reserve(self, lane: int, for_sha: str) -> bool:
        """
        Pins `lane` so that the commit `for_sha` claims it when it is processed.
        The first reservation for a sha wins; later ones are refused.
        """
        if for_sha in self._reserved_for:
            return False
        if lane in self._reserved_by_lane:
            # A lane carries one chain, so it can wait for only one commit.
            return False
        self._active.add(lane)
        self._reserved_for[for_sha] = lane
        self._reserved_by_lane[lane] = for_sha
        return True

    def is_reserved(self, sha: str) -> bool:
        return sha in self._reserved_for

    def claim(self, sha: str) -> int | None:
        """Hands over the lane reserved for `sha`, or None if there is none. The lane stays active."""
        lane = self._reserved_for.pop(sha, None)
        if lane is not None:
            del self._reserved_by_lane[lane]
        return lane

    def release(self, lane: int):
        if lane not in self._active:
            logging.debug("LaneAllocator: lane %d released twice", lane)
            return
        self._active.discard(lane)
        sha = self._reserved_by_lane.pop(lane, None)
        if sha is not None:
            del self._reserved_for[sha]
