# git_graph_layout.py

import logging
from collections.abc import Iterable, Sequence

from git_graph_colors import BranchColorizer
from git_graph_data import Commit, CommitNode, GraphLayout, Ref
from git_graph_edges import EdgeRouter
from git_graph_lanes import LaneAllocator

HORIZONTAL_SPACING = 40
VERTICAL_SPACING = 40

# More spacing to make graph less dense initially
LAYOUT_HORIZONTAL_SPACING = HORIZONTAL_SPACING * 1.5
LAYOUT_VERTICAL_SPACING = VERTICAL_SPACING * 1.5


class CommitGraphBuilder:
    """
    Assigns every commit of a newest-first window a lane.

    A commit continues the lane of the first child that named it as primary parent.
    Any other commit opens the lowest free lane. A lane stays open while some commit
    drawn in it still has a parent ahead in the window, since the line into that
    parent leaves from the lane. Once the chain in a lane has ended and every such
    line has reached its parent the lane is given back, so later commits reuse it
    and the graph stays narrow.

    The builder keeps no state between calls.
    """

    def build(self, commits: Sequence[Commit], refs: Iterable[Ref] = ()) -> list[CommitNode]:
        nodes, _ = self.assign_lanes(commits, refs)
        return nodes

    def assign_lanes(
        self, commits: Sequence[Commit], refs: Iterable[Ref] = ()
    ) -> tuple[list[CommitNode], int]:
        """Returns the nodes and the number of lanes still open after the last commit."""
        allocator = LaneAllocator()
        window = {commit.sha for commit in commits}

        nodes: list[CommitNode] = []
        nodes_map: dict[str, CommitNode] = {}
        # parent sha -> lanes holding a line that ends in that parent
        waiting_on: dict[str, set[int]] = {}
        # lane -> number of parents it still waits for
        pending: dict[int, int] = {}
        # lanes whose chain ended but which still wait for a parent
        ended: set[int] = set()

        def end_chain(lane: int) -> None:
            if pending.get(lane):
                ended.add(lane)
            else:
                pending.pop(lane, None)
                allocator.release(lane)

        for index, commit in enumerate(commits):
            if commit.sha in nodes_map:
                logging.debug("CommitGraphBuilder: duplicate commit %s at %d ignored", commit.sha[:7], index)
                continue

            arriving = waiting_on.pop(commit.sha, set())
            lane = allocator.claim(commit.sha)
            if lane is not None and lane in arriving:
                # Another commit in this lane merges into this one. Sitting in the
                # lane would draw that merge as a straight line through the chain.
                ended.add(lane)
                lane = None
            if lane is None:
                lane = allocator.allocate()

            node = CommitNode(sha=commit.sha, lane=lane, sequence_index=index, parents=tuple(commit.parents))
            nodes.append(node)
            nodes_map[commit.sha] = node

            for held_lane in arriving:
                pending[held_lane] -= 1
                if held_lane in ended and not pending[held_lane]:
                    ended.discard(held_lane)
                    end_chain(held_lane)

            continues = False
            for position, parent in enumerate(dict.fromkeys(commit.parents)):
                if parent not in window or parent in nodes_map:
                    continue
                if position == 0 and allocator.reserve(lane, parent):
                    continues = True
                    continue
                # Merge parent, or a primary parent a newer child already continues
                # into: the line curves into it and keeps this lane open until then.
                waiting_on.setdefault(parent, set()).add(lane)
                pending[lane] = pending.get(lane, 0) + 1

            if not continues:
                end_chain(lane)

        for ref in refs:
            node = nodes_map.get(ref.sha)
            if node is not None:
                node.labels.append(ref.name)

        return nodes, allocator.active_count


def layout_graph(
    commits: Sequence[Commit], refs: Iterable[Ref] = (), colorizer: BranchColorizer | None = None
) -> GraphLayout:
    """Lays out `commits` (newest first) and routes their edges in one call."""
    nodes, open_lanes = CommitGraphBuilder().assign_lanes(commits, refs)
    edges = EdgeRouter(colorizer).route(nodes)
    lane_count = max((node.lane for node in nodes), default=-1) + 1
    return GraphLayout(nodes=nodes, edges=edges, lane_count=lane_count, open_lanes=open_lanes)


def node_position(
    node: CommitNode,
    h_spacing: float = LAYOUT_HORIZONTAL_SPACING,
    v_spacing: float = LAYOUT_VERTICAL_SPACING,
) -> tuple[float, float]:
    """Newest commit at the top (y=0), lanes spread to the right."""
    return node.lane * h_spacing, node.sequence_index * v_spacing


def curve_control_points(
    start: tuple[float, float], end: tuple[float, float]
) -> tuple[tuple[float, float], tuple[float, float]]:
    """
    Control points of the cubic S-curve drawn for a branch/merge edge.

    Both sit on the horizontal line halfway between the endpoints, each one straight
    above or below its own endpoint, so the curve leaves and enters along the lane
    and is symmetric about its middle.
    """
    mid_y = (start[1] + end[1]) / 2
    return (start[0], mid_y), (end[0], mid_y)
