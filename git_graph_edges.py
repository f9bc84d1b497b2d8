# git_graph_edges.py

from git_graph_colors import NEUTRAL_COLOR, BranchColorizer
from git_graph_data import CommitNode, Edge, EdgeKind


class EdgeRouter:
    """Turns laid-out nodes into parent-child edges for the renderer."""

    def __init__(self, colorizer: BranchColorizer | None = None, neutral_color: str = NEUTRAL_COLOR):
        self.colorizer = colorizer or BranchColorizer()
        self.neutral_color = neutral_color

    def edge_color(self, node: CommitNode) -> str:
        if node.labels:
            return self.colorizer.color_of(node.labels[0])
        return self.neutral_color

    def route(self, nodes: list[CommitNode]) -> list[Edge]:
        nodes_map = {}
        for node in nodes:
            nodes_map.setdefault(node.sha, node)

        edges: list[Edge] = []
        for node in nodes:
            color = self.edge_color(node)
            seen_parents = set()
            for parent_sha in node.parents:
                if parent_sha in seen_parents:
                    continue
                seen_parents.add(parent_sha)

                parent_node = nodes_map.get(parent_sha)
                if parent_node is None:
                    # Parent is outside the window (e.g. --max-count), nothing to draw.
                    continue

                kind = EdgeKind.CONTINUATION if parent_node.lane == node.lane else EdgeKind.BRANCH_OR_MERGE
                edges.append(Edge(from_sha=node.sha, to_sha=parent_sha, kind=kind, color=color))
        return edges
