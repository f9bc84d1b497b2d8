# git_graph_data.py

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Commit:
    """A commit as delivered by the history provider. Read-only for the layout code."""

    sha: str
    parents: tuple[str, ...] = ()  # parents[0] is the primary (first) parent
    message: str = ""
    body: str = ""
    author_name: str = ""
    author_email: str = ""
    committer_name: str = ""
    committer_email: str = ""
    timestamp: int = 0  # unix seconds

    def __repr__(self) -> str:
        return f"Commit(sha='{self.sha[:7]}', parents={[p[:7] for p in self.parents]}, message='{self.message[:20]}')"


@dataclass(frozen=True)
class Ref:
    """A branch or tag pointing at a commit."""

    name: str
    sha: str
    is_remote: bool = False
    is_tag: bool = False


@dataclass
class CommitNode:
    """Laid-out commit, produced fresh by each layout run."""

    sha: str
    lane: int
    sequence_index: int
    labels: list[str] = field(default_factory=list)
    parents: tuple[str, ...] = ()

    def __repr__(self) -> str:
        return (
            f"CommitNode(sha='{self.sha[:7]}', "
            f"lane={self.lane}, "
            f"sequence_index={self.sequence_index}, "
            f"labels={self.labels}, "
            f"parents={[p[:7] for p in self.parents]})"
        )


class EdgeKind(str, Enum):
    CONTINUATION = "continuation"  # same lane, drawn straight
    BRANCH_OR_MERGE = "branchOrMerge"  # lane change, drawn as an S-curve


@dataclass(frozen=True)
class Edge:
    from_sha: str  # child
    to_sha: str  # parent
    kind: EdgeKind
    color: str


@dataclass(frozen=True)
class GraphLayout:
    nodes: list[CommitNode]
    edges: list[Edge]
    lane_count: int = 0
    open_lanes: int = 0  # lanes still open after the oldest commit
