from dataclasses import dataclass, field
from typing import List, Optional

from PyQt6.QtCore import QThread, pyqtSignal

from git_graph_data import Commit, GraphLayout, Ref
from git_graph_layout import layout_graph
from git_manager import GitManager


@dataclass
class GraphLoadResult:
    """后台加载的结果"""

    layout: GraphLayout
    commits: List[Commit] = field(default_factory=list)
    refs: List[Ref] = field(default_factory=list)
    current_branch: Optional[str] = None
    repo_path: str = ""
    branch: Optional[str] = None  # None when every ref was loaded


def load_graph(
    repo_path: str, limit: int, branch: Optional[str] = None, include_remotes: bool = True
) -> Optional[GraphLoadResult]:
    """读取历史并计算布局，仓库无效时返回 None"""
    git_manager = GitManager(repo_path)
    if not git_manager.initialize():
        return None

    commits = git_manager.get_commit_history(branch=branch, limit=limit)
    refs = git_manager.get_refs()
    if not include_remotes:
        refs = [ref for ref in refs if not ref.is_remote]

    return GraphLoadResult(
        layout=layout_graph(commits, refs),
        commits=commits,
        refs=refs,
        current_branch=git_manager.get_current_branch(),
        repo_path=repo_path,
        branch=branch,
    )


class GraphLoadThread(QThread):
    """在后台读取提交历史并计算提交图布局的线程"""

    finished = pyqtSignal(int, object)  # (request_id, GraphLoadResult)
    error = pyqtSignal(int, str)  # (request_id, error_message)

    def __init__(
        self,
        request_id: int,
        repo_path: str,
        limit: int,
        branch: Optional[str] = None,
        include_remotes: bool = True,
        parent=None,
    ):
        super().__init__(parent)
        self.request_id = request_id
        self.repo_path = repo_path
        self.limit = limit
        self.branch = branch
        self.include_remotes = include_remotes

    def run(self):
        """执行加载"""
        try:
            result = load_graph(self.repo_path, self.limit, self.branch, self.include_remotes)
            if result is None:
                self.error.emit(self.request_id, f"{self.repo_path} 不是 Git 仓库")
                return
            self.finished.emit(self.request_id, result)
        except Exception as e:
            self.error.emit(self.request_id, str(e))
