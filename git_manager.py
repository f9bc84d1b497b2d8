import logging
from typing import List, Optional

import git
from git import GitCommandError

from git_graph_data import Commit, Ref


class GitManager:
    """读取提交历史和引用，供提交图使用"""

    def __init__(self, repo_path: str):
        self.repo_path = repo_path
        self.repo: Optional[git.Repo] = None

    def initialize(self) -> bool:
        """初始化 Git 仓库"""
        try:
            self.repo = git.Repo(self.repo_path)
            return True
        except (git.InvalidGitRepositoryError, git.NoSuchPathError):
            logging.warning("GitManager: %s 不是 Git 仓库", self.repo_path)
            return False

    def get_current_branch(self) -> Optional[str]:
        """获取当前分支，HEAD 分离时返回 None"""
        if not self.repo:
            return None
        if self.repo.head.is_detached:
            return None
        return self.repo.active_branch.name

    def get_commit_history(
        self, branch: Optional[str] = None, limit: int = 100, skip: int = 0, all_refs: bool = True
    ) -> List[Commit]:
        """获取提交历史，最新的在前

        参数：
            branch: 只看这个分支（默认为所有引用或当前 HEAD）
            limit: 返回的最大提交数量（默认为 100）
            skip: 跳过的提交数量（默认为 0）
            all_refs: 未指定分支时是否包含所有引用的提交（默认为 True）
        """
        if not self.repo:
            return []

        kwargs = {"max_count": limit, "skip": skip, "topo_order": True}
        if not branch and all_refs:
            kwargs["all"] = True

        try:
            commits = []
            for commit in self.repo.iter_commits(branch or None, **kwargs):
                subject, _, body = commit.message.strip().partition("\n")
                commits.append(
                    Commit(
                        sha=commit.hexsha,
                        parents=tuple(parent.hexsha for parent in commit.parents),
                        message=subject.strip(),
                        body=body.strip(),
                        author_name=commit.author.name or "",
                        author_email=commit.author.email or "",
                        committer_name=commit.committer.name or "",
                        committer_email=commit.committer.email or "",
                        timestamp=commit.committed_date,
                    )
                )
            return commits
        except GitCommandError:
            logging.exception("获取提交历史失败：%s", branch or "--all")
            return []
        except ValueError:
            # 空仓库没有 HEAD
            logging.info("GitManager: %s 还没有提交", self.repo_path)
            return []

    def get_refs(self) -> List[Ref]:
        """获取本地分支、远程分支和标签"""
        if not self.repo:
            return []

        refs = []
        try:
            for head in self.repo.heads:
                refs.append(Ref(name=head.name, sha=head.commit.hexsha))

            for remote in self.repo.remotes:
                for ref in remote.refs:
                    # origin/HEAD 只是指向默认分支的符号引用
                    if ref.name.endswith("/HEAD"):
                        continue
                    refs.append(Ref(name=ref.name, sha=ref.commit.hexsha, is_remote=True))

            for tag in self.repo.tags:
                refs.append(Ref(name=tag.name, sha=tag.commit.hexsha, is_tag=True))
        except (GitCommandError, ValueError):
            logging.exception("获取引用失败")
        return refs
