# git_graph_filter.py

from collections.abc import Iterable

from git_graph_data import Commit, Ref

ALL_BRANCHES = "All Branches"


def commit_matches(commit: Commit, term: str) -> bool:
    """
    Case-insensitive search over the subject, body and author name, plus the sha
    by prefix. A blank term matches every commit.
    """
    term = term.strip().lower()
    if not term:
        return True
    return (
        term in commit.message.lower()
        or term in commit.body.lower()
        or term in commit.author_name.lower()
        or commit.sha.lower().startswith(term)
    )


def filter_commits(commits: Iterable[Commit], term: str) -> list[Commit]:
    return [commit for commit in commits if commit_matches(commit, term)]


def matching_shas(commits: Iterable[Commit], term: str) -> set[str]:
    return {commit.sha for commit in commits if commit_matches(commit, term)}


def branch_choices(refs: Iterable[Ref]) -> list[str]:
    """Entries of the branch selector: all refs first, then local and remote branch names."""
    local, remote = [], []
    for ref in refs:
        if ref.is_tag:
            continue
        names = remote if ref.is_remote else local
        if ref.name not in names:
            names.append(ref.name)
    return [ALL_BRANCHES] + local + remote


def branch_from_choice(choice: str | None) -> str | None:
    """The revision to load for a selector entry, None meaning every ref."""
    if not choice or choice == ALL_BRANCHES:
        return None
    return choice
