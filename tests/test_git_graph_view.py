import os
import sys
import unittest
from unittest.mock import patch

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from git_graph_data import Commit, Ref
from git_graph_filter import ALL_BRANCHES
from git_graph_layout import layout_graph
from git_graph_view import SEARCH_DIMMED_OPACITY, GitGraphView
from git_graph_window import GitGraphWindow
from threads import GraphLoadResult

REPO_PATH = "/tmp/some-repo"


def make_result(repo_path=REPO_PATH, branch=None):
    commits = [
        Commit(sha="c3c3c3", parents=("c2c2c2",), message="Fix lane release", author_name="Alice"),
        Commit(sha="c2c2c2", parents=("c1c1c1",), message="Add search box", author_name="Bob"),
        Commit(sha="c1c1c1", parents=(), message="Initial commit", author_name="Alice"),
    ]
    refs = [
        Ref(name="main", sha="c3c3c3"),
        Ref(name="feature", sha="c2c2c2"),
        Ref(name="v1.0", sha="c1c1c1", is_tag=True),
    ]
    return GraphLoadResult(
        layout=layout_graph(commits, refs),
        commits=commits,
        refs=refs,
        current_branch="main",
        repo_path=repo_path,
        branch=branch,
    )


class QtTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance()
        if cls.app is None:
            cls.app = QApplication([])


class TestGitGraphViewLoading(QtTestCase):
    def setUp(self):
        self.view = GitGraphView()
        self.loaded = []
        self.failures = []
        self.view.graph_loaded.connect(self.loaded.append)
        self.view.load_failed.connect(self.failures.append)

    def test_successful_load_records_recent_repository(self):
        result = make_result()
        with patch("git_graph_view.settings") as mock_settings:
            self.view._on_graph_loaded(self.view._request_id, result)
        mock_settings.add_recent_repository.assert_called_once_with(REPO_PATH)
        self.assertEqual(self.loaded, [result])
        self.assertEqual(len(self.view._commit_items), 3)

    def test_failed_load_does_not_record_repository(self):
        with patch("git_graph_view.settings") as mock_settings:
            self.view._on_graph_load_error(self.view._request_id, "/tmp/nowhere 不是 Git 仓库")
        mock_settings.add_recent_repository.assert_not_called()
        self.assertEqual(self.failures, ["/tmp/nowhere 不是 Git 仓库"])
        self.assertEqual(self.loaded, [])

    def test_stale_load_is_dropped(self):
        self.view._request_id = 2
        with patch("git_graph_view.settings") as mock_settings:
            self.view._on_graph_loaded(1, make_result())
        mock_settings.add_recent_repository.assert_not_called()
        self.assertEqual(self.view._commit_items, {})
        self.assertEqual(self.loaded, [])


class TestGitGraphViewSearch(QtTestCase):
    def setUp(self):
        self.view = GitGraphView()

    def load(self):
        with patch("git_graph_view.settings"):
            self.view._on_graph_loaded(self.view._request_id, make_result())

    def opacities(self):
        return {sha: item.opacity() for sha, item in self.view._commit_items.items()}

    def test_search_dims_other_commits(self):
        self.load()
        self.assertEqual(self.view.set_search_term("lane"), 1)
        self.assertEqual(
            self.opacities(),
            {"c3c3c3": 1.0, "c2c2c2": SEARCH_DIMMED_OPACITY, "c1c1c1": SEARCH_DIMMED_OPACITY},
        )
        self.assertEqual(self.view._message_items["c2c2c2"].opacity(), SEARCH_DIMMED_OPACITY)

    def test_search_by_author_and_sha(self):
        self.load()
        self.assertEqual(self.view.set_search_term("alice"), 2)
        self.assertEqual(self.view.set_search_term("C2C2"), 1)

    def test_clearing_search_shows_everything(self):
        self.load()
        self.view.set_search_term("lane")
        self.assertEqual(self.view.set_search_term(""), 3)
        self.assertTrue(all(opacity == 1.0 for opacity in self.opacities().values()))

    def test_search_term_applies_to_next_load(self):
        self.view.set_search_term("search box")
        self.load()
        self.assertEqual(self.opacities()["c2c2c2"], 1.0)
        self.assertEqual(self.opacities()["c3c3c3"], SEARCH_DIMMED_OPACITY)


class TestGitGraphWindow(QtTestCase):
    def test_branch_selector(self):
        with patch.object(GitGraphView, "load_repository") as load, patch("git_graph_view.settings"):
            window = GitGraphWindow(REPO_PATH, search="lane")
            load.assert_called_once_with(REPO_PATH, None)

            window.graph_view._on_graph_loaded(window.graph_view._request_id, make_result())
            items = [window.branch_combo.itemText(i) for i in range(window.branch_combo.count())]
            self.assertEqual(items, [ALL_BRANCHES, "main", "feature"])
            self.assertEqual(window.branch_combo.currentText(), ALL_BRANCHES)
            self.assertEqual(window.match_label.text(), "1 matching")

            load.reset_mock()
            window.branch_combo.setCurrentText("feature")
            load.assert_called_once_with(REPO_PATH, "feature")

            load.reset_mock()
            window.branch_combo.setCurrentText(ALL_BRANCHES)
            load.assert_called_once_with(REPO_PATH, None)

    def test_loaded_branch_is_selected(self):
        with patch.object(GitGraphView, "load_repository") as load, patch("git_graph_view.settings"):
            window = GitGraphWindow(REPO_PATH, branch="feature")
            load.assert_called_once_with(REPO_PATH, "feature")
            window.graph_view._on_graph_loaded(0, make_result(branch="feature"))
            self.assertEqual(window.branch_combo.currentText(), "feature")
            # Filling the selector does not trigger another load
            load.assert_called_once()

    def test_search_box_updates_match_count(self):
        with patch.object(GitGraphView, "load_repository"), patch("git_graph_view.settings"):
            window = GitGraphWindow(REPO_PATH)
            window.graph_view._on_graph_loaded(0, make_result())
            window.search_edit.setText("alice")
            self.assertEqual(window.match_label.text(), "2 matching")
            window.search_edit.clear()
            self.assertEqual(window.match_label.text(), "")


if __name__ == "__main__":
    unittest.main()
