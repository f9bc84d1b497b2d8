import json
import os
import shutil
import sys
import tempfile
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from settings import DEFAULT_MAX_COMMITS, Settings


class TestSettings(unittest.TestCase):
    def setUp(self):
        self.config_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.config_dir)

    def test_defaults(self):
        settings = Settings(self.config_dir)
        self.assertEqual(settings.get_max_commits(), DEFAULT_MAX_COMMITS)
        self.assertTrue(settings.get_show_remote_branches())
        self.assertIsNone(settings.get_last_repository())
        self.assertEqual(settings.get_recent_repositories(), [])

    def test_recent_repositories_persisted(self):
        settings = Settings(self.config_dir)
        settings.add_recent_repository("/repo/a")
        settings.add_recent_repository("/repo/b")
        settings.add_recent_repository("/repo/a")

        reloaded = Settings(self.config_dir)
        self.assertEqual(reloaded.get_recent_repositories(), ["/repo/a", "/repo/b"])
        self.assertEqual(reloaded.get_last_repository(), "/repo/a")

    def test_recent_repositories_capped(self):
        settings = Settings(self.config_dir)
        settings.settings["max_recent"] = 2
        for name in ["a", "b", "c"]:
            settings.add_recent_repository(name)
        self.assertEqual(settings.get_recent_repositories(), ["c", "b"])

    def test_invalid_max_commits_falls_back(self):
        settings = Settings(self.config_dir)
        settings.set_max_commits(0)
        self.assertEqual(settings.get_max_commits(), DEFAULT_MAX_COMMITS)
        settings.set_max_commits(500)
        self.assertEqual(Settings(self.config_dir).get_max_commits(), 500)

    def test_corrupt_file_keeps_defaults(self):
        with open(os.path.join(self.config_dir, "settings.json"), "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertLogs(level="ERROR"):
            settings = Settings(self.config_dir)
        self.assertEqual(settings.get_max_commits(), DEFAULT_MAX_COMMITS)

    def test_saved_values_override_defaults(self):
        with open(os.path.join(self.config_dir, "settings.json"), "w", encoding="utf-8") as f:
            json.dump({"show_remote_branches": False, "vertical_spacing": 30}, f)
        settings = Settings(self.config_dir)
        self.assertFalse(settings.get_show_remote_branches())
        self.assertEqual(settings.get_graph_spacing(), (60, 30))


if __name__ == "__main__":
    unittest.main()
