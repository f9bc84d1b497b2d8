import argparse
import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from git_graph_window import GitGraphWindow
from settings import settings


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="git-graph", description="Show the commit graph of a git repository.")
    parser.add_argument("repo_path", nargs="?", help="repository to open (default: last opened, else the cwd)")
    parser.add_argument("--branch", help="show only the history of this branch instead of every ref")
    parser.add_argument("--search", default="", help="highlight commits matching this message, author or sha")
    return parser.parse_args(argv)


def main():
    app = QApplication(sys.argv)
    args = parse_args(app.arguments()[1:])

    repo_path = os.path.abspath(args.repo_path or settings.get_last_repository() or os.getcwd())

    window = GitGraphWindow(repo_path, branch=args.branch, search=args.search)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    # 根据环境变量设置日志级别
    log_level = logging.DEBUG if os.getenv("DEBUG") == "1" else logging.INFO

    logging.basicConfig(
        level=log_level, format="%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"
    )
    if os.getenv("LOG_TO_FILE") == "1":
        file_handler = logging.FileHandler("git_graph.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s")
        )
        logging.getLogger().addHandler(file_handler)
    main()
