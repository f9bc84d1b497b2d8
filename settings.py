import json
import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_MAX_COMMITS = 100


class Settings:
    def __init__(self, config_dir: Optional[str] = None):
        # 默认放在用户主目录
        self.config_dir = config_dir or os.path.join(str(Path.home()), ".git_graph")
        try:
            os.makedirs(self.config_dir, exist_ok=True)
        except OSError as e:
            logging.warning("创建配置目录失败：%s", e)

        # 配置文件路径
        self.config_file = os.path.join(self.config_dir, "settings.json")

        # 默认设置
        self.settings = {
            "recent_repositories": [],  # 最近打开的仓库列表
            "last_repository": None,  # 上次打开的仓库
            "max_recent": 10,  # 最大记录数
            "max_commits": DEFAULT_MAX_COMMITS,  # 提交图一次加载的提交数
            "show_remote_branches": True,  # 是否显示远程分支
            "horizontal_spacing": 60,  # 泳道间距
            "vertical_spacing": 60,  # 行间距
        }

        # 加载已有设置
        self.load_settings()

    def load_settings(self):
        """加载设置"""
        if not os.path.exists(self.config_file):
            return
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                saved_settings = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.error("加载设置失败：%s", e)
            return
        if isinstance(saved_settings, dict):
            self.settings.update(saved_settings)
        else:
            logging.error("加载设置失败：%s 不是 JSON 对象", self.config_file)

    def save_settings(self):
        """保存设置"""
        try:
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(self.settings, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logging.error("保存设置失败：%s", e)

    def add_recent_repository(self, repo_path):
        """添加最近打开的仓库"""
        self.settings["last_repository"] = repo_path

        recent = self.settings["recent_repositories"]

        # 如果已经在列表中，先移除
        if repo_path in recent:
            recent.remove(repo_path)

        # 添加到列表开头
        recent.insert(0, repo_path)

        # 保持列表在最大长度以内
        self.settings["recent_repositories"] = recent[: self.settings["max_recent"]]

        self.save_settings()

    def get_recent_repositories(self):
        """获取最近仓库列表"""
        return self.settings["recent_repositories"]

    def get_last_repository(self):
        """获取上次打开的仓库"""
        return self.settings["last_repository"]

    def get_max_commits(self) -> int:
        value = self.settings.get("max_commits", DEFAULT_MAX_COMMITS)
        if not isinstance(value, int) or value <= 0:
            return DEFAULT_MAX_COMMITS
        return value

    def set_max_commits(self, max_commits: int):
        self.settings["max_commits"] = max_commits
        self.save_settings()

    def get_show_remote_branches(self) -> bool:
        return bool(self.settings.get("show_remote_branches", True))

    def set_show_remote_branches(self, show: bool):
        self.settings["show_remote_branches"] = show
        self.save_settings()

    def get_graph_spacing(self) -> tuple[float, float]:
        """获取提交图的 (泳道间距, 行间距)"""
        return (
            self.settings.get("horizontal_spacing", 60),
            self.settings.get("vertical_spacing", 60),
        )


# 创建全局settings实例
settings = Settings()
