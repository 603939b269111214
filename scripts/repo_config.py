"""Load the tiered repository list and the GitHub credential.

repos.yaml maps each tier (Graduated, Incubating, Sandbox) to a mapping of
project display name -> repository URL, e.g.

    Graduated:
      containerd: https://github.com/containerd/containerd
"""
import os
from typing import Dict, Mapping, Optional, Tuple

import yaml

DEFAULT_REPOS_FILE = "repos.yaml"

# CLI/file key -> YAML key, in processing order.
GROUPS: Dict[str, str] = {
    "graduated": "Graduated",
    "incubating": "Incubating",
    "sandbox": "Sandbox",
}


class ConfigError(ValueError):
    """Raised for a missing credential or an unusable repos.yaml."""


def read_token(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    token = env.get("GITHUB_TOKEN")
    if not token:
        raise ConfigError("GITHUB_TOKEN ENV variable required")
    return token


def load_repos(path: str = DEFAULT_REPOS_FILE) -> Dict[str, Dict[str, str]]:
    """Return {group key: {project name: repository URL}} for all three tiers."""
    try:
        with open(path, "r", encoding="utf-8") as handle:
            document = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"cannot parse {path}: {exc}") from exc

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ConfigError(f"{path}: expected a mapping of tiers at the top level")

    repos: Dict[str, Dict[str, str]] = {}
    for group, section in GROUPS.items():
        members = document.get(section)
        if members is None:
            members = {}
        if not isinstance(members, dict):
            raise ConfigError(f"{path}: {section} must map project names to URLs")
        for name, url in members.items():
            if not isinstance(url, str):
                raise ConfigError(f"{path}: {section}.{name} is not a URL string")
        repos[group] = {str(name): url for name, url in members.items()}
    return repos


def owner_and_repo(repo_url: str) -> Tuple[str, str]:
    # https://github.com/containerd/containerd -> ("containerd", "containerd")
    parts = repo_url.rstrip("/").split("/")
    if len(parts) < 2 or not parts[-1] or not parts[-2]:
        raise ConfigError(f"cannot derive owner/repo from {repo_url!r}")
    return parts[-2], parts[-1]
