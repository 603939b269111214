"""Collect language line-count snapshots for the configured repository groups.

Usage:
    GITHUB_TOKEN=... python scripts/collect_languages.py -graduated -sandbox

For each selected group every repository in repos.yaml is queried in turn and
the aggregate is written to results/<UTC date>-<group>.json.
"""
import argparse
import logging
import sys
from typing import List, Optional

import requests

from compute_stats import process_group
from fetch_languages import API_ROOT, DEFAULT_THROTTLE, GitHubClient, Throttle
from repo_config import DEFAULT_REPOS_FILE, GROUPS, ConfigError, load_repos, read_token
from write_results import DEFAULT_RESULTS_DIR, save_results

log = logging.getLogger("collect_languages")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Aggregate GitHub language stats per repository group into dated JSON files."
    )
    for group in GROUPS:
        parser.add_argument(
            f"-{group}",
            f"--{group}",
            action="store_true",
            help=f"Process {group} projects",
        )
    parser.add_argument("--repos-file", default=DEFAULT_REPOS_FILE, help="Repository list (default: %(default)s)")
    parser.add_argument("--results-dir", default=DEFAULT_RESULTS_DIR, help="Output directory (default: %(default)s)")
    parser.add_argument(
        "--throttle",
        type=float,
        default=DEFAULT_THROTTLE,
        help="Minimum seconds between API requests (default: %(default)s)",
    )
    parser.add_argument("--api-root", default=API_ROOT, help="GitHub API root (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.throttle < 0:
        parser.error("--throttle must not be negative")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    try:
        token = read_token()
        repos = load_repos(args.repos_file)
        client = GitHubClient(token, api_root=args.api_root, throttle=Throttle(args.throttle))
        for group in GROUPS:
            if not getattr(args, group):
                continue
            log.info("Processing %s projects (%d)", group, len(repos[group]))
            result = process_group(client, repos[group])
            save_results(result, group, args.results_dir)
    except ConfigError as exc:
        log.error("%s", exc)
        return 1
    except requests.RequestException as exc:
        log.error("GitHub API request failed: %s", exc)
        return 1
    except OSError as exc:
        log.error("Could not write results: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
