"""Aggregate per-repository language stats for one repository group.

The aggregate has two maps:
- topLanguage: language -> number of repos whose largest language it is
- totalLines: language -> lines summed over every repo in the group
"""
import logging
from typing import Any, Dict, List, Mapping, Tuple

from repo_config import owner_and_repo

log = logging.getLogger(__name__)

Result = Dict[str, Dict[str, int]]


def new_result() -> Result:
    return {"topLanguage": {}, "totalLines": {}}


def rank_languages(languages: Mapping[str, int]) -> List[Tuple[str, int]]:
    # Most lines first; equal counts fall back to the language name.
    return sorted(languages.items(), key=lambda item: (-item[1], item[0]))


def add_repo_languages(result: Result, ranked: List[Tuple[str, int]]) -> None:
    if not ranked:
        return
    top = result["topLanguage"]
    totals = result["totalLines"]
    top_lang = ranked[0][0]
    top[top_lang] = top.get(top_lang, 0) + 1
    for lang, lines in ranked:
        totals[lang] = totals.get(lang, 0) + lines


def process_group(client: Any, members: Mapping[str, str]) -> Result:
    """Fetch and aggregate language stats for every project in `members`.

    `client` needs a list_languages(owner, repo) method. Projects without any
    language stats are skipped; any other failure propagates to the caller.
    """
    result = new_result()
    for name, repo_url in members.items():
        log.info("Getting language stats for %s", name)
        owner, repo = owner_and_repo(repo_url)
        languages = client.list_languages(owner, repo)
        if not languages:
            log.info("%s does not contain any language stats", name)
            continue
        add_repo_languages(result, rank_languages(languages))
    return result
