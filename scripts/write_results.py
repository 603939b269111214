"""Write a group's aggregate to results/<UTC date>-<group>.json."""
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from typing import Any, Optional

DEFAULT_RESULTS_DIR = "results"

log = logging.getLogger(__name__)


def result_file_path(
    group: str, results_dir: str = DEFAULT_RESULTS_DIR, now: Optional[datetime] = None
) -> str:
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    date = now.strftime("%Y-%m-%d")
    return os.path.join(results_dir, f"{date}-{group}.json")


def save_results(
    result: Any,
    group: str,
    results_dir: str = DEFAULT_RESULTS_DIR,
    now: Optional[datetime] = None,
) -> str:
    """Serialize `result` for `group`, replacing any file from the same day."""
    path = result_file_path(group, results_dir, now)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    # Write beside the target, then swap it in whole.
    handle = tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=os.path.dirname(path) or ".", suffix=".tmp", delete=False
    )
    try:
        with handle:
            json.dump(result, handle, indent=2, sort_keys=True)
            handle.write("\n")
        os.replace(handle.name, path)
    except BaseException:
        os.unlink(handle.name)
        raise
    log.info("Wrote %s", path)
    return path
