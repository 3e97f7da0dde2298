"""Creation of the timestamped report directory tree."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path

from cloudaudit.models import REPORT_DIR_PREFIX, ReportLayout

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def create_report_layout(report_root: Path, now: datetime | None = None) -> ReportLayout:
    """Create ``security_reports_<timestamp>/`` and all its subdirectories.

    The directory name is unique per invocation: when a run in the same second
    already claimed the name, the timestamp is advanced until a free one exists.
    """
    moment = now or datetime.now()
    parent = report_root.expanduser().resolve()
    parent.mkdir(parents=True, exist_ok=True)

    while True:
        timestamp = moment.strftime(TIMESTAMP_FORMAT)
        root = parent / f"{REPORT_DIR_PREFIX}{timestamp}"
        try:
            root.mkdir()
        except FileExistsError:
            logger.debug("Report directory %s exists, advancing timestamp", root)
            moment += timedelta(seconds=1)
            continue
        break

    layout = ReportLayout(root=root, timestamp=timestamp)
    for subdir in layout.subdirectories():
        subdir.mkdir(exist_ok=True)
    return layout
