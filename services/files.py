import json
import logging
from pathlib import Path

log = logging.getLogger(__name__)


def write_data_as_json_file(data, file_name: str | Path) -> None:
    """Dump ``data`` as pretty-printed (2-space) UTF-8 JSON to ``file_name``.

    Non-ASCII text is written as-is rather than ``\\u`` escaped.
    """
    path = Path(file_name)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    log.info("Wrote %s", path)
