"""
Persistence of backed up items.

Every item lands in its own file:
``<output root>/hubspot-backup/<YYYY-MM-DD>/<endpoint>/<index>.json``.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple, Union

logger = logging.getLogger(__name__)

BACKUP_DIRNAME = "hubspot-backup"
DATE_FORMAT = "%Y-%m-%d"


# Escaped in item files even though they are written as UTF-8
HTML_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def serialize_item(item: Any) -> str:
    """
    Compact JSON with sorted keys, non-ASCII kept as UTF-8.

    ``<``, ``>``, ``&`` and the U+2028/U+2029 separators are written as
    ``\\uXXXX`` escapes. In compact output they can only occur inside
    strings, so the translation never touches the JSON structure.
    """
    text = json.dumps(item, ensure_ascii=False, separators=(",", ":"), sort_keys=True)
    return text.translate(HTML_ESCAPES)


class ItemWriter:
    """
    Writes page items as individual JSON files under a dated backup directory.
    """

    def __init__(
        self, output_base_path: Union[str, Path] = ".", run_date: Optional[date] = None
    ):
        """
        Initialize the item writer.

        Args:
            output_base_path: Directory that receives the ``hubspot-backup`` tree
            run_date: Date stamp of the run, today when omitted
        """
        self.run_date = (run_date or date.today()).strftime(DATE_FORMAT)
        self.backup_root = Path(output_base_path) / BACKUP_DIRNAME / self.run_date

    def endpoint_path(self, endpoint_name: str) -> Path:
        return self.backup_root / endpoint_name

    def item_path(self, endpoint_name: str, index: int) -> Path:
        return self.endpoint_path(endpoint_name) / f"{index}.json"

    def write_page(
        self, endpoint_name: str, start_offset: int, items: Iterable[Any]
    ) -> Tuple[int, int]:
        """
        Write the items of one page.

        Args:
            endpoint_name: Endpoint the items belong to
            start_offset: Index of the first item of the page
            items: Items in response order

        Returns:
            Tuple[int, int]: Number of items written and number of failures
        """
        folder = self.endpoint_path(endpoint_name)
        try:
            folder.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as e:
            # each item write below fails and is counted
            logger.error(f"Failed creating folder {folder}: {e}")

        written = 0
        failed = 0
        for position, item in enumerate(items):
            path = folder / f"{start_offset + position}.json"
            try:
                path.write_text(serialize_item(item), encoding="utf-8")
                written += 1
            except (OSError, TypeError, ValueError) as e:
                failed += 1
                logger.error(f"Failed writing {path}: {e}")

        return written, failed
