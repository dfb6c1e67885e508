"""JSON file helpers and joined parallel writes."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union


# Above this magnitude JavaScript switches to exponent notation.
_MAX_PLAIN_INTEGER = 1e21


def _parse_number(text: str) -> Union[int, float]:
    """Read whole-number floats (1.0, 1e5) back as ints, as JSON.stringify writes them."""
    value = float(text)
    if value.is_integer() and abs(value) < _MAX_PLAIN_INTEGER:
        return int(value)
    return value


def read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f, parse_float=_parse_number)


def dump_json(data: Any, indent: Optional[int] = None) -> str:
    """Serialize compactly, or pretty-printed when indent is given."""
    if indent is None:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(data, ensure_ascii=False, indent=indent)


def write_json(path: Path, data: Any, indent: Optional[int] = None) -> Path:
    """Serialize fully in memory, then write the whole document."""
    text = dump_json(data, indent)
    path.write_text(text, encoding="utf-8")
    return path


def run_all(
    jobs: Iterable[Callable[[], Path]],
    max_workers: int = 4,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> list[Path]:
    """Run write jobs on a thread pool and wait for every one of them.

    Returns the paths of the jobs that succeeded. A failing job is handed to
    on_error when given, otherwise its exception is re-raised after all
    jobs have finished.
    """
    written: list[Path] = []
    first_error: Optional[Exception] = None
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(job) for job in jobs]
        for future in futures:
            try:
                written.append(future.result())
            except Exception as e:
                if on_error is not None:
                    on_error(e)
                elif first_error is None:
                    first_error = e
    if first_error is not None:
        raise first_error
    return written
