"""
Demo script: parse series files via the public API and print them as JSON.

Usage:
    python scripts/run_ingest.py data/boiler_2021.csv data/pump.csv
    python scripts/run_ingest.py --pairs data/boiler_2021.csv      # [ts, value] pairs
    python scripts/run_ingest.py --config series.yaml              # sources from config

Each file is keyed by its identifier (file name up to the first '.' or
'_'). Progress and skipped lines are logged to stderr; the JSON document
goes to stdout.
"""

from __future__ import annotations

import json
import logging
import sys

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_ingest")


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def _split_args(argv: list[str]) -> tuple[str | None, bool, list[str]]:
    """Return ``(config_path, pairs, paths)`` from the raw argument list."""
    config_path = None
    pairs = False
    paths: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--pairs":
            pairs = True
        elif arg == "--config":
            config_path = next(args, None)
        else:
            paths.append(arg)
    return config_path, pairs, paths


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> int:
    import series_ingest
    from series_ingest.export import dumps

    config_path, pairs, paths = _split_args(sys.argv[1:])

    files = series_ingest.FileTable()
    parser_config = None
    layout = "pairs" if pairs else "records"
    if config_path is not None:
        config = series_ingest.load_config(config_path)
        parser_config = config.parser
        if not pairs:
            layout = config.output.json_layout
        series_ingest.load(config_path, files)
    elif not paths:
        log.error("which data file to parse?")
        return 2

    failed: list[str] = []
    if paths:
        summary = series_ingest.ingest_files(paths, files, parser_config)
        failed = list(summary.failed)
        for path in failed:
            log.warning("SKIP  %s  (could not open)", path)

    # one object keyed by file id; each value is that file's own JSON document
    body = ", ".join(
        f"{json.dumps(file_id)}: {dumps(table, layout)}"
        for file_id, table in files.snapshot().items()
    )
    sys.stdout.write("{" + body + "}\n")

    log.info("Done: %d file(s), %d failed", len(files), len(failed))
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
