import argparse
import sys
import time
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path

from tqdm import tqdm

from app.config import resolve_settings
from artifacts.logger import RunLogger
from domain.errors import InvalidInputError
from domain.models import CancellationHandle
from domain.rules import build_job
from services.repeat_copy_service import RepeatCopyService
from utils.sizefmt import describe_source


EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CANCELLED = 130


# ---------------------------
# Helpers
# ---------------------------

def tqdm_enabled() -> bool:
    return sys.stderr.isatty()


def log(msg: str, logfile: Path | None):
    ts = time.strftime("%Y-%m-%d %H:%M:%S")
    line = f"[{ts}] {msg}"
    tqdm.write(line)
    if logfile:
        logfile.parent.mkdir(parents=True, exist_ok=True)
        with logfile.open("a", encoding="utf-8") as f:
            f.write(line + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tscopy",
        description="Terminal Server File Copy – repeatedly copy a file and report mean throughput"
    )

    parser.add_argument("--config", help="Config file (json or yaml)")
    parser.add_argument("--source", help="File to copy")
    parser.add_argument("--dest", help="Destination directory")
    parser.add_argument("--times", help="How many times to copy the file (default 10)")
    parser.add_argument("--log-file", help="Write logs to file")
    return parser


# ---------------------------
# CLI main
# ---------------------------

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = resolve_settings(args.config, {
        "destination_dir": args.dest,
        "repeat_count": args.times,
        "log_file": args.log_file,
    })

    logfile = Path(cfg["log_file"]) if cfg.get("log_file") else None
    run_logger = RunLogger(str(logfile)) if logfile else None

    try:
        job, warnings = build_job(args.source, cfg["destination_dir"], cfg["repeat_count"])
    except InvalidInputError as e:
        log(f"Input error: {e}", logfile)
        return EXIT_FAILED

    for w in warnings:
        log(f"Warning: {w}", logfile)

    name, size_label = describe_source(job.source_path)
    log(f"Copying {name} ({size_label}) to {job.destination_dir} x{job.repeat_count}", logfile)

    cancel = CancellationHandle()
    service = RepeatCopyService(run_logger=run_logger)

    pbar = tqdm(
        total=job.repeat_count,
        desc="Copy",
        unit="copy",
        dynamic_ncols=True,
        disable=not tqdm_enabled(),
    )

    def on_progress(p):
        pbar.update(1)
        pbar.set_postfix_str(p.display())

    future = service.start(job, cancel, on_progress=on_progress)
    try:
        while True:
            try:
                outcome = future.result(timeout=0.2)
                break
            except FutureTimeoutError:
                continue
    except KeyboardInterrupt:
        log("Cancel requested; stopping after the current copy…", logfile)
        cancel.cancel()
        try:
            outcome = future.result()
        except KeyboardInterrupt:
            log("Interrupted again; not waiting for the current copy.", logfile)
            return EXIT_CANCELLED
    finally:
        pbar.close()

    if outcome.is_completed:
        log(f"Completed {outcome.cycles_completed} copies.", logfile)
        return EXIT_OK
    if outcome.is_cancelled:
        log(f"Cancelled after {outcome.cycles_completed} copies.", logfile)
        return EXIT_CANCELLED

    log(f"Failed after {outcome.cycles_completed} copies: {outcome.reason}", logfile)
    return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
