import argparse
import logging
import sys

from ..config import get_settings
from ..pipeline.image_processor import ImageProcessor
from ..pipeline.script_runner import ScriptRunner


def main(argv=None) -> int:
    settings = get_settings()

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    ap = argparse.ArgumentParser(description="Run pixelworks image commands.")
    ap.add_argument("-file", dest="script", default=None,
                    help="script with one command per line; commands are read from stdin otherwise")
    args = ap.parse_args(argv)

    runner = ScriptRunner(ImageProcessor(settings=settings))
    if args.script:
        report = runner.run_file(args.script)
    else:
        report = runner.run_lines(sys.stdin)

    print(f"Executed {report.executed} command(s), {len(report.failures)} failed.")
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
