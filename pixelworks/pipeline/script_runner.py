"""
Script Runner
Turns the editor's text command language into typed requests and runs them
against one ImageProcessor session.

    load images/koala.ppm koala
    brighten 10 koala koala-bright
    blur koala koala-blur split 50
    save out/koala-blur.png koala-blur
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union
import logging

from ..exceptions import InvalidParameterError, NumericParseError, PixelWorksError
from ..models.image_adjustments import GAUSSIAN_BLUR, GREYSCALE, INTENSITY, LUMA, SEPIA, SHARPEN, VALUE
from ..models.requests import (
    AdjustLevels, ApplyColorMatrix, ApplyKernel, Brighten, ColorCorrect, CombineChannels,
    Compress, ExtractChannel, Flip, LoadImage, PlotHistogram, SaveImage, SplitChannels,
    WeightedComponent,
)
from .image_processor import ImageProcessor

logger = logging.getLogger(__name__)

RUN_COMMANDS = ("run", "-file")
EXIT_COMMAND = "exit"


def parse_int(argument: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise NumericParseError(argument, value) from None


def parse_float(argument: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise NumericParseError(argument, value) from None


def _split_suffix(command: str, args: List[str], fixed: int) -> Optional[int]:
    """Parse the optional trailing ``split <percent>`` after *fixed* positional args."""
    if len(args) == fixed:
        return None
    if len(args) == fixed + 2 and args[fixed] == "split":
        percent = parse_int("split value", args[fixed + 1])
        if percent < 0:
            raise InvalidParameterError("Split value cannot be negative.")
        return percent
    raise InvalidParameterError(f"Usage: {command} {' '.join(['<arg>'] * fixed)} [split <percent>]")


def _expect(command: str, args: List[str], *names: str) -> None:
    if len(args) != len(names):
        raise InvalidParameterError(f"Usage: {command} {' '.join(f'<{n}>' for n in names)}")


# ─── Command parsers ──────────────────────────────────────────────
def _load(cmd, args):
    _expect(cmd, args, "path", "dest")
    return LoadImage(Path(args[0]), args[1])


def _save(cmd, args):
    _expect(cmd, args, "path", "source")
    return SaveImage(Path(args[0]), args[1])


def _channel(index):
    def parse(cmd, args):
        _expect(cmd, args, "source", "dest")
        return ExtractChannel(args[0], args[1], index)
    return parse


def _component(coefficients):
    def parse(cmd, args):
        _expect(cmd, args, "source", "dest")
        return WeightedComponent(args[0], args[1], coefficients)
    return parse


def _flip(horizontal):
    def parse(cmd, args):
        _expect(cmd, args, "source", "dest")
        return Flip(args[0], args[1], horizontal)
    return parse


def _brighten(cmd, args):
    _expect(cmd, args, "delta", "source", "dest")
    return Brighten(args[1], args[2], parse_int("brightness", args[0]))


def _rgb_split(cmd, args):
    _expect(cmd, args, "source", "red-dest", "green-dest", "blue-dest")
    return SplitChannels(*args)


def _rgb_combine(cmd, args):
    _expect(cmd, args, "dest", "red-source", "green-source", "blue-source")
    return CombineChannels(*args)


def _kernel(kernel):
    def parse(cmd, args):
        split = _split_suffix(cmd, args, 2)
        return ApplyKernel(args[0], args[1], kernel, split)
    return parse


def _matrix(matrix):
    def parse(cmd, args):
        split = _split_suffix(cmd, args, 2)
        return ApplyColorMatrix(args[0], args[1], matrix, split)
    return parse


def _color_correct(cmd, args):
    split = _split_suffix(cmd, args, 2)
    return ColorCorrect(args[0], args[1], split)


def _histogram(cmd, args):
    _expect(cmd, args, "source", "dest")
    return PlotHistogram(args[0], args[1])


def _levels(cmd, args):
    split = _split_suffix(cmd, args, 5)
    black, mid, white = (parse_int(name, value) for name, value in zip(("b", "m", "w"), args[:3]))
    return AdjustLevels(args[3], args[4], black, mid, white, split)


def _compress(cmd, args):
    _expect(cmd, args, "percent", "source", "dest")
    return Compress(args[1], args[2], parse_float("compression percentage", args[0]))


PARSERS: Dict[str, Callable] = {
    "load": _load,
    "save": _save,
    "red-component": _channel(0),
    "green-component": _channel(1),
    "blue-component": _channel(2),
    "value-component": _component(VALUE),
    "luma-component": _component(LUMA),
    "intensity-component": _component(INTENSITY),
    "horizontal-flip": _flip(True),
    "vertical-flip": _flip(False),
    "brighten": _brighten,
    "rgb-split": _rgb_split,
    "rgb-combine": _rgb_combine,
    "blur": _kernel(GAUSSIAN_BLUR),
    "sharpen": _kernel(SHARPEN),
    "sepia": _matrix(SEPIA),
    "greyscale": _matrix(GREYSCALE),
    "color-correct": _color_correct,
    "histogram": _histogram,
    "levels-adjust": _levels,
    "compress": _compress,
}


def parse_command(line: str):
    """
    Parse one command line into a request; blank lines and ``#`` comments give None.
    """
    tokens = line.split()
    if not tokens or tokens[0].startswith("#"):
        return None
    command, args = tokens[0].lower(), tokens[1:]
    parser = PARSERS.get(command)
    if parser is None:
        raise InvalidParameterError(f"Unknown command: {command}")
    return parser(command, args)


@dataclass
class ScriptReport:
    executed: int = 0
    failures: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class ScriptRunner:
    """
    Runs commands one at a time; a failing command is logged and skipped.
    """

    def __init__(self, processor: ImageProcessor | None = None):
        self.processor = processor or ImageProcessor()
        self._active_scripts = set()

    def run_line(self, line: str, report: ScriptReport | None = None) -> ScriptReport:
        report = report if report is not None else ScriptReport()
        tokens = line.split()
        try:
            if tokens and tokens[0].lower() in RUN_COMMANDS:
                if len(tokens) != 2:
                    raise InvalidParameterError(f"Usage: {tokens[0]} <script-path>")
                self.run_file(tokens[1], report)
                return report

            request = parse_command(line)
            if request is None:
                return report
            self.processor.execute(request)
            report.executed += 1
        except PixelWorksError as err:
            logger.error("%s: %s", line.strip(), err)
            report.failures.append(f"{line.strip()}: {err}")
        return report

    def run_lines(self, lines: Iterable[str], report: ScriptReport | None = None) -> ScriptReport:
        report = report if report is not None else ScriptReport()
        for line in lines:
            if line.strip().lower() == EXIT_COMMAND:
                logger.info("Exit requested, skipping the remaining commands")
                break
            self.run_line(line, report)
        return report

    def run_file(self, path: Union[str, Path], report: ScriptReport | None = None) -> ScriptReport:
        path = Path(path)
        report = report if report is not None else ScriptReport()
        key = path.resolve()
        if key in self._active_scripts:
            raise InvalidParameterError(f"Script {path} runs itself")
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as err:
            logger.error("Error reading the script file %s: %s", path, err)
            report.failures.append(f"{path}: {err}")
            return report

        logger.info("Running script %s (%d lines)", path, len(lines))
        self._active_scripts.add(key)
        try:
            return self.run_lines(lines, report)
        finally:
            self._active_scripts.discard(key)
