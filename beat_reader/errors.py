"""Errors raised while reading Beat Saber map files."""

from pathlib import Path


class BeatmapReaderError(Exception):
    """Base class for every error raised by beat_reader."""


class InfoParsingError(BeatmapReaderError, ValueError):
    """info.dat is not valid JSON or does not have the expected shape."""

    def __init__(self, cause: Exception):
        super().__init__(f"Failed to parse info.dat file. ({cause})")
        self.cause = cause


class BeatmapParsingError(BeatmapReaderError, ValueError):
    """A difficulty file matched neither the v3 nor the v2 shape.

    Both diagnostics are kept so callers can see why each guess failed.
    """

    def __init__(self, err_as_new: Exception, err_as_old: Exception):
        super().__init__(
            "Failed to parse a beatmap file. "
            f"(new format: {err_as_new}, old format: {err_as_old})"
        )
        self.err_as_new = err_as_new
        self.err_as_old = err_as_old


class DatReadError(BeatmapReaderError):
    """A map file could not be read from disk."""

    def __init__(self, path: Path, cause: Exception):
        super().__init__(f"Failed to read {path}: {cause}")
        self.path = path
        self.cause = cause
