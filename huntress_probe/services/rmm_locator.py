import os
from pathlib import Path
from collections.abc import Iterable
import structlog

logger = structlog.get_logger(__name__)

CLIENT_EXECUTABLES = (
    "Syncro.exe",
    "Syncro.Service.Runner.exe",  # service runner, accepts the same asset_field verbs
)


def install_directories() -> list[Path]:
    """Syncro install directories, most common first."""
    program_files = os.environ.get("ProgramFiles", r"C:\Program Files")
    program_files_x86 = os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)")
    program_data = os.environ.get("ProgramData", r"C:\ProgramData")
    return [
        Path(program_files) / "RepairTech" / "Syncro",
        Path(program_files_x86) / "RepairTech" / "Syncro",
        Path(program_data) / "Syncro" / "bin",
    ]


def candidate_paths(extra_paths: Iterable[str | os.PathLike] = ()) -> list[Path]:
    """Ordered candidates: explicit extra paths, then directories x executables."""
    candidates = [Path(p) for p in extra_paths]
    for directory in install_directories():
        candidates.extend(directory / name for name in CLIENT_EXECUTABLES)
    return candidates


def locate(candidates: Iterable[Path] | None = None, extra_paths: Iterable[str | os.PathLike] = ()) -> Path | None:
    """First candidate that exists on disk, or None when the client is absent."""
    if candidates is None:
        candidates = candidate_paths(extra_paths)
    for path in candidates:
        if path.is_file():
            logger.info("RMM client located", client_path=str(path))
            return path
    logger.debug("RMM client not found in any candidate path")
    return None
