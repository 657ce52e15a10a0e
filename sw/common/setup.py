import os
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create missing directories if missing, and optionally error out when a path
# doesn't exist.
def ensure_directory(path: Path,must_exist=False):
    if must_exist:
        if not path.exists():
            raise FileNotFoundError(f"Required directory is missing: {path}")
        if not path.is_dir():
            raise NotADirectoryError(f"Expected a directory, got a file: {path}")
    else:
        path.mkdir(parents=True,exist_ok=True)
    return path

# Dataclass for accessing paths across program. Building it never touches the disk, directories are only
# created once something actually needs to write there.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path

    @staticmethod
    def build():
        # Explicit override wins, then the usual per-user app data folder, then a dotfolder in home.
        override = os.getenv("STOPWATCH_HOME")
        appdata = os.getenv("APPDATA")
        if override:
            data = Path(override)
        elif appdata:
            data = Path(appdata) / "Stopwatch"
        else:
            data = Path.home() / ".stopwatch"

        return ProjectPaths(
            data = data,
            logs = data / "logs",
        )
PATHS = ProjectPaths.build()
