"""CLI commands for repwise."""

from .export import export, import_data
from .history import history, records
from .init import init
from .library import exercises, groups
from .serve import serve
from .settings import settings
from .timer import timer
from .workout import sets, workout

__all__ = [
    "exercises",
    "export",
    "groups",
    "history",
    "import_data",
    "init",
    "records",
    "serve",
    "sets",
    "settings",
    "timer",
    "workout",
]
