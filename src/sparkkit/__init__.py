"""
sparkkit - a small application toolkit

Recursive configuration trees with deep merging, a process-wide registry,
named timers and layered settings.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("sparkkit")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from sparkkit.config import Settings  # noqa: E402
from sparkkit.registry import Registry, get_registry  # noqa: E402
from sparkkit.timer import Timer  # noqa: E402
from sparkkit.utils import ConfigTree  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "ConfigTree",
    "Registry",
    "Settings",
    "Timer",
    "get_registry",
]
