"""Profiling support for treedup using cProfile.

When the TREEDUP_PROFILE environment variable is set to a directory path,
the main entry point runs under cProfile and its stats are dumped there with
a filename unique to the run.
"""
import cProfile
import functools
import itertools
import os
import time
from pathlib import Path
from typing import Callable, TypeVar, ParamSpec

P = ParamSpec('P')
T = TypeVar('T')

PROFILE_ENVIRONMENT_VARIABLE = 'TREEDUP_PROFILE'

# Distinguishes several profiled calls made within the same millisecond
_profile_counter = itertools.count()


def get_profile_dir() -> Path | None:
    """Return the directory named by TREEDUP_PROFILE, or None when profiling is off."""
    profile_path = os.environ.get(PROFILE_ENVIRONMENT_VARIABLE)
    if profile_path:
        return Path(profile_path)
    return None


def generate_profile_filename(prefix: str = "profile") -> str:
    """Generate a filename like "main_1730332456789_54321_0.prof".

    The parts are the prefix, the wall-clock time in milliseconds, the process
    ID and a per-process sequence number.
    """
    timestamp_ms = int(time.time() * 1000)
    seq = next(_profile_counter)
    return f"{prefix}_{timestamp_ms}_{os.getpid()}_{seq}.prof"


def profile_function(func: Callable[P, T], prefix: str = "profile") -> Callable[P, T]:
    """Wrap func so that it is profiled whenever TREEDUP_PROFILE is set."""
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        profile_dir = get_profile_dir()

        if profile_dir is None:
            return func(*args, **kwargs)

        profile_dir.mkdir(parents=True, exist_ok=True)
        profile_file = profile_dir / generate_profile_filename(prefix)

        profiler = cProfile.Profile()
        try:
            profiler.enable()
            return func(*args, **kwargs)
        finally:
            profiler.disable()
            profiler.dump_stats(str(profile_file))

    return wrapper


def profile_main(func: Callable[P, T]) -> Callable[P, T]:
    """Decorator for the command line entry point."""
    return profile_function(func, prefix="main")
