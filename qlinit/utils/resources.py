"""
resources.py - Resource limit flags for the CodeQL command line

Turns the user's ram and threads inputs into --ram and --threads flags,
filling in defaults from the host.
"""

import math
import os
import re

import psutil

from ..core.errors import InvalidSettingError

# Memory left over for the operating system and the runner itself
SYSTEM_RESERVED_MEMORY_MB = 256

# An optional "-" followed by ASCII digits
THREADS_INPUT = re.compile(r"-?[0-9]+\Z")


def get_total_memory_mb() -> float:
    return psutil.virtual_memory().total / (1024 * 1024)


def get_cpu_count() -> int:
    return os.cpu_count() or 1


def get_memory_flag(user_input: str = "") -> str:
    """
    Get the --ram flag for CodeQL

    Args:
        user_input: Megabytes of RAM to use, or empty to use all but a reserve

    Returns:
        Flag of the form --ram=<megabytes>

    Raises:
        InvalidSettingError: If the input is not a positive number
    """
    if user_input:
        try:
            memory_mb = float(user_input)
        except ValueError:
            raise InvalidSettingError("RAM", user_input)
        if math.isnan(memory_mb) or math.isinf(memory_mb) or memory_mb <= 0:
            raise InvalidSettingError("RAM", user_input)
    else:
        memory_mb = get_total_memory_mb() - SYSTEM_RESERVED_MEMORY_MB

    return f"--ram={math.floor(memory_mb)}"


def get_threads_flag(user_input: str = "") -> str:
    """
    Get the --threads flag for CodeQL

    0 means one thread per core and negative values leave that many cores
    free, so both ends are clamped to the host's core count.

    Args:
        user_input: Number of threads, or empty to use every core

    Returns:
        Flag of the form --threads=<n>

    Raises:
        InvalidSettingError: If the input is not an integer
    """
    if not user_input:
        return "--threads=0"

    if not THREADS_INPUT.match(user_input.strip()):
        raise InvalidSettingError("threads", user_input)
    num_threads = int(user_input.strip())

    max_threads = get_cpu_count()
    num_threads = max(-max_threads, min(num_threads, max_threads))

    return f"--threads={num_threads}"
