"""
Scoped effective-uid switching.

A process monitor is commonly installed setuid so it can read other
users' process details. Its configuration files belong to whoever ran
it, so every open, stat, mkdir and unlink of those files happens with
the effective uid temporarily set back to the real uid.

The effective uid is process-global state. The settings layer is
single-threaded, so no locking is done here.
"""

import functools
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


class PrivilegeScope:
    """
    Context manager that runs its body as the real user.

    On entry the current effective uid is saved and replaced by the real
    uid. On exit the saved effective uid is restored unconditionally,
    whether the body returned or raised. Exceptions from the body are
    never suppressed.

    When the process is not running with elevated bits (real and
    effective uid already match) entering and leaving are no-ops.

    Example:
        >>> with PrivilegeScope():
        ...     fd = open(path)
    """

    def __init__(self):
        self._saved_euid: Optional[int] = None

    @property
    def active(self) -> bool:
        """True while privileges are dropped by this scope."""
        return self._saved_euid is not None

    def __enter__(self):
        if self._saved_euid is not None:
            raise RuntimeError("PrivilegeScope is not reentrant")

        euid = os.geteuid()
        uid = os.getuid()
        if euid != uid:
            os.seteuid(uid)
            self._saved_euid = euid
            logger.debug(f"Dropped effective uid {euid} -> {uid}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        saved, self._saved_euid = self._saved_euid, None
        if saved is not None:
            os.seteuid(saved)
            logger.debug(f"Restored effective uid {saved}")
        return False


def dropped_privileges(func):
    """Decorator running func inside a fresh PrivilegeScope."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with PrivilegeScope():
            return func(*args, **kwargs)
    return wrapper
