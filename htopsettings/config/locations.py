"""
Configuration file location.

Resolution order:
    1. $HTOPRC, used verbatim
    2. $XDG_CONFIG_HOME/htop/htoprc, or ~/.config/htop/htoprc
    3. ~/.htoprc is kept aside as a legacy file to migrate from

The system-wide file (SYSCONFDIR/htoprc) is only ever read, never
written.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..security import PrivilegeScope, dropped_privileges, is_safe_legacy_file
from .defaults import SYSCONFDIR

logger = logging.getLogger(__name__)


@dataclass
class ConfigLocation:
    """Result of resolving where settings live."""
    filename: str
    legacy_filename: Optional[str] = None
    from_override: bool = False


class ConfigLocationResolver:
    """
    Decide which file holds the active configuration.

    All inputs are injectable so tests can point the resolver at a
    temporary home directory.
    """

    OVERRIDE_VAR = "HTOPRC"
    XDG_VAR = "XDG_CONFIG_HOME"

    def __init__(self, environ: Optional[Mapping[str, str]] = None,
                 home: Optional[str] = None, sysconfdir: str = SYSCONFDIR):
        self.environ = os.environ if environ is None else environ
        self._home = home
        self.sysconfdir = sysconfdir

    @property
    def home(self) -> str:
        if self._home is not None:
            return self._home
        return self.environ.get("HOME") or os.path.expanduser("~")

    def resolve(self) -> ConfigLocation:
        """
        Compute the configuration path for this session.

        Creates the per-user config directories when the override is not
        in use, and reports a legacy dotfile only if it is eligible for
        migration.
        """
        override = self.environ.get(self.OVERRIDE_VAR)
        if override is not None:
            logger.info(f"Using {self.OVERRIDE_VAR}={override}")
            return ConfigLocation(filename=override, from_override=True)

        xdg_config_home = self.environ.get(self.XDG_VAR)
        config_dir = xdg_config_home or os.path.join(self.home, ".config")
        htop_dir = os.path.join(config_dir, "htop")
        filename = os.path.join(htop_dir, "htoprc")
        legacy = os.path.join(self.home, ".htoprc")

        eligible = self._prepare(config_dir, htop_dir, legacy)
        if eligible:
            logger.info(f"Found legacy configuration {legacy}, will migrate to {filename}")

        return ConfigLocation(filename=filename, legacy_filename=legacy if eligible else None)

    def system_config_path(self) -> str:
        """Read-only system-wide fallback file."""
        return os.path.join(self.sysconfdir, "htoprc")

    @dropped_privileges
    def _prepare(self, config_dir: str, htop_dir: str, legacy: str) -> bool:
        for directory in (config_dir, htop_dir):
            try:
                os.mkdir(directory, 0o700)
            except FileExistsError:
                pass
            except OSError as e:
                logger.debug(f"Cannot create {directory}: {e}")
        return is_safe_legacy_file(legacy)

    def remove_legacy(self, legacy: str) -> bool:
        """
        Delete a migrated legacy dotfile.

        The eligibility check is repeated right before unlinking so a file
        swapped for a symlink in the meantime is left alone.
        """
        with PrivilegeScope():
            if not is_safe_legacy_file(legacy):
                logger.warning(f"Not removing {legacy}: no longer a regular readable file")
                return False
            try:
                os.unlink(legacy)
            except OSError as e:
                logger.warning(f"Failed to remove legacy configuration {legacy}: {e}")
                return False

        logger.info(f"Removed legacy configuration {legacy}")
        return True
