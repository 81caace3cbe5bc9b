"""Operating system detection.

The host is classified once per run and the resulting OperatingSystem is
passed explicitly to whatever needs it. On Linux the distribution is read
from ``/etc/os-release`` using exact line matches, so ``ID=debian`` is
recognised while ``ID=debian-derivative`` or ``ID="debian"`` are not.
"""

import platform
from enum import Enum
from typing import Dict, Optional, Tuple

from .exceptions import UnsupportedOperatingSystemError
from .logging_config import logger
from .package_managers import PackageManager

OS_RELEASE_PATH = "/etc/os-release"


class OperatingSystem(Enum):
    """Operating system families with a supported package manager."""

    MAC = "mac"
    DEBIAN = "debian"
    REDHAT = "redhat"
    WINDOWS = "windows"

    def package_managers(self) -> Tuple[PackageManager, ...]:
        """Package manager(s) for this operating system family, in preference order."""
        return _PACKAGE_MANAGERS[self]

    @classmethod
    def from_string(cls, value: str) -> "OperatingSystem":
        """
        Parse an operating system name such as ``macos`` or ``rhel``.

        Raises:
            ValueError: If the name is not a known alias
        """
        try:
            return _ALIASES[value.lower()]
        except KeyError:
            raise ValueError(f"Invalid operating system: '{value}'") from None

    @classmethod
    def detect(cls, os_release_path: str = OS_RELEASE_PATH) -> "OperatingSystem":
        """Detect the current operating system, if it's supported."""
        return detect_operating_system(os_release_path)


_PACKAGE_MANAGERS: Dict[OperatingSystem, Tuple[PackageManager, ...]] = {
    OperatingSystem.MAC: (PackageManager.HOMEBREW,),
    OperatingSystem.DEBIAN: (PackageManager.APT,),
    OperatingSystem.REDHAT: (PackageManager.DNF, PackageManager.YUM),
    OperatingSystem.WINDOWS: (PackageManager.CHOCOLATEY,),
}

_ALIASES: Dict[str, OperatingSystem] = {
    "mac": OperatingSystem.MAC,
    "osx": OperatingSystem.MAC,
    "macos": OperatingSystem.MAC,
    "debian": OperatingSystem.DEBIAN,
    "redhat": OperatingSystem.REDHAT,
    "rhel": OperatingSystem.REDHAT,
    "windows": OperatingSystem.WINDOWS,
    "win": OperatingSystem.WINDOWS,
}

_OS_RELEASE_IDS: Dict[str, OperatingSystem] = {
    "ID=debian": OperatingSystem.DEBIAN,
    "ID=fedora": OperatingSystem.REDHAT,
    "ID=centos": OperatingSystem.REDHAT,
    "ID=rhel": OperatingSystem.REDHAT,
}


def detect_operating_system(os_release_path: str = OS_RELEASE_PATH) -> OperatingSystem:
    """
    Detect the operating system family of the current host.

    Args:
        os_release_path: os-release file consulted on Linux

    Returns:
        Detected OperatingSystem

    Raises:
        UnsupportedOperatingSystemError: If the host cannot be classified
    """
    system = platform.system()
    logger.debug(f"Detected platform: {system!r}")

    if system == "Darwin":
        return OperatingSystem.MAC
    if system == "Windows":
        return OperatingSystem.WINDOWS
    if system == "Linux":
        distribution = detect_linux_distribution(os_release_path)
        if distribution is not None:
            return distribution
        raise UnsupportedOperatingSystemError(f"Unsupported Linux distribution (checked {os_release_path})")

    raise UnsupportedOperatingSystemError(f"Unsupported operating system: {system or 'unknown'}")


def detect_linux_distribution(os_release_path: str = OS_RELEASE_PATH) -> Optional[OperatingSystem]:
    """
    Check ``os-release`` to detect the current Linux distribution.

    Returns None when the file cannot be opened or no line matches.
    Lines that are not valid UTF-8 are skipped.
    """
    try:
        os_release = open(os_release_path, "rb")
    except OSError as e:
        logger.debug(f"Cannot open {os_release_path}: {e}")
        return None

    with os_release:
        for raw_line in os_release:
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError:
                continue

            line = line.rstrip("\n")
            if line.endswith("\r"):
                line = line[:-1]

            distribution = _OS_RELEASE_IDS.get(line)
            if distribution is not None:
                logger.debug(f"Matched {line!r} in {os_release_path}")
                return distribution

    return None
