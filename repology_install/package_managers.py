"""Native package managers and the install commands they accept."""

from enum import Enum
from typing import Dict, Tuple


class PackageManager(Enum):
    """A package manager family known to repology-install."""

    APT = "apt"
    DNF = "dnf"
    YUM = "yum"
    CHOCOLATEY = "chocolatey"
    HOMEBREW = "homebrew"

    @property
    def install_verb(self) -> str:
        """Command prefix that installs a package non-interactively."""
        return _INSTALL_VERBS[self]

    def requires_sudo(self) -> bool:
        """Whether installing with this manager needs root privileges."""
        return self in _SUDO_MANAGERS

    def repology_repository_prefix(self) -> Tuple[str, ...]:
        """Repology repository name prefixes served by this manager."""
        return _REPOSITORY_PREFIXES[self]

    def matches_repository(self, repo: str) -> bool:
        """Check whether a Repology repository name belongs to this manager."""
        return any(repo.startswith(prefix) for prefix in self.repology_repository_prefix())

    def install(self, package_name: str) -> str:
        """
        Build the shell command installing ``package_name``.

        The package name is inserted verbatim. It is not shell-escaped, so
        callers must sanitize untrusted input before running the command.

        Args:
            package_name: Name of the package in this manager's repositories

        Returns:
            Command string such as ``sudo apt-get install -y nginx``
        """
        sudo = "sudo " if self.requires_sudo() else ""
        return f"{sudo}{self.install_verb} {package_name}"


_INSTALL_VERBS: Dict[PackageManager, str] = {
    PackageManager.APT: "apt-get install -y",
    PackageManager.DNF: "dnf install -y",
    PackageManager.YUM: "yum install -y",
    PackageManager.HOMEBREW: "brew install",
    PackageManager.CHOCOLATEY: "choco install",
}

_SUDO_MANAGERS = frozenset({PackageManager.APT, PackageManager.DNF, PackageManager.YUM})

# Dnf and Yum serve the same RedHat family repositories
_REPOSITORY_PREFIXES: Dict[PackageManager, Tuple[str, ...]] = {
    PackageManager.APT: ("debian_", "ubuntu_"),
    PackageManager.DNF: ("fedora_", "centos_"),
    PackageManager.YUM: ("fedora_", "centos_"),
    PackageManager.CHOCOLATEY: ("chocolatey",),
    PackageManager.HOMEBREW: ("homebrew",),
}
