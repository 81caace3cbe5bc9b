"""Tests for operating system detection."""

import unittest
from unittest.mock import patch

import pytest

from repology_install.exceptions import UnsupportedOperatingSystemError
from repology_install.operating_system import (
    OperatingSystem,
    detect_linux_distribution,
    detect_operating_system,
)
from repology_install.package_managers import PackageManager


def write_os_release(tmp_path, content):
    path = tmp_path / "os-release"
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content)
    return str(path)


class TestPackageManagers(unittest.TestCase):
    """Test the OS to package manager table."""

    def test_every_os_has_package_managers(self):
        for os in OperatingSystem:
            managers = os.package_managers()
            self.assertTrue(managers, f"{os} has no package manager")
            for manager in managers:
                prefixes = manager.repology_repository_prefix()
                self.assertTrue(prefixes)
                self.assertEqual(len(prefixes), len(set(prefixes)))
                self.assertTrue(all(prefixes))

    def test_redhat_prefers_dnf_over_yum(self):
        self.assertEqual(OperatingSystem.REDHAT.package_managers(), (PackageManager.DNF, PackageManager.YUM))

    def test_single_manager_systems(self):
        self.assertEqual(OperatingSystem.MAC.package_managers(), (PackageManager.HOMEBREW,))
        self.assertEqual(OperatingSystem.DEBIAN.package_managers(), (PackageManager.APT,))
        self.assertEqual(OperatingSystem.WINDOWS.package_managers(), (PackageManager.CHOCOLATEY,))


class TestFromString:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("mac", OperatingSystem.MAC),
            ("OSX", OperatingSystem.MAC),
            ("macOS", OperatingSystem.MAC),
            ("debian", OperatingSystem.DEBIAN),
            ("RedHat", OperatingSystem.REDHAT),
            ("rhel", OperatingSystem.REDHAT),
            ("windows", OperatingSystem.WINDOWS),
            ("Win", OperatingSystem.WINDOWS),
        ],
    )
    def test_aliases(self, value, expected):
        assert OperatingSystem.from_string(value) is expected

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Invalid operating system: 'arch'"):
            OperatingSystem.from_string("arch")


class TestDetectLinuxDistribution:
    def test_debian(self, tmp_path):
        path = write_os_release(tmp_path, "NAME=Debian\nID=debian\nVERSION=11\n")
        assert detect_linux_distribution(path) is OperatingSystem.DEBIAN

    @pytest.mark.parametrize("line", ["ID=fedora", "ID=centos", "ID=rhel"])
    def test_redhat_family(self, tmp_path, line):
        path = write_os_release(tmp_path, f'NAME="Some Linux"\n{line}\n')
        assert detect_linux_distribution(path) is OperatingSystem.REDHAT

    def test_first_match_wins(self, tmp_path):
        path = write_os_release(tmp_path, "ID=fedora\nID=debian\n")
        assert detect_linux_distribution(path) is OperatingSystem.REDHAT

    def test_crlf_line_endings(self, tmp_path):
        path = write_os_release(tmp_path, b"NAME=Debian\r\nID=debian\r\n")
        assert detect_linux_distribution(path) is OperatingSystem.DEBIAN

    def test_last_line_without_newline(self, tmp_path):
        path = write_os_release(tmp_path, "NAME=Debian\nID=debian")
        assert detect_linux_distribution(path) is OperatingSystem.DEBIAN

    @pytest.mark.parametrize(
        "line", ["ID=debian-derivative", 'ID="debian"', "ID=ubuntu", " ID=debian", "ID_LIKE=debian"]
    )
    def test_only_exact_lines_match(self, tmp_path, line):
        path = write_os_release(tmp_path, f"NAME=Other\n{line}\n")
        assert detect_linux_distribution(path) is None

    def test_undecodable_lines_are_skipped(self, tmp_path):
        path = write_os_release(tmp_path, b"NAME=\xff\xfe\nID=debian\n")
        assert detect_linux_distribution(path) is OperatingSystem.DEBIAN

    def test_missing_file(self, tmp_path):
        assert detect_linux_distribution(str(tmp_path / "missing")) is None

    def test_empty_file(self, tmp_path):
        assert detect_linux_distribution(write_os_release(tmp_path, "")) is None


class TestDetectOperatingSystem:
    @patch("repology_install.operating_system.platform.system", return_value="Darwin")
    def test_mac(self, mock_system):
        assert detect_operating_system() is OperatingSystem.MAC

    @patch("repology_install.operating_system.platform.system", return_value="Windows")
    def test_windows(self, mock_system):
        assert detect_operating_system() is OperatingSystem.WINDOWS

    @patch("repology_install.operating_system.platform.system", return_value="Linux")
    def test_linux_debian(self, mock_system, tmp_path):
        path = write_os_release(tmp_path, "NAME=Debian\nID=debian\nVERSION=11\n")
        assert detect_operating_system(path) is OperatingSystem.DEBIAN

    @patch("repology_install.operating_system.platform.system", return_value="Linux")
    def test_linux_unknown_distribution(self, mock_system, tmp_path):
        path = write_os_release(tmp_path, "NAME=Arch Linux\nID=arch\n")
        with pytest.raises(UnsupportedOperatingSystemError):
            detect_operating_system(path)

    @patch("repology_install.operating_system.platform.system", return_value="Linux")
    def test_linux_without_os_release(self, mock_system, tmp_path):
        with pytest.raises(UnsupportedOperatingSystemError):
            detect_operating_system(str(tmp_path / "missing"))

    @patch("repology_install.operating_system.platform.system", return_value="FreeBSD")
    def test_other_platform(self, mock_system):
        with pytest.raises(UnsupportedOperatingSystemError, match="FreeBSD"):
            detect_operating_system()

    @patch("repology_install.operating_system.platform.system", return_value="Darwin")
    def test_classmethod_delegates(self, mock_system):
        assert OperatingSystem.detect() is OperatingSystem.MAC
