"""Command-line interface for repology-install."""

import json
import sys
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import click

from .. import __version__
from ..console import (
    print_environment,
    print_failure,
    print_install_commands,
    print_projects_table,
    print_warning,
)
from ..exceptions import ConfigurationError, FailedRequestError, RepologyInstallError
from ..http_client import DEFAULT_USER_AGENT
from ..logging_config import logger, set_log_format, set_log_level
from ..operating_system import OperatingSystem, detect_operating_system
from ..repology import REPOLOGY_API_BASE, RepologyClient, installable_commands

DEFAULT_TIMEOUT = 10.0  # seconds


@dataclass
class Config:
    """Configuration settings for a lookup."""

    package_name: str
    os_override: Optional[str] = None
    api_base_url: str = REPOLOGY_API_BASE
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    output_json: bool = False
    verbose: bool = False

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.package_name or not self.package_name.strip():
            raise ConfigurationError("Package name is not defined")
        if not self.user_agent:
            raise ConfigurationError("User agent must not be empty")
        if self.timeout <= 0:
            raise ConfigurationError("Timeout must be a positive number of seconds")
        if self.os_override:
            try:
                OperatingSystem.from_string(self.os_override)
            except ValueError as e:
                raise ConfigurationError(str(e)) from None

        self._validate_api_url()

    def _validate_api_url(self) -> None:
        parsed = urlparse(self.api_base_url)

        if not parsed.scheme or parsed.scheme not in ("http", "https"):
            raise ConfigurationError("API base URL must start with http:// or https://")
        if not parsed.netloc:
            raise ConfigurationError("API base URL must include a valid hostname")

        if self.api_base_url.endswith("/"):
            self.api_base_url = self.api_base_url.rstrip("/")

    def resolve_operating_system(self) -> OperatingSystem:
        """Return the overridden operating system, or detect the host's."""
        if self.os_override:
            return OperatingSystem.from_string(self.os_override)
        return detect_operating_system()


def build_config(
    package_name: str,
    os_override: Optional[str],
    api_base_url: str,
    user_agent: str,
    timeout: float,
    output_json: bool,
    verbose: bool,
) -> Config:
    """Build and validate a Config from CLI values."""
    config = Config(
        package_name=package_name,
        os_override=os_override,
        api_base_url=api_base_url,
        user_agent=user_agent,
        timeout=timeout,
        output_json=output_json,
        verbose=verbose,
    )
    config.validate()
    return config


def run(config: Config) -> int:
    """
    Look up the package and print the install commands.

    Returns:
        Process exit status
    """
    os = config.resolve_operating_system()
    package_managers = os.package_managers()
    logger.info(f"Using operating system {os.value}")

    with RepologyClient(
        base_url=config.api_base_url,
        user_agent=config.user_agent,
        timeout=config.timeout,
    ) as client:
        projects = client.get_projects(config.package_name, os)

    commands = installable_commands(projects, package_managers)

    if config.output_json:
        document = {
            "operating_system": os.value,
            "package_managers": [pm.value for pm in package_managers],
            "projects": [project.to_dict() for project in projects],
            "commands": list(dict.fromkeys(command for _, command in commands)),
        }
        click.echo(json.dumps(document, indent=2))
    else:
        print_environment(os, package_managers)
        if projects:
            print_projects_table(config.package_name, projects)
            print_install_commands(commands)

    if not projects:
        print_warning(f"No package named '{config.package_name}' found for {os.value}")
        return 1
    return 0


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("package_name")
@click.option(
    "--os",
    "os_override",
    envvar="REPOLOGY_INSTALL_OS",
    help="Operating system to look up instead of detecting it (mac, debian, redhat, windows).",
)
@click.option(
    "--api-base-url",
    envvar="REPOLOGY_API_URL",
    default=REPOLOGY_API_BASE,
    show_default=True,
    help="Repology API base URL.",
)
@click.option(
    "--user-agent",
    envvar="REPOLOGY_USER_AGENT",
    default=DEFAULT_USER_AGENT,
    show_default=True,
    help="User-Agent header sent to Repology.",
)
@click.option(
    "--timeout",
    envvar="REPOLOGY_TIMEOUT",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Request timeout in seconds.",
)
@click.option("--json", "output_json", is_flag=True, help="Print results as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--log-format",
    envvar="REPOLOGY_LOG_FORMAT",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Format of log records written to stderr.",
)
@click.version_option(__version__, prog_name="repology-install")
def cli(
    package_name: str,
    os_override: Optional[str],
    api_base_url: str,
    user_agent: str,
    timeout: float,
    output_json: bool,
    verbose: bool,
    log_format: str,
) -> None:
    """Find the command that installs PACKAGE_NAME with this system's package manager."""
    set_log_format(log_format.lower() == "json")
    if verbose:
        set_log_level("DEBUG")

    try:
        config = build_config(
            package_name=package_name,
            os_override=os_override,
            api_base_url=api_base_url,
            user_agent=user_agent,
            timeout=timeout,
            output_json=output_json,
            verbose=verbose,
        )
        exit_code = run(config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print_failure(str(e))
        sys.exit(1)
    except FailedRequestError as e:
        logger.error(f"Repology request failed: {e}")
        print_failure(f"Repology returned HTTP {e.status_code}")
        sys.exit(1)
    except RepologyInstallError as e:
        logger.error(str(e))
        print_failure(str(e))
        sys.exit(1)

    sys.exit(exit_code)


def main() -> None:
    """Entry point for the repology-install command."""
    cli()


if __name__ == "__main__":
    main()
