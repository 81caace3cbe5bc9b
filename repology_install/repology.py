"""Repology client for OS package metadata."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import requests

from .exceptions import FailedRequestError, RegistryRequestError, ResponseParseError
from .http_client import DEFAULT_USER_AGENT, create_session
from .logging_config import logger
from .operating_system import OperatingSystem
from .package_managers import PackageManager

REPOLOGY_API_BASE = "https://repology.org/api"


@dataclass(frozen=True)
class Project:
    """
    A Repology record for one package in one repository.

    Attribute names follow the Repology API keys. Optional fields missing
    from the response are None (``vulnerable`` being None means unknown,
    not False) and missing list fields are empty.
    """

    repo: str
    visiblename: str
    version: str
    status: str
    srcname: Optional[str] = None
    origversion: Optional[str] = None
    vulnerable: Optional[bool] = None
    licenses: Tuple[str, ...] = ()
    summary: Optional[str] = None
    categories: Tuple[str, ...] = ()
    subrepo: Optional[str] = None
    binname: Optional[str] = None
    maintainers: Tuple[str, ...] = ()

    @property
    def package_name(self) -> str:
        """Name to hand to the package manager."""
        return self.binname or self.srcname or self.visiblename

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        """
        Build a Project from one element of a Repology response.

        Raises:
            ResponseParseError: If the element is not an object, lacks a required
                key or holds a value of the wrong type
        """
        if not isinstance(data, dict):
            raise ResponseParseError(f"Expected a project object, got {type(data).__name__}")

        missing = [key for key in _REQUIRED_FIELDS if key not in data]
        if missing:
            raise ResponseParseError(f"Project is missing required field(s): {', '.join(missing)}")

        values: Dict[str, Any] = {}
        for key in _FIELDS:
            value = data.get(key)
            if key in _REQUIRED_FIELDS:
                _expect(key, value, str)
            elif key in _LIST_FIELDS:
                # null is read as an empty list
                if value is None:
                    value = ()
                elif not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                    raise ResponseParseError(f"Field '{key}' must be a list of strings")
                value = tuple(value)
            elif value is not None:
                _expect(key, value, bool if key == "vulnerable" else str)
            values[key] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the Repology key layout."""
        return {
            key: list(getattr(self, key)) if key in _LIST_FIELDS else getattr(self, key) for key in _FIELDS
        }


def _expect(key: str, value: Any, expected: type) -> None:
    if not isinstance(value, expected):
        raise ResponseParseError(f"Field '{key}' must be {expected.__name__}, got {type(value).__name__}")


# Repology keys are single lowercase words, so they double as attribute names
_FIELDS = (
    "repo",
    "srcname",
    "visiblename",
    "version",
    "origversion",
    "status",
    "vulnerable",
    "licenses",
    "summary",
    "categories",
    "subrepo",
    "binname",
    "maintainers",
)
_REQUIRED_FIELDS = ("repo", "visiblename", "version", "status")
_LIST_FIELDS = frozenset({"licenses", "categories", "maintainers"})


def parse_projects(payload: Any) -> List[Project]:
    """
    Convert a decoded Repology response into Project records.

    Raises:
        ResponseParseError: If the payload is not a list of valid project objects
    """
    if not isinstance(payload, list):
        raise ResponseParseError(f"Expected a list of projects, got {type(payload).__name__}")
    return [Project.from_dict(item) for item in payload]


def filter_projects(projects: Iterable[Project], package_managers: Sequence[PackageManager]) -> List[Project]:
    """
    Keep the projects whose repository belongs to one of ``package_managers``.

    Relative order is preserved.
    """
    return [
        project
        for project in projects
        if any(manager.matches_repository(project.repo) for manager in package_managers)
    ]


def installable_commands(
    projects: Iterable[Project], package_managers: Sequence[PackageManager]
) -> List[Tuple[Project, str]]:
    """
    Pair each matching project with the install command of its first matching manager.

    Projects matching none of ``package_managers`` are skipped.
    """
    commands = []
    for project in projects:
        for manager in package_managers:
            if manager.matches_repository(project.repo):
                commands.append((project, manager.install(project.package_name)))
                break
    return commands


class RepologyClient:
    """
    Client for the Repology project API.

    A client wraps a single requests.Session and holds no other state, so one
    instance can serve any number of independent lookups.
    """

    def __init__(
        self,
        base_url: str = REPOLOGY_API_BASE,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session if session is not None else create_session(user_agent)

    def __enter__(self) -> "RepologyClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def project_url(self, package_name: str) -> str:
        # No percent-encoding: callers pass URL-safe package names
        return f"{self.base_url}/v1/project/{package_name}"

    def fetch_projects(self, package_name: str) -> List[Project]:
        """
        Fetch every Repology record for ``package_name``, across all repositories.

        Raises:
            FailedRequestError: If Repology answers with a non-success status
            RegistryRequestError: If the request could not be completed
            ResponseParseError: If the response body is not a valid project list
        """
        url = self.project_url(package_name)
        logger.debug(f"Fetching Repology metadata: {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise RegistryRequestError(f"Error fetching Repology metadata for {package_name}: {e}") from e

        if not 200 <= response.status_code < 300:
            try:
                message = response.text
            except (requests.exceptions.RequestException, UnicodeDecodeError):
                message = ""
            logger.warning(f"Repology returned HTTP {response.status_code} for {package_name}")
            raise FailedRequestError(response.status_code, message)

        try:
            payload = response.json()
        except ValueError as e:
            raise ResponseParseError(f"Invalid JSON from Repology for {package_name}: {e}") from e

        projects = parse_projects(payload)
        logger.debug(f"Repology returned {len(projects)} record(s) for {package_name}")
        return projects

    def get_projects(self, package_name: str, os: OperatingSystem) -> List[Project]:
        """
        Fetch the Repology records for ``package_name`` installable on ``os``.

        Args:
            package_name: Repology project name (must be URL-safe)
            os: Operating system whose package managers select the repositories

        Returns:
            Records from repositories served by the package managers of ``os``

        Raises:
            FailedRequestError: If Repology answers with a non-success status
            RegistryRequestError: If the request could not be completed
            ResponseParseError: If the response body is not a valid project list
        """
        package_managers = os.package_managers()
        projects = filter_projects(self.fetch_projects(package_name), package_managers)
        logger.debug(f"{len(projects)} record(s) match {', '.join(pm.value for pm in package_managers)}")
        return projects
