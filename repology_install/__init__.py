"""repology-install: find native install commands for a package via Repology."""


def _get_version() -> str:
    """Get package version with fallback mechanisms."""
    try:
        from importlib.metadata import version

        return version("repology-install")
    except Exception:
        pass

    try:
        from pathlib import Path

        import tomllib

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("project", {}).get("version", "unknown")
    except Exception:
        pass

    return "unknown"


__version__ = _get_version()
