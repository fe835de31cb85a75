from pathlib import Path

import tomllib
from importlib.metadata import PackageNotFoundError, version


def _get_version() -> str:
    current_file = Path(__file__)
    pyproject_path = current_file.parent.parent / "pyproject.toml"

    try:
        with open(pyproject_path, "rb") as f:
            pyproject_data = tomllib.load(f)
        return str(pyproject_data["project"]["version"])
    except FileNotFoundError:
        pass
    except KeyError as e:
        raise ValueError("Failed to read version from pyproject.toml") from e

    # Installed without the source tree
    try:
        return version("pingu-python-sdk")
    except PackageNotFoundError as e:
        raise ValueError("Failed to read version from pyproject.toml") from e


SDK_VERSION = _get_version()
