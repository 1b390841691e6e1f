"""
script.py: downloads and runs the prerequisite install/uninstall scripts
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import httpx

from .errors import ScriptError
from .executor import ProcessExecutor
from .models import Invocation

logger = logging.getLogger("kubefire.script")

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/innobead/kubefire"
DEFAULT_SCRIPTS_DIR = Path.home() / ".kubefire" / "scripts"


class Script(Enum):
    INSTALL_PREREQUISITES = "install-prerequisites.sh"
    UNINSTALL_PREREQUISITES = "uninstall-prerequisites.sh"


def script_url(script: Script, version: str, base_url: str = DEFAULT_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{version}/scripts/{Script(script).value}"


def script_path(script: Script, version: str, scripts_dir: Optional[Path] = None) -> Path:
    return Path(scripts_dir or DEFAULT_SCRIPTS_DIR) / version / Script(script).value


def download(script: Script, version: str, force: bool = False,
             base_url: str = DEFAULT_BASE_URL, scripts_dir: Optional[Path] = None,
             client: Optional[httpx.Client] = None) -> Path:
    """
    Fetch `script` of release `version` unless it is already cached.
    :param force: download again even if the file exists
    :return: path of the local copy
    """
    path = script_path(script, version, scripts_dir)
    if path.exists() and not force:
        logger.debug("Using cached script %s", path)
        return path

    url = script_url(script, version, base_url)
    logger.info("Downloading %s", url)
    try:
        if client is None:
            with httpx.Client(timeout=30.0, follow_redirects=True) as own_client:
                response = own_client.get(url)
        else:
            response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise ScriptError(f"Failed to download {url}: {e}") from e

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(response.content)
    path.chmod(0o755)
    return path


def run(script: Script, version: str, scripts_dir: Optional[Path] = None,
        executor: Optional[ProcessExecutor] = None) -> None:
    """
    Run a previously downloaded script with bash (under sudo by default)
    """
    path = script_path(script, version, scripts_dir)
    if not path.exists():
        raise ScriptError(f"Script {path} not found, download it first")

    executor = executor or ProcessExecutor()
    logger.info("Running %s", path)
    executor.run(Invocation("bash", (str(path),)))
