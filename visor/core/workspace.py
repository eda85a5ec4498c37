"""Workspace discovery and creation.

A workspace is a directory containing visor.json. Commands look for it in
the given directory or any of its parents, like git or dbt.
"""

import logging
from datetime import timedelta
from pathlib import Path

from pydantic import ValidationError

from visor.core.config import get_settings
from visor.core.exceptions import StorageError, WorkspaceExistsError, WorkspaceNotFoundError
from visor.core.models import UserSettings, WorkspaceConfig
from visor.core.session import Session
from visor.storage import JsonStorage

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "visor.json"


class Workspace:
    """A loaded workspace: root directory, config and storage."""

    def __init__(self, root: Path, config: WorkspaceConfig):
        self.root = root
        self.config = config
        self.storage = JsonStorage(
            transactions_path=root / config.transactions_file,
            goals_path=root / config.goals_file,
        )

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def currency(self) -> str:
        return self.config.settings.currency

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    def open_session(self, ttl: timedelta | None = None) -> Session:
        """Session for the workspace user (TTL from settings by default)."""
        if ttl is None:
            ttl = timedelta(minutes=get_settings().session_ttl_minutes)
        return Session.create(self.config.user_id, ttl=ttl)

    def save_config(self) -> None:
        self.config_path.write_text(self.config.model_dump_json(indent=2), encoding="utf-8")


def find_workspace_root(start: Path) -> Path | None:
    """Return the first directory from start upwards holding visor.json."""
    start = start.resolve()
    for candidate in (start, *start.parents):
        if (candidate / CONFIG_FILENAME).is_file():
            return candidate
    return None


def load_workspace(path: Path | None = None) -> Workspace:
    """Load the workspace at or above path.

    Args:
        path: Starting directory. Defaults to VISOR_WORKSPACE, then the
            current directory.

    Returns:
        Workspace.

    Raises:
        WorkspaceNotFoundError: If no visor.json is found.
        StorageError: If visor.json cannot be read or is not a valid
            configuration.
    """
    start = path or get_settings().workspace or Path.cwd()
    root = find_workspace_root(Path(start))
    if root is None:
        raise WorkspaceNotFoundError(f"No {CONFIG_FILENAME} found in {start} or its parents")

    config_path = root / CONFIG_FILENAME
    try:
        config = WorkspaceConfig.model_validate_json(config_path.read_bytes())
    except ValidationError as e:
        raise StorageError(f"Invalid {config_path}: {e.error_count()} error(s)") from e
    except OSError as e:
        raise StorageError(f"Cannot read {config_path}: {e}") from e

    logger.debug("Loaded workspace %s from %s", config.name, root)
    return Workspace(root, config)


def init_workspace(
    path: Path,
    name: str,
    currency: str | None = None,
    user_id: str = "demo-user",
) -> Workspace:
    """Create a new workspace with empty data files.

    Raises:
        WorkspaceExistsError: If path already holds a visor.json.
    """
    if (path / CONFIG_FILENAME).exists():
        raise WorkspaceExistsError(f"Workspace already exists at {path}")

    config = WorkspaceConfig(
        name=name,
        user_id=user_id,
        settings=UserSettings(currency=currency or get_settings().default_currency),
    )
    path.mkdir(parents=True, exist_ok=True)
    ws = Workspace(path, config)
    ws.save_config()
    for data_file in (ws.storage.transactions_path, ws.storage.goals_path):
        if not data_file.exists():
            data_file.write_text("[]\n", encoding="utf-8")

    logger.info("Created workspace %s at %s", name, path)
    return ws
