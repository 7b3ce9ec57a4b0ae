"""The release state of a project and its on-disk representation."""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from releasestate.exceptions import ReleaseStateFileError

logger = logging.getLogger(__name__)


def parse_bool(value: Optional[str]) -> bool:
    """True only for ``"true"`` (any case), anything else (including None) is False."""
    return value is not None and value.strip().lower() == "true"


class ReleaseState(BaseModel):
    """
    Previous and current version/release flags of a project.

    Serialised as JSON with camelCase keys: ``previousVersion``,
    ``currentVersion``, ``previousRelease`` and ``currentRelease``.
    """

    model_config = ConfigDict(populate_by_name=True)

    previous_version: Optional[str] = Field(None, alias="previousVersion")
    current_version: str = Field(..., alias="currentVersion")
    previous_release: bool = Field(False, alias="previousRelease")
    current_release: bool = Field(False, alias="currentRelease")

    def is_new_version(self) -> bool:
        """Whether the version changed in the last commit."""
        return self.previous_version != self.current_version

    def is_new_release(self) -> bool:
        """Whether the last commit released the current version."""
        return self.current_release and (
            self.is_new_version() or not self.previous_release
        )

    def to_json(self) -> str:
        return json.dumps(self.model_dump(by_alias=True), indent=2)

    def write(self, path: Union[str, Path]) -> None:
        """Write the state to ``path``, creating parent directories as needed."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json() + "\n", encoding="utf-8")

    @classmethod
    def read(cls, path: Union[str, Path]) -> "ReleaseState":
        """
        Read a state previously written with :meth:`write`.

        Raises:
            ReleaseStateFileError: If the file is missing or not a valid state
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ReleaseStateFileError(
                f"Failed to read the release state: {e}", path=str(path)
            ) from e

        try:
            return cls.model_validate_json(content)
        except ValidationError as e:
            raise ReleaseStateFileError(
                f"Invalid release state: {e}", path=str(path)
            ) from e


def write_release_state(state: ReleaseState, output_file: Path) -> None:
    """Default writer: store the state as JSON at ``output_file``."""
    state.write(output_file)
    logger.info(f"Release state written to {output_file}")
