"""Project descriptors and the manifest listing them."""

from pathlib import Path, PurePosixPath
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from releasestate.exceptions import ManifestError


class ProjectDescriptor(BaseModel):
    """A tracked sub-project of the repository."""

    name: str = Field(..., description="Name of the project")
    properties_path: str = Field(
        ..., description="Path of the properties file, relative to the repository root"
    )
    output_file: Path = Field(..., description="Where the release state is written")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Project name must not be empty")
        return v.strip()

    @field_validator("properties_path")
    @classmethod
    def validate_properties_path(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Properties path must not be empty")
        path = PurePosixPath(v)
        if path.is_absolute():
            raise ValueError(
                f"Properties path must be relative to the repository root: {v}"
            )
        if ".." in path.parts:
            raise ValueError(f"Properties path must not leave the repository: {v}")
        return path.as_posix()


class ProjectManifest(BaseModel):
    """The set of projects whose release state is generated in one run."""

    projects: List[ProjectDescriptor] = Field(default_factory=list)
    ancestor_search_depth: Optional[int] = Field(
        None, ge=1, description="Commits walked per side when resolving merges"
    )

    @model_validator(mode="after")
    def validate_unique_names(self) -> "ProjectManifest":
        seen = set()
        duplicates = []
        for project in self.projects:
            if project.name in seen:
                duplicates.append(project.name)
            seen.add(project.name)
        if duplicates:
            raise ValueError(f"Found duplicate project names: {', '.join(duplicates)}")
        return self

    def resolve_outputs(self, base_dir: Path) -> "ProjectManifest":
        """Make relative output files relative to ``base_dir``."""
        for project in self.projects:
            if not project.output_file.is_absolute():
                project.output_file = base_dir / project.output_file
        return self

    @classmethod
    def from_yaml(
        cls,
        path_or_content: Union[str, Path],
        base_dir: Optional[Path] = None,
    ) -> "ProjectManifest":
        """
        Load a manifest from a YAML file or string content.

        When loading from a file, relative output files are resolved against
        the file's directory unless ``base_dir`` is given.

        Raises:
            ManifestError: If the manifest cannot be read or is invalid
        """
        source = "<string>"
        try:
            if isinstance(path_or_content, Path) or "\n" not in path_or_content:
                source = str(path_or_content)
                with open(path_or_content, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
                if base_dir is None:
                    base_dir = Path(path_or_content).resolve().parent
            else:
                data = yaml.safe_load(path_or_content)
        except OSError as e:
            raise ManifestError(f"Failed to read manifest {source}: {e}") from e
        except yaml.YAMLError as e:
            raise ManifestError(f"Failed to parse manifest {source}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ManifestError(f"Manifest {source} must be a mapping")

        try:
            manifest = cls(**data)
        except ValidationError as e:
            raise ManifestError(f"Invalid manifest {source}: {e}") from e

        if base_dir is not None:
            manifest.resolve_outputs(base_dir)
        return manifest
