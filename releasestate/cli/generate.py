"""CLI command generating the release state of the last commit"""

import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click

from releasestate.cli.error_formatting import format_error
from releasestate.cli.utils.logging import logger
from releasestate.config import get_ancestor_search_depth
from releasestate.exceptions import ReleaseStateError
from releasestate.model import ProjectDescriptor, ProjectManifest
from releasestate.resolver import generate_release_states


def parse_project_spec(spec: str) -> ProjectDescriptor:
    """Parse a ``NAME=PROPERTIES:OUTPUT`` project specification."""
    name, sep, rest = spec.partition("=")
    properties_path, sep2, output_file = rest.partition(":")
    if not sep or not sep2 or not name or not properties_path or not output_file:
        raise click.BadParameter(
            f"'{spec}' is not of the form NAME=PROPERTIES:OUTPUT",
            param_hint="--project",
        )
    try:
        return ProjectDescriptor(
            name=name,
            properties_path=properties_path,
            output_file=Path(output_file),
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--project") from e


@click.command(name="generate")
@click.option(
    "--git-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path(".git"),
    show_default=True,
    help="Git directory (or working tree root) of the repository.",
)
@click.option(
    "--manifest",
    "-m",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML manifest listing the projects.",
)
@click.option(
    "--project",
    "-p",
    "project_specs",
    multiple=True,
    metavar="NAME=PROPERTIES:OUTPUT",
    help="A project to resolve. Can be repeated.",
)
@click.option(
    "--ancestor-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Commits walked per side when resolving merge commits.",
)
@click.option(
    "--keep-going",
    is_flag=True,
    default=False,
    help="Resolve every project even if some fail, then report the failures.",
)
def generate(
    git_dir: Path,
    manifest: Optional[Path],
    project_specs: Tuple[str, ...],
    ancestor_depth: Optional[int],
    keep_going: bool,
):
    """Generate the release state of the last commit for each project.

    Example:

      releasestate generate -p app=app/gradle.properties:build/app.json
    """
    projects: List[ProjectDescriptor] = []
    manifest_depth = None

    try:
        if manifest is not None:
            loaded = ProjectManifest.from_yaml(manifest)
            projects.extend(loaded.projects)
            manifest_depth = loaded.ancestor_search_depth
    except ReleaseStateError as e:
        logger.error(f"Failed to load manifest: {format_error(e)}")
        sys.exit(1)

    projects.extend(parse_project_spec(spec) for spec in project_specs)
    if not projects:
        raise click.UsageError("No projects given, use --manifest or --project")

    depth = ancestor_depth or manifest_depth or get_ancestor_search_depth()
    logger.debug(f"Resolving {len(projects)} project(s) in {git_dir} (depth {depth})")

    try:
        results = generate_release_states(
            git_dir,
            projects,
            ancestor_search_depth=depth,
            fail_fast=not keep_going,
        )
    except ReleaseStateError as e:
        logger.error(format_error(e))
        sys.exit(1)

    for result in results:
        state = result.state
        logger.info(
            f"{result.project.name}: {state.previous_version} -> {state.current_version}"
            f" (release: {state.previous_release} -> {state.current_release})"
        )
