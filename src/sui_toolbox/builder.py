"""
Package builder invocation.

Runs `sui move build --dump-bytecode-as-base64` and turns its JSON output
into a BuildArtifact. The subprocess sits behind PackageBuilder so tests
can hand the workflow a fake builder.

Build failures are deterministic for fixed sources and are never retried.
"""

import json
import logging
import shlex
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from .errors import BuildToolError
from .models import BuildArtifact

logger = logging.getLogger(__name__)


class PackageBuilder(Protocol):
    """Anything that can compile a Move package directory."""

    def run_build(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Return the parsed build output: {"modules": [...], "dependencies": [...]}.

        Raises:
            BuildToolError: The build failed
        """
        ...


class SuiMoveBuilder:
    """
    Builds packages with the sui CLI.

    Usage:
        builder = SuiMoveBuilder("cargo run --bin sui")
        output = builder.run_build("packages/token")
    """

    def __init__(self, sui_bin: str = "sui", timeout: Optional[float] = None):
        """
        Args:
            sui_bin: Command that runs the sui binary, split with shlex
            timeout: Optional process timeout in seconds (default: none)
        """
        self.command = shlex.split(sui_bin)
        if not self.command:
            raise ValueError("sui_bin must not be empty")
        self.timeout = timeout

    def build_command(self, path: Union[str, Path]) -> list[str]:
        return [*self.command, "move", "build", "--dump-bytecode-as-base64", "--path", str(path)]

    def run_build(self, path: Union[str, Path]) -> Dict[str, Any]:
        cmd = self.build_command(path)
        logger.debug(f"Running build: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise BuildToolError(f"Build tool not found: {self.command[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise BuildToolError(f"Build timed out after {self.timeout}s: {path}") from e

        if result.returncode != 0:
            logger.error(f"Build failed for {path} (exit {result.returncode}): {result.stderr.strip()[:500]}")
            raise BuildToolError(
                f"Build failed for {path} with exit code {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr,
            )

        # Diagnostics go to stderr; stdout is the JSON document
        try:
            return json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise BuildToolError(
                f"Build output for {path} is not valid JSON: {e}",
                returncode=result.returncode,
                stderr=result.stderr,
            ) from e


def build(source_path: Union[str, Path], builder: Optional[PackageBuilder] = None) -> BuildArtifact:
    """
    Compile source_path into a BuildArtifact.

    Args:
        source_path: Move package directory
        builder: PackageBuilder to use (default: SuiMoveBuilder with `sui`)

    Raises:
        BuildToolError: Tool failed or its output is not a build artifact
    """
    builder = builder or SuiMoveBuilder()
    output = builder.run_build(source_path)

    try:
        artifact = BuildArtifact.from_build_output(output)
    except ValueError as e:
        raise BuildToolError(f"Unexpected build output for {source_path}: {e}") from e

    logger.info(
        f"Built {source_path}: {len(artifact.modules)} modules, "
        f"{len(artifact.dependencies)} dependencies"
    )
    return artifact
