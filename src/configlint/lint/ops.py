"""Lint operations - load the artifacts of a project and check them."""

from __future__ import annotations

from pathlib import Path

from configlint.core.errors import InputError
from configlint.core.logging import get_logger, set_run_id
from configlint.lint.checker import check_artifacts
from configlint.lint.models import Artifact, ArtifactSet, CheckResult
from configlint.settings.models import ConfigLintConfig

log = get_logger("lint.ops")


class LintOps:
    """Consistency check for one project.

    Artifact paths from the settings are resolved against the project root.
    Every artifact is read before any checking starts; an artifact that
    cannot be read raises InputError and nothing is reported.
    """

    def __init__(self, project_root: Path, settings: ConfigLintConfig | None = None) -> None:
        self._project_root = project_root
        self._settings = settings or ConfigLintConfig()

    @property
    def project_root(self) -> Path:
        return self._project_root

    def resolve(self, relative: str) -> Path:
        path = Path(relative)
        return path if path.is_absolute() else self._project_root / path

    def load_artifacts(self) -> ArtifactSet:
        """Read the four artifacts. Files named twice are read once.

        Raises:
            InputError: If an artifact is missing or unreadable.
        """
        paths = self._settings.artifacts
        cache: dict[Path, Artifact] = {}

        def load(relative: str) -> Artifact:
            path = self.resolve(relative)
            key = path.resolve()
            if key not in cache:
                cache[key] = Artifact(path=relative, text=_read_text(path))
            return cache[key]

        return ArtifactSet(
            schema=load(paths.schema_file),
            persistence=load(paths.persistence_file),
            runtime=load(paths.runtime_file),
            docs=load(paths.docs_file),
        )

    def check(self) -> CheckResult:
        """Load the artifacts and run the checker over them."""
        set_run_id()
        log.info("check_start", project_root=str(self._project_root))
        artifacts = self.load_artifacts()
        return check_artifacts(
            artifacts,
            self._settings.patterns,
            flag_malformed_rows=self._settings.report.flag_malformed_rows,
        )


def _read_text(path: Path) -> str:
    if not path.is_file():
        raise InputError.not_found(str(path))
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError.unreadable(str(path), str(e)) from e
