"""Exception hierarchy for the scaffolding pipeline.

Components below the orchestrator raise these and never recover from them;
``ScaffoldPipeline.run`` is the single place where they are caught, reported
and turned into a failed ``ScaffoldResult``.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for every error raised deliberately by the scaffolder."""


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------


class TemplateNotFoundError(ScaffoldError):
    """Raised when a template has no directory on disk."""

    def __init__(self, template_dir: str) -> None:
        self.template_dir = template_dir
        super().__init__(f"Template directory not found: {template_dir}")


class TargetDirectoryError(ScaffoldError):
    """Raised when the target directory cannot be created."""


class MaterializationError(ScaffoldError):
    """Raised after all sibling copies settled and at least one of them failed.

    Attributes:
        failures: Mapping of template entry name -> error message.
    """

    def __init__(self, failures: dict[str, str]) -> None:
        self.failures = dict(failures)
        details = "; ".join(f"{name}: {msg}" for name, msg in sorted(self.failures.items()))
        super().__init__(
            f"Failed to copy {len(self.failures)} template entr"
            f"{'y' if len(self.failures) == 1 else 'ies'}: {details}"
        )


# ---------------------------------------------------------------------------
# Unsupported selections
# ---------------------------------------------------------------------------


class UnsupportedTemplateError(ScaffoldError):
    """Raised for a template identifier outside the known set."""

    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__(f"Unsupported template to generate an .env file for: {template}")


class UnsupportedSigningOptionError(ScaffoldError):
    """Raised for a signing option the selected template does not offer."""

    def __init__(self, signing_option: str | None) -> None:
        self.signing_option = signing_option
        super().__init__(f"Unsupported signing option: {signing_option}")


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


class AccountCreationError(ScaffoldError):
    """Raised when the module publisher account cannot be created or funded."""


class DependencyInstallError(ScaffoldError):
    """Raised when the package manager exits with a non-zero status."""

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"`{command}` exited with code {returncode}"
        if stderr:
            message += f": {stderr}"
        super().__init__(message)
