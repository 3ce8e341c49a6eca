"""Reasons a pkg-config probe can fail or be skipped on purpose."""


class PkgConfigError(Exception):
    """Base class for everything a probe can raise."""

    description = "pkg-config error"


class EnvNoPkgConfig(PkgConfigError):
    """Aborted because a ``*_NO_PKG_CONFIG`` environment variable is set.

    Carries the name of the responsible variable.
    """

    description = "pkg-config requested to be aborted"

    def __init__(self, variable):
        super().__init__(variable)
        self.variable = variable

    def __str__(self):
        return f"Aborted because {self.variable} is set"


class CrossCompilation(PkgConfigError):
    """Cross compilation detected; override with ``PKG_CONFIG_ALLOW_CROSS=1``."""

    description = ("pkg-config doesn't handle cross compilation. "
                   "Use PKG_CONFIG_ALLOW_CROSS=1 to override")

    def __str__(self):
        return "Cross compilation detected. Use PKG_CONFIG_ALLOW_CROSS=1 to override"


class CommandError(PkgConfigError):
    """pkg-config could not be started.

    ``command`` is the rendered command line, ``cause`` the ``OSError``.
    """

    description = "failed to run pkg-config"

    def __init__(self, command, cause):
        super().__init__(command, cause)
        self.command = command
        self.cause = cause

    def __str__(self):
        return f"Failed to run `{self.command}`: {self.cause}"


class FailureError(PkgConfigError):
    """pkg-config ran but did not exit successfully.

    ``output`` is the captured :class:`~pkgprobe.utils.command_executor.ProcessOutput`.
    """

    description = "pkg-config did not exit successfully"

    def __init__(self, command, output):
        super().__init__(command, output)
        self.command = command
        self.output = output

    def __str__(self):
        stdout = self.output.stdout.decode("utf-8", errors="replace")
        stderr = self.output.stderr.decode("utf-8", errors="replace")
        message = f"`{self.command}` did not exit successfully: exit status: {self.output.returncode}"
        if stdout:
            message += f"\n--- stdout\n{stdout}"
        if stderr:
            message += f"\n--- stderr\n{stderr}"
        return message


class UnknownError(PkgConfigError):
    """Reserved for future failure kinds. Never raised by pkgprobe itself."""

    description = "unknown pkg-config error"
