"""Exception types raised by devutils commands and installers."""


class DevutilsError(Exception):
    """Base class for errors reported to the user."""


class InstallError(DevutilsError):
    """An installation step failed.

    The message is shown verbatim in the failure panel, so it usually carries
    troubleshooting hints after the first line.
    """


class UnsupportedPlatformError(DevutilsError):
    """No handler exists for the detected platform."""

    def __init__(self, platform_type: str, what: str = "this command"):
        self.platform_type = platform_type
        super().__init__(f"Platform '{platform_type}' is not supported for {what}.")
