"""Git version control."""

from .common import SimplePackage

PACKAGE = SimplePackage(
    name="git",
    display_name="Git",
    command="git",
    brew="git",
    apt="git",
    dnf="git",
    choco="git",
    winget="Git.Git",
)

NAME = PACKAGE.name
DISPLAY_NAME = PACKAGE.display_name
REQUIRES_DESKTOP = False

install_macos = PACKAGE.install_macos
install_debian = PACKAGE.install_debian
install_rpm = PACKAGE.install_rpm
install_windows = PACKAGE.install_windows
HANDLERS = PACKAGE.handlers

is_installed = PACKAGE.is_installed
is_eligible = PACKAGE.is_eligible
install = PACKAGE.install
