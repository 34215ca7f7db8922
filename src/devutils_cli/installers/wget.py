"""Wget for non-interactive downloads."""

from .common import SimplePackage

PACKAGE = SimplePackage(
    name="wget",
    display_name="Wget",
    command="wget",
    brew="wget",
    apt="wget",
    dnf="wget",
    choco="wget",
    winget="JernejSimoncic.Wget",
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
