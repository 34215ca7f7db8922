"""jq for querying JSON on the command line."""

from .common import SimplePackage

PACKAGE = SimplePackage(
    name="jq",
    display_name="jq",
    command="jq",
    brew="jq",
    apt="jq",
    dnf="jq",
    choco="jq",
    winget="jqlang.jq",
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
