"""tmux terminal multiplexer."""

from .common import SimplePackage

PACKAGE = SimplePackage(
    name="tmux",
    display_name="tmux",
    command="tmux",
    brew="tmux",
    apt="tmux",
    dnf="tmux",
)

NAME = PACKAGE.name
DISPLAY_NAME = PACKAGE.display_name
REQUIRES_DESKTOP = False

install_macos = PACKAGE.install_macos
install_debian = PACKAGE.install_debian
install_rpm = PACKAGE.install_rpm
HANDLERS = PACKAGE.handlers

is_installed = PACKAGE.is_installed
is_eligible = PACKAGE.is_eligible
install = PACKAGE.install
