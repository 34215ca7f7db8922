"""yt-dlp video downloader."""

from .common import SimplePackage

PACKAGE = SimplePackage(
    name="yt-dlp",
    display_name="yt-dlp",
    command="yt-dlp",
    brew="yt-dlp",
    apt="yt-dlp",
    dnf="yt-dlp",
    choco="yt-dlp",
    winget="yt-dlp.yt-dlp",
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
