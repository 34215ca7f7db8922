"""Cross-platform replacements for common shell aliases, exposed as ``dev <name>``."""

import typer

from . import (
    clear_dns_cache,
    clone,
    count,
    datauri,
    docker_clean,
    dp,
    empty_trash,
    get_video,
    git_push,
    ips,
    iso,
    killni,
    ll,
    local_ip,
    mkd,
    packages,
    path,
    ports,
    refresh_files,
    rename_files_with_date,
)

SCRIPTS = (
    ("git-push", git_push.git_push),
    ("clone", clone.clone),
    ("ports", ports.ports),
    ("local-ip", local_ip.local_ip),
    ("ips", ips.ips),
    ("iso", iso.iso),
    ("dp", dp.dp),
    ("docker-clean", docker_clean.docker_clean),
    ("brewi", packages.brewi),
    ("brewr", packages.brewr),
    ("brews", packages.brews),
    ("brewu", packages.brewu),
    ("ll", ll.ll),
    ("count", count.count),
    ("count-files", count.count_files),
    ("count-folders", count.count_folders),
    ("mkd", mkd.mkd),
    ("path", path.path),
    ("datauri", datauri.datauri),
    ("refresh-files", refresh_files.refresh_files),
    ("rename-files-with-date", rename_files_with_date.rename_files_with_date),
    ("empty-trash", empty_trash.empty_trash),
    ("killni", killni.killni),
    ("get-video", get_video.get_video),
    ("clear-dns-cache", clear_dns_cache.clear_dns_cache),
)


def register(app: typer.Typer) -> None:
    for name, func in SCRIPTS:
        app.command(name)(func)
