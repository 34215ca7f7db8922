"""``dev identity``: per-project git identities backed by ``~/.devutils``.

An identity is a name, an email and (usually) an SSH key pair plus a GPG key.
Linking an identity to a folder or a remote writes three files:

* ``~/.gitconfig`` gets ``includeIf`` rules pointing at the profile,
* ``~/.gitconfig-<alias>`` sets the email, signing key and ``sshCommand``,
* ``~/.ssh/config`` gets a ``<host>-<alias>`` Host entry for remotes.

``~/.devutils`` stays the source of truth; ``dev identity sync`` rebuilds the
generated files from it on a new machine.
"""

import logging
import re
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from .. import config, installers, platforms, shell
from ..errors import DevutilsError
from ..ui import confirm, console, error, rule

logger = logging.getLogger(__name__)

SSH_KEY_TYPES = ("ed25519", "rsa")
GENERATED_BY = "# Generated by dev identity link"

identity_app = typer.Typer(
    name="identity",
    help="Manage identity profiles for git configuration and keys",
    invoke_without_command=True,
)


@dataclass(frozen=True)
class Remote:
    host: str
    path_prefix: str
    port: Optional[int] = None

    def host_alias(self, alias: str) -> str:
        return f"{self.host}-{alias}"


SSH_URL = re.compile(r"^git@([^:]+):(.+?)(?:\.git)?$")
SSH_SCHEME_URL = re.compile(r"^ssh://git@([^/:]+)(?::(\d+))?/(.+?)(?:\.git)?$")
HTTPS_URL = re.compile(r"^https?://([^/:]+)(?::(\d+))?(/[^?#]*)?")


def parse_remote_url(url: str) -> Optional[Remote]:
    """Split a git remote (``git@``, ``ssh://`` or ``https://``) into host, port and owner path."""
    if not url:
        return None
    match = SSH_URL.match(url)
    if match:
        return Remote(match.group(1), match.group(2).rstrip("/"))
    match = SSH_SCHEME_URL.match(url)
    if match:
        port = int(match.group(2)) if match.group(2) else None
        return Remote(match.group(1), match.group(3).rstrip("/"), port)
    match = HTTPS_URL.match(url)
    if match:
        prefix = (match.group(3) or "/").strip("/")
        prefix = re.sub(r"\.git$", "", prefix)
        port = int(match.group(2)) if match.group(2) else None
        return Remote(match.group(1), prefix, port)
    return None


def is_remote_url(value: str) -> bool:
    return bool(re.match(r"^(https?://|ssh://|git@)", value or ""))


def is_folder_path(value: str) -> bool:
    return bool(re.match(r"^(/|~/|\./|\.\./|[a-zA-Z]:\\)", value or ""))


def expand_path(value: str) -> Path:
    if value == "~" or value.startswith("~/"):
        return platforms.get_home_dir() / value[2:]
    return Path(value).resolve()


def contract_path(path: Path) -> str:
    """``path`` with the home directory shown as ``~``, in forward-slash form."""
    home = platforms.get_home_dir()
    try:
        relative = path.relative_to(home)
    except ValueError:
        return path.as_posix()
    return "~" if str(relative) == "." else f"~/{relative.as_posix()}"


# --- config access ------------------------------------------------------------


def load_identities() -> tuple[dict, dict]:
    """The whole config and its ``identities`` mapping (created when absent)."""
    current = config.load_config() or {}
    identities = current.setdefault("identities", {})
    return current, identities


def save(current: dict) -> None:
    current["updated"] = config.now_iso()
    config.save_config(current)


def ssh_private_key(identity: dict) -> Optional[str]:
    return identity.get("sshKey") or (identity.get("ssh") or {}).get("privateKey")


def ssh_public_key(identity: dict) -> Optional[str]:
    return (identity.get("ssh") or {}).get("publicKey")


def gpg_key_id(identity: dict) -> Optional[str]:
    return identity.get("gpgKey") or (identity.get("gpg") or {}).get("keyId")


def url_rewrites(identity: dict) -> list[Remote]:
    """Parsed remotes of every link, one per host and path prefix."""
    remotes = []
    for link in identity.get("links") or []:
        remote = parse_remote_url(link.get("remote", ""))
        if remote and remote not in remotes:
            remotes.append(remote)
    return remotes


# --- generated files ----------------------------------------------------------


def ssh_config_path() -> Path:
    return platforms.get_home_dir() / ".ssh" / "config"


def gitconfig_path() -> Path:
    return platforms.get_home_dir() / ".gitconfig"


def profile_path(alias: str) -> Path:
    return platforms.get_home_dir() / f".gitconfig-{alias}"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8") if path.exists() else ""


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text.strip() + "\n", encoding="utf-8")


def remove_section(text: str, header: str) -> str:
    """Drop the ``header`` line, its indented body and a comment line directly above it."""
    lines = text.splitlines()
    kept: list[str] = []
    skipping = False
    for line in lines:
        if line.strip() == header:
            if kept and kept[-1].startswith("#"):
                kept.pop()
            skipping = True
            continue
        if skipping and (line.startswith((" ", "\t")) and line.strip()):
            continue
        skipping = False
        kept.append(line)
    return re.sub(r"\n{3,}", "\n\n", "\n".join(kept)).strip()


def update_ssh_config(alias: str, remote: Remote, identity_file: str) -> None:
    """Add or replace the ``Host <host>-<alias>`` entry for ``remote``."""
    host_alias = remote.host_alias(alias)
    entry = [f"# Added by dev identity link ({alias})", f"Host {host_alias}", f"    HostName {remote.host}"]
    if remote.port:
        entry.append(f"    Port {remote.port}")
    entry += ["    User git", f"    IdentityFile {identity_file}", "    IdentitiesOnly yes"]

    path = ssh_config_path()
    current = remove_section(_read(path), f"Host {host_alias}")
    if not path.parent.exists():
        path.parent.mkdir(mode=0o700, parents=True)
    _write(path, f"{current}\n\n" + "\n".join(entry))
    path.chmod(0o600)


def profile_gitconfig(alias: str, identity: dict) -> str:
    """Contents of ``~/.gitconfig-<alias>``."""
    public_key = ssh_public_key(identity)
    signing_key = public_key or gpg_key_id(identity)
    lines = [GENERATED_BY, "[user]", f"    name = {identity['name']}", f"    email = {identity['email']}"]
    if signing_key:
        lines.append(f"    signingkey = {signing_key}")

    private_key = ssh_private_key(identity)
    if private_key:
        lines += ["", "[core]", f"    sshCommand = ssh -i {private_key} -o IdentitiesOnly=yes"]

    for remote in url_rewrites(identity):
        port = f":{remote.port}" if remote.port else ""
        lines += [
            "",
            f'[url "git@{remote.host_alias(alias)}:{remote.path_prefix}/"]',
            f"    insteadOf = https://{remote.host}{port}/{remote.path_prefix}/",
            f"    insteadOf = git@{remote.host}:{remote.path_prefix}/",
            f"    insteadOf = ssh://git@{remote.host}{port}/{remote.path_prefix}/",
        ]

    if signing_key:
        lines += ["", "[commit]", "    gpgsign = true"]
        if public_key:
            lines += ["", "[gpg]", "    format = ssh"]
    return "\n".join(lines) + "\n"


def write_profile(alias: str, identity: dict) -> Path:
    path = profile_path(alias)
    _write(path, profile_gitconfig(alias, identity))
    return path


def include_conditions(folder: Optional[str], remote_url: Optional[str]) -> list[str]:
    conditions = []
    if folder:
        conditions.append(f"gitdir:{folder.rstrip('/')}/")
    remote = parse_remote_url(remote_url or "")
    if remote:
        conditions.append(f"hasconfig:remote.*.url:git@{remote.host}:{remote.path_prefix}/**")
    return conditions


def add_include_rules(alias: str, folder: Optional[str], remote_url: Optional[str]) -> int:
    """Write ``includeIf`` rules for the link to ``~/.gitconfig``, replacing older copies; returns the rule count."""
    path = gitconfig_path()
    text = _read(path)
    added = 0
    for condition in include_conditions(folder, remote_url):
        header = f'[includeIf "{condition}"]'
        text = remove_section(text, header)
        block = f"# {alias} identity (added by dev identity link)\n{header}\n    path = ~/.gitconfig-{alias}"
        text = f"{text}\n\n{block}"
        added += 1
    if added:
        _write(path, text)
    return added


def remove_include_rule(folder: str) -> None:
    path = gitconfig_path()
    text = _read(path)
    if text:
        _write(path, remove_section(text, f'[includeIf "gitdir:{folder.rstrip("/")}/"]'))


# --- key generation -----------------------------------------------------------


def ensure_tool(command: str, installer: str, force: bool) -> bool:
    """True when ``command`` is on PATH, offering to install it first."""
    if shell.command_exists(command):
        return True
    console.print(f"\n[yellow]Warning:[/yellow] {command} is not installed.")
    if not (force or confirm("Would you like to install it now?")):
        console.print(f"Skipping: {command} is required for this key.")
        return False
    try:
        installers.get_installer(installer).install()
    except DevutilsError as exc:
        error(str(exc))
        return False
    if not shell.command_exists(command):
        error(f"{command} is still not available. You may need to restart your terminal.")
        return False
    return True


def generate_ssh_key(alias: str, email: str, key_type: str) -> dict:
    ssh_dir = platforms.get_home_dir() / ".ssh"
    ssh_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    key_file = ssh_dir / f"id_{key_type}_{alias}"
    if key_file.exists():
        raise DevutilsError(f"SSH key already exists at {key_file}")
    argv = ["ssh-keygen", "-t", key_type, "-C", email, "-f", str(key_file), "-N", ""]
    if key_type == "rsa":
        argv += ["-b", "4096"]
    code = shell.run_interactive(argv)
    if code != 0:
        raise DevutilsError(f"ssh-keygen exited with code {code}")
    return {"privateKey": str(key_file), "publicKey": f"{key_file}.pub"}


GPG_BATCH = """%no-protection
Key-Type: eddsa
Key-Curve: ed25519
Key-Usage: sign
Subkey-Type: ecdh
Subkey-Curve: cv25519
Subkey-Usage: encrypt
Name-Real: {name}
Name-Email: {email}
Expire-Date: 0
%commit
"""


def gpg_key_for(email: str) -> Optional[dict]:
    """Key ID and fingerprint of the newest key for ``email``, from ``gpg --list-keys``."""
    result = shell.run_command(f"gpg --list-keys --keyid-format long {shlex.quote(email)}")
    if not result.ok:
        return None
    key_id = re.search(r"pub\s+\w+/([A-F0-9]+)\s", result.stdout, re.IGNORECASE)
    if not key_id:
        return None
    fingerprint = re.search(r"^\s+([A-F0-9]{40})\s*$", result.stdout, re.MULTILINE)
    return {"keyId": key_id.group(1), "fingerprint": fingerprint.group(1) if fingerprint else key_id.group(1)}


def generate_gpg_key(alias: str, name: str, email: str) -> dict:
    batch = platforms.get_temp_dir() / f"devutils-gpg-{alias}.batch"
    batch.write_text(GPG_BATCH.format(name=name, email=email), encoding="utf-8")
    try:
        result = shell.run_command(f"gpg --batch --gen-key {shlex.quote(str(batch))}")
    finally:
        batch.unlink(missing_ok=True)
    if not result.ok:
        raise DevutilsError(f"gpg exited with code {result.code}: {result.stderr.strip()}")
    key = gpg_key_for(email)
    if key is None:
        raise DevutilsError("GPG key created but could not retrieve key ID")
    return key


# --- commands -----------------------------------------------------------------


def _ask(question: str, default: str) -> str:
    answer = typer.prompt(question, default=default or "", show_default=bool(default)).strip()
    if not answer:
        error(f"{question} is required.")
        raise typer.Exit(1)
    return answer


def _require(identities: dict, alias: str) -> dict:
    if alias not in identities:
        error(f'Identity "{alias}" not found.')
        if identities:
            console.print(f"Available identities: {', '.join(identities)}")
        raise typer.Exit(1)
    return identities[alias]


def show_identities(identities: dict) -> None:
    if not identities:
        console.print("\nNo identities configured.")
        console.print("Run [cyan]dev identity add <alias>[/cyan] to create one.\n")
        return
    console.print("\n[bold]Configured identities:[/bold]")
    rule(50)
    for alias, identity in identities.items():
        console.print(f"\n  [cyan]{alias}[/cyan]:")
        console.print(f"    Name:   {identity.get('name')}", highlight=False)
        console.print(f"    Email:  {identity.get('email')}", highlight=False)
        if ssh_public_key(identity) or ssh_private_key(identity):
            console.print(f"    SSH:    {ssh_public_key(identity) or ssh_private_key(identity)}", highlight=False)
        if gpg_key_id(identity):
            console.print(f"    GPG:    {gpg_key_id(identity)}", highlight=False)
        links = identity.get("links") or []
        if links:
            console.print("    Links:")
            for link in links:
                described = " -> ".join(part for part in (link.get("path"), link.get("remote")) if part)
                console.print(f"      - {described}", highlight=False)
    console.print()


@identity_app.callback()
def identity_callback(ctx: typer.Context):
    """Manage identity profiles for git configuration and keys."""
    if ctx.invoked_subcommand is None:
        show_identities(load_identities()[1])


@identity_app.command("list")
def list_identities():
    """List all configured identities."""
    show_identities(load_identities()[1])


@identity_app.command("add")
def add(
    alias: str = typer.Argument(..., help="Short name for the identity, e.g. work"),
    name: Optional[str] = typer.Option(None, "--name", help="Name for this identity"),
    email: Optional[str] = typer.Option(None, "--email", help="Email for this identity"),
    ssh_type: str = typer.Option("ed25519", "--ssh-type", help="SSH key type: ed25519 or rsa"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing identity and install missing tools"),
):
    """Add an identity and generate its SSH and GPG keys."""
    if ssh_type not in SSH_KEY_TYPES:
        error(f"Unsupported SSH key type: {ssh_type}. Use ed25519 or rsa.")
        raise typer.Exit(1)
    current, identities = load_identities()
    if alias in identities and not force:
        error(f'Identity "{alias}" already exists.')
        console.print("Use --force to overwrite.")
        raise typer.Exit(1)

    user = current.get("user") or {}
    if not (name and email):
        console.print(f"\n[bold]--- Add Identity: {alias} ---[/bold]\n")
        name = name or _ask("Name", user.get("name", ""))
        email = email or _ask("Email", user.get("email", ""))

    identity = {"name": name, "email": email, "created": config.now_iso()}

    console.print("\n[bold]--- SSH Key ---[/bold]")
    if ensure_tool("ssh-keygen", "openssh", force):
        try:
            console.print(f"Generating {ssh_type} SSH key...")
            identity["ssh"] = generate_ssh_key(alias, email, ssh_type)
        except DevutilsError as exc:
            console.print(f"[yellow]Warning:[/yellow] Failed to generate SSH key: {exc}", highlight=False)
        else:
            public = Path(identity["ssh"]["publicKey"])
            console.print(f"SSH key created: {public}", highlight=False)
            if public.exists():
                console.print("\nPublic key:")
                console.print(public.read_text(encoding="utf-8").strip(), highlight=False, soft_wrap=True)

    console.print("\n[bold]--- GPG Key ---[/bold]")
    if ensure_tool("gpg", "gpg", force):
        try:
            console.print("Generating GPG key...")
            identity["gpg"] = generate_gpg_key(alias, name, email)
        except DevutilsError as exc:
            console.print(f"[yellow]Warning:[/yellow] Failed to generate GPG key: {exc}", highlight=False)
        else:
            console.print(f"GPG key created: {identity['gpg']['keyId']}", highlight=False)
            console.print(f"Fingerprint: {identity['gpg']['fingerprint']}", highlight=False)

    identities[alias] = identity
    save(current)
    logger.info("saved identity %s", alias)
    console.print(f'\n[green]Identity "{alias}" saved.[/green]')
    console.print(f"Configuration updated: {config.config_path()}\n", highlight=False)


@identity_app.command("update")
def update(
    alias: str = typer.Argument(..., help="Identity to update"),
    name: Optional[str] = typer.Option(None, "--name", help="New name for this identity"),
    email: Optional[str] = typer.Option(None, "--email", help="New email for this identity"),
):
    """Change the name or email of an identity, keeping its keys."""
    current, identities = load_identities()
    identity = _require(identities, alias)
    if not (name and email):
        console.print(f"\n[bold]--- Update Identity: {alias} ---[/bold]\n")
        name = name or _ask("Name", identity.get("name", ""))
        email = email or _ask("Email", identity.get("email", ""))
    identity.update(name=name, email=email, updated=config.now_iso())
    save(current)
    if profile_path(alias).exists():
        write_profile(alias, identity)
    console.print(f'\n[green]Identity "{alias}" updated.[/green]')
    console.print(f"Configuration updated: {config.config_path()}\n", highlight=False)


@identity_app.command("remove")
def remove(
    alias: str = typer.Argument(..., help="Identity to remove"),
    force: bool = typer.Option(False, "--force", help="Delete without confirmation"),
):
    """Remove an identity and delete its SSH key pair."""
    current, identities = load_identities()
    identity = _require(identities, alias)
    if not force and not confirm(f'Delete identity "{alias}"?'):
        console.print("Cancelled.")
        return

    for key in ((identity.get("ssh") or {}).get("privateKey"), ssh_public_key(identity)):
        if key and Path(key).exists():
            Path(key).unlink()
            console.print(f"Deleted: {key}", highlight=False)

    del identities[alias]
    save(current)
    console.print(f'\n[green]Identity "{alias}" removed.[/green]')
    console.print(f"Configuration updated: {config.config_path()}\n", highlight=False)


def path_conflict(folder: str, alias: str, identities: dict) -> Optional[str]:
    """Why ``folder`` cannot be linked to ``alias``, or None when it can."""
    wanted = expand_path(folder)
    for other_alias, identity in identities.items():
        for link in identity.get("links") or []:
            if not link.get("path"):
                continue
            linked = expand_path(link["path"])
            if linked == wanted:
                if other_alias == alias:
                    continue
                return f'Path {contract_path(wanted)} is already linked to identity "{other_alias}"'
            if linked.is_relative_to(wanted):
                return f'Cannot link {contract_path(wanted)} - child path {link["path"]} is already linked to identity "{other_alias}"'
            if wanted.is_relative_to(linked):
                return f'Cannot link {contract_path(wanted)} - parent path {link["path"]} is already linked to identity "{other_alias}"'
    return None


@identity_app.command("link")
def link(
    args: Optional[list[str]] = typer.Argument(None, help="Identity, folder path (~/work) and/or remote URL, in any order"),
):
    """Link an identity to a folder path and/or remote server."""
    current, identities = load_identities()
    if not identities:
        console.print("\nNo identities configured.")
        console.print("Run [cyan]dev identity add <alias>[/cyan] first.\n")
        return

    alias = folder = remote_url = None
    for arg in args or []:
        if arg in identities:
            alias = arg
        elif is_remote_url(arg):
            remote_url = arg
        elif is_folder_path(arg):
            folder = arg
        elif alias is None:
            alias = arg

    if alias is None:
        console.print("\nAvailable identities:")
        for i, known in enumerate(identities, 1):
            console.print(f"  {i}. {known} ({identities[known].get('email')})", highlight=False)
        alias = typer.prompt("Select identity").strip()
    identity = _require(identities, alias)

    if not (folder or remote_url):
        folder = typer.prompt("Source folder path (optional, press Enter to skip)", default="", show_default=False).strip()
        if not folder:
            remote_url = typer.prompt("Remote server URL (optional, press Enter to skip)", default="", show_default=False).strip()
        if not (folder or remote_url):
            error("You must provide at least a folder path or remote URL.")
            raise typer.Exit(1)

    if folder:
        expanded = expand_path(folder)
        if not expanded.exists():
            if not confirm(f"Folder {folder} does not exist. Create it?"):
                console.print("Aborted.")
                return
            expanded.mkdir(parents=True)
            console.print(f"[green]✓[/green] Created folder {folder}", highlight=False)
        conflict = path_conflict(folder, alias, identities)
        if conflict:
            error(conflict)
            raise typer.Exit(1)
        folder = contract_path(expanded)

    remote = None
    if remote_url:
        remote = parse_remote_url(remote_url)
        if remote is None:
            error(f"Could not parse remote URL: {remote_url}")
            raise typer.Exit(1)

    entry = {key: value for key, value in (("path", folder), ("remote", remote_url)) if value}
    links = identity.setdefault("links", [])
    if entry not in links:
        links.append(entry)
    save(current)
    console.print("[green]✓[/green] Updated ~/.devutils")

    private_key = ssh_private_key(identity)
    if remote and private_key:
        update_ssh_config(alias, remote, private_key)
        console.print("[green]✓[/green] Updated ~/.ssh/config")
    write_profile(alias, identity)
    console.print(f"[green]✓[/green] Created ~/.gitconfig-{alias}")
    add_include_rules(alias, folder, remote_url)
    console.print("[green]✓[/green] Updated ~/.gitconfig")

    console.print(f'\n[green]✓ Linked identity "{alias}":[/green]')
    console.print(f"  Name:  {identity['name']}", highlight=False)
    console.print(f"  Email: {identity['email']}", highlight=False)
    if folder:
        console.print(f"  Path:  {folder}", highlight=False)
    if remote_url:
        console.print(f"  Remote: {remote_url}", highlight=False)
    if private_key:
        console.print(f"  SSH Key: {private_key}", highlight=False)
    console.print()


@identity_app.command("unlink")
def unlink(folder: str = typer.Argument(..., help="Linked folder path")):
    """Unlink a folder path from its identity."""
    current, identities = load_identities()
    wanted = expand_path(folder)
    for alias, identity in identities.items():
        links = identity.get("links") or []
        for entry in links:
            if entry.get("path") and expand_path(entry["path"]) == wanted:
                break
        else:
            continue
        links.remove(entry)
        save(current)
        console.print("[green]✓[/green] Updated ~/.devutils")
        remove_include_rule(entry["path"])
        console.print("[green]✓[/green] Removed includeIf rule from ~/.gitconfig")
        if profile_path(alias).exists() or links or ssh_private_key(identity):
            write_profile(alias, identity)
            console.print(f"[green]✓[/green] Updated ~/.gitconfig-{alias}")
        console.print(f'\n[green]✓ Unlinked path from identity "{alias}":[/green]')
        console.print(f"  Path:  {entry['path']}", highlight=False)
        if entry.get("remote"):
            console.print(f"  Remote: {entry['remote']} (still configured in ~/.ssh/config)", highlight=False)
        return

    error(f'No link found for path "{folder}"')
    console.print("Use [cyan]dev identity list[/cyan] to see all configured links.")
    raise typer.Exit(1)


@identity_app.command("sync")
def sync():
    """Regenerate all config files from ~/.devutils (for new machines)."""
    _, identities = load_identities()
    if not identities:
        console.print("\nNo identities configured.")
        console.print("Run [cyan]dev identity add <alias>[/cyan] to create one.\n")
        return

    console.print("\n[bold]=== Syncing Identities ===[/bold]\n")
    ssh_updated = False
    profiles = rules = 0
    for alias, identity in identities.items():
        console.print(f"Processing identity: {alias}")
        links = identity.get("links") or []
        private_key = ssh_private_key(identity)
        if private_key:
            for remote in url_rewrites(identity):
                update_ssh_config(alias, remote, private_key)
                ssh_updated = True
        for entry in links:
            rules += add_include_rules(alias, entry.get("path"), entry.get("remote"))
        if identity.get("email"):
            write_profile(alias, identity)
            profiles += 1
        console.print(f"  [green]✓[/green] {len(links)} link(s) processed")

    console.print("\n[bold]=== Sync Complete ===[/bold]\n")
    console.print(f"  Identities synced: {len(identities)}")
    if ssh_updated:
        console.print("  [green]✓[/green] Updated ~/.ssh/config")
    console.print(f"  [green]✓[/green] Created {profiles} profile gitconfig(s)")
    console.print(f"  [green]✓[/green] Added {rules} includeIf rule(s) to ~/.gitconfig\n")
