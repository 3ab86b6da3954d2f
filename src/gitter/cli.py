"""Command line interface for gitter."""

from pathlib import Path
from typing import NoReturn, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.client import Client
from .core.config import ClientConfig
from .core.errors import GitterError
from .core.logging import setup_logging
from .core.process import STDOUT_ERRORS

console = Console()


def _fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(error))}", highlight=False, soft_wrap=True)
    raise click.Abort()


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with path, hidden and env settings",
)
@click.option("--git", "git_path", help="Path to the git executable")
@click.option(
    "--hidden",
    multiple=True,
    help="Repository path to hide (can specify multiple times)",
)
@click.option("--debug", is_flag=True, help="Log every git command that is run")
@click.option("--log-file", help="Also write logs to this file")
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Optional[Path],
    git_path: Optional[str],
    hidden: Tuple[str, ...],
    debug: bool,
    log_file: Optional[str],
) -> None:
    """Git repository discovery and command runner.

    Main commands:

      list    List repositories below a directory
      show    Check a repository and show its layout
      init    Create a repository
      clone   Clone a repository
      run     Run a git command in a repository

    Run 'gitter COMMAND --help' for more information on a specific command.
    """
    setup_logging(debug=debug, log_file=log_file)
    try:
        config = ClientConfig.load(config_file) if config_file else ClientConfig()
    except GitterError as e:
        _fail(e)

    options = {
        "path": git_path or config.path,
        "hidden": list(config.hidden) + list(hidden),
        "env": config.env,
    }
    ctx.obj = Client(options)


@cli.command(name="list")
@click.argument("root", type=click.Path(file_okay=False, dir_okay=True))
@click.pass_obj
def list_repositories(client: Client, root: str) -> None:
    """List repositories found below ROOT.

    Hidden directories and repositories on the hidden list are left out.

    Example:

      gitter list /srv/git
    """
    try:
        repositories = client.get_repositories(root)
    except GitterError as e:
        _fail(e)

    table = Table(title="Repositories")
    table.add_column("Name", style="cyan")
    table.add_column("Path", style="green")
    table.add_column("Description", style="yellow")
    for listing in repositories:
        table.add_row(listing.name, listing.path, listing.description.strip())
    console.print(table)


@cli.command()
@click.argument("path", type=click.Path(file_okay=False, dir_okay=True))
@click.pass_obj
def show(client: Client, path: str) -> None:
    """Check that PATH is an accessible repository and show its layout."""
    try:
        repository = client.get_repository(path)
    except GitterError as e:
        _fail(e)

    layout = "bare" if repository.bare else "working tree"
    console.print(f"[bold]{escape(repository.name)}[/] ({layout})", highlight=False)
    console.print(repository.path, markup=False, highlight=False, soft_wrap=True)


@cli.command()
@click.argument("path", type=click.Path(file_okay=False, dir_okay=True))
@click.option("--bare", is_flag=True, help="Create a repository without a working tree")
@click.pass_obj
def init(client: Client, path: str, bare: bool) -> None:
    """Create a repository at PATH.

    Examples:

      gitter init ~/source/project

      gitter init /srv/git/project.git --bare
    """
    try:
        repository = client.create_repository(path, bare=bare)
    except GitterError as e:
        _fail(e)

    console.print(
        f"Created repository at {repository.path}", markup=False, highlight=False, soft_wrap=True
    )


@cli.command()
@click.argument("url")
@click.argument("directory", type=click.Path(file_okay=False, dir_okay=True))
@click.option(
    "--ssh-passphrase",
    envvar="GITTER_SSH_PASSPHRASE",
    help="Passphrase of the SSH key used by the remote",
)
@click.option("--branch", "-b", help="Branch to check out after cloning")
@click.pass_obj
def clone(
    client: Client,
    url: str,
    directory: str,
    ssh_passphrase: Optional[str],
    branch: Optional[str],
) -> None:
    """Clone URL into DIRECTORY.

    Example:

      GITTER_SSH_PASSPHRASE=secret gitter clone git@example.com:team/app.git app
    """
    if ssh_passphrase:
        client.set_ssh_passphrase(ssh_passphrase)
    options = {"--branch": branch} if branch else {}
    try:
        repository = client.clone_repository(url, directory, options)
    except GitterError as e:
        _fail(e)
    finally:
        if ssh_passphrase:
            client.set_ssh_passphrase(None)

    console.print(
        f"Cloned {url} into {repository.path}", markup=False, highlight=False, soft_wrap=True
    )


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("path", type=click.Path(file_okay=False, dir_okay=True))
@click.argument("verb")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def run(client: Client, path: str, verb: str, args: Tuple[str, ...]) -> None:
    """Run git VERB with ARGS in the repository at PATH and print its output.

    Example:

      gitter run ~/source/project log -n 1 --oneline
    """
    try:
        output = client.get_repository(path).run(verb, args=list(args))
    except GitterError as e:
        _fail(e)

    click.echo(output.encode("utf-8", errors=STDOUT_ERRORS), nl=False)


def main() -> None:
    """Entry point for the gitter CLI."""
    cli()


if __name__ == "__main__":
    main()
