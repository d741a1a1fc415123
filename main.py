# main.py
import typer

from filemanager.cli import DEFAULT_USERNAME, FileManagerCLI
from filemanager.utils import LOGS_DIR

app = typer.Typer(
    name="file-manager",
    help="Interactive file manager shell confined to your home directory.",
    add_completion=False,
)


@app.command()
def main(
    username: str = typer.Option(
        DEFAULT_USERNAME, "--username", help="Name used in the welcome and goodbye messages"
    ),
    log_dir: str = typer.Option(
        LOGS_DIR, "--log-dir", help="Directory for commands.log"
    ),
):
    """Start an interactive file manager session in the home directory."""
    cli = FileManagerCLI(username=username, log_dir=log_dir)
    cli.run()


if __name__ == "__main__":
    app()
