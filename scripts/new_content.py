from pathlib import Path
from typing import Annotated, Optional

import typer

from portfolio.schemas.content import ContentType
from portfolio.services.content_scaffold import ContentExistsError, create_content_file
from portfolio.settings import settings

app = typer.Typer(help="Scaffold a new draft blog post or project.")


@app.command()
def new(
    content_type: Annotated[
        ContentType, typer.Argument(help="Kind of content to create.")
    ],
    title: Annotated[str, typer.Argument(help="Title of the new entry.")],
    content_dir: Annotated[
        Optional[Path],
        typer.Option("--content-dir", "-c", help="Content root directory."),
    ] = None,
) -> None:
    """Create ``<content-dir>/<blog|projects>/<slug>.md`` with draft frontmatter."""
    try:
        path = create_content_file(content_dir or settings.CONTENT_DIR, content_type, title)
    except (ContentExistsError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Created {path}")
    typer.echo(f"Slug: {path.stem}")


if __name__ == "__main__":
    app()
