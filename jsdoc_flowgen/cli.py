"""
jsdoc-flowgen CLI

    jsdoc-flowgen lib/foo.js              # Flow declaration to stdout
    jsdoc-flowgen lib/foo.js --inline     # source with inline annotations
    cat foo.js | jsdoc-flowgen - -o foo.js.flow
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

from jsdoc_flowgen.common.exceptions import FlowgenError
from jsdoc_flowgen.config import get_settings
from jsdoc_flowgen.converter import convert
from jsdoc_flowgen.parsing import SourceFile

app = typer.Typer(name="jsdoc-flowgen", help="Generate Flow types from JSDoc comments", add_completion=False)
console = Console(stderr=True)


def _read_source(path: str, language: str | None) -> SourceFile:
    if path == "-":
        return SourceFile.from_content(
            sys.stdin.read(), language=language or get_settings().language, file_path="<stdin>"
        )
    return SourceFile.from_file(path, language=language)


@app.command()
def main(
    path: str = typer.Argument(..., help="JavaScript file ('-' for stdin)"),
    inline: bool = typer.Option(False, "--inline", "-i", help="Rewrite the source with inline annotations"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write result to a file"),
    language: str | None = typer.Option(None, "--language", "-l", help="Grammar override"),
):
    """
    Convert JSDoc-annotated JavaScript to Flow.

    Examples:
        jsdoc-flowgen src/index.js > index.js.flow
        jsdoc-flowgen src/index.js --inline -o src/index.js
    """
    try:
        source = _read_source(path, language)
        result = convert(source, declaration=not inline)
    except (FlowgenError, OSError, ValueError) as e:
        console.print(f"[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)

    if output is not None:
        output.write_text(result, encoding=source.encoding)
        console.print(f"[green]✅ Wrote {output}[/green]")
    else:
        typer.echo(result, nl=False)


if __name__ == "__main__":
    app()
