"""Main CLI application."""

import typer

from nagoyabae.cli.commands import character, score, serve

app = typer.Typer(
    name="nagoyabae",
    help="Nagoya-bae photo scoring and mascot generation",
    no_args_is_help=True,
)

serve.register(app)
score.register(app)
character.register(app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
