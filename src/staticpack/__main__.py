from staticpack.cli import cli

cli()
