from rescli.cli import cli

cli()
