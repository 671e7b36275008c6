from nebu.cli.main import cli

cli()
