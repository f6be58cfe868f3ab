from relinstall.main import cli

cli()
