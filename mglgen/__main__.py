from mglgen.main import cli

cli()
