from dayboard.cli.app import app

app()
