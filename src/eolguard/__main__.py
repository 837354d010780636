from eolguard.cli import app

app()
