from postloom.cli.app import app

app()
