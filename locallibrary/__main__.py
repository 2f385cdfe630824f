from locallibrary.cli import app

app()
