from covgate.cli import app

app(prog_name="covgate")
