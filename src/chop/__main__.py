from chop.cli.app import app

app(prog_name="chop")
