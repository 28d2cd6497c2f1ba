from pyclock.cli import app

app(prog_name="clock")
