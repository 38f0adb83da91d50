from imgorisort.cli import app

app(prog_name="imgorisort")
