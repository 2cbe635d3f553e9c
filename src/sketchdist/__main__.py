from sketchdist.cli.main import app

app(prog_name="sketchdist")
