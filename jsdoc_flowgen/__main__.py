from jsdoc_flowgen.cli import app

app(prog_name="jsdoc-flowgen")
