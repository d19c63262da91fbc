from reindexer.main import run

run()
