from repo_ask.main import run

run()
