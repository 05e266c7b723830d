from sportscast.main import run

run()
