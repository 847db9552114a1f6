# scramble/__main__.py
from scramble.cli import app

if __name__ == "__main__":
    app(prog_name="scramble")
