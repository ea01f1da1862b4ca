# projectshelf/main.py
from projectshelf.cli import app

if __name__ == "__main__":
    app()
