from dotenv import load_dotenv

from . import cli_app

if __name__ == "__main__":  # pragma: no cover - manual CLI invocation
    load_dotenv()
    cli_app()
