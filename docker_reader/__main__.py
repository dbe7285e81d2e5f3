from dotenv import load_dotenv

from docker_reader.cli.commands import cli_app

if __name__ == "__main__":
    load_dotenv()
    cli_app()  # type: ignore
