from docker_reader._version import __version__
from docker_reader.log import setup_logger

setup_logger()

__all__ = ["__version__"]
