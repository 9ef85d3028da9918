import logging
from typing import Optional, Union

_FMT = "[%(levelname)s] %(message)s"
_ROOT = "tabconv"

# Library use stays silent until an application configures logging.
logging.getLogger(_ROOT).addHandler(logging.NullHandler())


def configure(level: Union[int, str] = logging.WARNING, *, quiet: bool = False,
              debug: bool = False, log_file: Optional[str] = None) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    if quiet:
        level = logging.ERROR
    if debug:
        level = logging.DEBUG
    handlers = [logging.StreamHandler()]
    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setLevel(logging.DEBUG)
        handlers.append(fh)
    logging.basicConfig(level=level, format=_FMT, handlers=handlers, force=True)


def get_logger(name: str = _ROOT) -> logging.Logger:
    return logging.getLogger(name)
