import sys

from ._main import main
from .utils import listen_to_logs


def cli(argv=None):
    argv = sys.argv if argv is None else argv
    if "--version" in argv or "version" in argv[1:2]:
        from . import __version__

        print("termline", __version__)
    elif "--listen" in argv:
        listen_to_logs()
    else:
        main()
