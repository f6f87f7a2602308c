import os
import socket
import logging

logger = logging.getLogger("termline")

# stdout belongs to the line being edited, so logs are sent elsewhere.
PORT = int(os.environ.get("TERMLINE_LOG_PORT", "12013"))


class UDPHandler(logging.Handler):
    udp_address = ("127.0.0.1", PORT)

    def __init__(self):
        super().__init__()
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def emit(self, record):
        msg = self.format(record)
        bb = msg.encode()
        size = 2**10
        try:
            while bb:
                bb1 = bb[:size]
                bb = bb[size:]
                self._socket.sendto(bb1, self.udp_address)
        except OSError:
            self.handleError(record)


def forward_logs(level=logging.INFO):
    """Send the termline logs over UDP, to be shown with ``termline --listen``."""
    for handler in logger.handlers:
        if isinstance(handler, UDPHandler):
            return handler
    handler = UDPHandler()
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def listen_to_logs():
    """Called from ``termline --listen``

    This way we can see the logs from another process, so they do not get mixed up with the line being edited.
    """

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", PORT))

    while True:
        data, addr = sock.recvfrom(2**20)
        print(data.decode())
