"""Text console front end: plays a game turn by turn from standard input."""

from __future__ import annotations

import sys
import time
from typing import Iterator, List, Optional, TextIO, Union

from hexcells.client import Client, GameClientError
from hexcells.game import Phase, Position

DEFAULT_NICKNAME = "_console_player"
DEFAULT_HOST = "127.0.0.1"
WAIT_INTERVAL = 1.0
HOSTED_FIELD_SIZE = (4, 4)


class _Tokens:
    """Whitespace-separated words read lazily from a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._words: Iterator[str] = (word for line in stream for word in line.split())

    def word(self) -> Optional[str]:
        return next(self._words, None)

    def command(self) -> Union[int, str, None]:
        word = self.word()
        if word is None:
            return None
        try:
            return int(word)
        except ValueError:
            return word

    def position(self) -> Optional[Position]:
        """Read a position given as ``y x``; None on end of input or bad numbers."""
        y_word = self.word()
        x_word = self.word() if y_word is not None else None
        if x_word is None:
            return None
        try:
            return Position(x=int(x_word), y=int(y_word))
        except ValueError:
            return None


def _print_menu(stdout: TextIO, action: str, finish: str) -> None:
    lines = [
        "Enter command:",
        " 0 = disconnect",
        f" 1 = {action}",
        f" 2 = {finish}",
        " 3 = show field",
        " 4 = show players",
        " 5 = send message",
    ]
    print("\n".join(lines), file=stdout)


def _phase_loop(client: Client, tokens: _Tokens, stdout: TextIO, attacking: bool) -> bool:
    """Run one phase menu; return True when the player asked to shut down."""
    action, finish = ("attack...", "stop attacking") if attacking else ("feed...", "end turn")
    while True:
        _print_menu(stdout, action, finish)
        cmd = tokens.command()
        if not client.is_connected():
            return False

        if cmd is None or cmd == 0:
            print("Client shutdown", file=stdout)
            client.disconnect()
            return True
        if cmd == 1:
            print("Enter arguments:", file=stdout)
            if attacking:
                print(" Who: y x", file=stdout)
                who = tokens.position()
                if who is None or not client.is_connected():
                    continue
            print(" Whom: y x", file=stdout)
            whom = tokens.position()
            if whom is None or not client.is_connected():
                continue
            if attacking:
                client.attack(who, whom)
            else:
                client.feed(whom)
        elif cmd == 2:
            client.next_phase()
            return False
        elif cmd == 3:
            print(client.field(), file=stdout)
        elif cmd == 4:
            for player in client.players():
                print(f" >{player}", file=stdout)
        elif cmd == 5:
            print("Enter message:", file=stdout)
            msg = tokens.word()
            if msg is not None:
                client.send_message(msg)
        else:
            print(f"Unknown command ({cmd})", file=stdout)


def run(client: Client, stdin: TextIO, stdout: TextIO) -> int:
    """Play turns with ``client`` driven by commands from ``stdin``.

    Returns 0 once the player disconnects; game-state errors of the client
    (disconnection, game over) propagate to the caller.
    """
    tokens = _Tokens(stdin)
    while True:
        print("Wait for your turn...", file=stdout)
        while client.phase() is Phase.WAIT:
            time.sleep(WAIT_INTERVAL)
        for attacking in (True, False):
            if _phase_loop(client, tokens, stdout, attacking):
                return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) > 2:
        print("Call format: console [nickname=_console_player] [IpAddres=127.0.0.1]", file=sys.stderr)
        return 1
    nickname = args[0] if args else DEFAULT_NICKNAME
    host = args[1] if len(args) > 1 else DEFAULT_HOST

    client = Client(nickname)
    if len(args) == 2:
        ok = client.connect(host)
    else:
        ok = client.host_game(*HOSTED_FIELD_SIZE)
    if not ok:
        return 1
    try:
        return run(client, sys.stdin, sys.stdout)
    except GameClientError as exc:
        print(f"Game over: {exc}", file=sys.stderr)
        client.disconnect()
        return 1


if __name__ == "__main__":
    sys.exit(main())