"""Game client: joins a server and exposes the player's moves."""

from __future__ import annotations

import logging
import socket
import threading
from typing import List, Optional

from hexcells.game import Field, Phase, PlayerData, Position
from hexcells.protocol import (
    GAME_PORT,
    ConnectionClosed,
    MsgType,
    Packet,
    UpdType,
    recv_packet,
    send_packet,
)

log = logging.getLogger(__name__)


class GameClientError(Exception):
    """Base of the errors a game action can raise."""


class Disconnected(GameClientError):
    """The client is not connected to a server."""


class GameWon(GameClientError):
    """The game is over and this player won."""


class GameLost(GameClientError):
    """The game is over and this player lost."""


class Client:
    """A player connected to a game server."""

    def __init__(self, nickname: str = "Player") -> None:
        self._me = PlayerData(nickname=nickname)
        self._current = PlayerData()
        self._field = Field()
        self._players: List[PlayerData] = []
        self._messages: List[str] = []
        self._phase = Phase.WAIT
        self._food = 0
        self._sock: Optional[socket.socket] = None
        self._connected = False
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.RLock()

    @property
    def nickname(self) -> str:
        return self._me.nickname

    @nickname.setter
    def nickname(self, value: str) -> None:
        self._me.nickname = value

    # ---- connection ------------------------------------------------

    def connect(self, host: str = "127.0.0.1", port: int = GAME_PORT) -> bool:
        """Join the server at ``host``; False when the connection fails."""
        self.disconnect()
        try:
            sock = socket.create_connection((host, port), timeout=5)
        except OSError:
            log.error("Connection failed: %s", host)
            return False
        try:
            send_packet(sock, Packet().write_str(self._me.nickname))
            packet = recv_packet(sock)
            self._me.id = packet.read_u16()
            self._field = packet.read_field()
            count = packet.read_i32()
            self._players = [packet.read_player() for _ in range(count)]
        except (ConnectionClosed, ValueError):
            log.error("Initialization failed: %s", host)
            sock.close()
            return False
        sock.settimeout(None)
        self._sock = sock
        self._connected = True
        self._thread = threading.Thread(target=self._receive_loop, daemon=True)
        self._thread.start()
        return True

    def host_game(self, height: int, width: int) -> bool:
        """Start a local host process and join it."""
        from hexcells.host import spawn_host

        try:
            spawn_host(height, width, GAME_PORT)
        except (OSError, RuntimeError):
            return False
        return self.connect("127.0.0.1", GAME_PORT)

    def disconnect(self) -> None:
        """Leave the server; the server itself may keep running."""
        if self._sock is None:
            return
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._sock.close()
        self._sock = None
        self._thread = None
        with self._lock:
            self._connected = False
            self._phase = Phase.WAIT
            self._food = 0
            self._messages.clear()
            self._players.clear()

    def is_connected(self) -> bool:
        return self._sock is not None and self._connected

    # ---- receiving -------------------------------------------------

    def _receive_loop(self) -> None:
        while True:
            try:
                packet = recv_packet(self._sock)
            except ConnectionClosed:
                self._connected = False
                return
            try:
                with self._lock:
                    self._handle(packet)
            except ValueError as exc:
                log.error("Bad packet from server: %s", exc)

    def _handle(self, packet: Packet) -> None:
        mtype = MsgType(packet.read_i32())
        if mtype is MsgType.UPD:
            self._handle_update(packet)
        elif mtype is MsgType.GMOVER:
            won = packet.read_bool()
            self._phase = Phase.WIN if won else Phase.LOSE
            self._messages.append("You win!" if won else "You lose!")
        elif mtype is MsgType.TURN:
            player = packet.read_player()
            self._current = player
            self._messages.append(f"It's {player.nickname}'s turn")
            if player.id == self._me.id:
                if self._phase is not Phase.LOSE:
                    self._messages.append("Now attack other cells!")
                    self._phase = Phase.ATTACK
                else:
                    self._send(Packet().write_i32(MsgType.TURN))
        elif mtype is MsgType.MSG:
            self._messages.append(packet.read_str())
        else:
            log.error("Unexpected message type %s", mtype)

    def _handle_update(self, packet: Packet) -> None:
        utype = UpdType(packet.read_i32())
        if utype is UpdType.DISC_PLAYER:
            player = packet.read_player()
            gone = next((p for p in self._players if p.id == player.id), None)
            if gone is not None:
                self._players.remove(gone)
        elif utype is UpdType.CONN_PLAYER:
            self._players.append(packet.read_player())
        else:
            pos = packet.read_position()
            self._field[pos] = packet.read_cell()

    def _send(self, packet: Packet) -> None:
        try:
            send_packet(self._sock, packet)
        except ConnectionClosed:
            self._connected = False

    def _check_state(self) -> None:
        if not self.is_connected():
            raise Disconnected("not connected")
        if self._phase is Phase.WIN:
            raise GameWon("game over: won")
        if self._phase is Phase.LOSE:
            raise GameLost("game over: lost")

    # ---- actions ---------------------------------------------------

    def attack(self, who: Position, whom: Position) -> bool:
        """Attack ``whom`` from ``who``; False when the move is not allowed now."""
        with self._lock:
            self._check_state()
            if self._phase is not Phase.ATTACK or not self._field.may_attack(self._me.id, who, whom):
                return False
            self._send(Packet().write_i32(MsgType.ATTACK).write_position(who).write_position(whom))
            return True

    def feed(self, whom: Position) -> bool:
        """Feed the cell at ``whom``; False when the move is not allowed now."""
        with self._lock:
            self._check_state()
            if (
                self._phase is not Phase.FEED
                or not self._field.may_feed(self._me.id, whom)
                or self._food == 0
            ):
                return False
            self._send(Packet().write_i32(MsgType.FEED).write_position(whom))
            self._food -= 1
            self._messages.append(f"Food left: {self._food}")
            return True

    def send_message(self, msg: str) -> None:
        """Send a chat message to every player."""
        self._check_state()
        self._send(Packet().write_i32(MsgType.MSG).write_str(msg))

    def food_left(self) -> int:
        self._check_state()
        return self._food

    def next_phase(self) -> Phase:
        """Advance ATTACK -> FEED -> WAIT; does nothing while waiting."""
        with self._lock:
            self._check_state()
            if self._phase is Phase.WAIT:
                self._messages.append("Wait for your turn!")
            elif self._phase is Phase.ATTACK:
                self._phase = Phase.FEED
                self._food = self._field.count(self._me.id)
                self._messages.append("Now feed your cells!")
            elif self._phase is Phase.FEED:
                self._phase = Phase.WAIT
                self._food = 0
                self._send(Packet().write_i32(MsgType.TURN))
                self._messages.append("Now wait for your turn!")
            return self._phase

    def phase(self) -> Phase:
        self._check_state()
        return self._phase

    def whoami(self) -> PlayerData:
        self._check_state()
        return PlayerData(self._me.nickname, self._me.id)

    def current_player(self) -> PlayerData:
        self._check_state()
        return PlayerData(self._current.nickname, self._current.id)

    def field(self) -> Field:
        return self._field

    def players(self) -> List[PlayerData]:
        with self._lock:
            return list(self._players)

    def messages(self) -> List[str]:
        with self._lock:
            return list(self._messages)