"""Game server: accepts players, relays their moves and keeps the shared field."""

from __future__ import annotations

import heapq
import logging
import selectors
import socket
import threading
from dataclasses import dataclass
from typing import List, Optional

from hexcells.game import Field, PlayerData, Position
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

_POLL_SECONDS = 0.2


@dataclass(eq=False)
class _Peer:
    sock: socket.socket
    player: PlayerData


class Server:
    """Turn-based game server over TCP; every player takes turns in join order."""

    def __init__(self, height: int, width: int, port: int = GAME_PORT) -> None:
        self._field = Field(width, height)
        self._requested_port = port
        self._listener: Optional[socket.socket] = None
        self._selector: Optional[selectors.BaseSelector] = None
        self._thread: Optional[threading.Thread] = None
        self._clients: List[_Peer] = []
        self._current_pos = 0
        self._free_ids: List[int] = []
        self._count = 0
        self._had_player = False
        self._stop = threading.Event()

    # ---- lifecycle -------------------------------------------------

    def start(self) -> None:
        """Bind the listening socket and start serving in a background thread."""
        self._listener = socket.create_server(("", self._requested_port))
        self._selector = selectors.DefaultSelector()
        self._selector.register(self._listener, selectors.EVENT_READ, None)
        log.info("Server waiting for the first player")
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def busy(self) -> bool:
        """True while the server is running and still has (or awaits) players."""
        if self._stop.is_set() or self._listener is None:
            return False
        return not self._had_player or bool(self._clients)

    def close(self) -> None:
        """Stop serving and drop every connection."""
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._shutdown()

    def port(self) -> int:
        """The port the server listens on."""
        if self._listener is None:
            return self._requested_port
        return self._listener.getsockname()[1]

    def _shutdown(self) -> None:
        for peer in self._clients:
            peer.sock.close()
        self._clients.clear()
        if self._selector is not None:
            self._selector.close()
        if self._listener is not None:
            self._listener.close()

    # ---- ids -------------------------------------------------------

    def _allocate_id(self) -> int:
        player_id = heapq.heappop(self._free_ids) if self._free_ids else self._count + 1
        self._count += 1
        return player_id

    def _release_id(self, player_id: int) -> None:
        self._count -= 1
        heapq.heappush(self._free_ids, player_id)

    # ---- sending ---------------------------------------------------

    @staticmethod
    def _send(peer_sock: socket.socket, packet: Packet) -> None:
        try:
            send_packet(peer_sock, packet)
        except ConnectionClosed:
            log.debug("send failed")

    def _broadcast(self, packet: Packet, except_pos: int = -1) -> None:
        for index, peer in enumerate(self._clients):
            if index != except_pos:
                self._send(peer.sock, packet)

    def _update_cell(self, pos: Position, except_pos: int = -1) -> None:
        packet = Packet().write_i32(MsgType.UPD).write_i32(UpdType.CELL_UPDATE)
        packet.write_position(pos).write_cell(self._field[pos])
        self._broadcast(packet, except_pos)

    def _game_over(self, player_id: int, is_winner: bool) -> None:
        peer = next((p for p in self._clients if p.player.id == player_id), None)
        if peer is not None:
            self._send(peer.sock, Packet().write_i32(MsgType.GMOVER).write_bool(is_winner))

    def _next_turn(self) -> None:
        self._current_pos += 1
        if len(self._clients) == 1 and self._current_pos == 1:
            return
        if self._current_pos >= len(self._clients):
            self._current_pos = 0
        if not self._clients:
            return
        packet = Packet().write_i32(MsgType.TURN)
        packet.write_player(self._clients[self._current_pos].player)
        self._broadcast(packet)

    # ---- players ---------------------------------------------------

    def _init_peer(self, peer: _Peer) -> None:
        peer.player.nickname = recv_packet(peer.sock).read_str()
        packet = Packet().write_u16(peer.player.id).write_field(self._field)
        packet.write_i32(len(self._clients))
        for other in self._clients:
            packet.write_player(other.player)
        send_packet(peer.sock, packet)
        log.info("%s initialized", peer.player)

    def _new_player(self) -> None:
        try:
            sock, _ = self._listener.accept()
        except OSError:
            log.error("Connection failed")
            return
        player_id = self._allocate_id()
        peer = _Peer(sock, PlayerData(id=player_id))
        try:
            nest = self._field.nest(player_id)
        except (ValueError, IndexError):
            log.error("No room for a new player")
            sock.close()
            self._release_id(player_id)
            return
        try:
            self._init_peer(peer)
        except (ConnectionClosed, ValueError):
            log.error("Player initialization failed")
            self._field.discard(player_id)
            sock.close()
            self._release_id(player_id)
            return

        self._update_cell(nest)
        self._clients.append(peer)
        self._had_player = True

        self._broadcast(
            Packet().write_i32(MsgType.UPD).write_i32(UpdType.CONN_PLAYER).write_player(peer.player)
        )
        turn = Packet().write_i32(MsgType.TURN)
        turn.write_player(self._clients[self._current_pos].player)
        self._send(sock, turn)
        player = peer.player
        self._broadcast(
            Packet().write_i32(MsgType.MSG).write_str(
                f"{player.nickname} (Player{player.id}) connected"
            )
        )
        self._selector.register(sock, selectors.EVENT_READ, peer)
        log.info("%s connected", player)

    def _remove_player(self, pos: int) -> None:
        peer = self._clients[pos]
        player = peer.player
        self._broadcast(
            Packet().write_i32(MsgType.MSG).write_str(
                f"{player.nickname} (Player{player.id}) disconnected"
            )
        )
        self._broadcast(
            Packet().write_i32(MsgType.UPD).write_i32(UpdType.DISC_PLAYER).write_player(player),
            pos,
        )
        for cell_pos in self._field.discard(player.id):
            self._update_cell(cell_pos, pos)
        self._selector.unregister(peer.sock)
        peer.sock.close()
        self._release_id(player.id)
        del self._clients[pos]

    # ---- packets ---------------------------------------------------

    def _process_packet(self, pos: int, packet: Packet) -> None:
        try:
            mtype = MsgType(packet.read_i32())
        except ValueError:
            log.error("unknown message structure")
            return
        if mtype is MsgType.TURN:
            self._next_turn()
        elif mtype is MsgType.ATTACK:
            who = packet.read_position()
            whom = packet.read_position()
            owner_prev = self._field[whom].owner
            self._field.attack(who, whom)
            owner_curr = self._field[whom].owner
            self._update_cell(who)
            self._update_cell(whom)
            if owner_prev != 0 and self._field.count(owner_prev) == 0:
                self._game_over(owner_prev, False)
            if self._field.belongs_to(owner_curr):
                self._game_over(owner_curr, True)
        elif mtype is MsgType.FEED:
            whom = packet.read_position()
            self._field.feed(whom)
            self._update_cell(whom)
        elif mtype is MsgType.MSG:
            text = packet.read_str()
            nickname = self._clients[pos].player.nickname
            self._broadcast(Packet().write_i32(MsgType.MSG).write_str(f"{nickname}:{text}"))
        else:
            log.error("unexpected message type %s", mtype)

    def _drop(self, index: int) -> None:
        log.info("%s disconnected", self._clients[index].player)
        self._remove_player(index)
        if self._current_pos == 0:
            if index == 0:
                self._current_pos = len(self._clients)
                self._next_turn()
        else:
            if index <= self._current_pos:
                self._current_pos -= 1
            if index == self._current_pos + 1:
                self._next_turn()

    def _run(self) -> None:
        while not self._stop.is_set() and self.busy():
            try:
                events = self._selector.select(_POLL_SECONDS)
            except (OSError, ValueError):
                break
            if any(key.data is None for key, _ in events):
                self._new_player()
                continue
            for peer in [key.data for key, _ in events]:
                if peer not in self._clients:
                    continue
                index = self._clients.index(peer)
                try:
                    packet = recv_packet(peer.sock)
                except ConnectionClosed:
                    self._drop(index)
                    continue
                log.info("Incoming message from %s", peer.player)
                try:
                    self._process_packet(index, packet)
                except (ValueError, IndexError) as exc:
                    log.error("bad packet from %s: %s", peer.player, exc)