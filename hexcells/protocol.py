"""Wire protocol: message kinds, packet encoding and length-prefixed framing."""

from __future__ import annotations

import socket
import struct
from enum import IntEnum

from hexcells.game import Cell, Field, PlayerData, Position

GAME_PORT = 5990

_HEADER = struct.Struct(">I")


class MsgType(IntEnum):
    """Top-level message kind, the first value of every packet."""

    TURN = 0
    ATTACK = 1
    FEED = 2
    UPD = 3
    MSG = 4
    GMOVER = 5

    def __str__(self) -> str:
        return _MSG_NAMES[self]


_MSG_NAMES = {
    MsgType.TURN: "<turn>",
    MsgType.ATTACK: "<attack>",
    MsgType.FEED: "<feed>",
    MsgType.UPD: "<update>",
    MsgType.MSG: "<message>",
    MsgType.GMOVER: "<gameover>",
}


class UpdType(IntEnum):
    """Kind of update the server pushes about other players' actions."""

    DISC_PLAYER = 0
    CONN_PLAYER = 1
    CELL_UPDATE = 2

    def __str__(self) -> str:
        return _UPD_NAMES[self]


_UPD_NAMES = {
    UpdType.DISC_PLAYER: "<disc>",
    UpdType.CONN_PLAYER: "<conn>",
    UpdType.CELL_UPDATE: "<cell>",
}


class ConnectionClosed(ConnectionError):
    """The peer closed the connection or it broke."""


class Packet:
    """A big-endian byte buffer written and read sequentially."""

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)
        self._offset = 0

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def _write(self, fmt: str, value) -> "Packet":
        try:
            self._data += struct.pack(fmt, value)
        except struct.error as exc:
            raise ValueError(f"value {value!r} does not fit the wire format") from exc
        return self

    def _take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise ValueError("packet is too short")
        chunk = bytes(self._data[self._offset:end])
        self._offset = end
        return chunk

    def _read(self, fmt: str):
        (value,) = struct.unpack(fmt, self._take(struct.calcsize(fmt)))
        return value

    def write_bool(self, value: bool) -> "Packet":
        return self._write(">B", 1 if value else 0)

    def write_u16(self, value: int) -> "Packet":
        return self._write(">H", value)

    def write_i32(self, value: int) -> "Packet":
        return self._write(">i", value)

    def write_u32(self, value: int) -> "Packet":
        return self._write(">I", value)

    def write_str(self, value: str) -> "Packet":
        encoded = value.encode("utf-8")
        self.write_u32(len(encoded))
        self._data += encoded
        return self

    def read_bool(self) -> bool:
        return self._read(">B") != 0

    def read_u16(self) -> int:
        return self._read(">H")

    def read_i32(self) -> int:
        return self._read(">i")

    def read_u32(self) -> int:
        return self._read(">I")

    def read_str(self) -> str:
        length = self.read_u32()
        return self._take(length).decode("utf-8")

    def write_position(self, pos: Position) -> "Packet":
        return self.write_u32(pos.y).write_u32(pos.x)

    def read_position(self) -> Position:
        y = self.read_u32()
        x = self.read_u32()
        return Position(x=x, y=y)

    def write_cell(self, cell: Cell) -> "Packet":
        return self.write_u16(cell.size).write_u16(cell.owner).write_u16(cell.capacity)

    def read_cell(self) -> Cell:
        size = self.read_u16()
        owner = self.read_u16()
        capacity = self.read_u16()
        cell = Cell(owner=owner, capacity=capacity)
        cell.size = size
        return cell

    def write_player(self, player: PlayerData) -> "Packet":
        return self.write_u16(player.id).write_str(player.nickname)

    def read_player(self) -> PlayerData:
        player_id = self.read_u16()
        nickname = self.read_str()
        return PlayerData(nickname=nickname, id=player_id)

    def write_field(self, field: Field) -> "Packet":
        height, width = field.height(), field.width()
        self.write_i32(height).write_i32(width)
        for y in range(height):
            for x in range(width):
                self.write_cell(field[Position(x, y)])
        return self

    def read_field(self) -> Field:
        height = self.read_i32()
        width = self.read_i32()
        if height < 0 or width < 0:
            raise ValueError("negative field size")
        field = Field(width, height)
        for y in range(height):
            for x in range(width):
                field[Position(x, y)] = self.read_cell()
        return field


def send_packet(sock: socket.socket, packet: Packet) -> None:
    """Send one length-prefixed packet."""
    data = packet.to_bytes()
    try:
        sock.sendall(_HEADER.pack(len(data)) + data)
    except OSError as exc:
        raise ConnectionClosed("connection lost while sending") from exc


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining:
        try:
            chunk = sock.recv(remaining)
        except OSError as exc:
            raise ConnectionClosed("connection lost while receiving") from exc
        if not chunk:
            raise ConnectionClosed("connection closed by peer")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def recv_packet(sock: socket.socket) -> Packet:
    """Receive one length-prefixed packet, blocking until it is complete."""
    (size,) = _HEADER.unpack(_recv_exact(sock, _HEADER.size))
    return Packet(_recv_exact(sock, size))