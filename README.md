# hexcells

A small multiplayer turn-based strategy game played on a hexagonal field.
Each player starts with a single cell (a "nest") of size 2, placed in a
free corner of the field when possible. Players take turns in the order
they joined. A turn has two phases:

* **attack**: move mass from one of your cells (size above 1) into an
  adjacent cell you do not own. All but one unit leaves the attacking
  cell; an unowned target is taken over, an enemy target loses that much
  size and changes hands if the attack was larger.
* **feed**: you get as much food as the total size of your cells, and
  each unit adds one to one of your cells, up to its capacity of 8.

A player whose cells are all gone has lost; a player who owns every cell
of the field has won.

Players connect to a server over TCP (port 5990 by default) and can chat
with each other while they play.

## Installation

```
pip install .
```

## Playing from the terminal

Start a game server for a field of the given size:

```
hexcells-host HEIGHT WIDTH [PORT]
```

The server prints `ready` once it accepts connections. It waits for the
first player and then keeps running while at least one player is
connected.

Join a game with the console client:

```
hexcells-console [NICKNAME] [ADDRESS]
```

With both a nickname and an address the client connects to the server at
that address on port 5990. With fewer arguments it starts its own server
on the local machine (a 4 × 4 field on port 5990) and joins it. The
default nickname is `_console_player`.

The console waits for your turn and then reads commands from standard
input:

* attack phase: `0` disconnect, `1` attack (enter the attacking cell and
  the target, each as `y x`), `2` stop attacking, `3` show the field,
  `4` show the players, `5` send a one-word chat message;
* feed phase: `0` disconnect, `1` feed a cell (`y x`), `2` end the turn,
  `3`–`5` as above.

End of input disconnects just as `0` does.

## Using the library

The game rules live in `hexcells.game`:

```python
from hexcells.game import Field, Position

field = Field(10, 10)          # width, height
nest = field.nest(1)           # player 1 gets a starting cell
print(field.count(1))          # total size owned by player 1
print(field.reachable(Position(0, 0), Position(1, 0)))
print(field)                   # text picture of the field
```

`Field` also offers `attack`, `may_attack`, `feed`, `may_feed`,
`contains`, `belongs_to`, `discard` and `resize`; cells are `Cell`
objects with `size`, `owner` and `capacity`, and `Phase` names the phases
of play (`ATTACK`, `FEED`, `WAIT`, `WIN`, `LOSE`).

`hexcells.protocol` holds the wire format: `Packet` (big-endian reads and
writes of numbers, strings, positions, cells, players and whole fields),
the message kinds `MsgType` and `UpdType`, and `send_packet` /
`recv_packet` for length-prefixed framing over a socket.

`hexcells.server.Server` runs a game session in a background thread
(`start`, `busy`, `close`, `port`). `hexcells.host.spawn_host` starts a
host process and waits until it is ready.

`hexcells.client.Client` is the player side: it connects (`connect`,
`host_game`, `disconnect`, `is_connected`), plays (`attack`, `feed`,
`next_phase`, `send_message`, `food_left`) and exposes the game state
(`phase`, `whoami`, `current_player`, `field`, `players`, `messages`).
Client actions raise `Disconnected`, `GameWon` or `GameLost` (all
subclasses of `GameClientError`) once the game can no longer be played.
`hexcells.console.run` drives a connected client from any pair of text
streams.

`hexcells.widgets`, `hexcells.chat` and `hexcells.layout` hold display
logic: `MessageList` wraps lines to a fixed width and scrolls through
them, `Textbox` is a single-line ASCII input box, `Chat` pairs the two,
and `FieldLayout` / `HexTile` compute where each hexagon sits on screen,
its colour and label, and which hexagon lies under a point (`hex_at`).

## What is not included

There is no graphical window. The widget and layout modules compute
text, positions and colours but draw nothing; the only interactive front
end is the terminal console.

## Running the tests

```
pip install .[test]
pytest
```