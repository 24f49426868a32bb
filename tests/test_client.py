import time

import pytest

from hexcells.client import Client, Disconnected
from hexcells.game import Phase, Position
from hexcells.server import Server


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return False


@pytest.fixture
def server():
    srv = Server(3, 4, 0)
    srv.start()
    yield srv
    srv.close()


@pytest.fixture
def client(server):
    cli = Client("dave")
    assert cli.connect("127.0.0.1", server.port())
    yield cli
    cli.disconnect()


def test_not_connected_raises():
    cli = Client("eve")
    assert not cli.is_connected()
    with pytest.raises(Disconnected):
        cli.phase()
    with pytest.raises(Disconnected):
        cli.attack(Position(0, 0), Position(1, 0))


def test_connect_failure_returns_false(server):
    port = server.port()
    server.close()
    assert Client("eve").connect("127.0.0.1", port) is False


def test_first_player_gets_turn(client):
    assert wait_for(lambda: client.phase() is Phase.ATTACK)
    me = client.whoami()
    assert me.id == 1 and me.nickname == "dave"
    assert client.current_player().id == 1
    assert "Now attack other cells!" in client.messages()


def test_turn_cycle(client):
    assert wait_for(lambda: client.phase() is Phase.ATTACK)
    assert client.attack(Position(0, 0), Position(3, 2)) is False
    assert client.next_phase() is Phase.FEED
    assert client.food_left() == client.field().count(1)
    nest = Position(0, 0)
    before = client.field()[nest].size
    assert client.feed(nest) is True
    assert wait_for(lambda: client.field()[nest].size == before + 1)
    assert client.next_phase() is Phase.WAIT
    assert client.food_left() == 0
    assert client.feed(nest) is False


def test_chat_and_disconnect(client):
    client.send_message("hello")
    assert wait_for(lambda: "dave:hello" in client.messages())
    assert [p.nickname for p in client.players()] == ["dave"]
    client.disconnect()
    assert not client.is_connected()
    assert client.messages() == []
    with pytest.raises(Disconnected):
        client.whoami()