import io
import json
import re
import sys
from urllib.parse import urlparse

import pytest
import requests
import responses

from salesdesk.api import create_app
from salesdesk.client import ApiResponse, UserApiClient, interact, main
from salesdesk.sales import SaleService, SaleStorage
from salesdesk.users import LocalUserStorage, UserService

BASE = "http://api.example.com"


def _forward_to(app):
    flask_client = app.test_client()

    def callback(request):
        path = urlparse(request.url).path
        body = request.body or b""
        if isinstance(body, str):
            body = body.encode()
        reply = flask_client.open(
            path,
            method=request.method,
            data=body,
            headers={"Content-Type": "application/json"},
        )
        return reply.status_code, {}, reply.get_data()

    return callback


@pytest.fixture
def live_mock():
    user_service = UserService(LocalUserStorage())
    app = create_app(user_service, SaleService(SaleStorage(), BASE))
    callback = _forward_to(app)
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        pattern = re.compile(re.escape(BASE) + r"/users.*")
        for method in (responses.POST, responses.GET, responses.DELETE):
            rsps.add_callback(method, pattern, callback=callback)
        yield user_service


def test_create_get_delete_round_trip(live_mock):
    client = UserApiClient(BASE)
    created = client.create_user("Ana", "Calle 1", "ana")
    assert created.status_code == 201
    data = created.json()
    assert data["name"] == "Ana"
    assert data["nickname"] == "ana"
    assert data["version"] == 1

    fetched = client.get_user(data["id"])
    assert fetched.status_code == 200
    assert fetched.json()["address"] == "Calle 1"

    deleted = client.delete_user(data["id"])
    assert deleted.status_code == 204
    assert client.get_user(data["id"]).status_code == 404


def test_create_user_sends_json_body():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/users", json={"id": "1"}, status=201)
        reply = UserApiClient(BASE + "/").create_user("N", "A", "K")
        sent = json.loads(rsps.calls[0].request.body)
    assert sent == {"name": "N", "address": "A", "nickname": "K"}
    assert reply == ApiResponse(201, '{"id": "1"}')


def test_connection_error_raised_by_client():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{BASE}/users/x", body=requests.ConnectionError("refused"))
        with pytest.raises(requests.ConnectionError):
            UserApiClient(BASE).get_user("x")


def test_interact_exit():
    out = io.StringIO()
    interact(UserApiClient(BASE), io.StringIO("4\n"), out)
    text = out.getvalue()
    assert "Seleccione una operación:" in text
    assert text.endswith("¡Hasta luego!\n")


def test_interact_invalid_option():
    out = io.StringIO()
    interact(UserApiClient(BASE), io.StringIO("9\n4\n"), out)
    text = out.getvalue()
    assert "Opción inválida" in text
    assert text.count("Seleccione una operación:") == 2


def test_interact_stops_at_end_of_input():
    out = io.StringIO()
    interact(UserApiClient(BASE), io.StringIO(""), out)
    assert out.getvalue().count("Seleccione una operación:") == 1
    assert "¡Hasta luego!" not in out.getvalue()


def test_interact_create_then_get(live_mock):
    client = UserApiClient(BASE)
    out = io.StringIO()
    interact(client, io.StringIO("1\nLuis\nAv 2\nlu\n4\n"), out)
    text = out.getvalue()
    assert "Código de estado: 201" in text
    assert "Usuario creado exitosamente" in text
    body_line = next(l for l in text.splitlines() if l.startswith("Cuerpo de la respuesta: "))
    user = json.loads(body_line[len("Cuerpo de la respuesta: "):])
    assert user["name"] == "Luis"

    out = io.StringIO()
    interact(client, io.StringIO(f"2\n{user['id']}\n4\n"), out)
    assert "Usuario encontrado" in out.getvalue()


def test_interact_get_and_delete_missing(live_mock):
    out = io.StringIO()
    interact(UserApiClient(BASE), io.StringIO("2\nnope\n3\nnope\n4\n"), out)
    text = out.getvalue()
    assert text.count("Usuario no encontrado") == 2
    assert text.count("Código de estado: 404") == 2


def test_interact_delete_success(live_mock):
    client = UserApiClient(BASE)
    user_id = client.create_user("Eva", "X", "ev").json()["id"]
    out = io.StringIO()
    interact(client, io.StringIO(f"3\n{user_id}\n4\n"), out)
    assert "Usuario eliminado exitosamente" in out.getvalue()
    assert client.get_user(user_id).status_code == 404


def test_interact_unexpected_status():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{BASE}/users/q", body="teapot", status=418)
        out = io.StringIO()
        interact(UserApiClient(BASE), io.StringIO("2\nq\n4\n"), out)
    text = out.getvalue()
    assert "Código de respuesta inesperado: 418" in text
    assert "Cuerpo de la respuesta: teapot" in text


def test_interact_server_error_on_create():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE}/users", json={"error": "boom"}, status=500)
        out = io.StringIO()
        interact(UserApiClient(BASE), io.StringIO("1\na\nb\nc\n4\n"), out)
    assert "Error interno del servidor" in out.getvalue()


def test_interact_reports_connection_error():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.DELETE, f"{BASE}/users/z", body=requests.ConnectionError("refused"))
        out = io.StringIO()
        interact(UserApiClient(BASE), io.StringIO("3\nz\n4\n"), out)
    text = out.getvalue()
    assert "Error de conexión: refused" in text
    assert text.endswith("¡Hasta luego!\n")


def test_main_reads_standard_input(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("4\n"))
    main(["--base-url", BASE])
    captured = capsys.readouterr().out
    assert "4. Salir" in captured
    assert captured.endswith("¡Hasta luego!\n")