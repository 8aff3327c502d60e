"""Interactive command-line client for the users API."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Sequence, TextIO

import requests

DEFAULT_BASE_URL = "http://localhost:1234"
REQUEST_TIMEOUT = 10.0

_SERVER_ERROR = "Error interno del servidor"

_CREATE_OUTCOMES: Mapping[int, str] = {
    201: "Usuario creado exitosamente",
    400: "Error en la solicitud: datos inválidos",
    500: _SERVER_ERROR,
}
_GET_OUTCOMES: Mapping[int, str] = {
    200: "Usuario encontrado",
    404: "Usuario no encontrado",
    500: _SERVER_ERROR,
}
_DELETE_OUTCOMES: Mapping[int, str] = {
    204: "Usuario eliminado exitosamente",
    404: "Usuario no encontrado",
    500: _SERVER_ERROR,
}

_MENU = (
    "\nSeleccione una operación:\n"
    "1. Crear usuario\n"
    "2. Obtener usuario\n"
    "3. Eliminar usuario\n"
    "4. Salir\n"
)


@dataclass(frozen=True)
class ApiResponse:
    """Status code and raw body of a reply from the API."""

    status_code: int
    body: str

    def json(self) -> Any:
        """Decode the body as JSON."""
        return json.loads(self.body)


class UserApiClient:
    """Thin client for the user routes of the API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._session = session if session is not None else requests.Session()

    def _send(self, method: str, path: str, **kwargs: Any) -> ApiResponse:
        response = self._session.request(
            method, f"{self.base_url}{path}", timeout=REQUEST_TIMEOUT, **kwargs
        )
        return ApiResponse(response.status_code, response.text)

    def create_user(self, name: str, address: str, nickname: str) -> ApiResponse:
        """POST a new user; raises requests.RequestException if unreachable."""
        payload: Dict[str, str] = {"name": name, "address": address, "nickname": nickname}
        return self._send("POST", "/users", json=payload)

    def get_user(self, user_id: str) -> ApiResponse:
        """GET a user by ID; raises requests.RequestException if unreachable."""
        return self._send("GET", f"/users/{user_id}")

    def delete_user(self, user_id: str) -> ApiResponse:
        """DELETE a user by ID; raises requests.RequestException if unreachable."""
        return self._send("DELETE", f"/users/{user_id}")


class _EndOfInput(Exception):
    pass


def _report(out: TextIO, response: ApiResponse, outcomes: Mapping[int, str]) -> None:
    out.write(f"\nCódigo de estado: {response.status_code}\n")
    out.write(f"Cuerpo de la respuesta: {response.body}\n")
    message = outcomes.get(
        response.status_code,
        f"Código de respuesta inesperado: {response.status_code}",
    )
    out.write(message + "\n")


def interact(
    client: UserApiClient,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> None:
    """Run the menu loop until the user chooses to leave or input ends."""
    source = stdin if stdin is not None else sys.stdin
    out = stdout if stdout is not None else sys.stdout
    lines: Iterator[str] = iter(source)

    def ask(prompt: str) -> str:
        out.write(prompt)
        out.flush()
        line = next(lines, None)
        if line is None:
            raise _EndOfInput
        return line.rstrip("\r\n")

    def create() -> None:
        name = ask("Nombre: ")
        address = ask("Dirección: ")
        nickname = ask("Nickname: ")
        _run(lambda: client.create_user(name, address, nickname), _CREATE_OUTCOMES)

    def get() -> None:
        user_id = ask("ID del usuario: ")
        _run(lambda: client.get_user(user_id), _GET_OUTCOMES)

    def delete() -> None:
        user_id = ask("ID del usuario: ")
        _run(lambda: client.delete_user(user_id), _DELETE_OUTCOMES)

    def _run(call: Callable[[], ApiResponse], outcomes: Mapping[int, str]) -> None:
        try:
            response = call()
        except requests.RequestException as exc:
            out.write(f"Error de conexión: {exc}\n")
            return
        _report(out, response, outcomes)

    actions: Dict[str, Callable[[], None]] = {"1": create, "2": get, "3": delete}

    try:
        while True:
            out.write(_MENU)
            option = ask("Opción: ")
            if option == "4":
                out.write("¡Hasta luego!\n")
                return
            action = actions.get(option)
            if action is None:
                out.write("Opción inválida\n")
            else:
                action()
    except _EndOfInput:
        out.write("\n")


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Start the interactive client."""
    parser = argparse.ArgumentParser(description="Interactive client for the users API.")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="address of the API")
    args = parser.parse_args(argv)
    interact(UserApiClient(args.base_url), sys.stdin, sys.stdout)


if __name__ == "__main__":
    main()