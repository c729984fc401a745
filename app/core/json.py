from typing import Any
import json
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

# Headers que el front espera en todas las respuestas de /api
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class UTF8JSONResponse(JSONResponse):
    """
    Respuesta JSON en UTF-8, sin escapes ASCII y con jsonable_encoder
    previo (datetime, etc.).
    """
    media_type = "application/json; charset=utf-8"

    def render(self, content: Any) -> bytes:
        payload = jsonable_encoder(content, exclude_none=False)
        return json.dumps(
            payload,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")


def error_response(status_code: int, message: str, detail: str | None = None) -> UTF8JSONResponse:
    """
    Forma única de los errores: {"error": "..."} y, a veces, "detail"
    con el texto de la excepción para diagnóstico.
    """
    body: dict[str, Any] = {"error": message}
    if detail:
        body["detail"] = detail
    return UTF8JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)
